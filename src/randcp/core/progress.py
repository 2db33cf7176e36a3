from __future__ import annotations

"""
Concurrent Progress Reporting.

The copy engine increments a shared counter after every attempt while a
background thread waits on the same condition and redraws a percentage line.
Rendering is best effort: several increments may be coalesced into a single
redraw. The reporter leaves on its own once the target is reached; otherwise
the orchestrator cancels it cooperatively.
"""

import logging
import sys
import threading
from typing import Optional, TextIO, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SHARED STATE
# -----------------------------------------------------------------------------

class ProgressState:
    """
    Counter shared between the copy engine and the progress reporter.

    Every increment notifies waiters while the lock is held, so a waiting
    reporter never misses the final value.
    """

    def __init__(self, target: int):
        self.target = target
        self._copied = 0
        self._cancelled = False
        self._cond = threading.Condition()

    @property
    def copied(self) -> int:
        with self._cond:
            return self._copied

    @property
    def cancelled(self) -> bool:
        with self._cond:
            return self._cancelled

    def increment(self) -> int:
        """Record one completed attempt and wake the reporter."""
        with self._cond:
            self._copied += 1
            self._cond.notify_all()
            return self._copied

    def cancel(self) -> None:
        """Ask the reporter to stop waiting for a target that will not be reached."""
        with self._cond:
            self._cancelled = True
            self._cond.notify_all()

    def wait_for_update(self, last_seen: int) -> Tuple[int, bool]:
        """
        Block until the counter moves past last_seen, the target is reached
        or the state is cancelled.

        Args:
            last_seen: Counter value already rendered by the caller.

        Returns:
            Tuple[int, bool]: Current count and whether the reporter should stop.
        """
        with self._cond:
            self._cond.wait_for(
                lambda: self._cancelled or self._copied != last_seen or self._copied >= self.target
            )
            done = self._cancelled or self._copied >= self.target
            return self._copied, done

# -----------------------------------------------------------------------------
# REPORTER THREAD
# -----------------------------------------------------------------------------

def format_percentage(copied: int, target: int) -> str:
    """Render the progress line body, e.g. 'copied  50%'."""
    pct = (copied / target) * 100 if target > 0 else 100.0
    return f"copied {pct:3.0f}%"


class ProgressReporter:
    """
    Background observer rendering the share of the target already copied.

    In echo mode nothing is rendered; the copy engine prints file names itself
    and the reporter only tracks completion.
    """

    def __init__(self, state: ProgressState, echo: bool = False, stream: Optional[TextIO] = None):
        self.state = state
        self.echo = echo
        self.stream = stream if stream is not None else sys.stdout
        self.renders = 0
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        self._thread = threading.Thread(
            target=self._run,
            name="ProgressReporter",
            daemon=True,
        )
        self._thread.start()

    def cancel(self) -> None:
        """Stop the reporter cooperatively and wait for its thread to exit."""
        self.state.cancel()
        self.join()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        last_seen = 0
        while True:
            copied, done = self.state.wait_for_update(last_seen)
            if self.state.cancelled:
                logger.debug(f"Progress reporter cancelled at {copied}/{self.state.target}")
                return
            if copied != last_seen or done:
                self._render(copied)
                last_seen = copied
            if done:
                return

    def _render(self, copied: int) -> None:
        if self.echo:
            return
        self.stream.write("\r" + format_percentage(copied, self.state.target))
        self.stream.flush()
        self.renders += 1
