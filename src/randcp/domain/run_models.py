from __future__ import annotations

"""
Run Domain Data Models.

Result objects exchanged between the copy engine, the orchestrator and the
interface layer, with factory functions for the success and failure cases.
"""

from dataclasses import dataclass, field
from typing import Optional

from randcp.domain.config import RunConfig

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass
class CopyReport:
    """
    Counters accumulated by the copy engine.

    Attributes:
        copied: Files copied (or that would be copied in dry-run mode).
        attempted: Candidates handed to the copy primitive, failures included.
        failed: Attempts rejected by the copy primitive.
        skipped_pattern: Candidates whose name did not match the pattern.
        skipped_existing: Candidates whose destination name was already taken.
        candidates: Leaves inspected before the run stopped.
    """
    copied: int = 0
    attempted: int = 0
    failed: int = 0
    skipped_pattern: int = 0
    skipped_existing: int = 0
    candidates: int = 0


@dataclass(frozen=True)
class RunResult:
    """
    Outcome of a complete sampling run.

    Attributes:
        ok: Whether the run completed.
        error: Failure description when ok is False.
        source: Source directory that was sampled.
        dest: Destination directory.
        limit: Requested number of files.
        dry_run: Whether the copy primitive was bypassed.
        leaves_found: Regular files discovered during traversal.
        report: Copy counters.
        reporter_cancelled: True when progress reporting was cut short.
    """
    ok: bool
    error: str
    source: str
    dest: str
    limit: int
    dry_run: bool
    leaves_found: int = 0
    report: CopyReport = field(default_factory=CopyReport)
    reporter_cancelled: bool = False

    @property
    def copied(self) -> int:
        return self.report.copied

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(error: str, cfg: RunConfig) -> RunResult:
    """
    Create a failed run result.

    Args:
        error: Detailed error description.
        cfg: Configuration of the failed run.

    Returns:
        RunResult: Result flagged as not ok with zeroed counters.
    """
    return RunResult(
        ok=False,
        error=error,
        source=cfg.source,
        dest=cfg.dest,
        limit=cfg.limit,
        dry_run=cfg.dry_run,
    )


def create_success_result(
        cfg: RunConfig,
        leaves_found: int,
        report: CopyReport,
        reporter_cancelled: bool,
        error: Optional[str] = None,
) -> RunResult:
    """
    Create a completed run result.

    Args:
        cfg: Configuration of the run.
        leaves_found: Number of regular files discovered.
        report: Counters produced by the copy engine.
        reporter_cancelled: Whether progress reporting was cancelled.
        error: Optional non-fatal note.

    Returns:
        RunResult: Result flagged as ok.
    """
    return RunResult(
        ok=True,
        error=error or "",
        source=cfg.source,
        dest=cfg.dest,
        limit=cfg.limit,
        dry_run=cfg.dry_run,
        leaves_found=leaves_found,
        report=report,
        reporter_cancelled=reporter_cancelled,
    )
