from __future__ import annotations

"""
Randomized Copy Engine.

Consumes the shuffled leaf list and copies candidates into a flat destination
directory until the limit is reached or the list runs out. Each attempt is
published to the shared progress state. Copies are strictly sequential.
"""

import logging
import os
import sys
from typing import Callable, Optional, Set, TextIO, Tuple

from randcp.core.filters import PatternMatcher
from randcp.core.progress import ProgressState
from randcp.domain.config import RunConfig
from randcp.domain.run_models import CopyReport
from randcp.domain.tree_models import TreeBuildResult
from randcp.infra.fs import copy_file, path_exists

logger = logging.getLogger(__name__)

CopyFunc = Callable[[str, str], Tuple[bool, Optional[str]]]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def copy_random(
        build: TreeBuildResult,
        config: RunConfig,
        matcher: PatternMatcher,
        progress: Optional[ProgressState] = None,
        copy_func: CopyFunc = copy_file,
        echo_stream: Optional[TextIO] = None,
) -> CopyReport:
    """
    Copy up to ``config.limit`` leaves, in list order, into the destination.

    A candidate is skipped without counting against the limit when its base
    name fails the pattern, or when the flattened destination name exists
    already or was claimed by an earlier candidate of this run. Failed copies
    are logged and still count as attempts.

    Args:
        build: Traversal result whose leaves were already shuffled.
        config: Run parameters.
        matcher: Compiled filename filter.
        progress: Shared counter observed by the progress reporter.
        copy_func: Copy primitive, ``(source, dest) -> (ok, error)``.
        echo_stream: Stream receiving echoed paths, stdout by default.

    Returns:
        CopyReport: Counters of the run; ``copied`` excludes failures.
    """
    out = echo_stream if echo_stream is not None else sys.stdout
    report = CopyReport()
    claimed: Set[str] = set()

    for handle in build.leaves:
        if report.attempted >= config.limit:
            break
        report.candidates += 1

        name = build.leaf_name(handle)

        if not matcher.matches(name):
            report.skipped_pattern += 1
            continue

        dest_path = os.path.join(config.dest, name)
        if name in claimed or path_exists(dest_path):
            logger.debug(f"Destination exists, skipping: {dest_path}")
            report.skipped_existing += 1
            continue
        claimed.add(name)

        if config.echo:
            out.write(build.tree.display_path(handle) + "\n")
            out.flush()

        report.attempted += 1
        if config.dry_run:
            report.copied += 1
        else:
            ok, err = copy_func(build.full_path(handle), dest_path)
            if ok:
                report.copied += 1
            else:
                report.failed += 1
                logger.warning(f"Copy failed: {err}")

        if progress is not None:
            progress.increment()

    logger.debug(
        f"Copy loop finished: copied={report.copied} failed={report.failed} "
        f"skipped_pattern={report.skipped_pattern} skipped_existing={report.skipped_existing}"
    )
    return report
