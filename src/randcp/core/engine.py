from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates one sampling run:
1. Compiles the filename filter (fails before touching the filesystem).
2. Builds the source tree and collects regular-file leaves.
3. Shuffles the leaves.
4. Starts the progress reporter thread.
5. Runs the sequential copy engine.
6. Joins the reporter when the limit was reached, cancels it otherwise.
"""

import logging
import random
import sys
from typing import Optional, TextIO

from randcp.core.copier import CopyFunc, copy_random
from randcp.core.filters import PatternMatcher
from randcp.core.progress import ProgressReporter, ProgressState
from randcp.core.shuffler import shuffle_leaves
from randcp.core.tree_builder import build_tree
from randcp.domain.config import RunConfig
from randcp.domain.errors import TraversalError
from randcp.domain.run_models import RunResult, create_error_result, create_success_result
from randcp.infra.fs import copy_file

logger = logging.getLogger(__name__)


def run_sampling(
        config: RunConfig,
        *,
        stream: Optional[TextIO] = None,
        copy_func: CopyFunc = copy_file,
        rng: Optional[random.Random] = None,
        show_progress: bool = True,
) -> RunResult:
    """
    Execute a full sampling run for a validated configuration.

    Args:
        config: Validated run parameters.
        stream: Output for echo lines and the percentage line, stdout by default.
        copy_func: Copy primitive handed to the copy engine.
        rng: Optional random source for the shuffle.
        show_progress: Start the concurrent progress reporter.

    Returns:
        RunResult: Counters of the run; not ok if the source root is unreadable.

    Raises:
        PatternError: If the filter expression is invalid.
    """
    out = stream if stream is not None else sys.stdout
    logger.info(f"Sampling up to {config.limit} file(s) from {config.source} into {config.dest}")

    # -------------------------------------------------------------------------
    # 1) Filter & Discovery
    # -------------------------------------------------------------------------
    matcher = PatternMatcher(config.pattern, config.insensitive)

    try:
        build = build_tree(config.source, recursive=config.recursive, max_depth=config.max_depth)
    except TraversalError as e:
        logger.error(str(e))
        return create_error_result(str(e), config)

    shuffle_leaves(build.leaves, rng)

    # -------------------------------------------------------------------------
    # 2) Copy with concurrent progress reporting
    # -------------------------------------------------------------------------
    progress = ProgressState(target=config.limit)
    reporter: Optional[ProgressReporter] = None
    if show_progress:
        reporter = ProgressReporter(progress, echo=config.echo, stream=out)
        reporter.start()

    cancelled = False
    try:
        report = copy_random(
            build,
            config,
            matcher,
            progress=progress,
            copy_func=copy_func,
            echo_stream=out,
        )
    finally:
        if reporter is not None:
            if progress.copied < config.limit:
                cancelled = True
                reporter.cancel()
            else:
                reporter.join()

    if cancelled:
        logger.debug(f"Limit not reached ({report.attempted}/{config.limit}); progress reporter cancelled.")

    if config.dry_run:
        logger.info(f"Dry run: {report.copied} file(s) would be copied.")
    else:
        logger.info(f"Copied {report.copied} file(s), {report.failed} failure(s).")

    return create_success_result(
        config,
        leaves_found=len(build.leaves),
        report=report,
        reporter_cancelled=cancelled,
    )
