from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, logging bootstrap,
configuration validation, the sampling run and the final summary line.
"""

import argparse
import sys
from typing import List, Optional

from randcp.core.engine import run_sampling
from randcp.core.validator import validate_config
from randcp.domain.errors import ConfigurationError
from randcp.domain.run_models import RunResult
from randcp.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from randcp.interface.cli import args as cli_args
from randcp.utils.i18n import i18n

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    if args.debug:
        log_level = "DEBUG"
    elif args.verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: argparse.Namespace) -> int:
    # 3. Configuration validation (fatal problems stop before traversal)
    try:
        config, warnings = validate_config(cli_args.args_to_overrides(args))
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_CONFIG

    for w in warnings:
        logger.warning(w)

    logger.debug(f"Run configuration: {config}")

    # 4. Sampling run
    try:
        result = run_sampling(config, stream=sys.stdout)
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_CONFIG
    except KeyboardInterrupt:
        shutdown_logging()
        print("\n" + i18n.t("cli.status.interrupted"), file=sys.stderr)
        return EXIT_INTERRUPTED

    if not result.ok:
        shutdown_logging()
        print(f"randcp: {result.error}", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Output rendering phase
    shutdown_logging()
    _print_summary(result)
    return EXIT_OK

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_summary(result: RunResult) -> None:
    """
    Print the final count on stdout.

    The leading carriage return overwrites the percentage line left by the
    progress reporter.
    """
    print("\r" + i18n.t("cli.status.summary", default="Copied {count} files.", count=result.copied))

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
