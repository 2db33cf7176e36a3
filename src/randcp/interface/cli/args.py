from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed argparse namespace
into the raw configuration overrides consumed by the validator.
"""

import argparse
from typing import Any, Dict

from randcp import __version__
from randcp.utils.i18n import i18n

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the randcp CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="randcp",
        description=i18n.t("app.description"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # --- Paths ---
    p.add_argument("source", metavar="SOURCE", help=i18n.t("cli.args.source"))
    p.add_argument("dest", metavar="DEST", help=i18n.t("cli.args.dest"))

    # --- Selection ---
    p.add_argument(
        "-l", "--limit",
        type=int,
        default=None,
        metavar="LIMIT",
        help=i18n.t("cli.args.limit"),
    )
    p.add_argument(
        "-p", "--pattern",
        default=None,
        metavar="PATTERN",
        help=i18n.t("cli.args.pattern"),
    )
    p.add_argument(
        "-i", "--insensitive",
        action="store_true",
        help=i18n.t("cli.args.insensitive"),
    )
    p.add_argument(
        "-r", "--recursive",
        action="store_true",
        help=i18n.t("cli.args.recursive"),
    )
    p.add_argument(
        "-d", "--depth",
        type=int,
        default=None,
        metavar="DEPTH",
        help=i18n.t("cli.args.depth"),
    )

    # --- Execution ---
    p.add_argument(
        "-y", "--dry-run",
        action="store_true",
        help=i18n.t("cli.args.dry_run"),
    )
    p.add_argument(
        "-e", "--echo",
        action="store_true",
        help=i18n.t("cli.args.echo"),
    )

    # --- Diagnostics ---
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help=i18n.t("cli.args.verbose"),
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help=i18n.t("cli.args.debug"),
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        metavar="FILE",
        help=i18n.t("cli.args.log_file"),
    )
    p.add_argument(
        "-V", "--version",
        action="version",
        version=i18n.t("app.version", version=__version__),
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a raw configuration dictionary.

    Options left at their argparse default are omitted so that the domain
    defaults apply.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "source": args.source,
        "dest": args.dest,
    }

    if args.limit is not None:
        overrides["limit"] = args.limit
    if args.pattern is not None:
        overrides["pattern"] = args.pattern
    if args.depth is not None:
        overrides["max_depth"] = args.depth

    if args.insensitive:
        overrides["insensitive"] = True
    if args.recursive:
        overrides["recursive"] = True
    if args.dry_run:
        overrides["dry_run"] = True
    if args.echo:
        overrides["echo"] = True

    return overrides
