from __future__ import annotations

"""
Run Configuration Domain.

Holds the immutable per-run parameters and the default values every raw
configuration source is merged over.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_LIMIT = 1
UNLIMITED_DEPTH = 0


@dataclass(frozen=True)
class RunConfig:
    """
    Immutable parameters of a single sampling run.

    Attributes:
        source: Absolute path of the directory to sample from.
        dest: Absolute path of the directory receiving the copies.
        limit: Maximum number of files to copy.
        pattern: Optional regex applied to base names.
        insensitive: Case-insensitive pattern matching.
        recursive: Descend into subdirectories.
        max_depth: Deepest directory level to scan, 0 for unlimited.
        dry_run: Select and report without copying.
        echo: Print each selected file instead of a percentage.
    """
    source: str
    dest: str
    limit: int = DEFAULT_LIMIT
    pattern: Optional[str] = None
    insensitive: bool = False
    recursive: bool = False
    max_depth: int = UNLIMITED_DEPTH
    dry_run: bool = False
    echo: bool = False


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default raw configuration.

    Returns:
        Dict[str, Any]: Default values keyed by RunConfig field name.
    """
    return {
        # IO Paths
        "source": "",
        "dest": "",

        # Selection
        "limit": DEFAULT_LIMIT,
        "pattern": None,
        "insensitive": False,
        "recursive": False,
        "max_depth": UNLIMITED_DEPTH,

        # Execution
        "dry_run": False,
        "echo": False,
    }
