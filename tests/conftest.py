from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for source/destination directory layouts and configs.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from randcp.domain.config import RunConfig  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Dict[str, str], str], Path]:
    """
    Return a factory that materializes a file layout under tmp_path.

    Keys are POSIX-style relative paths; a trailing '/' creates an empty
    directory, anything else a file holding the mapped content.
    """
    def _make(layout: Dict[str, str], name: str = "src") -> Path:
        root = tmp_path / name
        root.mkdir()
        for rel, content in layout.items():
            target = root / rel
            if rel.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _make


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Empty destination directory."""
    d = tmp_path / "dest"
    d.mkdir()
    return d


@pytest.fixture
def run_config_factory(dest_dir: Path) -> Callable[..., RunConfig]:
    """Build RunConfig objects pointing at the shared destination."""
    def _make(source: Path, **kwargs) -> RunConfig:
        return RunConfig(source=str(source), dest=str(dest_dir), **kwargs)

    return _make
