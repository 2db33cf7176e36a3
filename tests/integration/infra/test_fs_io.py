from __future__ import annotations

"""
Integration tests for the FileSystem Infrastructure Layer.

Verifies the copy primitive (content, exclusivity, permission bits, partial
cleanup) and the path helpers against a real temporary directory.
"""

import os
import stat
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from randcp.infra.fs import check_directory, copy_file, normalize_path, path_exists


def test_copy_file_copies_content(tmp_path: Path) -> None:
    """TC-01: Bytes are reproduced exactly."""
    src = tmp_path / "src.bin"
    payload = bytes(range(256)) * 1000
    src.write_bytes(payload)
    dst = tmp_path / "dst.bin"

    ok, err = copy_file(str(src), str(dst))

    assert ok is True
    assert err is None
    assert dst.read_bytes() == payload


def test_copy_file_never_overwrites(tmp_path: Path) -> None:
    """TC-02: An existing destination is left untouched."""
    src = tmp_path / "src.txt"
    src.write_text("new", encoding="utf-8")
    dst = tmp_path / "dst.txt"
    dst.write_text("old", encoding="utf-8")

    ok, err = copy_file(str(src), str(dst))

    assert ok is False
    assert str(dst) in err
    assert dst.read_text(encoding="utf-8") == "old"


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_copy_file_preserves_mode(tmp_path: Path) -> None:
    """TC-03: Permission bits follow the source."""
    src = tmp_path / "script.sh"
    src.write_text("#!/bin/sh\n", encoding="utf-8")
    os.chmod(str(src), 0o751)
    dst = tmp_path / "copy.sh"

    ok, _ = copy_file(str(src), str(dst))

    assert ok is True
    assert stat.S_IMODE(os.stat(str(dst)).st_mode) == 0o751


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_copy_file_read_only_source(tmp_path: Path) -> None:
    src = tmp_path / "ro.txt"
    src.write_text("r", encoding="utf-8")
    os.chmod(str(src), 0o444)
    dst = tmp_path / "ro_copy.txt"

    ok, _ = copy_file(str(src), str(dst))

    assert ok is True
    assert dst.read_text(encoding="utf-8") == "r"
    assert stat.S_IMODE(os.stat(str(dst)).st_mode) == 0o444


def test_copy_file_missing_source(tmp_path: Path) -> None:
    ok, err = copy_file(str(tmp_path / "ghost"), str(tmp_path / "out"))

    assert ok is False
    assert "ghost" in err
    assert not (tmp_path / "out").exists()


def test_copy_file_removes_partial_destination(tmp_path: Path) -> None:
    """TC-04: A write failure unlinks the half-written file."""
    src = tmp_path / "src.txt"
    src.write_text("data", encoding="utf-8")
    dst = tmp_path / "dst.txt"

    with patch("randcp.infra.fs.shutil.copyfileobj", side_effect=OSError(28, "No space left on device")):
        ok, err = copy_file(str(src), str(dst))

    assert ok is False
    assert "No space left" in err
    assert not dst.exists()


def test_check_directory(tmp_path: Path) -> None:
    f = tmp_path / "f.txt"
    f.write_text("x", encoding="utf-8")

    assert check_directory(str(tmp_path)) is None
    assert check_directory(str(f)) == "Not a directory"
    assert check_directory(str(tmp_path / "missing")) == "No such file or directory"
    assert check_directory("") == "path is empty"


def test_normalize_path_expands_user_and_vars(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RANDCP_TEST_DIR", str(tmp_path))

    assert normalize_path("$RANDCP_TEST_DIR/sub/") == os.path.join(str(tmp_path), "sub")
    assert normalize_path("~") == os.path.abspath(os.path.expanduser("~"))
    assert normalize_path("   ") == ""
    assert normalize_path(None) == ""


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_path_exists_sees_dangling_links(tmp_path: Path) -> None:
    link = tmp_path / "dangling"
    os.symlink(str(tmp_path / "nowhere"), str(link))

    assert path_exists(str(link)) is True
    assert path_exists(str(tmp_path / "absent")) is False
