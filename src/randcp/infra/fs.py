from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization, directory validation and the byte-level copy primitive
used by the copy engine. Copies create their target exclusively and carry the
source permission bits over; a partially written target is removed.
"""

import logging
import os
import shutil
import stat
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

COPY_BUFFER_SIZE = 64 * 1024

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str]) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Expands environment variables ($VAR/%VAR%) and the user home shortcut,
    and drops trailing separators.

    Args:
        path: Raw input path string.

    Returns:
        str: Normalized absolute path, empty string for empty input.
    """
    p = (path or "").strip()
    if not p:
        return ""
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def check_directory(path: str) -> Optional[str]:
    """
    Verify that a path names an existing, readable directory.

    Args:
        path: Directory to inspect.

    Returns:
        Optional[str]: Reason for rejection, None if the directory is usable.
    """
    if not path:
        return "path is empty"
    if not os.path.exists(path):
        return "No such file or directory"
    if not os.path.isdir(path):
        return "Not a directory"
    if not os.access(path, os.R_OK | os.X_OK):
        return "Permission denied"
    return None


def path_exists(path: str) -> bool:
    """Existence check that also reports dangling symlinks as taken."""
    return os.path.lexists(path)

# -----------------------------------------------------------------------------
# COPY PRIMITIVE
# -----------------------------------------------------------------------------

def copy_file(source: str, dest: str) -> Tuple[bool, Optional[str]]:
    """
    Copy one file, refusing to overwrite an existing destination.

    The destination is opened with O_CREAT | O_EXCL so a concurrent writer
    cannot be clobbered. Permission bits of the source are applied once the
    data is written. On a read or write failure the partial destination file
    is unlinked.

    Args:
        source: File to read.
        dest: File to create.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        st = os.stat(source)
    except OSError as e:
        return False, f"{source}: {e.strerror or e}"

    mode = stat.S_IMODE(st.st_mode)
    flags = os.O_CREAT | os.O_EXCL | os.O_WRONLY | getattr(os, "O_BINARY", 0)

    try:
        src = open(source, "rb")
    except OSError as e:
        return False, f"{source}: {e.strerror or e}"

    with src:
        try:
            fd = os.open(dest, flags, mode | stat.S_IWUSR)
        except OSError as e:
            return False, f"{dest}: {e.strerror or e}"

        try:
            with os.fdopen(fd, "wb") as dst:
                shutil.copyfileobj(src, dst, COPY_BUFFER_SIZE)
        except OSError as e:
            _remove_partial(dest)
            return False, f"{dest}: {e.strerror or e}"

    try:
        os.chmod(dest, mode)
    except OSError as e:
        logger.debug(f"Could not apply mode {oct(mode)} to {dest}: {e}")

    return True, None


def _remove_partial(path: str) -> None:
    """Unlink a partially written destination file."""
    try:
        os.unlink(path)
        logger.debug(f"Removed partial copy: {path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove partial copy '{path}': {e.strerror or e}")
