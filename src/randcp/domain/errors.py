from __future__ import annotations

"""
Domain Exception Hierarchy.

Fatal conditions raised by the core services. Per-entry and per-file failures
are logged and skipped instead, so they never surface as exceptions.
"""


class RandcpError(Exception):
    """Base class for every fatal error raised by randcp."""


class ConfigurationError(RandcpError):
    """Invalid run parameters detected before any traversal starts."""


class PatternError(ConfigurationError):
    """
    The filename filter expression could not be compiled.

    Attributes:
        pattern: The raw expression supplied by the user.
    """

    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
        self.pattern = pattern


class TraversalError(RandcpError):
    """
    The source root itself could not be read.

    Attributes:
        path: Directory that failed to open.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read source directory '{path}': {reason}")
        self.path = path
