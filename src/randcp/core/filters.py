from __future__ import annotations

"""
Filename Pattern Matching.

Compiles the optional user-supplied filter expression once, before traversal,
and evaluates candidate base names against it. An invalid expression is a
fatal configuration error so the run never starts with a broken filter.
"""

import re
from typing import Optional

from randcp.domain.errors import PatternError

# -----------------------------------------------------------------------------
# PATTERN COMPILATION
# -----------------------------------------------------------------------------

def compile_pattern(pattern: Optional[str], insensitive: bool = False) -> Optional[re.Pattern]:
    """
    Transform a raw regex string into a compiled Pattern object.

    Args:
        pattern: Raw regex string, or None when no filter is configured.
        insensitive: Compile with re.IGNORECASE.

    Returns:
        Optional[re.Pattern]: Compiled expression, None when pattern is None.

    Raises:
        PatternError: If the expression is syntactically invalid.
    """
    if pattern is None:
        return None

    flags = re.IGNORECASE if insensitive else 0
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e

# -----------------------------------------------------------------------------
# MATCHER
# -----------------------------------------------------------------------------

class PatternMatcher:
    """
    Filename filter compiled once per run.

    Matching uses search semantics: the expression may match anywhere in the
    name unless it is anchored explicitly.
    """

    def __init__(self, pattern: Optional[str] = None, insensitive: bool = False):
        self.pattern = pattern
        self.insensitive = insensitive
        self._rx = compile_pattern(pattern, insensitive)

    @property
    def enabled(self) -> bool:
        return self._rx is not None

    def matches(self, name: str) -> bool:
        """
        Verify if a base name satisfies the filter.

        Args:
            name: Candidate file name.

        Returns:
            bool: True if no pattern is configured or the pattern matches.
        """
        if self._rx is None:
            return True
        return self._rx.search(name) is not None

    def __repr__(self) -> str:
        return f"PatternMatcher(pattern={self.pattern!r}, insensitive={self.insensitive})"
