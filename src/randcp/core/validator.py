from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration input (CLI overrides) and the core.
Coerces types, fills defaults, normalizes paths and rejects configurations
that must never start a run.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from randcp.core.filters import compile_pattern
from randcp.domain.config import RunConfig, get_default_config
from randcp.domain.errors import ConfigurationError
from randcp.infra.fs import check_directory, normalize_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
        check_paths: bool = True,
) -> Tuple[RunConfig, List[str]]:
    """
    Validate a raw configuration dictionary and build a RunConfig.

    Soft problems (wrong types, meaningless flag combinations) are coerced
    and reported as warnings unless strict is set. Missing directories, an
    invalid limit or an uncompilable pattern always raise.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type mismatch instead of coercing.
        check_paths: Verify that source and destination are directories.

    Returns:
        Tuple[RunConfig, List[str]]: Immutable configuration and warnings.

    Raises:
        ConfigurationError: On any fatal configuration problem.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Invalid config type: expected dict, received {type(config).__name__}."
        )

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    # 2. Field Processing & Normalization
    for field in ("insensitive", "recursive", "dry_run", "echo"):
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in ("limit", "max_depth"):
        merged[field] = _as_int(merged.get(field), defaults[field], field, warnings, strict)

    merged["pattern"] = _as_optional_str(merged.get("pattern"), "pattern", warnings, strict)

    source = normalize_path(_as_optional_str(merged.get("source"), "source", warnings, strict))
    dest = normalize_path(_as_optional_str(merged.get("dest"), "dest", warnings, strict))

    # 3. Fatal Constraints
    if merged["limit"] < 1:
        raise ConfigurationError(f"Invalid limit: {merged['limit']} (must be at least 1)")
    if merged["max_depth"] < 0:
        raise ConfigurationError(f"Invalid depth: {merged['max_depth']} (must not be negative)")

    if check_paths:
        for label, path in (("source", source), ("destination", dest)):
            reason = check_directory(path)
            if reason:
                raise ConfigurationError(f"{path or label}: {reason}")

    # Compiled only to fail early, the matcher is built again by the engine
    compile_pattern(merged["pattern"], merged["insensitive"])

    # 4. Flag Consistency
    if merged["max_depth"] and not merged["recursive"]:
        warnings.append("Depth is only meaningful with recursive scanning; ignoring it.")
        merged["max_depth"] = 0
    if merged["insensitive"] and merged["pattern"] is None:
        warnings.append("Case-insensitive matching requested without a pattern.")

    cfg = RunConfig(
        source=source,
        dest=dest,
        limit=merged["limit"],
        pattern=merged["pattern"],
        insensitive=merged["insensitive"],
        recursive=merged["recursive"],
        max_depth=merged["max_depth"],
        dry_run=merged["dry_run"],
        echo=merged["echo"],
    )
    return cfg, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Validate and coerce boolean flags."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, str)):
        v = str(value).strip().lower()
        if v in ("1", "true", "yes", "y", "on"):
            return True
        if v in ("0", "false", "no", "n", "off"):
            return False

    msg = f"Invalid field '{field}': expected bool, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Validate and coerce integer counters."""
    if value is None:
        return fallback
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass

    msg = f"Invalid field '{field}': expected int, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    """Validate optional string inputs; empty strings become None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value if value != "" else None

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Ignoring it.")
    return None
