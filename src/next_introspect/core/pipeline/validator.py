from __future__ import annotations

"""
Options Validation Service.

Gatekeeper for every entry point (library callers and CLI alike). Ensures
the options dictionary conforms to the expected schema: coerces loosely
typed values, rejects unknown enumeration members and fills missing keys
with defaults.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from next_introspect.domain.config import get_default_options
from next_introspect.domain.constants import VALID_FORMATS, VALID_MODES, VALID_PATH_STYLES

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        options: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize an introspection options dictionary.

    Args:
        options: Raw options (usually a partial dictionary).
        strict: If True, raises on type mismatch or unknown enum values
                instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized options and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_options()

    # 1. Base Type Validation
    if options is None:
        return defaults, warnings
    if not isinstance(options, dict):
        msg = f"Invalid options type: expected dict, received {type(options).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(options)

    # 2. Schema Definition
    string_fields = ["metadata_file", "strip_prefix"]

    bool_fields = [
        "nested", "show_file_paths", "package_summary",
        "include_scripts", "include_dependencies",
    ]

    int_fields = ["max_depth", "indent"]

    list_fields = ["ignore_patterns", "exclude_fields", "strip_prefixes"]

    enum_fields = {
        "mode": VALID_MODES,
        "format": VALID_FORMATS,
        "path_style": VALID_PATH_STYLES,
    }

    # 3. Field Processing
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in int_fields:
        merged[field] = _as_int(merged.get(field), defaults[field], field, warnings, strict)

    for field in list_fields:
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    for field, allowed in enum_fields.items():
        merged[field] = _as_choice(merged.get(field), defaults[field], allowed, field, warnings, strict)

    for w in warnings:
        logger.debug(f"Options: {w}")
    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce numeric and keyword inputs into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Accept non-negative integers; numeric strings are parsed and negatives clamped when lenient."""
    if value is None:
        return fallback
    if isinstance(value, int) and not isinstance(value, bool):
        if value >= 0:
            return value
        msg = f"Invalid field '{field}': must be >= 0, received {value}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Clamped to 0.")
        return 0

    if isinstance(value, str) and not strict:
        s = value.strip()
        try:
            parsed = int(s)
        except ValueError:
            parsed = None
        if parsed is not None:
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            return max(0, parsed)

    msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of stripped strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return items

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_choice(
        value: Any,
        fallback: str,
        allowed: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip() in allowed:
        return value.strip()

    msg = f"Invalid field '{field}': '{value}' is not one of {', '.join(allowed)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
