from __future__ import annotations

"""
Introspection Options Domain.

Dict-based option schema shared by the orchestrator, the validator and
the CLI. Every key has a default so callers can pass partial overrides.
"""

from typing import Any, Dict

from next_introspect.domain.constants import (
    DEFAULT_MAX_DEPTH,
    MODE_COMPREHENSIVE,
    default_ignore_patterns,
)

DEFAULT_FORMAT = "object"
DEFAULT_INDENT = 2
DEFAULT_PATH_STYLE = "absolute"


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_options() -> Dict[str, Any]:
    """
    Generate the default introspection options.

    Returns:
        Dict[str, Any]: Default option values.
    """
    return {
        # Analysis
        "mode": MODE_COMPREHENSIVE,
        "max_depth": DEFAULT_MAX_DEPTH,
        "ignore_patterns": default_ignore_patterns(),
        "metadata_file": "",

        # Output shaping
        "format": DEFAULT_FORMAT,
        "indent": DEFAULT_INDENT,
        "nested": False,
        "exclude_fields": [],
        "strip_prefixes": [],

        # Path display
        "path_style": DEFAULT_PATH_STYLE,
        "strip_prefix": "",
        "show_file_paths": False,

        # Manifest display
        "package_summary": False,
        "include_scripts": False,
        "include_dependencies": False,
    }
