from __future__ import annotations

"""
Source Heuristics for Route Files.

Line-scan and regex heuristics that classify a route module as a client or
server component and detect its exports. This is deliberately not a parser:
the route builders only depend on the functions below, so a syntax-aware
implementation can replace this module without touching them.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from next_introspect.domain.constants import APP_EXPORT_FLAGS, DATA_FETCHING_METHODS

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# REGEX CONSTANTS
# -----------------------------------------------------------------------------

_CLIENT_DIRECTIVE_RX = re.compile(r"""^(['"])use client\1;?$""")
_DIRECTIVE_SCAN_LINES = 5

_NAMED_DECL_RX = re.compile(
    r"export\s+(?:async\s+)?(?:const|let|var|function\*?|class|interface|type|enum)\s+([A-Za-z_$][\w$]*)"
)
_EXPORT_LIST_RX = re.compile(r"export\s*\{\s*([^}]+?)\s*\}")
_DEFAULT_EXPORT_RX = re.compile(r"export\s+default\b")
_REVALIDATE_RX = re.compile(r"export\s+(?:const\s+)?revalidate\s*=\s*(\d+)")

_NON_CODE_PREFIXES = ("//", "/*", "*", "import", "export")


# ==============================================================================
# PUBLIC API
# ==============================================================================

def detect_component_type(content: str) -> str:
    """
    Classify a module as 'client' or 'server' from its leading directive.

    Only the first few lines are inspected, and scanning stops at the first
    line that is real code rather than a comment, import or export.

    Args:
        content: Module source text.

    Returns:
        str: 'client' when the directive is present, otherwise 'server'.
    """
    for raw in content.splitlines()[:_DIRECTIVE_SCAN_LINES]:
        line = raw.strip()
        if _CLIENT_DIRECTIVE_RX.match(line):
            return "client"
        if line and not line.startswith(_NON_CODE_PREFIXES):
            break
    return "server"


def extract_exports(content: str) -> List[str]:
    """
    Collect exported names, including 'default' for a default export.

    Args:
        content: Module source text.

    Returns:
        List[str]: Unique export names in order of appearance.
    """
    names: List[str] = []

    def _add(name: str) -> None:
        if name and name not in names:
            names.append(name)

    for match in _NAMED_DECL_RX.finditer(content):
        _add(match.group(1))

    for match in _EXPORT_LIST_RX.finditer(content):
        for item in match.group(1).split(","):
            item = item.strip()
            if not item:
                continue
            # 'local as exported' publishes the alias
            parts = re.split(r"\s+as\s+", item)
            _add(parts[-1].strip())

    if _DEFAULT_EXPORT_RX.search(content):
        _add("default")

    return names


def extract_revalidate(content: str) -> Optional[int]:
    """Return the numeric 'revalidate' export, if declared."""
    match = _REVALIDATE_RX.search(content)
    return int(match.group(1)) if match else None


def extract_app_exports(content: str) -> Dict[str, Any]:
    """
    Summarize route-level exports relevant to the nested-layout family.

    Args:
        content: Module source text.

    Returns:
        Dict[str, Any]: Flags for metadata/generate* exports that are
                        present, plus 'revalidate' when declared.
    """
    exported = set(extract_exports(content))
    out: Dict[str, Any] = {name: True for name in APP_EXPORT_FLAGS if name in exported}
    revalidate = extract_revalidate(content)
    if revalidate is not None:
        out["revalidate"] = revalidate
    return out


def extract_data_fetching(content: str) -> Optional[Dict[str, bool]]:
    """
    Detect flat-family data-fetching exports.

    Args:
        content: Module source text.

    Returns:
        Optional[Dict[str, bool]]: Present methods, or None when none is.
    """
    exported = set(extract_exports(content))
    found = {name: True for name in DATA_FETCHING_METHODS if name in exported}
    return found or None


def read_source(file_path: str) -> Optional[str]:
    """
    Read a route module, logging and recovering from I/O failures.

    Args:
        file_path: Absolute path to the module.

    Returns:
        Optional[str]: File content, or None when unreadable.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read route file '{file_path}': {e}")
        return None
