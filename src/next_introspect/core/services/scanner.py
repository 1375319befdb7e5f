from __future__ import annotations

"""
Route Tree Discovery Service.

Walks a route root sequentially, depth-bounded and sorted, so that
first-discovered-file tie-breaks and warning order are reproducible.
Unreadable directories are logged and contribute nothing.
"""

import fnmatch
import logging
import os
from typing import List, Optional, Sequence

from next_introspect.domain.constants import DEFAULT_MAX_DEPTH, default_ignore_patterns
from next_introspect.domain.models import FileEntry

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def traverse_directory(
        root: str,
        max_depth: int = DEFAULT_MAX_DEPTH,
        ignore_patterns: Optional[Sequence[str]] = None,
) -> List[FileEntry]:
    """
    List every entry under a root, pre-order, directories before contents.

    Args:
        root: Directory to scan.
        max_depth: Maximum recursion depth; deeper subtrees are truncated.
        ignore_patterns: Glob patterns matched against root-relative paths.

    Returns:
        List[FileEntry]: Entries in deterministic (sorted) visiting order.
    """
    patterns = list(ignore_patterns) if ignore_patterns is not None else default_ignore_patterns()
    root_abs = os.path.abspath(root)
    entries: List[FileEntry] = []
    _walk(root_abs, root_abs, 0, max_depth, patterns, entries)
    return entries


def matches_ignore(relative_path: str, patterns: Sequence[str]) -> bool:
    """
    Evaluate glob ignore rules against a '/' separated relative path.

    Supports 'dir/**' (the directory and everything below it) and
    '**/pattern' (pattern at any depth, matched on the base name), plus
    plain fnmatch globs against the full relative path or the base name.

    Args:
        relative_path: Path relative to the scanned root.
        patterns: Glob patterns.

    Returns:
        bool: True if any rule matches.
    """
    name = relative_path.rsplit("/", 1)[-1]
    for pattern in patterns:
        if pattern.endswith("/**"):
            prefix = pattern[:-3]
            if relative_path == prefix or relative_path.startswith(prefix + "/"):
                return True
            if "/" not in prefix and name == prefix:
                return True
            continue
        if pattern.startswith("**/"):
            if fnmatch.fnmatchcase(name, pattern[3:]):
                return True
            continue
        if fnmatch.fnmatchcase(relative_path, pattern) or fnmatch.fnmatchcase(name, pattern):
            return True
    return False


def directory_exists(path: str) -> bool:
    return os.path.isdir(path)


def file_exists(path: str) -> bool:
    return os.path.isfile(path)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _walk(
        current: str,
        root: str,
        depth: int,
        max_depth: int,
        patterns: Sequence[str],
        out: List[FileEntry],
) -> None:
    """Recursive, sequential visitor feeding the entry list."""
    if depth > max_depth:
        return

    try:
        names = sorted(os.listdir(current))
    except OSError as e:
        logger.warning(f"Could not read directory '{current}': {e}")
        return

    for name in names:
        full_path = os.path.join(current, name)
        rel_path = os.path.relpath(full_path, root).replace(os.sep, "/")
        if matches_ignore(rel_path, patterns):
            continue

        is_dir = os.path.isdir(full_path)
        out.append(FileEntry(path=full_path, relative_path=rel_path, is_directory=is_dir, name=name))
        if is_dir:
            _walk(full_path, root, depth + 1, max_depth, patterns, out)
