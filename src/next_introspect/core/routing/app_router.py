from __future__ import annotations

"""
Nested-Layout Route Builder (App Router).

Groups the special files of an 'app' tree by directory and emits one
RouteRecord per directory. Source files are only opened in the detailed
and comprehensive modes.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

from next_introspect.core.analysis import source_scan
from next_introspect.core.routing.segments import (
    analyze_segments,
    classify_path,
    format_route_path,
)
from next_introspect.core.services.scanner import traverse_directory
from next_introspect.domain.constants import (
    APP_SPECIAL_FILES,
    DEFAULT_MAX_DEPTH,
    MODE_BASIC,
    MODE_COMPREHENSIVE,
    ROUTER_APP,
    SOURCE_EXTENSIONS,
)
from next_introspect.domain.models import AppRouterInfo, FileEntry, RouteRecord

logger = logging.getLogger(__name__)

# Roles whose exports carry route-level metadata
_EXPORT_SOURCE_ROLES = ("page", "layout")
# Route handlers are not components
_NON_COMPONENT_ROLES = ("route",)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def special_file_role(file_name: str) -> Optional[str]:
    """
    Map a filename to its special-file role key.

    Args:
        file_name: Base name such as 'not-found.tsx'.

    Returns:
        Optional[str]: Role key ('page', 'notFound', ...) or None.
    """
    stem, ext = os.path.splitext(file_name)
    if ext.lower() not in SOURCE_EXTENSIONS:
        return None
    return APP_SPECIAL_FILES.get(stem)


def build_app_routes(
        app_dir: str,
        mode: str = MODE_COMPREHENSIVE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        ignore_patterns: Optional[Sequence[str]] = None,
) -> List[RouteRecord]:
    """
    Scan an App Router root and build its route records.

    Args:
        app_dir: Absolute path of the 'app' directory.
        mode: Analysis depth (basic, detailed, comprehensive).
        max_depth: Traversal depth bound.
        ignore_patterns: Glob patterns to skip.

    Returns:
        List[RouteRecord]: One record per directory holding special files,
                           in discovery order.
    """
    entries = traverse_directory(app_dir, max_depth, ignore_patterns)
    groups = group_files_by_directory(entries)
    logger.debug(f"App Router: {len(groups)} route directories under '{app_dir}'")

    routes: List[RouteRecord] = []
    for directory, files in groups.items():
        routes.append(build_app_route(directory, files, mode))
    return routes


def group_files_by_directory(entries: Sequence[FileEntry]) -> Dict[str, List[FileEntry]]:
    """
    Group special files by their containing directory.

    Insertion order follows the first file discovered per directory.

    Args:
        entries: Scanner output for an App Router root.

    Returns:
        Dict[str, List[FileEntry]]: Relative directory ('' for the root)
                                    mapped to its special files.
    """
    groups: Dict[str, List[FileEntry]] = {}
    for entry in entries:
        if entry.is_directory or special_file_role(entry.name) is None:
            continue
        directory = entry.relative_path.rpartition("/")[0]
        groups.setdefault(directory, []).append(entry)
    return groups


def build_app_route(directory: str, files: Sequence[FileEntry], mode: str) -> RouteRecord:
    """
    Build the record of one route directory.

    Args:
        directory: Directory relative to the app root.
        files: Special files found in that directory, discovery order.
        mode: Analysis depth.

    Returns:
        RouteRecord: The nested-layout route.
    """
    segments = classify_path(directory)
    analysis = analyze_segments(segments)

    special_files = {role: False for role in APP_SPECIAL_FILES.values()}
    for f in files:
        role = special_file_role(f.name)
        if role:
            special_files[role] = True

    component_types: Dict[str, str] = {}
    exports: Optional[Dict[str, Any]] = None
    if mode != MODE_BASIC:
        component_types, exports = _analyze_components(files, mode)

    info = AppRouterInfo(
        segment=segments[-1].name if segments else "",
        is_route_group=any(s.is_route_group for s in segments),
        is_intercepting_route=any(s.is_intercepting for s in segments),
        is_parallel_route=any(s.is_parallel for s in segments),
        special_files=special_files,
        component_types=component_types,
        exports=exports,
    )

    return RouteRecord(
        path=format_route_path(segments),
        file_path=files[0].path if files else "",
        pattern=analysis.pattern,
        router=ROUTER_APP,
        dynamic_segments=analysis.dynamic_segments,
        catch_all_segment=analysis.catch_all_segment,
        app_router=info,
    )


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _analyze_components(
        files: Sequence[FileEntry],
        mode: str,
) -> Tuple[Dict[str, str], Optional[Dict[str, Any]]]:
    """Read each special file once for component and export detection."""
    component_types: Dict[str, str] = {}
    exports: Optional[Dict[str, Any]] = {} if mode == MODE_COMPREHENSIVE else None

    for f in files:
        role = special_file_role(f.name)
        if role is None:
            continue
        content = source_scan.read_source(f.path)
        if content is None:
            continue

        if role not in _NON_COMPONENT_ROLES:
            component_types[role] = source_scan.detect_component_type(content)

        if exports is not None and role in _EXPORT_SOURCE_ROLES:
            exports.update(source_scan.extract_app_exports(content))

    return component_types, exports
