from __future__ import annotations

"""
Flat-File Route Builder (Pages Router).

Maps every source file under a 'pages' root to exactly one RouteRecord.
API routes and special pages are flagged, not filtered.
"""

import logging
import os
import re
from typing import List, Optional, Sequence

from next_introspect.core.analysis import source_scan
from next_introspect.core.routing.segments import (
    analyze_segments,
    classify_path,
    format_route_path,
)
from next_introspect.core.services.scanner import traverse_directory
from next_introspect.domain.constants import (
    DEFAULT_MAX_DEPTH,
    MODE_BASIC,
    MODE_COMPREHENSIVE,
    PAGES_SPECIAL_PAGES,
    ROUTER_PAGES,
    SOURCE_EXTENSIONS,
)
from next_introspect.domain.models import FileEntry, PagesRouterInfo, RouteRecord

logger = logging.getLogger(__name__)

_EXTENSION_RX = re.compile(r"\.(tsx|jsx|js|ts)$")


# ==============================================================================
# PUBLIC API
# ==============================================================================

def is_pages_router_file(file_name: str) -> bool:
    """
    Check whether a file can back a flat-family route.

    Declaration files and test/spec modules are excluded.

    Args:
        file_name: Base name of the file.

    Returns:
        bool: True for routable source files.
    """
    if file_name.endswith(".d.ts") or ".test." in file_name or ".spec." in file_name:
        return False
    return file_name.endswith(SOURCE_EXTENSIONS)


def route_path_from_file(relative_path: str) -> str:
    """
    Convert a pages-relative file path into its raw route path.

    Args:
        relative_path: Path relative to the pages root, e.g. 'blog/index.tsx'.

    Returns:
        str: Raw route path, e.g. '/blog'; '/' for the root index.
    """
    route = _EXTENSION_RX.sub("", relative_path.replace("\\", "/"))
    if route == "index":
        route = ""
    elif route.endswith("/index"):
        route = route[: -len("/index")]
    return "/" + route


def special_page_type(file_name: str) -> Optional[str]:
    """Return the special page kind for _app, _document, _error, 404, 500."""
    stem, ext = os.path.splitext(file_name)
    if ext.lower() not in SOURCE_EXTENSIONS:
        return None
    return PAGES_SPECIAL_PAGES.get(stem)


def build_pages_routes(
        pages_dir: str,
        mode: str = MODE_COMPREHENSIVE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        ignore_patterns: Optional[Sequence[str]] = None,
) -> List[RouteRecord]:
    """
    Scan a Pages Router root and build its route records.

    Args:
        pages_dir: Absolute path of the 'pages' directory.
        mode: Analysis depth (basic, detailed, comprehensive).
        max_depth: Traversal depth bound.
        ignore_patterns: Glob patterns to skip.

    Returns:
        List[RouteRecord]: One record per routable file, discovery order.
    """
    routes: List[RouteRecord] = []
    for entry in traverse_directory(pages_dir, max_depth, ignore_patterns):
        if entry.is_directory or not is_pages_router_file(entry.name):
            continue
        routes.append(build_pages_route(entry, mode))

    logger.debug(f"Pages Router: {len(routes)} routes under '{pages_dir}'")
    return routes


def build_pages_route(entry: FileEntry, mode: str) -> RouteRecord:
    """
    Build the record backed by one flat-family file.

    Args:
        entry: Scanner entry relative to the pages root.
        mode: Analysis depth.

    Returns:
        RouteRecord: The flat-file route.
    """
    raw_path = route_path_from_file(entry.relative_path)
    segments = classify_path(raw_path, allow_markers=False)
    analysis = analyze_segments(segments)
    path = format_route_path(segments, hide_special=False)

    page_type = special_page_type(entry.name)
    component_type: Optional[str] = "unknown" if mode == MODE_BASIC else None
    data_fetching = None

    if mode != MODE_BASIC:
        content = source_scan.read_source(entry.path)
        if content is not None:
            component_type = source_scan.detect_component_type(content)
            if mode == MODE_COMPREHENSIVE:
                data_fetching = source_scan.extract_data_fetching(content)
        else:
            component_type = "unknown"

    info = PagesRouterInfo(
        is_api_route=path == "/api" or path.startswith("/api/"),
        is_special_page=page_type is not None,
        special_page_type=page_type,
        component_type=component_type,
        data_fetching=data_fetching,
    )

    return RouteRecord(
        path=path,
        file_path=entry.path,
        pattern=analysis.pattern,
        router=ROUTER_PAGES,
        dynamic_segments=analysis.dynamic_segments,
        catch_all_segment=analysis.catch_all_segment,
        pages_router=info,
    )
