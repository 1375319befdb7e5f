from __future__ import annotations

"""
Result Merge Service.

Combines a previously exported JSON result with either a fresh result or
a bare metadata mapping. Routes merge by path with the newer values
winning; metadata merges through the regular lookup rules.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from next_introspect.core.routing.tree import ensure_route_list
from next_introspect.core.services.metadata import merge_route_metadata
from next_introspect.domain.errors import IntrospectionError

logger = logging.getLogger(__name__)

RouteKey = Tuple[str, str]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def load_result_file(json_file_path: str) -> Dict[str, Any]:
    """
    Read a previously exported JSON result.

    Args:
        json_file_path: Path to the JSON file.

    Returns:
        Dict[str, Any]: Parsed result.

    Raises:
        IntrospectionError: Unreadable file or not a JSON object.
    """
    try:
        with open(json_file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise IntrospectionError(f"Could not load result file {json_file_path}: {e}") from e
    if not isinstance(data, dict):
        raise IntrospectionError(f"Result file {json_file_path} does not contain a JSON object")
    return data


def merge_results(
        existing: Mapping[str, Any],
        new_data: Mapping[str, Any],
        merge_source: str,
        merged_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Merge new data into an existing result.

    Nested route maps on either side are flattened first. A 'routes' key
    in new_data selects route merging; otherwise new_data is a metadata
    mapping.

    Args:
        existing: Previously exported result.
        new_data: Fresh result or route-key -> metadata mapping.
        merge_source: Identifier of the existing file (usually its path).
        merged_at: Merge timestamp; defaults to now (UTC).

    Returns:
        Dict[str, Any]: Merged result with 'mergedAt'/'mergeSource' stamped.
    """
    existing_routes = ensure_route_list(existing.get("routes"))

    if "routes" in new_data:
        merged_routes = merge_routes_by_path(existing_routes, ensure_route_list(new_data.get("routes")))
    else:
        merged_routes = merge_route_metadata(existing_routes, new_data)

    stamp = (merged_at or datetime.now(timezone.utc)).isoformat()
    result = dict(existing)
    result["routes"] = merged_routes
    result["metadata"] = {
        **dict(existing.get("metadata") or {}),
        "mergedAt": stamp,
        "mergeSource": merge_source,
    }
    logger.info(f"Merged {len(merged_routes)} routes from '{merge_source}'")
    return result


def merge_routes_by_path(
        existing: List[Dict[str, Any]],
        incoming: List[Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Shallow-merge route dicts keyed by path and router family.

    Args:
        existing: Older route dicts.
        incoming: Newer route dicts; their fields win.

    Returns:
        List[Dict[str, Any]]: Existing order first, unknown routes appended.
    """
    merged: Dict[RouteKey, Dict[str, Any]] = {}
    for route in existing:
        merged[_route_key(route)] = dict(route)
    for route in incoming:
        key = _route_key(route)
        if key in merged:
            merged[key] = {**merged[key], **route}
        else:
            merged[key] = dict(route)
    return list(merged.values())


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _route_key(route: Mapping[str, Any]) -> RouteKey:
    return str(route.get("path", "")), str(route.get("router", ""))
