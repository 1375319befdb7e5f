from __future__ import annotations

"""
Route Tree and Array Converters.

Bidirectional transform between the flat list of serialized route records
and a nested map keyed by path segment. A node that is both addressable
and a parent keeps its own record under the empty key, which no URL
segment can produce, so neither the record nor its children are ever
overwritten, whatever the input order.
"""

from typing import Any, Dict, List, Mapping, Sequence

from next_introspect.domain.constants import SELF_KEY

RouteDict = Dict[str, Any]
RouteTree = Dict[str, Any]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def is_route_leaf(node: Any) -> bool:
    """A node is a route record once it carries a 'router' field."""
    return isinstance(node, Mapping) and "router" in node


def routes_to_nested(routes: Sequence[Mapping[str, Any]]) -> RouteTree:
    """
    Fold serialized route records into a nested map.

    The 'path' field is dropped from leaves because the key chain encodes
    it. The root route lives under the top-level empty key.

    Args:
        routes: Serialized route records (dicts with a 'path').

    Returns:
        RouteTree: Nested map of segment -> record or subtree.
    """
    tree: RouteTree = {}
    for route in routes:
        parts = _split_path(str(route.get("path", "/")))
        leaf = {k: v for k, v in route.items() if k != "path"}

        if not parts:
            _place_leaf(tree, SELF_KEY, leaf)
            continue

        current = tree
        for part in parts[:-1]:
            current = _descend(current, part)
        _place_leaf(current, parts[-1], leaf)
    return tree


def routes_to_array(tree: Mapping[str, Any]) -> List[RouteDict]:
    """
    Flatten a nested map back into serialized route records.

    Args:
        tree: Output of routes_to_nested, or a previously exported one.

    Returns:
        List[RouteDict]: Records with 'path' rebuilt from the key chain.
    """
    out: List[RouteDict] = []
    _collect(tree, [], out)
    return out


def ensure_route_list(routes: Any) -> List[RouteDict]:
    """
    Normalize a 'routes' payload that may be a list or a nested map.

    Args:
        routes: List of records, nested map, or None.

    Returns:
        List[RouteDict]: Flat list of records.
    """
    if routes is None:
        return []
    if isinstance(routes, Mapping):
        return routes_to_array(routes)
    return [dict(r) for r in routes if isinstance(r, Mapping)]


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _split_path(path: str) -> List[str]:
    return [p for p in path.split("/") if p]


def _descend(node: RouteTree, key: str) -> RouteTree:
    """Return the subtree at key, promoting an existing leaf to the empty key."""
    existing = node.get(key)
    if existing is None:
        node[key] = {}
    elif is_route_leaf(existing):
        node[key] = {SELF_KEY: existing}
    return node[key]


def _place_leaf(node: RouteTree, key: str, leaf: RouteDict) -> None:
    """Store a record at key without discarding children already there."""
    existing = node.get(key)
    if isinstance(existing, dict) and not is_route_leaf(existing):
        existing[SELF_KEY] = leaf
    else:
        node[key] = leaf


def _collect(node: Mapping[str, Any], chain: List[str], out: List[RouteDict]) -> None:
    for key, value in node.items():
        if not isinstance(value, Mapping):
            continue
        if is_route_leaf(value):
            # The empty key addresses the parent node itself
            parts = chain if key == SELF_KEY else chain + [key]
            record = dict(value)
            record["path"] = "/" + "/".join(p for p in parts if p)
            out.append(record)
        else:
            _collect(value, chain + [key], out)
