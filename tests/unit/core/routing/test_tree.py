from __future__ import annotations

"""
Unit tests for the Route Tree and Array Converters.
"""

import itertools
from typing import Any, Dict, List

import pytest

from next_introspect.core.routing.app_router import build_app_routes
from next_introspect.core.routing.tree import (
    ensure_route_list,
    is_route_leaf,
    routes_to_array,
    routes_to_nested,
)


def _route(path: str, router: str = "app") -> Dict[str, Any]:
    return {"path": path, "pattern": "static", "router": router}


def _as_set(routes: List[Dict[str, Any]]) -> set:
    return {tuple(sorted(r.items())) for r in routes}


def test_nested_shape_and_root_under_empty_key() -> None:
    tree = routes_to_nested([_route("/"), _route("/blog"), _route("/blog/[slug]")])

    assert is_route_leaf(tree[""])
    assert "path" not in tree[""]
    assert is_route_leaf(tree["blog"][""])
    assert is_route_leaf(tree["blog"]["[slug]"])


def test_shorter_route_promoted_in_any_order() -> None:
    """A parent route and its child coexist regardless of arrival order."""
    routes = [_route("/blog"), _route("/blog/a"), _route("/blog/a/b")]
    for perm in itertools.permutations(routes):
        tree = routes_to_nested(list(perm))
        assert is_route_leaf(tree["blog"][""])
        assert is_route_leaf(tree["blog"]["a"][""])
        assert is_route_leaf(tree["blog"]["a"]["b"])


def test_round_trip_is_set_equal() -> None:
    routes = [
        _route("/"),
        _route("/about"),
        _route("/blog"),
        _route("/blog/[slug]"),
        _route("/api/users", router="pages"),
    ]
    assert _as_set(routes_to_array(routes_to_nested(routes))) == _as_set(routes)


def test_ensure_route_list_accepts_both_shapes() -> None:
    routes = [_route("/"), _route("/x")]
    assert ensure_route_list(None) == []
    assert _as_set(ensure_route_list(routes)) == _as_set(routes)
    assert _as_set(ensure_route_list(routes_to_nested(routes))) == _as_set(routes)


@pytest.mark.parametrize("paths", [
    ["/", "/index"],
    ["/blog", "/blog/index"],
    ["/blog", "/blog/index", "/blog/index/x"],
])
def test_literal_index_segment_survives_round_trip(paths: List[str]) -> None:
    """A directory named 'index' never collides with its parent's own record."""
    for perm in itertools.permutations(paths):
        routes = [_route(p) for p in perm]
        restored = routes_to_array(routes_to_nested(routes))
        assert sorted(r["path"] for r in restored) == sorted(paths)


def test_app_router_index_directory_round_trip(make_project: Any) -> None:
    """'app/index/page.tsx' stays distinct from the root page after nesting."""
    root = make_project({
        "app/page.tsx": "export default function Home() {}\n",
        "app/index/page.tsx": "export default function I() {}\n",
        "app/blog/page.tsx": "export default function B() {}\n",
        "app/blog/index/page.tsx": "export default function BI() {}\n",
    })
    built = [r.to_dict() for r in build_app_routes(str(root / "app"), mode="basic")]
    restored = routes_to_array(routes_to_nested(built))

    assert sorted(r["path"] for r in restored) == ["/", "/blog", "/blog/index", "/index"]
    assert {r["path"]: r for r in restored} == {r["path"]: r for r in built}
