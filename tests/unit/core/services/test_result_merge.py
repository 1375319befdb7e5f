from __future__ import annotations

"""
Unit tests for the Result Merge Service.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from next_introspect.core.services.merge import (
    load_result_file,
    merge_results,
    merge_routes_by_path,
)
from next_introspect.domain.errors import IntrospectionError

_STAMP = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def existing() -> dict:
    return {
        "project": {"framework": "nextjs"},
        "routes": [
            {"path": "/", "router": "app", "pattern": "static"},
            {"path": "/about", "router": "app", "pattern": "static"},
            {"path": "/about", "router": "pages", "pattern": "static"},
        ],
        "metadata": {"mode": "comprehensive", "filesProcessed": 3},
    }


def test_merge_metadata_mapping(existing: dict) -> None:
    merged = merge_results(existing, {"/about": {"title": "About"}}, "old.json", merged_at=_STAMP)

    titled = [r for r in merged["routes"] if r.get("metadata")]
    assert len(titled) == 2
    assert merged["metadata"]["mergedAt"] == "2024-01-02T03:04:05+00:00"
    assert merged["metadata"]["mergeSource"] == "old.json"
    assert merged["metadata"]["mode"] == "comprehensive"
    assert merged["project"] == existing["project"]


def test_merge_fresh_result_by_path_and_router(existing: dict) -> None:
    fresh = {"routes": [
        {"path": "/about", "router": "app", "pattern": "dynamic"},
        {"path": "/new", "router": "app", "pattern": "static"},
    ]}
    merged = merge_results(existing, fresh, "old.json", merged_at=_STAMP)

    by_key = {(r["path"], r["router"]): r for r in merged["routes"]}
    assert by_key[("/about", "app")]["pattern"] == "dynamic"
    assert by_key[("/about", "pages")]["pattern"] == "static"
    assert [r["path"] for r in merged["routes"]] == ["/", "/about", "/about", "/new"]


def test_nested_existing_routes_are_flattened() -> None:
    nested = {"routes": {"": {"router": "app", "pattern": "static"}, "blog": {"router": "app"}}}
    merged = merge_results(nested, {"blog": {"title": "Blog"}}, "nested.json", merged_at=_STAMP)

    paths = {r["path"]: r for r in merged["routes"]}
    assert set(paths) == {"/", "/blog"}
    assert paths["/blog"]["metadata"] == {"title": "Blog"}


def test_incoming_fields_win() -> None:
    merged = merge_routes_by_path(
        [{"path": "/a", "router": "app", "x": 1, "y": 1}],
        [{"path": "/a", "router": "app", "y": 2}],
    )
    assert merged == [{"path": "/a", "router": "app", "x": 1, "y": 2}]


def test_load_result_file(tmp_path: Path) -> None:
    target = tmp_path / "routes.json"
    target.write_text(json.dumps({"routes": []}), encoding="utf-8")
    assert load_result_file(str(target)) == {"routes": []}


@pytest.mark.parametrize("content", ["[1, 2]", "{oops"])
def test_load_result_file_rejects_bad_content(tmp_path: Path, content: str) -> None:
    target = tmp_path / "routes.json"
    target.write_text(content, encoding="utf-8")
    with pytest.raises(IntrospectionError):
        load_result_file(str(target))
