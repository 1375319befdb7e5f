from __future__ import annotations

"""
Unit tests for the Result Presentation Helpers.
"""

import os

import pytest

from next_introspect.core.services.display import filter_excluded_fields, format_path_for_display

ROOT = os.path.abspath(os.path.join(os.sep, "work", "site"))
FILE = os.path.join(ROOT, "src", "app", "blog", "page.tsx")
DIRS = {"app": "src/app"}


@pytest.mark.parametrize("style, expected", [
    ("absolute", FILE),
    ("relative-to-project", "src/app/blog/page.tsx"),
    ("relative-to-app", "blog/page.tsx"),
    ("relative-to-pages", FILE),
])
def test_display_styles(style: str, expected: str) -> None:
    assert format_path_for_display(FILE, ROOT, DIRS, style) == expected


def test_strip_prefix() -> None:
    assert format_path_for_display(FILE, ROOT, DIRS, "strip-prefix", "/src/") == "app/blog/page.tsx"
    assert format_path_for_display(FILE, ROOT, DIRS, "strip-prefix", "/nowhere/") == FILE
    assert format_path_for_display(FILE, ROOT, DIRS, "strip-prefix", "") == FILE


def test_file_outside_route_root_keeps_absolute_path() -> None:
    outside = os.path.join(ROOT, "lib", "util.ts")
    assert format_path_for_display(outside, ROOT, DIRS, "relative-to-app") == outside


def test_filter_excluded_fields_at_any_depth() -> None:
    result = {
        "project": {"rootDir": "/x", "version": "14"},
        "routes": [{"path": "/", "filePath": "/x/app/page.tsx", "appRouter": {"filePath": "y"}}],
    }
    filtered = filter_excluded_fields(result, ["filePath", "rootDir"])

    assert filtered == {
        "project": {"version": "14"},
        "routes": [{"path": "/", "appRouter": {}}],
    }
    assert result["routes"][0]["filePath"] == "/x/app/page.tsx"


def test_filter_without_fields_is_identity() -> None:
    result = {"a": 1}
    assert filter_excluded_fields(result, None) is result
    assert filter_excluded_fields(result, []) is result
