from __future__ import annotations

"""
Unit tests for the Route Domain Models and Errors.

Verifies:
1. camelCase serialization, omitting absent optional fields.
2. Immutability of frozen dataclasses.
3. Error messages.
"""

import dataclasses

import pytest

from next_introspect.domain.errors import (
    InvalidProjectError,
    IntrospectionError,
    NotAnalyzedError,
    UnknownFormatError,
)
from next_introspect.domain.models import (
    AppRouterInfo,
    FileEntry,
    PagesRouterInfo,
    ProjectInfo,
    RouteRecord,
    RouteSegment,
)


def test_minimal_route_serialization() -> None:
    record = RouteRecord(path="/about", file_path="/p/about.tsx", pattern="static", router="pages")

    assert record.to_dict() == {
        "path": "/about",
        "filePath": "/p/about.tsx",
        "pattern": "static",
        "router": "pages",
    }


def test_full_app_route_serialization() -> None:
    record = RouteRecord(
        path="/docs/[[...slug]]",
        file_path="/p/app/docs/[[...slug]]/page.tsx",
        pattern="optional-catch-all",
        router="app",
        catch_all_segment="slug",
        app_router=AppRouterInfo(
            segment="[[...slug]]",
            special_files={"page": True},
            component_types={"page": "server"},
            exports={"generateStaticParams": True},
        ),
        metadata={"title": "Docs"},
    )
    out = record.to_dict()

    assert out["catchAllSegment"] == "slug"
    assert "dynamicSegments" not in out
    assert out["appRouter"] == {
        "segment": "[[...slug]]",
        "isRouteGroup": False,
        "isInterceptingRoute": False,
        "isParallelRoute": False,
        "specialFiles": {"page": True},
        "componentTypes": {"page": "server"},
        "exports": {"generateStaticParams": True},
    }
    assert out["metadata"] == {"title": "Docs"}
    assert list(out)[:3] == ["path", "filePath", "pattern"]


def test_pages_info_and_helpers() -> None:
    info = PagesRouterInfo(is_api_route=True, component_type="server")
    record = RouteRecord(path="/api/x", file_path="/p/api/x.ts", pattern="static", router="pages", pages_router=info)

    assert info.to_dict() == {"isApiRoute": True, "isSpecialPage": False, "componentType": "server"}
    assert record.is_api_route is True
    assert record.is_special_page is False


def test_records_are_frozen() -> None:
    record = RouteRecord(path="/", file_path="/p", pattern="static", router="app")
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.path = "/x"  # type: ignore[misc]


def test_project_info_serialization() -> None:
    info = ProjectInfo(framework="nextjs", version="14", router="app", root_dir="/p", source_dirs={"app": "app"})

    assert info.to_dict() == {
        "framework": "nextjs",
        "version": "14",
        "router": "app",
        "rootDir": "/p",
        "sourceDirs": {"app": "app"},
    }


def test_entry_and_segment_helpers() -> None:
    assert FileEntry(path="/p/a.TSX", relative_path="a.TSX", is_directory=False, name="a.TSX").extension == ".tsx"
    assert FileEntry(path="/p/.env", relative_path=".env", is_directory=False, name=".env").extension == ""
    assert RouteSegment(name="(group)", is_route_group=True).contributes_to_url is False
    assert RouteSegment(name="[id]", is_dynamic=True, param_name="id").contributes_to_url is True


def test_error_messages() -> None:
    assert str(InvalidProjectError("/nope")) == "Invalid Next.js project: /nope"
    assert str(NotAnalyzedError("get_routes")) == (
        "Project must be analyzed first. Call analyze() before get_routes()."
    )
    assert isinstance(UnknownFormatError("x"), ValueError)
    assert isinstance(UnknownFormatError("x"), IntrospectionError)
