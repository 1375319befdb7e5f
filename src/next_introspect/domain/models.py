from __future__ import annotations

"""
Route Introspection Domain Models.

Defines the immutable records produced by the route builders and the
project descriptor assembled once per analysis. Every model knows how to
project itself into the camelCase JSON shape consumed by the formatters,
the merge service and previously exported result files.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# TRAVERSAL MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """
    Single filesystem entry yielded by the directory scanner.

    Attributes:
        path: Absolute filesystem path.
        relative_path: Path relative to the scanned root, '/' separated.
        is_directory: True for directories.
        name: Base name of the entry.
    """
    path: str
    relative_path: str
    is_directory: bool
    name: str

    @property
    def extension(self) -> str:
        """Lower-cased extension including the leading dot."""
        dot = self.name.rfind(".")
        return self.name[dot:].lower() if dot > 0 else ""

# -----------------------------------------------------------------------------
# ROUTE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RouteSegment:
    """
    Structural classification of one path segment.

    A segment belongs to at most one of the dynamic family, route groups,
    intercepting markers or parallel slots. Static segments carry no flags.

    Attributes:
        name: Raw segment text as found on disk.
        is_dynamic: Bracketed parameter of any kind.
        is_catch_all: '[...x]' or '[[...x]]'.
        is_optional_catch_all: '[[...x]]' only.
        is_route_group: '(group)' organizational folder.
        is_intercepting: '(.)', '(..)', '(...)' or '(....)'.
        is_parallel: '@slot' folder.
        param_name: Bound variable name, present iff is_dynamic.
    """
    name: str
    is_dynamic: bool = False
    is_catch_all: bool = False
    is_optional_catch_all: bool = False
    is_route_group: bool = False
    is_intercepting: bool = False
    is_parallel: bool = False
    param_name: Optional[str] = None

    @property
    def contributes_to_url(self) -> bool:
        return not (self.is_route_group or self.is_intercepting or self.is_parallel)


@dataclass(frozen=True)
class AppRouterInfo:
    """
    Nested-layout family details attached to a route.

    Attributes:
        segment: Last raw directory segment ('' for the root).
        is_route_group: Any segment of the route is a route group.
        is_intercepting_route: Any segment is an intercepting marker.
        is_parallel_route: Any segment is a parallel slot.
        special_files: Presence map keyed by special file role.
        component_types: 'client' or 'server' per special file role.
        exports: Detected export flags and revalidate interval.
    """
    segment: str
    is_route_group: bool = False
    is_intercepting_route: bool = False
    is_parallel_route: bool = False
    special_files: Dict[str, bool] = field(default_factory=dict)
    component_types: Dict[str, str] = field(default_factory=dict)
    exports: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "segment": self.segment,
            "isRouteGroup": self.is_route_group,
            "isInterceptingRoute": self.is_intercepting_route,
            "isParallelRoute": self.is_parallel_route,
            "specialFiles": dict(self.special_files),
            "componentTypes": dict(self.component_types),
        }
        if self.exports is not None:
            out["exports"] = dict(self.exports)
        return out


@dataclass(frozen=True)
class PagesRouterInfo:
    """
    Flat-file family details attached to a route.

    Attributes:
        is_api_route: Route lives under the 'api' segment.
        is_special_page: File is one of _app, _document, _error, 404, 500.
        special_page_type: Which special page, when is_special_page.
        component_type: 'client', 'server' or 'unknown' (basic mode).
        data_fetching: Flags for getStaticProps and friends.
    """
    is_api_route: bool = False
    is_special_page: bool = False
    special_page_type: Optional[str] = None
    component_type: Optional[str] = None
    data_fetching: Optional[Dict[str, bool]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "isApiRoute": self.is_api_route,
            "isSpecialPage": self.is_special_page,
        }
        if self.special_page_type is not None:
            out["specialPageType"] = self.special_page_type
        if self.component_type is not None:
            out["componentType"] = self.component_type
        if self.data_fetching is not None:
            out["dataFetching"] = dict(self.data_fetching)
        return out


@dataclass(frozen=True)
class RouteRecord:
    """
    One logical, addressable route of the analyzed project.

    The 'router' tag selects which of 'app_router' or 'pages_router' is
    populated. Records are rebuilt with dataclasses.replace when metadata
    or display paths are applied.

    Attributes:
        path: URL path, always starting with '/'.
        file_path: Representative source file backing the route.
        pattern: static, dynamic, catch-all or optional-catch-all.
        router: 'app' or 'pages'.
        dynamic_segments: Ordered plain dynamic parameter names.
        catch_all_segment: Catch-all parameter name, if any.
        app_router: Nested-layout family details.
        pages_router: Flat-file family details.
        metadata: Free-form metadata merged from an external source.
    """
    path: str
    file_path: str
    pattern: str
    router: str
    dynamic_segments: List[str] = field(default_factory=list)
    catch_all_segment: Optional[str] = None
    app_router: Optional[AppRouterInfo] = None
    pages_router: Optional[PagesRouterInfo] = None
    metadata: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Project the record into its serialized JSON shape.

        Returns:
            Dict[str, Any]: camelCase mapping omitting absent optional fields.
        """
        out: Dict[str, Any] = {
            "path": self.path,
            "filePath": self.file_path,
            "pattern": self.pattern,
        }
        if self.dynamic_segments:
            out["dynamicSegments"] = list(self.dynamic_segments)
        if self.catch_all_segment:
            out["catchAllSegment"] = self.catch_all_segment
        out["router"] = self.router
        if self.app_router is not None:
            out["appRouter"] = self.app_router.to_dict()
        if self.pages_router is not None:
            out["pagesRouter"] = self.pages_router.to_dict()
        if self.metadata is not None:
            out["metadata"] = dict(self.metadata)
        return out

    @property
    def is_api_route(self) -> bool:
        return bool(self.pages_router and self.pages_router.is_api_route)

    @property
    def is_special_page(self) -> bool:
        return bool(self.pages_router and self.pages_router.is_special_page)

# -----------------------------------------------------------------------------
# PROJECT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectInfo:
    """
    Coarse descriptor of the analyzed project.

    Attributes:
        framework: Framework tag, always 'nextjs'.
        version: Declared framework version or 'unknown'.
        router: 'app', 'pages' or 'both'.
        root_dir: Absolute project root.
        config: Best-effort scraped build configuration.
        package_info: Manifest content or summary.
        source_dirs: Detected route roots keyed by family.
    """
    framework: str
    version: str
    router: str
    root_dir: str
    config: Optional[Dict[str, Any]] = None
    package_info: Optional[Dict[str, Any]] = None
    source_dirs: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "framework": self.framework,
            "version": self.version,
            "router": self.router,
            "rootDir": self.root_dir,
        }
        if self.config is not None:
            out["config"] = self.config
        if self.package_info is not None:
            out["packageInfo"] = self.package_info
        out["sourceDirs"] = dict(self.source_dirs)
        return out
