from __future__ import annotations

"""
Introspection Orchestrator.

NextIntrospect ties the pipeline together: project recognition, route
building for each detected router family, optional metadata merge and
path-display reformatting, then result composition and formatting. One
instance owns one project root and at most one completed analysis; any
option change invalidates that analysis.
"""

import dataclasses
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from next_introspect.core.formatters import JsonFormatter, get_formatter
from next_introspect.core.pipeline.validator import validate_config
from next_introspect.core.routing.app_router import build_app_routes
from next_introspect.core.routing.pages_router import build_pages_routes
from next_introspect.core.routing.tree import routes_to_nested
from next_introspect.core.services.display import filter_excluded_fields, format_path_for_display
from next_introspect.core.services.merge import load_result_file, merge_results
from next_introspect.core.services.metadata import merge_route_metadata, parse_metadata_file
from next_introspect.core.services.project import get_project_info, is_nextjs_project
from next_introspect.domain.constants import (
    PATTERN_STATIC,
    ROUTER_APP,
    ROUTER_BOTH,
    ROUTER_PAGES,
    VALID_MODES,
)
from next_introspect.domain.errors import InvalidProjectError, MetadataFileError, NotAnalyzedError
from next_introspect.domain.models import ProjectInfo, RouteRecord
from next_introspect.infra.fs import normalize_path, write_text_output

logger = logging.getLogger(__name__)


class NextIntrospect:
    """
    Analyze a Next.js project and render its routes.

    Example:
        >>> intro = NextIntrospect("./my-app", {"mode": "basic"})
        >>> intro.analyze()
        >>> print(intro.format("markdown"))
    """

    def __init__(self, project_path: str, options: Optional[Dict[str, Any]] = None) -> None:
        self.project_path = normalize_path(project_path)
        self._options = self._resolve_options(options or {})
        self._project_info: Optional[ProjectInfo] = None
        self._routes: List[RouteRecord] = []
        self._analysis_meta: Dict[str, Any] = {}

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------

    def analyze(self) -> ProjectInfo:
        """
        Run a full analysis of the project root.

        Returns:
            ProjectInfo: The project descriptor.

        Raises:
            InvalidProjectError: Root missing, not a directory, or not
                                 recognized as a Next.js project.
        """
        root = self.project_path
        if not os.path.isdir(root) or not is_nextjs_project(root):
            raise InvalidProjectError(root)

        self._reset()
        opts = self._options
        mode = opts["mode"]
        started = time.perf_counter()
        logger.info(f"Analyzing '{root}' (mode={mode})")

        project_info = get_project_info(root, opts)
        source_dirs = project_info.source_dirs
        routes: List[RouteRecord] = []

        if project_info.router in (ROUTER_APP, ROUTER_BOTH) and ROUTER_APP in source_dirs:
            routes += build_app_routes(
                os.path.join(root, source_dirs[ROUTER_APP]),
                mode,
                opts["max_depth"],
                opts["ignore_patterns"],
            )
        if project_info.router in (ROUTER_PAGES, ROUTER_BOTH) and ROUTER_PAGES in source_dirs:
            routes += build_pages_routes(
                os.path.join(root, source_dirs[ROUTER_PAGES]),
                mode,
                opts["max_depth"],
                opts["ignore_patterns"],
            )

        if opts["metadata_file"]:
            routes = self._apply_metadata_file(routes, opts["metadata_file"])

        if opts["show_file_paths"]:
            routes = [
                dataclasses.replace(
                    r,
                    file_path=format_path_for_display(
                        r.file_path, root, source_dirs, opts["path_style"], opts["strip_prefix"]
                    ),
                )
                for r in routes
            ]

        duration_ms = int((time.perf_counter() - started) * 1000)
        self._project_info = project_info
        self._routes = routes
        self._analysis_meta = {
            "analyzedAt": datetime.now(timezone.utc).isoformat(),
            "duration": duration_ms,
            "filesProcessed": len(routes),
            "mode": mode,
        }
        logger.info(f"Found {len(routes)} routes ({project_info.router} router) in {duration_ms}ms")
        return project_info

    def reanalyze(self) -> ProjectInfo:
        self._reset()
        return self.analyze()

    def is_analyzed(self) -> bool:
        return self._project_info is not None

    # -------------------------------------------------------------------------
    # Options
    # -------------------------------------------------------------------------

    def get_mode(self) -> str:
        return self._options["mode"]

    def set_mode(self, mode: str) -> None:
        """Change the analysis mode; the next query requires a new analyze()."""
        self.update_options({"mode": mode})

    def get_options(self) -> Dict[str, Any]:
        return dict(self._options)

    def update_options(self, options: Dict[str, Any]) -> None:
        """
        Merge option overrides and invalidate the current analysis.

        Args:
            options: Partial options mapping.

        Raises:
            ValueError: Unknown analysis mode.
        """
        self._options = self._resolve_options({**self._options, **options})
        self._reset()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_project_info(self) -> ProjectInfo:
        if self._project_info is None:
            raise NotAnalyzedError("get_project_info")
        return self._project_info

    def get_routes(self) -> List[RouteRecord]:
        self._require_analysis("get_routes")
        return list(self._routes)

    def get_routes_by_router(self, router: str) -> List[RouteRecord]:
        return [r for r in self.get_routes() if r.router == router]

    def get_api_routes(self) -> List[RouteRecord]:
        return [r for r in self.get_routes() if r.is_api_route]

    def get_special_pages(self) -> List[RouteRecord]:
        return [r for r in self.get_routes() if r.is_special_page]

    def get_dynamic_routes(self) -> List[RouteRecord]:
        return [r for r in self.get_routes() if r.pattern != PATTERN_STATIC]

    def get_static_routes(self) -> List[RouteRecord]:
        return [r for r in self.get_routes() if r.pattern == PATTERN_STATIC]

    def get_result(self) -> Dict[str, Any]:
        """
        Compose the serializable result.

        Returns:
            Dict[str, Any]: {'project', 'routes', 'metadata'}, with routes
                            nested when requested and excluded fields removed.
        """
        project_info = self._project_info
        if project_info is None:
            raise NotAnalyzedError("get_result")

        routes: Any = [r.to_dict() for r in self._routes]
        if self._options["nested"]:
            routes = routes_to_nested(routes)

        result = {
            "project": project_info.to_dict(),
            "routes": routes,
            "metadata": dict(self._analysis_meta),
        }
        return filter_excluded_fields(result, self._options["exclude_fields"])

    def export_to_object(self) -> Dict[str, Any]:
        self._require_analysis("export_to_object")
        return self.get_result()

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def format(self, format_type: Optional[str] = None) -> Any:
        """
        Render the result.

        Args:
            format_type: object, json, markdown or typescript; defaults to
                         the 'format' option.

        Returns:
            Any: Text for json/markdown/typescript, the dict for object.

        Raises:
            UnknownFormatError: Unregistered format.
            NotAnalyzedError: Called before analyze().
        """
        formatter = get_formatter(
            format_type or self._options["format"],
            indent=self._options["indent"],
            strip_prefixes=self._options["strip_prefixes"],
        )
        self._require_analysis("format")
        return formatter.format(self.get_result())

    def render_text(self, format_type: Optional[str] = None) -> str:
        """Like format(), with the object kind serialized as indented JSON."""
        output = self.format(format_type)
        if isinstance(output, str):
            return output
        return JsonFormatter(indent=self._options["indent"]).format(output)

    def export_to_file(self, file_path: str, format_type: str = "json") -> str:
        """
        Write the rendered result to disk as UTF-8.

        Args:
            file_path: Destination; parent directories are created.
            format_type: Output kind.

        Returns:
            str: Absolute path written.
        """
        self._require_analysis("export_to_file")
        written = write_text_output(file_path, self.render_text(format_type))
        logger.info(f"Exported {format_type} output to '{written}'")
        return written

    def merge_with_json(self, existing_json_path: str, new_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge a fresh result or a metadata mapping into an exported result.

        Args:
            existing_json_path: Previously exported JSON result.
            new_data: Result with 'routes', or route-key -> metadata mapping.

        Returns:
            Dict[str, Any]: The merged result.

        Raises:
            IntrospectionError: The existing file cannot be loaded.
        """
        existing = load_result_file(existing_json_path)
        return merge_results(existing, new_data, existing_json_path)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _require_analysis(self, operation: str) -> None:
        if self._project_info is None:
            raise NotAnalyzedError(operation)

    def _reset(self) -> None:
        self._project_info = None
        self._routes = []
        self._analysis_meta = {}

    @staticmethod
    def _resolve_options(raw: Dict[str, Any]) -> Dict[str, Any]:
        mode = raw.get("mode")
        if mode is not None and mode not in VALID_MODES:
            raise ValueError(f"Invalid mode: {mode}. Use one of {', '.join(VALID_MODES)}")
        options, warnings = validate_config(raw, strict=False)
        for w in warnings:
            logger.warning(w)
        return options

    @staticmethod
    def _apply_metadata_file(routes: List[RouteRecord], metadata_file: str) -> List[RouteRecord]:
        try:
            metadata = parse_metadata_file(metadata_file)
        except MetadataFileError as e:
            logger.warning(f"Skipping metadata file: {e}")
            return routes
        logger.debug(f"Applying {len(metadata)} metadata entries")
        return merge_route_metadata(routes, metadata)
