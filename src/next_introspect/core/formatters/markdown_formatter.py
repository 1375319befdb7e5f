from __future__ import annotations

"""
Markdown Formatter.

Assembles a human-readable report with a fixed section order: project
information, configuration, route statistics, then one subsection per
route for each router family, API routes and special pages. Every
optional field degrades to 'N/A' or is omitted instead of failing.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional

from next_introspect.core.formatters.base import IntrospectionResult, ResultFormatter
from next_introspect.core.routing.tree import ensure_route_list
from next_introspect.domain.constants import (
    PATTERN_STATIC,
    ROUTER_APP,
    ROUTER_PAGES,
)

_NA = "N/A"

_ROUTER_LABELS: Dict[str, str] = {
    "app": "App Router",
    "pages": "Pages Router",
    "both": "App Router + Pages Router",
}

_PATTERN_LABELS: Dict[str, str] = {
    "static": "Static",
    "dynamic": "Dynamic",
    "catch-all": "Catch-all",
    "optional-catch-all": "Optional Catch-all",
}

_RESERVED_METADATA_KEYS = ("title", "description")


class MarkdownFormatter(ResultFormatter):
    """Render the result as a Markdown document."""

    format_type = "markdown"

    def format(self, result: IntrospectionResult) -> str:
        project: Mapping[str, Any] = result.get("project") or {}
        meta: Mapping[str, Any] = result.get("metadata") or {}
        routes = ensure_route_list(result.get("routes"))

        lines: List[str] = ["# Next.js Project Introspection", ""]
        self._add_project_section(lines, project, meta)

        config = project.get("config")
        if config:
            lines += ["## Configuration", ""]
            self._add_config_section(lines, config)
            lines.append("")

        app_routes = [r for r in routes if r.get("router") == ROUTER_APP]
        pages_routes = [r for r in routes if r.get("router") == ROUTER_PAGES]
        api_routes = [r for r in pages_routes if _pages(r).get("isApiRoute")]
        special_pages = [r for r in pages_routes if _pages(r).get("isSpecialPage")]
        plain_pages = [r for r in pages_routes if r not in api_routes and r not in special_pages]
        dynamic_count = sum(1 for r in routes if r.get("pattern", PATTERN_STATIC) != PATTERN_STATIC)

        lines += [
            "## Routes Overview",
            "",
            f"- **Total Routes**: {len(routes)}",
            f"- **App Router Routes**: {len(app_routes)}",
            f"- **Pages Router Routes**: {len(pages_routes)}",
            f"- **API Routes**: {len(api_routes)}",
            f"- **Dynamic Routes**: {dynamic_count}",
            "",
        ]

        sections = (
            ("## App Router Routes", app_routes, self._add_app_details),
            ("## Pages Router Routes", plain_pages, self._add_pages_details),
            ("## API Routes", api_routes, self._add_pages_details),
            ("## Special Pages", special_pages, self._add_special_page_details),
        )
        for heading, section_routes, detail_fn in sections:
            if not section_routes:
                continue
            lines += [heading, ""]
            for route in section_routes:
                self._add_route(lines, route, detail_fn)

        return "\n".join(lines)

    # -------------------------------------------------------------------------
    # Sections
    # -------------------------------------------------------------------------

    def _add_project_section(
            self,
            lines: List[str],
            project: Mapping[str, Any],
            meta: Mapping[str, Any],
    ) -> None:
        source_dirs = project.get("sourceDirs") or {}
        framework = f"{project.get('framework', _NA)} {project.get('version', '')}".strip()
        router = project.get("router")

        lines += [
            "## Project Information",
            "",
            f"- **Framework**: {framework}",
            f"- **Router Type**: {_ROUTER_LABELS.get(router, router or _NA)}",
            f"- **Root Directory**: `{project.get('rootDir', _NA)}`",
            f"- **App Directory**: `{source_dirs.get('app') or _NA}`",
            f"- **Pages Directory**: `{source_dirs.get('pages') or _NA}`",
            f"- **Analysis Mode**: {meta.get('mode', _NA)}",
            f"- **Files Processed**: {meta.get('filesProcessed', _NA)}",
            f"- **Analysis Duration**: {_duration(meta.get('duration'))}",
            f"- **Analyzed At**: {meta.get('analyzedAt', _NA)}",
        ]
        if meta.get("mergedAt"):
            lines.append(f"- **Merged At**: {meta['mergedAt']}")
        if meta.get("mergeSource"):
            lines.append(f"- **Merge Source**: `{meta['mergeSource']}`")
        lines.append("")

    def _add_config_section(self, lines: List[str], config: Mapping[str, Any]) -> None:
        if config.get("basePath"):
            lines.append(f"- **Base Path**: `{config['basePath']}`")
        if config.get("distDir"):
            lines.append(f"- **Distribution Directory**: `{config['distDir']}`")
        if config.get("trailingSlash") is not None:
            state = "Enabled" if config["trailingSlash"] else "Disabled"
            lines.append(f"- **Trailing Slash**: {state}")
        domains = (config.get("images") or {}).get("domains") or []
        if domains:
            lines.append(f"- **Image Domains**: {', '.join(f'`{d}`' for d in domains)}")
        if config.get("hasMiddleware"):
            lines.append("- **Middleware**: Present")
        if config.get("experimental"):
            lines.append("- **Experimental Features**: Enabled")

    # -------------------------------------------------------------------------
    # Route entries
    # -------------------------------------------------------------------------

    def _add_route(
            self,
            lines: List[str],
            route: Mapping[str, Any],
            detail_fn: Callable[[List[str], Mapping[str, Any]], None],
    ) -> None:
        lines += [f"### `{route.get('path', _NA)}`", ""]

        dynamic = route.get("dynamicSegments") or []
        if dynamic:
            lines.append(f"- **Dynamic Segments**: {_code_list(dynamic)}")
        if route.get("catchAllSegment"):
            lines.append(f"- **Catch-all Segment**: `{route['catchAllSegment']}`")
        pattern = route.get("pattern")
        lines.append(f"- **Pattern**: {_PATTERN_LABELS.get(pattern, pattern or _NA)}")

        detail_fn(lines, route)
        self._add_metadata(lines, route.get("metadata"))
        lines.append("")

    def _add_app_details(self, lines: List[str], route: Mapping[str, Any]) -> None:
        app = route.get("appRouter") or {}

        present = [name for name, flag in (app.get("specialFiles") or {}).items() if flag]
        if present:
            lines.append(f"- **Special Files**: {_code_list(present)}")

        if app.get("isRouteGroup"):
            lines.append("- **Route Group**: Yes")
        if app.get("isInterceptingRoute"):
            lines.append("- **Intercepting Route**: Yes")
        if app.get("isParallelRoute"):
            lines.append("- **Parallel Route**: Yes")

        components = [
            f"{name}: {kind}"
            for name, kind in (app.get("componentTypes") or {}).items()
            if kind and kind != "unknown"
        ]
        if components:
            lines.append(f"- **Components**: {', '.join(components)}")

        exports = app.get("exports") or {}
        flags = [name for name, value in exports.items() if value is True]
        if flags:
            lines.append(f"- **Exports**: {_code_list(flags)}")
        if "revalidate" in exports:
            lines.append(f"- **Revalidate**: {exports['revalidate']}s")

    def _add_pages_details(self, lines: List[str], route: Mapping[str, Any]) -> None:
        pages = _pages(route)
        component = pages.get("componentType")
        if component and component != "unknown":
            lines.append(f"- **Component Type**: {component}")

        methods = [name for name, flag in (pages.get("dataFetching") or {}).items() if flag]
        if methods:
            lines.append(f"- **Data Fetching**: {_code_list(methods)}")

    def _add_special_page_details(self, lines: List[str], route: Mapping[str, Any]) -> None:
        lines.append(f"- **Special Page**: {_pages(route).get('specialPageType') or _NA}")
        self._add_pages_details(lines, route)

    def _add_metadata(self, lines: List[str], metadata: Optional[Mapping[str, Any]]) -> None:
        if not metadata:
            return
        if metadata.get("title"):
            lines.append(f"- **Title**: {metadata['title']}")
        if metadata.get("description"):
            lines.append(f"- **Description**: {metadata['description']}")
        custom = [
            f"{key}: {value}"
            for key, value in metadata.items()
            if key not in _RESERVED_METADATA_KEYS
        ]
        if custom:
            lines.append(f"- **Metadata**: {', '.join(custom)}")


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _pages(route: Mapping[str, Any]) -> Mapping[str, Any]:
    return route.get("pagesRouter") or {}


def _code_list(items: List[str]) -> str:
    return ", ".join(f"`{item}`" for item in items)


def _duration(value: Any) -> str:
    return _NA if value is None else f"{value}ms"
