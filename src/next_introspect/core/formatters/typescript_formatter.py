from __future__ import annotations

"""
TypeScript Route Module Formatter.

Generates a source module exposing every page route twice: as granular
named exports (one per node of the route structure, so bundlers can drop
unused ones) and as a nested 'routes' object whose leaves reference those
exports. Parameterized routes become typed template functions that also
carry their raw path in a 'path' field.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from next_introspect.core.formatters.base import IntrospectionResult, ResultFormatter
from next_introspect.core.routing.identifiers import (
    accessor_tokens,
    build_template,
    export_name,
    sanitize_identifier,
    strip_path_prefixes,
)
from next_introspect.core.routing.tree import ensure_route_list
from next_introspect.domain.config import DEFAULT_INDENT
from next_introspect.domain.constants import BASE_KEY, INDEX_KEY, ROUTER_PAGES

logger = logging.getLogger(__name__)

RouteStructure = Dict[str, Union[str, "RouteStructure"]]
NodePath = Tuple[str, ...]

_ROUTE_KEYS = (INDEX_KEY, BASE_KEY)


# ==============================================================================
# PUBLIC API: STRUCTURE
# ==============================================================================

def is_page_route(route: Mapping[str, Any]) -> bool:
    """
    Decide whether a route gets an accessor in the generated module.

    API routes, underscore-prefixed internals and routes without a primary
    page file (layout-only or handler-only directories) are skipped.

    Args:
        route: Serialized route record.

    Returns:
        bool: True if the route is a navigable page.
    """
    path = str(route.get("path", ""))
    if path == "/api" or path.startswith("/api/") or "/_" in path:
        return False

    if route.get("router") == ROUTER_PAGES:
        pages = route.get("pagesRouter") or {}
        return not pages.get("isApiRoute") and not pages.get("isSpecialPage")

    special_files = (route.get("appRouter") or {}).get("specialFiles")
    if isinstance(special_files, Mapping):
        return bool(special_files.get("page"))

    file_name = os.path.basename(str(route.get("filePath", "")))
    return os.path.splitext(file_name)[0].lower() == "page"


def build_route_structure(routes: Sequence[Mapping[str, Any]]) -> RouteStructure:
    """
    Nest page routes by accessor token.

    A node that is both addressable and a parent keeps its own path under
    'index', or under 'base' when a child route is itself named 'index'
    (so '/' and '/index' both survive). The result does not depend on
    input order.

    Args:
        routes: Serialized route records.

    Returns:
        RouteStructure: token -> raw path, or token -> nested structure.
    """
    root = _StructureNode()
    for route in routes:
        if not is_page_route(route):
            continue
        path = str(route["path"])
        node = root
        # The root page is the top-level node's own path
        tokens = [] if path == "/" else accessor_tokens(path)
        for token in tokens:
            node = node.children.setdefault(token, _StructureNode())
        if node.path is not None and node.path != path:
            logger.warning(f"Routes '{node.path}' and '{path}' share an accessor; keeping the first")
            continue
        node.path = path
    return _freeze(root, top_level=True)  # type: ignore[return-value]


def ordered_items(node: Mapping[str, Any]) -> List[Tuple[str, Any]]:
    """Items with 'index'/'base' first, then insertion order."""
    head = [(k, node[k]) for k in _ROUTE_KEYS if k in node]
    tail = [(k, v) for k, v in node.items() if k not in _ROUTE_KEYS]
    return head + tail


# ==============================================================================
# FORMATTER
# ==============================================================================

class TypeScriptFormatter(ResultFormatter):
    """Render page routes as a tree-shakable TypeScript module."""

    format_type = "typescript"

    def __init__(
            self,
            indent: int = DEFAULT_INDENT,
            strip_prefixes: Optional[Sequence[str]] = None,
    ) -> None:
        self.indent = max(1, int(indent)) if indent else DEFAULT_INDENT
        self.strip_prefixes = list(strip_prefixes or [])

    def format(self, result: IntrospectionResult) -> str:
        routes = ensure_route_list(result.get("routes"))
        structure = build_route_structure(routes)
        logger.debug(f"TypeScript module: {len(structure)} top-level route keys")

        names = self._assign_export_names(structure)

        out: List[str] = [self._header(result.get("project") or {})]
        out.append("// Named exports for granular tree-shaking")
        for node_path, name in names.items():
            value = self._node_at(structure, node_path)
            out.append(f"export const {name} = {self._render_value(value, 0)};")

        out.append("")
        out.append("// Direct-reference routes object for dot notation (ultra tree-shakable)")
        out.append(f"export const routes = {self._render_references(structure, (), names, 0)} as const;")
        out.append("")
        out.append("// Default export for convenience")
        out.append("export default routes;")
        return "\n".join(out) + "\n"

    # -------------------------------------------------------------------------
    # Naming
    # -------------------------------------------------------------------------

    def _assign_export_names(self, structure: RouteStructure) -> Dict[NodePath, str]:
        """Pre-order walk assigning unique binding names to every node."""
        names: Dict[NodePath, str] = {}
        used: set = set()

        def _walk(node: Mapping[str, Any], prefix: NodePath) -> None:
            for key, value in node.items():
                node_path = prefix + (key,)
                name = export_name(node_path)
                if name in used:
                    n = 2
                    while f"{name}_{n}" in used:
                        n += 1
                    name = f"{name}_{n}"
                used.add(name)
                names[node_path] = name
                if isinstance(value, dict):
                    _walk(value, node_path)

        _walk(structure, ())
        return names

    @staticmethod
    def _node_at(structure: RouteStructure, node_path: NodePath) -> Any:
        node: Any = structure
        for key in node_path:
            node = node[key]
        return node

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _header(self, project: Mapping[str, Any]) -> str:
        framework = project.get("framework", "nextjs")
        lines = [
            "/**",
            f" * Generated route types for {framework} project",
            f" * Framework: {framework} {project.get('version', 'unknown')}",
            f" * Root directory: {project.get('rootDir', '')}",
            " *",
            " * This file provides type-safe access to your application routes.",
            " * Use the routes object to access route paths with dot notation.",
            " */",
            "",
        ]
        return "\n".join(lines)

    def _render_value(self, value: Any, depth: int) -> str:
        if isinstance(value, str):
            return self._render_route(value, depth)
        if _is_simple_route(value):
            key, path = ordered_items(value)[0]
            return f"{{ {key}: {self._literal(path)} }}"
        return self._render_object(value, depth)

    def _render_route(self, path: str, depth: int) -> str:
        stripped = strip_path_prefixes(path, self.strip_prefixes)
        template = build_template(stripped)
        if template is None:
            return self._literal(path)

        pad = " " * (self.indent * depth)
        inner = pad + " " * self.indent
        fields = [_property_key(p) for p in template.params]
        names = ", ".join(
            b if k == b else f"{k}: {b}" for k, b in zip(fields, template.bindings)
        )
        types = ", ".join(f"{k}: string" for k in fields)
        return "\n".join([
            "(() => {",
            f"{inner}/**",
            f"{inner} * @param {{object}} params - Route parameters",
            f"{inner} * @returns {{string}} URL: {template.example}",
            f"{inner} */",
            f"{inner}const func = ({{ {names} }}: {{ {types} }}): string => `{template.template}`;",
            f"{inner}func.path = {json.dumps(template.path)};",
            f"{inner}return func as typeof func & {{ path: string }};",
            f"{pad}}})()",
        ])

    def _render_object(self, node: Mapping[str, Any], depth: int) -> str:
        items = ordered_items(node)
        if not items:
            return "{}"
        pad = " " * (self.indent * depth)
        inner = pad + " " * self.indent
        lines = ["{"]
        for i, (key, value) in enumerate(items):
            rendered = self._literal(value) if isinstance(value, str) else self._render_object(value, depth + 1)
            comma = "," if i < len(items) - 1 else ""
            lines.append(f"{inner}{key}: {rendered}{comma}")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    def _render_references(
            self,
            node: Mapping[str, Any],
            prefix: NodePath,
            names: Mapping[NodePath, str],
            depth: int,
    ) -> str:
        items = ordered_items(node)
        if not items:
            return "{}"
        pad = " " * (self.indent * depth)
        inner = pad + " " * self.indent
        lines = ["{"]
        for i, (key, value) in enumerate(items):
            node_path = prefix + (key,)
            if isinstance(value, str) or _is_simple_route(value):
                rendered = names[node_path]
            else:
                rendered = self._render_references(value, node_path, names, depth + 1)
            comma = "," if i < len(items) - 1 else ""
            lines.append(f"{inner}{key}: {rendered}{comma}")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    def _literal(self, path: str) -> str:
        return json.dumps(strip_path_prefixes(path, self.strip_prefixes))


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_simple_route(value: Any) -> bool:
    """A node holding nothing but a single index/base path."""
    if not isinstance(value, dict) or len(value) != 1:
        return False
    key, path = next(iter(value.items()))
    return key in _ROUTE_KEYS and isinstance(path, str)


def _property_key(name: str) -> str:
    """Object key for a parameter, quoted unless already an identifier."""
    return name if sanitize_identifier(name) == name else json.dumps(name)


@dataclass
class _StructureNode:
    path: Optional[str] = None
    children: Dict[str, "_StructureNode"] = field(default_factory=dict)


def _freeze(node: _StructureNode, top_level: bool = False) -> Union[str, RouteStructure]:
    """Collapse childless nodes to their path and place self paths."""
    if not node.children and not top_level:
        return node.path or ""
    out: RouteStructure = {}
    if node.path is not None:
        out[_self_key(node.children)] = node.path
    for token, child in node.children.items():
        out[token] = _freeze(child)
    return out


def _self_key(children: Mapping[str, Any]) -> str:
    for key in _ROUTE_KEYS:
        if key not in children:
            return key
    n = 2
    while f"{INDEX_KEY}_{n}" in children:
        n += 1
    return f"{INDEX_KEY}_{n}"
