from __future__ import annotations

"""
Unit tests for the TypeScript Route Module Formatter.

Validates page filtering, structure building, export naming and the
exact shape of the generated module.
"""

from typing import Any, Dict, List, Optional

from next_introspect.core.formatters.typescript_formatter import (
    TypeScriptFormatter,
    build_route_structure,
    is_page_route,
)


def _app(path: str, page: bool = True) -> Dict[str, Any]:
    files = {"page": True} if page else {"layout": True}
    return {"path": path, "router": "app", "pattern": "static", "appRouter": {"specialFiles": files}}


def _pages(path: str, api: bool = False, special: bool = False) -> Dict[str, Any]:
    return {
        "path": path,
        "router": "pages",
        "pattern": "static",
        "pagesRouter": {"isApiRoute": api, "isSpecialPage": special},
    }


def _render(routes: List[Dict[str, Any]], strip: Optional[List[str]] = None) -> str:
    project = {"framework": "nextjs", "version": "14.1.0", "rootDir": "/work/site"}
    return TypeScriptFormatter(strip_prefixes=strip).format({"project": project, "routes": routes})


# -----------------------------------------------------------------------------
# Structure
# -----------------------------------------------------------------------------

def test_page_filter() -> None:
    assert is_page_route(_app("/blog")) is True
    assert is_page_route(_app("/dashboard", page=False)) is False
    assert is_page_route(_app("/api/health")) is False
    assert is_page_route(_app("/_private/x")) is False
    assert is_page_route(_pages("/about")) is True
    assert is_page_route(_pages("/404", special=True)) is False
    assert is_page_route(_pages("/api/users", api=True)) is False


def test_page_filter_falls_back_to_file_name() -> None:
    assert is_page_route({"path": "/a", "router": "app", "filePath": "/x/app/a/page.tsx"}) is True
    assert is_page_route({"path": "/a", "router": "app", "filePath": "/x/app/a/layout.tsx"}) is False


def test_structure_is_order_independent() -> None:
    routes = [_app("/blog/[slug]"), _app("/blog"), _app("/")]
    expected = {"blog": {"bySlug": "/blog/[slug]", "index": "/blog"}, "index": "/"}

    assert build_route_structure(routes) == expected
    assert build_route_structure(list(reversed(routes))) == expected


def test_structure_keeps_literal_index_segments() -> None:
    """A route named 'index' pushes its parent's own path to 'base'."""
    routes = [_app("/index"), _app("/"), _app("/blog/index"), _app("/blog")]
    expected = {
        "base": "/",
        "index": "/index",
        "blog": {"base": "/blog", "index": "/blog/index"},
    }

    assert build_route_structure(routes) == expected
    assert build_route_structure(list(reversed(routes))) == expected


# -----------------------------------------------------------------------------
# Module output
# -----------------------------------------------------------------------------

def test_generated_module() -> None:
    text = _render([_app("/"), _app("/blog"), _app("/blog/[slug]"), _app("/api/health")])

    assert text.startswith("/**\n * Generated route types for nextjs project\n")
    assert " * Framework: nextjs 14.1.0\n" in text
    assert 'export const index = "/";' in text
    assert 'export const blog = {\n  index: "/blog",\n  bySlug: "/blog/[slug]"\n};' in text
    assert 'export const blog_index = "/blog";' in text
    assert (
        "export const blog_bySlug = (() => {\n"
        "  /**\n"
        "   * @param {object} params - Route parameters\n"
        "   * @returns {string} URL: /blog/<slug>\n"
        "   */\n"
        "  const func = ({ slug }: { slug: string }): string => `/blog/${slug}`;\n"
        '  func.path = "/blog/[slug]";\n'
        "  return func as typeof func & { path: string };\n"
        "})();"
    ) in text
    assert (
        "export const routes = {\n"
        "  index: index,\n"
        "  blog: {\n"
        "    index: blog_index,\n"
        "    bySlug: blog_bySlug\n"
        "  }\n"
        "} as const;"
    ) in text
    assert "health" not in text
    assert text.endswith("export default routes;\n")


def test_empty_module() -> None:
    text = _render([])
    assert "export const routes = {} as const;" in text
    assert "export default routes;" in text


def test_catch_all_parameters() -> None:
    text = _render([_app("/docs/[[...slug]]"), _app("/shop/[...parts]")])

    assert "export const docs_bySlugOptional = (() => {" in text
    assert "`/docs/${slug}`" in text
    assert "export const shop_byPartsRest = (() => {" in text


def test_reserved_words_and_collisions() -> None:
    text = _render([_app("/default"), _app("/a_b"), _app("/a/b")])

    assert 'export const default_route = "/default";' in text
    assert 'export const a_b = "/a_b";' in text
    assert 'export const a_b_2 = "/a/b";' in text
    assert "default: default_route" in text


def test_strip_prefixes() -> None:
    text = _render([_app("/site/about"), _app("/site/[id]")], strip=["/site"])

    assert 'export const site_about = "/about";' in text
    assert 'func.path = "/[id]";' in text
    assert "`/${id}`" in text


def test_hyphenated_parameter_binds_safe_local() -> None:
    """Parameter fields stay quoted while the template interpolates a valid identifier."""
    text = _render([_app("/posts/[post-id]")])

    assert "export const posts_byPostId = (() => {" in text
    assert (
        '  const func = ({ "post-id": postId }: { "post-id": string }): string => `/posts/${postId}`;\n'
    ) in text
    assert "   * @returns {string} URL: /posts/<post-id>\n" in text
    assert "post-id }" not in text


def test_index_and_root_both_exported() -> None:
    text = _render([_app("/"), _app("/index")])

    assert 'export const base = "/";' in text
    assert 'export const index = "/index";' in text
    assert "export const routes = {\n  index: index,\n  base: base\n} as const;" in text
