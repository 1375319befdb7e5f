from __future__ import annotations

"""
Unit tests for the Markdown Formatter.

Checks section order, per-family details and graceful degradation when
optional fields are missing.
"""

from next_introspect.core.formatters import MarkdownFormatter


def _result() -> dict:
    return {
        "project": {
            "framework": "nextjs",
            "version": "14.1.0",
            "router": "both",
            "rootDir": "/work/site",
            "config": {"basePath": "/docs", "trailingSlash": False, "hasMiddleware": True},
            "sourceDirs": {"app": "app", "pages": "pages"},
        },
        "routes": [
            {
                "path": "/blog/[slug]",
                "filePath": "/work/site/app/blog/[slug]/page.tsx",
                "pattern": "dynamic",
                "dynamicSegments": ["slug"],
                "router": "app",
                "appRouter": {
                    "segment": "[slug]",
                    "isRouteGroup": False,
                    "isInterceptingRoute": False,
                    "isParallelRoute": False,
                    "specialFiles": {"page": True, "loading": True},
                    "componentTypes": {"page": "client"},
                    "exports": {"generateStaticParams": True, "revalidate": 60},
                },
                "metadata": {"title": "Post", "description": "A post", "owner": "web"},
            },
            {
                "path": "/about",
                "filePath": "/work/site/pages/about.tsx",
                "pattern": "static",
                "router": "pages",
                "pagesRouter": {"isApiRoute": False, "isSpecialPage": False, "componentType": "server",
                                "dataFetching": {"getStaticProps": True}},
            },
            {
                "path": "/api/users",
                "filePath": "/work/site/pages/api/users.ts",
                "pattern": "static",
                "router": "pages",
                "pagesRouter": {"isApiRoute": True, "isSpecialPage": False},
            },
            {
                "path": "/404",
                "filePath": "/work/site/pages/404.tsx",
                "pattern": "static",
                "router": "pages",
                "pagesRouter": {"isApiRoute": False, "isSpecialPage": True, "specialPageType": "404"},
            },
        ],
        "metadata": {
            "analyzedAt": "2024-01-01T00:00:00+00:00",
            "duration": 12,
            "filesProcessed": 4,
            "mode": "comprehensive",
        },
    }


def test_section_order() -> None:
    text = MarkdownFormatter().format(_result())
    headings = [line for line in text.splitlines() if line.startswith("## ")]

    assert headings == [
        "## Project Information",
        "## Configuration",
        "## Routes Overview",
        "## App Router Routes",
        "## Pages Router Routes",
        "## API Routes",
        "## Special Pages",
    ]
    assert text.startswith("# Next.js Project Introspection\n")


def test_project_and_statistics() -> None:
    text = MarkdownFormatter().format(_result())

    assert "- **Framework**: nextjs 14.1.0" in text
    assert "- **Router Type**: App Router + Pages Router" in text
    assert "- **Analysis Duration**: 12ms" in text
    assert "- **Total Routes**: 4" in text
    assert "- **Pages Router Routes**: 3" in text
    assert "- **API Routes**: 1" in text
    assert "- **Dynamic Routes**: 1" in text
    assert "- **Base Path**: `/docs`" in text
    assert "- **Trailing Slash**: Disabled" in text
    assert "- **Middleware**: Present" in text


def test_route_details() -> None:
    text = MarkdownFormatter().format(_result())

    assert "### `/blog/[slug]`" in text
    assert "- **Dynamic Segments**: `slug`" in text
    assert "- **Pattern**: Dynamic" in text
    assert "- **Special Files**: `page`, `loading`" in text
    assert "- **Components**: page: client" in text
    assert "- **Exports**: `generateStaticParams`" in text
    assert "- **Revalidate**: 60s" in text
    assert "- **Title**: Post" in text
    assert "- **Description**: A post" in text
    assert "- **Metadata**: owner: web" in text
    assert "- **Data Fetching**: `getStaticProps`" in text
    assert "- **Special Page**: 404" in text


def test_minimal_result_degrades_to_na() -> None:
    text = MarkdownFormatter().format({"routes": []})

    assert "- **Framework**: N/A" in text
    assert "- **Analysis Duration**: N/A" in text
    assert "- **Total Routes**: 0" in text
    assert "## App Router Routes" not in text
    assert "## Configuration" not in text


def test_merge_info_and_nested_routes() -> None:
    result = {
        "routes": {"": {"router": "app", "pattern": "static"}},
        "metadata": {"mergedAt": "2024-02-02T00:00:00+00:00", "mergeSource": "old.json"},
    }
    text = MarkdownFormatter().format(result)

    assert "### `/`" in text
    assert "- **Merged At**: 2024-02-02T00:00:00+00:00" in text
    assert "- **Merge Source**: `old.json`" in text
