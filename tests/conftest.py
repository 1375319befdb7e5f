from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Factories that lay out Next.js-shaped project trees under tmp_path.
"""

import json
import os
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


ProjectFactory = Callable[[Dict[str, str], Optional[Dict]], Path]


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_project(tmp_path: Path) -> ProjectFactory:
    """
    Return a factory writing a project tree.

    The factory takes a mapping of relative file path -> content and an
    optional package.json payload (a default manifest declaring 'next' is
    written when omitted).
    """

    def _factory(files: Dict[str, str], manifest: Optional[Dict] = None) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        payload = manifest if manifest is not None else {
            "name": "demo-app",
            "version": "1.0.0",
            "dependencies": {"next": "14.1.0", "react": "18.2.0"},
        }
        (root / "package.json").write_text(json.dumps(payload), encoding="utf-8")
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _factory


@pytest.fixture
def app_project(make_project: ProjectFactory) -> Path:
    """
    App Router project.

    Structure:
    app/
      layout.tsx, page.tsx
      blog/page.tsx
      blog/[slug]/page.tsx   ('use client')
      (marketing)/about/page.tsx
      docs/[[...slug]]/page.tsx
      api/health/route.ts
      dashboard/layout.tsx   (layout only)
    """
    return make_project({
        "app/layout.tsx": "export default function RootLayout() {}\n",
        "app/page.tsx": "export const metadata = { title: 'Home' };\nexport default function Home() {}\n",
        "app/blog/page.tsx": "export const revalidate = 60;\nexport default function Blog() {}\n",
        "app/blog/[slug]/page.tsx": "'use client';\nimport x from 'y';\nexport default function Post() {}\n",
        "app/(marketing)/about/page.tsx": "export default function About() {}\n",
        "app/docs/[[...slug]]/page.tsx": "export async function generateStaticParams() {}\nexport default function D() {}\n",
        "app/api/health/route.ts": "export async function GET() {}\n",
        "app/dashboard/layout.tsx": "export default function L() {}\n",
    })


@pytest.fixture
def pages_project(make_project: ProjectFactory) -> Path:
    """
    Pages Router project.

    Structure:
    pages/
      index.tsx, about.tsx, _app.tsx, 404.tsx
      blog/index.tsx, blog/[slug].tsx (getStaticProps + getStaticPaths)
      api/users.ts
      utils.test.ts (ignored)
    """
    return make_project({
        "pages/index.tsx": "export default function Home() {}\n",
        "pages/about.tsx": "export default function About() {}\n",
        "pages/_app.tsx": "export default function App() {}\n",
        "pages/404.tsx": "export default function NotFound() {}\n",
        "pages/blog/index.tsx": "export default function Blog() {}\n",
        "pages/blog/[slug].tsx": (
            "export async function getStaticProps() {}\n"
            "export async function getStaticPaths() {}\n"
            "export default function Post() {}\n"
        ),
        "pages/api/users.ts": "export default function handler() {}\n",
        "pages/utils.test.ts": "test('x', () => {})\n",
    })
