from __future__ import annotations

"""
Routing Vocabulary and Global Constants.

Centralizes the closed sets that drive route inference: special filenames
for both router families, recognized source extensions, reserved
identifiers for generated modules and the default traversal ignore list.
"""

from typing import Dict, FrozenSet, List, Tuple

# -----------------------------------------------------------------------------
# ROUTER FAMILIES AND PATTERNS
# -----------------------------------------------------------------------------

ROUTER_APP = "app"
ROUTER_PAGES = "pages"
ROUTER_BOTH = "both"

PATTERN_STATIC = "static"
PATTERN_DYNAMIC = "dynamic"
PATTERN_CATCH_ALL = "catch-all"
PATTERN_OPTIONAL_CATCH_ALL = "optional-catch-all"

FRAMEWORK_NAME = "nextjs"

# -----------------------------------------------------------------------------
# ANALYSIS MODES AND OUTPUT KINDS
# -----------------------------------------------------------------------------

MODE_BASIC = "basic"
MODE_DETAILED = "detailed"
MODE_COMPREHENSIVE = "comprehensive"
VALID_MODES: Tuple[str, ...] = (MODE_BASIC, MODE_DETAILED, MODE_COMPREHENSIVE)

VALID_FORMATS: Tuple[str, ...] = ("object", "json", "markdown", "typescript")

VALID_PATH_STYLES: Tuple[str, ...] = (
    "absolute",
    "relative-to-project",
    "relative-to-app",
    "relative-to-pages",
    "strip-prefix",
)

# -----------------------------------------------------------------------------
# FILE VOCABULARY
# -----------------------------------------------------------------------------

SOURCE_EXTENSIONS: Tuple[str, ...] = (".tsx", ".jsx", ".js", ".ts")

# Filename stem -> key used in the special-file presence map
APP_SPECIAL_FILES: Dict[str, str] = {
    "page": "page",
    "layout": "layout",
    "loading": "loading",
    "error": "error",
    "not-found": "notFound",
    "template": "template",
    "default": "default",
    "route": "route",
}

# Filename stem -> special page kind
PAGES_SPECIAL_PAGES: Dict[str, str] = {
    "_app": "app",
    "_document": "document",
    "_error": "error",
    "404": "404",
    "500": "500",
}

# Static segment names that denote special files and never reach the URL
URL_HIDDEN_SEGMENTS: FrozenSet[str] = frozenset({"page", "route"})

INTERCEPTING_MARKERS: FrozenSet[str] = frozenset({".", "..", "...", "...."})

NEXT_CONFIG_FILES: Tuple[str, ...] = (
    "next.config.js",
    "next.config.mjs",
    "next.config.ts",
    "next.config.mts",
    "next.config.cjs",
)

MIDDLEWARE_FILES: Tuple[str, ...] = (
    "middleware.js",
    "middleware.ts",
    "middleware.mjs",
    "middleware.mts",
)

DATA_FETCHING_METHODS: Tuple[str, ...] = (
    "getStaticProps",
    "getServerSideProps",
    "getStaticPaths",
)

APP_EXPORT_FLAGS: Tuple[str, ...] = (
    "metadata",
    "generateMetadata",
    "generateStaticParams",
    "generateViewport",
)

# -----------------------------------------------------------------------------
# NESTED ROUTE MAP
# -----------------------------------------------------------------------------

# Key of a node's own record; no URL segment is empty
SELF_KEY = ""

# -----------------------------------------------------------------------------
# GENERATED MODULE IDENTIFIERS
# -----------------------------------------------------------------------------

INDEX_KEY = "index"
BASE_KEY = "base"
RESERVED_SUFFIX = "_route"

RESERVED_WORDS: FrozenSet[str] = frozenset({
    "default", "const", "let", "var", "function", "class", "interface",
    "type", "enum", "namespace", "module", "export", "import", "from", "as",
    "if", "else", "for", "while", "do", "switch", "case", "break",
    "continue", "return", "try", "catch", "finally", "throw", "new", "this",
    "super", "extends", "implements", "public", "private", "protected",
    "static", "readonly", "abstract", "async", "await", "yield", "typeof",
    "instanceof", "in", "of", "true", "false", "null", "undefined", "void",
    "never", "any", "unknown", "string", "number", "boolean", "object",
    "symbol", "bigint", "delete", "with", "debugger", "routes",
})

# -----------------------------------------------------------------------------
# TRAVERSAL DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_MAX_DEPTH = 10


def default_ignore_patterns() -> List[str]:
    """
    Get the glob patterns skipped during route traversal.

    Returns:
        List[str]: Glob patterns evaluated against root-relative paths.
    """
    return [
        "node_modules/**",
        ".git/**",
        ".next/**",
        "dist/**",
        "build/**",
        ".vercel/**",
        "coverage/**",
        "**/*.test.*",
        "**/*.spec.*",
        "**/*.d.ts",
        ".DS_Store",
        "Thumbs.db",
    ]
