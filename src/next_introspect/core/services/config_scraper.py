from __future__ import annotations

"""
Build Configuration Scraper.

Best-effort, regex-based extraction of a handful of keys from a
next.config file. The file is never executed or evaluated, so results
are advisory: missing or dynamic values simply do not appear.
"""

import logging
import os
import re
from typing import Any, Dict, List, Optional

from next_introspect.core.services.scanner import file_exists
from next_introspect.domain.constants import MIDDLEWARE_FILES, NEXT_CONFIG_FILES

logger = logging.getLogger(__name__)

_EXPERIMENTAL_BOOL_FEATURES = (
    "serverComponentsExternalPackages",
    "optimizeCss",
    "serverMinification",
    "webVitalsAttribution",
)

_DOMAINS_RX = re.compile(r"domains\s*:\s*\[([^\]]*)\]")
_ENV_PAIR_RX = re.compile(r"(\w+)\s*:\s*['\"]([^'\"]+)['\"]")


# ==============================================================================
# PUBLIC API
# ==============================================================================

def find_config_file(project_path: str) -> Optional[str]:
    """Return the first existing next.config.* file, by priority."""
    for name in NEXT_CONFIG_FILES:
        candidate = os.path.join(project_path, name)
        if file_exists(candidate):
            return candidate
    return None


def has_middleware(project_path: str) -> bool:
    """Check for a middleware module at the root or under src/."""
    for base in (project_path, os.path.join(project_path, "src")):
        for name in MIDDLEWARE_FILES:
            if file_exists(os.path.join(base, name)):
                return True
    return False


def parse_next_config(project_path: str) -> Optional[Dict[str, Any]]:
    """
    Scrape the project's build configuration.

    Args:
        project_path: Project root.

    Returns:
        Optional[Dict[str, Any]]: Extracted keys, or None when there is
                                  neither a config file nor middleware.
    """
    middleware = has_middleware(project_path)
    config_path = find_config_file(project_path)
    if config_path is None:
        return {"hasMiddleware": True} if middleware else None

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not parse Next.js config '{config_path}': {e}")
        return {"hasMiddleware": middleware}

    config = scrape_config_source(content)
    config["hasMiddleware"] = middleware
    logger.debug(f"Scraped {len(config)} config keys from '{os.path.basename(config_path)}'")
    return config


def scrape_config_source(content: str) -> Dict[str, Any]:
    """
    Extract known keys from config source text.

    Args:
        content: next.config source.

    Returns:
        Dict[str, Any]: Only the keys that were found.
    """
    config: Dict[str, Any] = {}

    for key in ("basePath", "distDir"):
        value = _extract_string(content, key)
        if value is not None:
            config[key] = value

    trailing = _extract_bool(content, "trailingSlash")
    if trailing is not None:
        config["trailingSlash"] = trailing

    images = _extract_images(content)
    if images is not None:
        config["images"] = images

    env = _extract_env(content)
    if env:
        config["env"] = env

    experimental = _extract_experimental(content)
    if experimental:
        config["experimental"] = experimental

    return config


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _extract_string(content: str, prop: str) -> Optional[str]:
    match = re.search(rf"{prop}\s*:\s*['\"]([^'\"]+)['\"]", content)
    return match.group(1) if match else None


def _extract_bool(content: str, prop: str) -> Optional[bool]:
    match = re.search(rf"{prop}\s*:\s*(true|false)", content)
    return match.group(1) == "true" if match else None


def _extract_object(content: str, prop: str) -> Optional[str]:
    """Capture an object literal allowing one level of nested braces."""
    match = re.search(rf"{prop}\s*:\s*({{[^{{}}]*(?:{{[^{{}}]*}}[^{{}}]*)*}})", content)
    return match.group(1) if match else None


def _extract_images(content: str) -> Optional[Dict[str, Any]]:
    section = _extract_object(content, "images")
    if section is None:
        return None

    images: Dict[str, Any] = {}
    match = _DOMAINS_RX.search(section)
    if match:
        domains: List[str] = []
        for raw in match.group(1).split(","):
            domain = raw.strip().replace("'", "").replace('"', "")
            if domain:
                domains.append(domain)
        images["domains"] = domains
    return images


def _extract_env(content: str) -> Dict[str, str]:
    section = _extract_object(content, "env")
    if section is None:
        return {}
    return {m.group(1): m.group(2) for m in _ENV_PAIR_RX.finditer(section)}


def _extract_experimental(content: str) -> Dict[str, bool]:
    section = _extract_object(content, "experimental")
    if section is None:
        return {}
    out: Dict[str, bool] = {}
    for feature in _EXPERIMENTAL_BOOL_FEATURES:
        value = _extract_bool(section, feature)
        if value is not None:
            out[feature] = value
    return out
