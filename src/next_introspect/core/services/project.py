from __future__ import annotations

"""
Project Detection Service.

Recognizes Next.js projects, locates their route roots, reads the package
manifest and assembles the ProjectInfo descriptor used by every formatter.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from next_introspect.core.services.config_scraper import parse_next_config
from next_introspect.core.services.scanner import directory_exists, file_exists
from next_introspect.domain.constants import (
    FRAMEWORK_NAME,
    ROUTER_APP,
    ROUTER_BOTH,
    ROUTER_PAGES,
)
from next_introspect.domain.models import ProjectInfo

logger = logging.getLogger(__name__)

_DETECTION_CONFIG_FILES = ("next.config.js", "next.config.mjs", "next.config.ts")
_ROUTE_ROOT_CANDIDATES = {
    ROUTER_APP: ("app", "src/app"),
    ROUTER_PAGES: ("pages", "src/pages"),
}


# ==============================================================================
# PUBLIC API
# ==============================================================================

def is_nextjs_project(project_path: str) -> bool:
    """
    Apply the project-recognition heuristic.

    Any of: 'next' declared in the manifest, a recognized config file, or
    a recognized route directory.

    Args:
        project_path: Candidate project root.

    Returns:
        bool: True if the directory looks like a Next.js project.
    """
    if not directory_exists(project_path):
        return False

    manifest = read_package_json(project_path)
    if manifest:
        deps = manifest.get("dependencies") or {}
        dev_deps = manifest.get("devDependencies") or {}
        if "next" in deps or "next" in dev_deps:
            return True

    for name in _DETECTION_CONFIG_FILES:
        if file_exists(os.path.join(project_path, name)):
            return True

    return any(detect_source_dirs(project_path).values())


def detect_source_dirs(project_path: str) -> Dict[str, str]:
    """
    Locate route roots relative to the project root.

    'src/' variants win over top-level ones when both exist.

    Args:
        project_path: Project root.

    Returns:
        Dict[str, str]: e.g. {'app': 'src/app', 'pages': 'pages'}.
    """
    found: Dict[str, str] = {}
    for family, candidates in _ROUTE_ROOT_CANDIDATES.items():
        for rel in candidates:
            if directory_exists(os.path.join(project_path, *rel.split("/"))):
                found[family] = rel
    return found


def detect_router_type(project_path: str) -> str:
    """
    Report which router families are present.

    Args:
        project_path: Project root.

    Returns:
        str: 'app', 'pages' or 'both'; 'app' when neither is present.
    """
    dirs = detect_source_dirs(project_path)
    has_app = ROUTER_APP in dirs
    has_pages = ROUTER_PAGES in dirs
    if has_app and has_pages:
        return ROUTER_BOTH
    if has_pages:
        return ROUTER_PAGES
    return ROUTER_APP


def read_package_json(project_path: str) -> Optional[Dict[str, Any]]:
    """
    Load package.json, recovering from absence or malformed content.

    Args:
        project_path: Project root.

    Returns:
        Optional[Dict[str, Any]]: Parsed manifest or None.
    """
    manifest_path = os.path.join(project_path, "package.json")
    if not file_exists(manifest_path):
        return None
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read package manifest '{manifest_path}': {e}")
        return None
    return data if isinstance(data, dict) else None


def get_package_info(
        project_path: str,
        *,
        summary: bool = False,
        include_scripts: bool = False,
        include_dependencies: bool = False,
) -> Optional[Dict[str, Any]]:
    """
    Read the manifest, optionally reduced to a summary.

    Args:
        project_path: Project root.
        summary: Replace the full manifest by a compact summary.
        include_scripts: In summary mode, keep scripts instead of a count.
        include_dependencies: In summary mode, keep dependency maps
            instead of counts.

    Returns:
        Optional[Dict[str, Any]]: Manifest, summary, or None.
    """
    manifest = read_package_json(project_path)
    if manifest is None or not summary:
        return manifest

    out: Dict[str, Any] = {
        "name": manifest.get("name"),
        "version": manifest.get("version"),
    }

    scripts = manifest.get("scripts")
    if scripts:
        if include_scripts:
            out["scripts"] = scripts
        else:
            out["scriptsCount"] = len(scripts)

    for key, count_key in (("dependencies", "dependenciesCount"),
                           ("devDependencies", "devDependenciesCount")):
        deps = manifest.get(key)
        if not deps:
            continue
        if include_dependencies:
            out[key] = deps
        else:
            out[count_key] = len(deps)

    for key in ("private", "type", "packageManager"):
        if key in manifest:
            out[key] = manifest[key]

    return out


def get_project_info(project_path: str, options: Optional[Dict[str, Any]] = None) -> ProjectInfo:
    """
    Assemble the project descriptor.

    Args:
        project_path: Absolute project root.
        options: Validated introspection options (manifest display keys).

    Returns:
        ProjectInfo: Immutable descriptor.
    """
    opts = options or {}
    manifest = read_package_json(project_path) or {}
    deps = manifest.get("dependencies") or {}
    dev_deps = manifest.get("devDependencies") or {}
    version = deps.get("next") or dev_deps.get("next") or "unknown"

    package_info = get_package_info(
        project_path,
        summary=bool(opts.get("package_summary", False)),
        include_scripts=bool(opts.get("include_scripts", False)),
        include_dependencies=bool(opts.get("include_dependencies", False)),
    )

    return ProjectInfo(
        framework=FRAMEWORK_NAME,
        version=str(version),
        router=detect_router_type(project_path),
        root_dir=project_path,
        config=parse_next_config(project_path),
        package_info=package_info,
        source_dirs=detect_source_dirs(project_path),
    )
