from __future__ import annotations

"""
Result Presentation Helpers.

Path-display reformatting for route file paths and recursive field
exclusion applied to the composed result before formatting.
"""

import os
from typing import Any, Dict, Iterable, Mapping, Optional


def format_path_for_display(
        file_path: str,
        project_root: str,
        source_dirs: Mapping[str, str],
        style: str = "absolute",
        strip_prefix: str = "",
) -> str:
    """
    Reformat a file path according to a display style.

    Args:
        file_path: Absolute source path.
        project_root: Absolute project root.
        source_dirs: Route roots relative to the project root.
        style: absolute, relative-to-project, relative-to-app,
            relative-to-pages or strip-prefix.
        strip_prefix: Prefix used by the strip-prefix style.

    Returns:
        str: Display path; the input when the style does not apply.
    """
    if style == "relative-to-project":
        return _relative(file_path, project_root)

    if style in ("relative-to-app", "relative-to-pages"):
        family = "app" if style == "relative-to-app" else "pages"
        source_dir = source_dirs.get(family)
        if not source_dir:
            return file_path
        relative = _relative(file_path, os.path.join(project_root, source_dir))
        return file_path if relative.startswith("..") else relative

    if style == "strip-prefix" and strip_prefix:
        normalized = file_path.replace("\\", "/")
        if strip_prefix in normalized:
            return normalized.split(strip_prefix, 1)[1] or normalized
        return file_path

    return file_path


def filter_excluded_fields(obj: Any, exclude_fields: Optional[Iterable[str]]) -> Any:
    """
    Recursively drop keys named in exclude_fields from dicts and lists.

    Args:
        obj: Result object, list or scalar.
        exclude_fields: Field names to remove at any depth.

    Returns:
        Any: A filtered copy; scalars pass through.
    """
    excluded = set(exclude_fields or ())
    if not excluded:
        return obj
    return _filter(obj, excluded)


def _filter(obj: Any, excluded: set) -> Any:
    if isinstance(obj, list):
        return [_filter(item, excluded) for item in obj]
    if isinstance(obj, Mapping):
        out: Dict[str, Any] = {}
        for key, value in obj.items():
            if key in excluded:
                continue
            out[key] = _filter(value, excluded)
        return out
    return obj


def _relative(path: str, start: str) -> str:
    return os.path.relpath(path, start).replace(os.sep, "/")
