from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization for user-supplied locations and writes of
rendered output files.
"""

import os
from typing import Optional


def normalize_path(path: Optional[str], fallback: str = ".") -> str:
    """
    Normalize a user path into an absolute filesystem path.

    Expands '~' and environment variables; an empty input resolves to
    fallback.

    Args:
        path: Raw input path string.
        fallback: Path used when the input is empty.

    Returns:
        str: Absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def write_text_output(path: str, content: str) -> str:
    """
    Write UTF-8 text, creating missing parent directories.

    Args:
        path: Destination file.
        content: Text to write.

    Returns:
        str: Absolute path written.

    Raises:
        OSError: If the directory cannot be created or the file written.
    """
    target = normalize_path(path)
    parent = os.path.dirname(target)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        f.write(content)
    return target
