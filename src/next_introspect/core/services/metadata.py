from __future__ import annotations

"""
Route Metadata Service.

Loads free-form route metadata from JSON or TOML files and merges it onto
route records. Metadata is looked up by exact path, then by dotted
segment key, then by router-prefixed key. It only ever populates the
'metadata' sub-object, never structural fields.
"""

import dataclasses
import json
import logging
import os
import tomllib
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar, Union

from next_introspect.domain.constants import INDEX_KEY
from next_introspect.domain.errors import MetadataFileError
from next_introspect.domain.models import RouteRecord

logger = logging.getLogger(__name__)

RouteMetadata = Dict[str, Any]
MetadataMap = Dict[str, RouteMetadata]
RouteLike = TypeVar("RouteLike", RouteRecord, Dict[str, Any])

_KEY_ALIASES = {"desc": "description"}


# ==============================================================================
# PUBLIC API: LOADING
# ==============================================================================

def parse_metadata_file(file_path: str) -> MetadataMap:
    """
    Load a metadata mapping from a .json or .toml file.

    JSON may hold an object or an array of objects merged in order. TOML
    tables become entries keyed by their (dotted) table name.

    Args:
        file_path: Path to the metadata file.

    Returns:
        MetadataMap: Route key -> metadata record.

    Raises:
        MetadataFileError: Missing file, unsupported extension, or
                           unparseable content.
    """
    if not os.path.isfile(file_path):
        raise MetadataFileError(f"Metadata file not found: {file_path}")

    ext = os.path.splitext(file_path)[1].lower()
    if ext not in (".json", ".toml"):
        raise MetadataFileError(f"Unsupported metadata file format: {ext}. Use .json or .toml")

    try:
        if ext == ".json":
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            metadata = _from_json(data)
        else:
            with open(file_path, "rb") as f:
                data = tomllib.load(f)
            metadata = _flatten_tables(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise MetadataFileError(f"Could not parse metadata file {file_path}: {e}") from e

    logger.debug(f"Loaded {len(metadata)} metadata entries from '{file_path}'")
    return {key: _normalize_entry(entry) for key, entry in metadata.items()}


# ==============================================================================
# PUBLIC API: MERGING
# ==============================================================================

def metadata_keys(path: str, router: str) -> List[str]:
    """
    Candidate lookup keys for a route, in priority order.

    Args:
        path: URL path of the route.
        router: 'app' or 'pages'.

    Returns:
        List[str]: Exact path, dotted form, router-prefixed form.
    """
    segments = [s for s in path.split("/") if s]
    dotted = ".".join(segments) if segments else INDEX_KEY
    return [path, dotted, f"{router}.{path.lstrip('/')}"]


def lookup_metadata(metadata: Mapping[str, Any], path: str, router: str) -> Optional[RouteMetadata]:
    for key in metadata_keys(path, router):
        entry = metadata.get(key)
        if isinstance(entry, Mapping):
            return dict(entry)
    return None


def merge_route_metadata(routes: Sequence[RouteLike], metadata: Mapping[str, Any]) -> List[RouteLike]:
    """
    Attach matching metadata to each route.

    Works on RouteRecord instances and on serialized route dicts alike;
    unmatched routes are returned unchanged.

    Args:
        routes: Route records or dicts.
        metadata: Route key -> metadata record.

    Returns:
        List: New list with metadata applied.
    """
    out: List[Any] = []
    for route in routes:
        if isinstance(route, RouteRecord):
            entry = lookup_metadata(metadata, route.path, route.router)
            out.append(dataclasses.replace(route, metadata=entry) if entry is not None else route)
        else:
            entry = lookup_metadata(metadata, str(route.get("path", "")), str(route.get("router", "")))
            out.append({**route, "metadata": entry} if entry is not None else route)
    return out


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _from_json(data: Any) -> MetadataMap:
    if isinstance(data, list):
        merged: MetadataMap = {}
        for item in data:
            if isinstance(item, dict):
                merged.update(item)
        return merged
    if isinstance(data, dict):
        return data
    raise MetadataFileError("Metadata JSON must be an object or an array of objects")


def _flatten_tables(data: Mapping[str, Any], prefix: str = "") -> MetadataMap:
    """Turn nested TOML tables into dotted keys; tables with scalars are entries."""
    out: MetadataMap = {}
    for key, value in data.items():
        if not isinstance(value, dict):
            continue
        full_key = f"{prefix}.{key}" if prefix else key
        scalars = {k: v for k, v in value.items() if not isinstance(v, dict)}
        if scalars or not value:
            out[full_key] = scalars
        out.update(_flatten_tables(value, full_key))
    return out


def _normalize_entry(entry: Union[Mapping[str, Any], Any]) -> Any:
    if not isinstance(entry, Mapping):
        return entry
    return {_KEY_ALIASES.get(k, k): v for k, v in entry.items()}
