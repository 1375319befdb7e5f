from __future__ import annotations

from .core.formatters import get_formatter
from .core.routing.tree import routes_to_array, routes_to_nested
from .domain.config import get_default_options
from .domain.errors import (
    IntrospectionError,
    InvalidProjectError,
    MetadataFileError,
    NotAnalyzedError,
    UnknownFormatError,
)
from .domain.models import ProjectInfo, RouteRecord, RouteSegment
from .introspect import NextIntrospect

__version__ = "0.1.0"

__all__ = [
    "NextIntrospect",
    "ProjectInfo",
    "RouteRecord",
    "RouteSegment",
    "IntrospectionError",
    "InvalidProjectError",
    "NotAnalyzedError",
    "UnknownFormatError",
    "MetadataFileError",
    "get_default_options",
    "get_formatter",
    "routes_to_nested",
    "routes_to_array",
    "__version__",
]
