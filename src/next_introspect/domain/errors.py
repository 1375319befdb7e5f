from __future__ import annotations

"""
Introspection Error Taxonomy.

Errors raised across the public API. Per-file and per-directory failures
never surface here: they are logged and recovered where they happen.
"""


class IntrospectionError(Exception):
    """Base class for all surfaced introspection failures."""


class InvalidProjectError(IntrospectionError):
    """The target root is missing, not a directory or not a Next.js project."""

    def __init__(self, project_path: str) -> None:
        super().__init__(f"Invalid Next.js project: {project_path}")
        self.project_path = project_path


class NotAnalyzedError(IntrospectionError):
    """A result-dependent operation was called before analyze()."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Project must be analyzed first. Call analyze() before {operation}()."
        )
        self.operation = operation


class UnknownFormatError(IntrospectionError, ValueError):
    """The requested output format is not one of the registered kinds."""

    def __init__(self, format_name: str) -> None:
        super().__init__(f"Unknown format: {format_name}")
        self.format_name = format_name


class MetadataFileError(IntrospectionError):
    """A metadata file could not be read or has an unsupported format."""
