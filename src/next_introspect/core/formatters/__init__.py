from __future__ import annotations

from typing import Optional, Sequence

from next_introspect.domain.config import DEFAULT_INDENT
from next_introspect.domain.errors import UnknownFormatError

from .base import FormattedOutput, IntrospectionResult, ResultFormatter
from .json_formatter import JsonFormatter
from .markdown_formatter import MarkdownFormatter
from .object_formatter import ObjectFormatter
from .typescript_formatter import TypeScriptFormatter


def get_formatter(
        kind: str,
        *,
        indent: int = DEFAULT_INDENT,
        strip_prefixes: Optional[Sequence[str]] = None,
) -> ResultFormatter:
    """
    Instantiate the formatter registered for an output kind.

    Args:
        kind: object, json, markdown or typescript.
        indent: Indentation width for the text renderers.
        strip_prefixes: Path strip rules for the TypeScript module.

    Returns:
        ResultFormatter: A fresh formatter instance.

    Raises:
        UnknownFormatError: If kind is not registered.
    """
    registry = {
        "object": lambda: ObjectFormatter(),
        "json": lambda: JsonFormatter(indent=indent),
        "markdown": lambda: MarkdownFormatter(),
        "typescript": lambda: TypeScriptFormatter(indent=indent, strip_prefixes=strip_prefixes),
    }
    factory = registry.get(kind)
    if factory is None:
        raise UnknownFormatError(kind)
    return factory()


__all__ = [
    "ResultFormatter",
    "IntrospectionResult",
    "FormattedOutput",
    "ObjectFormatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "TypeScriptFormatter",
    "get_formatter",
]
