from __future__ import annotations

"""
JSON Formatter.

Serializes the composed result. An indent of 0 yields a compact single
line with no whitespace beyond the required separators.
"""

import json

from next_introspect.core.formatters.base import IntrospectionResult, ResultFormatter
from next_introspect.domain.config import DEFAULT_INDENT


class JsonFormatter(ResultFormatter):
    """Render the result as JSON text."""

    format_type = "json"

    def __init__(self, indent: int = DEFAULT_INDENT) -> None:
        self.indent = max(0, int(indent))

    def format(self, result: IntrospectionResult) -> str:
        if self.indent == 0:
            return json.dumps(result, ensure_ascii=False, separators=(",", ":"), default=str)
        return json.dumps(result, ensure_ascii=False, indent=self.indent, default=str)
