from __future__ import annotations

"""
Raw Object Formatter.

Identity renderer returning the composed result for in-process callers.
"""

from next_introspect.core.formatters.base import IntrospectionResult, ResultFormatter


class ObjectFormatter(ResultFormatter):
    """Return the result unchanged."""

    format_type = "object"

    def format(self, result: IntrospectionResult) -> IntrospectionResult:
        return result
