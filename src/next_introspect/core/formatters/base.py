from __future__ import annotations

"""
Base Definitions for Result Formatters.

Provides the abstract interface shared by every output renderer. A
formatter receives the composed, JSON-shaped result and never mutates it.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union

IntrospectionResult = Dict[str, Any]
FormattedOutput = Union[str, IntrospectionResult]


class ResultFormatter(ABC):
    """
    Abstract base class for the output renderers.
    """

    format_type: str = ""

    @abstractmethod
    def format(self, result: IntrospectionResult) -> FormattedOutput:
        """
        Render a composed introspection result.

        Args:
            result: Mapping with 'project', 'routes' and 'metadata'.

        Returns:
            FormattedOutput: Text output, or the object itself.
        """
        pass
