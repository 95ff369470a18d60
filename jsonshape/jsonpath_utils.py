"""JSONPath utilities for selecting sub-documents in shape suites."""

from __future__ import annotations

from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JSONPathError

from .exceptions import InvalidArgumentError


class JSONPathMatcher:
    """Utility class for JSONPath selection."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """Compile and cache a JSONPath expression."""
        if path not in cls._cache:
            try:
                cls._cache[path] = jsonpath_parse(path)
            except JSONPathError as e:
                raise InvalidArgumentError(
                    f"Invalid JSONPath expression '{path}': {e}",
                    {"path": path}
                )
        return cls._cache[path]

    @classmethod
    def find_values(cls, data: Any, path: str) -> list[Any]:
        """Find all values matching a JSONPath expression."""
        expr = cls.compile(path)
        return [m.value for m in expr.find(data)]

    @classmethod
    def select(cls, data: Any, path: str) -> Any:
        """
        Select the document a case compares.

        A single match yields that value; several matches (e.g. a wildcard
        over array elements) yield the list of matched values.

        Raises:
            InvalidArgumentError: If the expression matches nothing or is not a string
        """
        if not path or path == '$':
            return data
        if not isinstance(path, str):
            raise InvalidArgumentError(
                f"JSONPath must be a string, got {type(path).__name__}",
                {"path": path}
            )

        values = cls.find_values(data, path)
        if not values:
            raise InvalidArgumentError(
                f"JSONPath '{path}' matched nothing",
                {"path": path}
            )
        if len(values) == 1:
            return values[0]
        return values
