"""JSONPath utilities for redacting values before masking."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathParserError
from jsonpath_ng.lexer import JsonPathLexerError

from .exceptions import RuleError


class JSONPathMatcher:
    """Utility class for JSONPath matching and redaction."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """Compile and cache a JSONPath expression."""
        if path not in cls._cache:
            try:
                cls._cache[path] = jsonpath_parse(path)
            except (JsonPathParserError, JsonPathLexerError) as e:
                raise RuleError(path, str(e)) from e
        return cls._cache[path]

    @classmethod
    def redact(cls, data: Any, paths: list[str], value: Any = "redacted") -> Any:
        """
        Replace every value matched by the given expressions.

        Args:
            data: The document to redact (not modified)
            paths: List of JSONPath expressions
            value: Replacement for each matched value

        Returns:
            A redacted copy of data
        """
        result = deepcopy(data)
        for path in paths:
            expr = cls.compile(path)
            result = expr.update(result, value)
        return result
