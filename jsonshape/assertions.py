"""Fluent assertion surface over the shape engine."""

from __future__ import annotations

from typing import Any, Optional

from .engine import ShapeEngine
from .exceptions import InvalidArgumentError, SchemaMismatchError
from .models import ComparisonResult, ShapeConfig


def _format_reason(because: str, because_args: tuple) -> str:
    if not because:
        return ""
    reason = because % because_args if because_args else because
    reason = reason.strip()
    if not reason.lower().startswith("because"):
        reason = f"because {reason}"
    return reason


def _fail_unless(result: ComparisonResult, because: str, because_args: tuple):
    if result.matched:
        return
    reason = _format_reason(because, because_args)
    message = result.message
    if reason:
        message = f"Expected matching shapes {reason}.\n{message}"
    raise SchemaMismatchError(message, result)


class AndConstraint:
    """Allows chaining further assertions on the same document."""

    def __init__(self, assertion: DocumentAssertion):
        self.and_ = assertion


class DocumentAssertion:
    """
    Assertions about the shape of one JSON document.

    Usage:
        should(response).have_same_schema_as(expected)
        should(response).contain_schema_of(template, ignore_additional_props=True)
    """

    def __init__(self, subject: Any, config: Optional[ShapeConfig] = None):
        if subject is None:
            raise InvalidArgumentError("document under assertion is required")
        self.subject = subject
        self.engine = ShapeEngine(config)

    def have_same_schema_as(
        self,
        expected: Any,
        because: str = "",
        *because_args: Any
    ) -> AndConstraint:
        """Assert that the subject has exactly the shape of expected."""
        result = self.engine.have_same_schema(self.subject, expected)
        _fail_unless(result, because, because_args)
        return AndConstraint(self)

    def contain_schema_of(
        self,
        expected: Any,
        ignore_additional_props: bool = False,
        because: str = "",
        *because_args: Any
    ) -> AndConstraint:
        """Assert the subject's shape against expected with array elements
        treated as interchangeable."""
        result = self.engine.contains_schema_of(
            self.subject, expected, ignore_additional_props
        )
        _fail_unless(result, because, because_args)
        return AndConstraint(self)


def should(document: Any, config: Optional[ShapeConfig] = None) -> DocumentAssertion:
    """
    Start a fluent assertion on a parsed JSON document.

    None is rejected as a missing document; wrap a null root as
    JsonDocument(None) to assert on it.
    """
    return DocumentAssertion(document, config)


def assert_same_schema(
    actual: Any,
    expected: Any,
    because: str = "",
    config: Optional[ShapeConfig] = None
) -> None:
    should(actual, config).have_same_schema_as(expected, because)


def assert_contains_schema(
    actual: Any,
    expected: Any,
    ignore_additional_props: bool = False,
    because: str = "",
    config: Optional[ShapeConfig] = None
) -> None:
    should(actual, config).contain_schema_of(expected, ignore_additional_props, because)
