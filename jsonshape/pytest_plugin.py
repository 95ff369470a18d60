"""pytest plugin for jsonshape.

Registered through the pytest11 entry point declared in pyproject.toml, so
the fixtures are available once the package is installed.
"""

from __future__ import annotations

from typing import Any

import pytest

from .assertions import assert_contains_schema as _assert_contains_schema
from .assertions import assert_same_schema as _assert_same_schema


@pytest.fixture(scope="session")
def assert_same_schema() -> Any:
    """Fixture returning ``assert_same_schema(actual, expected, because="", config=None)``.

    Usage in tests::

        def test_payload(assert_same_schema):
            assert_same_schema(response.json(), {"id": 1, "name": "x"})

    Raises ``SchemaMismatchError`` (an ``AssertionError``) with the diff
    report when the shapes differ.
    """
    return _assert_same_schema


@pytest.fixture(scope="session")
def assert_contains_schema() -> Any:
    """Fixture returning ``assert_contains_schema(actual, expected,
    ignore_additional_props=False, because="", config=None)``."""
    return _assert_contains_schema
