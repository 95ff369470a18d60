"""
jsonshape - structural comparison of JSON documents

Flattens two parsed JSON documents into typed path signatures and compares
them, tolerating fields that are null or undefined on one side.
"""

from .engine import (
    ShapeEngine,
    compare,
    have_same_schema,
    contains_schema_of,
)
from .models import (
    ShapeConfig,
    ComparisonMode,
    ComparisonResult,
    LogLevel,
    Signature,
    ValueKind,
    UNDEFINED,
    JsonDocument,
)
from .extractor import (
    SignatureExtractor,
    extract_signatures,
)
from .reconciler import reconcile
from .differ import Differ, render_report
from .assertions import (
    should,
    assert_same_schema,
    assert_contains_schema,
    DocumentAssertion,
)
from .exceptions import (
    JsonShapeError,
    InvalidArgumentError,
    UnsupportedValueKindError,
    SchemaMismatchError,
    ConfigError,
    SuiteFileError,
)
from .suite import (
    SuiteRunner,
    ShapeCase,
    CaseResult,
    SuiteReport,
)
from .runner import (
    ShapeRunner,
    run_suite,
)

__version__ = "1.0.0"
__all__ = [
    # Engine
    "ShapeEngine",
    "ShapeConfig",
    "compare",
    "have_same_schema",
    "contains_schema_of",
    # Model
    "ComparisonMode",
    "ComparisonResult",
    "LogLevel",
    "Signature",
    "ValueKind",
    "UNDEFINED",
    "JsonDocument",
    # Core
    "SignatureExtractor",
    "extract_signatures",
    "reconcile",
    "Differ",
    "render_report",
    # Assertions
    "should",
    "assert_same_schema",
    "assert_contains_schema",
    "DocumentAssertion",
    # Errors
    "JsonShapeError",
    "InvalidArgumentError",
    "UnsupportedValueKindError",
    "SchemaMismatchError",
    "ConfigError",
    "SuiteFileError",
    # Suites
    "SuiteRunner",
    "ShapeCase",
    "CaseResult",
    "SuiteReport",
    "ShapeRunner",
    "run_suite",
]
