"""Main comparison engine for jsonshape."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .differ import Differ
from .exceptions import InvalidArgumentError
from .extractor import SignatureExtractor
from .models import ComparisonMode, ComparisonResult, JsonDocument, ShapeConfig

logger = logging.getLogger(__name__)


class ShapeEngine:
    """
    Compares the shapes of two parsed JSON documents.

    Pipeline:
    1. Extraction: flatten each document into (path, kind) signatures
    2. Reconciliation: make null/undefined compatible with any kind
    3. Differencing: set difference in both directions, rendered as a report
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[ShapeConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or ShapeConfig()
        self.extractor = SignatureExtractor(self.config)
        self.differ = Differ(self.config)

    def compare(
        self,
        actual: Any,
        expected: Any,
        mode: ComparisonMode = ComparisonMode.SAME,
        ignore_additional_props: Optional[bool] = None
    ) -> ComparisonResult:
        """
        Compare the shapes of two documents.

        A bare None is a missing document. Pass JsonDocument(None) to
        compare a document whose root is JSON null.

        Args:
            actual: The document under test
            expected: The reference document
            mode: SAME for equal schemas, CONTAINS for index-insensitive
                comparison
            ignore_additional_props: Drop additionalProp placeholder paths
                in CONTAINS mode (defaults to the config value)

        Returns:
            ComparisonResult with the verdict and difference report

        Raises:
            InvalidArgumentError: If a document is missing
            UnsupportedValueKindError: If a document holds a non-JSON value
        """
        self._validate_inputs(actual, expected)
        actual = _unwrap(actual)
        expected = _unwrap(expected)

        if ignore_additional_props is None:
            ignore_additional_props = self.config.ignore_additional_props

        actual_signatures = list(self.extractor.extract(actual))
        expected_signatures = list(self.extractor.extract(expected))
        logger.debug(
            "Comparing %d actual against %d expected signatures (mode=%s)",
            len(actual_signatures), len(expected_signatures), mode.value
        )

        result = self.differ.diff(
            actual_signatures,
            expected_signatures,
            mode=mode,
            ignore_additional_props=ignore_additional_props
        )

        if result.matched:
            logger.debug("Shapes match")
        else:
            logger.debug(
                "Shapes differ: %d only in actual, %d only in expected",
                len(result.only_in_actual), len(result.only_in_expected)
            )
        return result

    def have_same_schema(self, actual: Any, expected: Any) -> ComparisonResult:
        """Check that both documents have exactly the same shape."""
        return self.compare(actual, expected, ComparisonMode.SAME)

    def contains_schema_of(
        self,
        actual: Any,
        expected: Any,
        ignore_additional_props: Optional[bool] = None
    ) -> ComparisonResult:
        """
        Check that actual covers the shape of expected, ignoring array
        element counts and positions.

        Note: extra structure in actual is reported as a difference too, so
        a match means both shapes are equivalent after normalization.
        """
        return self.compare(
            actual, expected, ComparisonMode.CONTAINS, ignore_additional_props
        )

    def _validate_inputs(self, actual: Any, expected: Any):
        """Validate input documents."""
        if actual is None:
            raise InvalidArgumentError("actual document is required")
        if expected is None:
            raise InvalidArgumentError("expected document is required")


def _unwrap(document: Any) -> Any:
    return document.root if isinstance(document, JsonDocument) else document


def compare(
    actual: Any,
    expected: Any,
    mode: ComparisonMode = ComparisonMode.SAME,
    ignore_additional_props: Optional[bool] = None,
    config: Optional[ShapeConfig] = None
) -> ComparisonResult:
    """
    Convenience function to compare two documents.

    A bare None is a missing document; see JsonDocument for null roots.

    Args:
        actual: The document under test
        expected: The reference document
        mode: Comparison mode
        ignore_additional_props: See ShapeEngine.compare
        config: Optional engine configuration

    Returns:
        ComparisonResult
    """
    engine = ShapeEngine(config)
    return engine.compare(actual, expected, mode, ignore_additional_props)


def have_same_schema(
    actual: Any,
    expected: Any,
    config: Optional[ShapeConfig] = None
) -> ComparisonResult:
    return ShapeEngine(config).have_same_schema(actual, expected)


def contains_schema_of(
    actual: Any,
    expected: Any,
    ignore_additional_props: bool = False,
    config: Optional[ShapeConfig] = None
) -> ComparisonResult:
    return ShapeEngine(config).contains_schema_of(actual, expected, ignore_additional_props)
