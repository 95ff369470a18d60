"""Signature set differencing and diff report rendering."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import ComparisonMode, ComparisonResult, ShapeConfig, Signature
from .reconciler import reconcile
from .utils import normalize_array_indices, unique


REPORT_HEADER = "The inputs do not match, the differences are as follows:"


def difference(left: Iterable[Signature], right: Iterable[Signature]) -> list[Signature]:
    """Signatures in left but not in right, de-duplicated, first-seen order."""
    right_set = set(right)
    return [s for s in unique(left) if s not in right_set]


def drop_marked(signatures: Iterable[Signature], marker: str) -> list[Signature]:
    """Remove signatures whose path contains the marker substring."""
    return [s for s in signatures if marker not in s.path]


def normalize_indices(signatures: Iterable[Signature]) -> list[Signature]:
    """Rewrite array indices to the item wildcard and de-duplicate."""
    return unique(s.with_path(normalize_array_indices(s.path)) for s in signatures)


def format_signature(signature: Signature) -> str:
    kind = signature.kind.value if signature.kind else ""
    return f"Path: {signature.path}, Type:{kind}"


def render_report(
    only_in_actual: list[Signature],
    only_in_expected: list[Signature]
) -> str:
    """
    Render the human-readable difference report.

    Returns an empty string when there are no differences. Otherwise the
    header line comes first, even when only the Expected section has
    entries. Each section is emitted only when it has entries.
    """
    if not only_in_actual and not only_in_expected:
        return ""

    lines = [REPORT_HEADER, ""]
    if only_in_actual:
        lines.append("Actual:")
        lines.extend(format_signature(s) for s in only_in_actual)
    if only_in_expected:
        if only_in_actual:
            lines.append("")
        lines.append("Expected:")
        lines.extend(format_signature(s) for s in only_in_expected)

    return "\n".join(lines) + "\n"


class Differ:
    """
    Compares two signature collections.

    Modes:
    - same: reconcile unknowns, then exact set comparison
    - contains: optionally drop additionalProp placeholders, reconcile,
      treat every array element as interchangeable, then compare
    """

    def __init__(self, config: Optional[ShapeConfig] = None):
        self.config = config or ShapeConfig()

    def diff(
        self,
        actual: Iterable[Signature],
        expected: Iterable[Signature],
        mode: ComparisonMode = ComparisonMode.SAME,
        ignore_additional_props: bool = False
    ) -> ComparisonResult:
        """
        Compute the differences between two signature collections.

        Args:
            actual: Signatures of the actual document
            expected: Signatures of the expected document
            mode: Comparison mode
            ignore_additional_props: Only used in contains mode

        Returns:
            ComparisonResult with both difference lists and the report
        """
        if mode == ComparisonMode.CONTAINS and ignore_additional_props:
            marker = self.config.additional_prop_marker
            actual = drop_marked(actual, marker)
            expected = drop_marked(expected, marker)

        actual, expected = reconcile(actual, expected)

        if mode == ComparisonMode.CONTAINS:
            actual = normalize_indices(actual)
            expected = normalize_indices(expected)

        # Both modes require both differences to be empty.
        only_in_actual = difference(actual, expected)
        only_in_expected = difference(expected, actual)

        return ComparisonResult(
            matched=not only_in_actual and not only_in_expected,
            mode=mode,
            only_in_actual=only_in_actual,
            only_in_expected=only_in_expected,
            message=render_report(only_in_actual, only_in_expected),
        )
