"""Reconciliation of null/undefined signatures between two documents."""

from __future__ import annotations

from typing import Iterable

from .models import Signature


def unknown_paths(signatures: Iterable[Signature]) -> set[str]:
    """Paths whose value is null or undefined."""
    return {s.path for s in signatures if s.is_unknown}


def _coarsen_side(
    side: list[Signature],
    unknown: set[str],
    other_paths: set[str]
) -> list[Signature]:
    """Coarsen signatures at unknown paths that the other side also addresses."""
    result = []
    for signature in side:
        if signature.path in unknown and signature.path in other_paths:
            result.append(signature.coarsen())
        else:
            result.append(signature)
    return result


def reconcile(
    actual: Iterable[Signature],
    expected: Iterable[Signature]
) -> tuple[list[Signature], list[Signature]]:
    """
    Make null/undefined values compatible with any kind on the other side.

    A path that is null or undefined on either side is coarsened to a bare
    path (kind None) on each side where the other side has any signature
    at that exact path. Each side is evaluated against the other side's
    original signatures, so when both sides name the same path they collapse
    to the same bare signature and compare equal.

    Args:
        actual: Signatures of the actual document
        expected: Signatures of the expected document

    Returns:
        Tuple of (reconciled_actual, reconciled_expected), order preserved
    """
    actual = list(actual)
    expected = list(expected)

    all_unknown = unknown_paths(actual) | unknown_paths(expected)
    actual_paths = {s.path for s in actual}
    expected_paths = {s.path for s in expected}

    return (
        _coarsen_side(actual, all_unknown, expected_paths),
        _coarsen_side(expected, all_unknown, actual_paths),
    )
