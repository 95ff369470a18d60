"""Utility functions for the jsonshape engine."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from .models import UNDEFINED, DEFAULT_DATE_FORMATS, Signature, ValueKind


ARRAY_ITEM_TOKEN = ".[item]"

_ARRAY_INDEX = re.compile(r'\[[0-9]+\]')


def parse_datetime(value: str, formats: Iterable[str] = DEFAULT_DATE_FORMATS) -> datetime:
    """
    Parse a date/time string.

    Args:
        value: The candidate string
        formats: strptime formats tried before ISO 8601 parsing

    Returns:
        Parsed datetime object
    """
    text = value.strip()
    for f in formats:
        try:
            return datetime.strptime(text, f)
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        pass

    raise ValueError(f"Cannot parse datetime '{value}'")


def is_date_string(value: str, formats: Iterable[str] = DEFAULT_DATE_FORMATS) -> bool:
    """Check whether a string reads as a calendar date or date/time."""
    if not value or not value.strip():
        return False
    try:
        parse_datetime(value, formats)
    except ValueError:
        return False
    return True


def is_numeric(value: Any) -> bool:
    """Check if a value is a JSON number (bool excluded)."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def get_kind(value: Any, date_formats: Iterable[str] = DEFAULT_DATE_FORMATS) -> Optional[ValueKind]:
    """
    Get the value kind of a JSON value.

    Returns None for Python values that have no JSON counterpart.
    """
    if value is None:
        return ValueKind.NULL
    elif value is UNDEFINED:
        return ValueKind.UNDEFINED
    elif isinstance(value, bool):
        return ValueKind.BOOLEAN
    elif is_numeric(value):
        return ValueKind.NUMBER
    elif isinstance(value, str):
        return ValueKind.DATE if is_date_string(value, date_formats) else ValueKind.STRING
    elif isinstance(value, (datetime, date)):
        # YAML loaders produce these for unquoted timestamps
        return ValueKind.DATE
    elif isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    elif isinstance(value, dict):
        return ValueKind.OBJECT
    return None


def object_path(parent_path: str) -> str:
    """Prefix under which an object's members are addressed."""
    return f"{parent_path}." if parent_path else "$."


def item_path(parent_path: str, index: int) -> str:
    """Path of an array element."""
    return f"{parent_path or '$.'}[{index}]"


def trim_path(path: str) -> str:
    """Strip the separator dots used while building paths."""
    return path.strip('.')


def normalize_array_indices(path: str) -> str:
    """
    Replace every array index in a path with the item wildcard.

    "$.tags[3]" becomes "$.tags.[item]" and a root element "$.[0]" becomes
    "$.[item]". A member literally named "[0]" ("$.a.[0]") keeps its own
    dot and stays distinct from an element of "$.a".
    """
    normalized = _ARRAY_INDEX.sub(ARRAY_ITEM_TOKEN, path)
    if normalized.startswith("$." + ARRAY_ITEM_TOKEN):
        normalized = "$" + normalized[2:]
    return normalized


def unique(signatures: Iterable[Signature]) -> list[Signature]:
    """De-duplicate while keeping first-seen order."""
    return list(dict.fromkeys(signatures))
