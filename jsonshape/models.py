"""Data models for the jsonshape comparison engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional

from .exceptions import ConfigError


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    def to_logging(self) -> int:
        return {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


class ValueKind(Enum):
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    DATE = "date"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"

    @property
    def is_unknown(self) -> bool:
        """Null and undefined carry no shape information."""
        return self in (ValueKind.NULL, ValueKind.UNDEFINED)


class ComparisonMode(Enum):
    SAME = "same"
    CONTAINS = "contains"


class _Undefined:
    """Marker for a declared but absent slot in a document."""

    _instance: Optional["_Undefined"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class JsonDocument:
    """
    A whole parsed document.

    A bare None passed as a document means the document is missing. Wrap
    the parsed value to compare a document whose root is JSON null.
    """
    root: Any


@dataclass(frozen=True)
class Signature:
    """
    A node's location and value kind.

    A signature whose kind is None has been coarsened by reconciliation: its
    path is known to exist on both sides but one of them is null/undefined.
    """
    path: str
    kind: Optional[ValueKind]

    @property
    def is_unknown(self) -> bool:
        return self.kind is not None and self.kind.is_unknown

    def coarsen(self) -> Signature:
        return Signature(self.path, None)

    def with_path(self, path: str) -> Signature:
        return Signature(path, self.kind)

    def __str__(self) -> str:
        if self.kind is None:
            return self.path
        return f"{self.path}-{self.kind.value}"

    @classmethod
    def parse(cls, text: str) -> Signature:
        """
        Read back the "<path>-<kind>" form.

        Splits on the last dash since member names may contain dashes.
        Text without a recognised kind suffix is a coarsened signature.
        """
        head, sep, tail = text.rpartition('-')
        if sep:
            try:
                return cls(head, ValueKind(tail))
            except ValueError:
                pass
        return cls(text, None)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "type": self.kind.value if self.kind else None,
        }


DEFAULT_DATE_FORMATS: tuple[str, ...] = (
    '%Y-%m-%dT%H:%M:%S.%fZ',
    '%Y-%m-%dT%H:%M:%SZ',
    '%Y-%m-%dT%H:%M:%S.%f%z',
    '%Y-%m-%dT%H:%M:%S%z',
    '%Y-%m-%dT%H:%M:%S.%f',
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M:%S.%f',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d',
    '%m/%d/%Y %H:%M:%S',
    '%m/%d/%Y',
    '%d %B %Y',
    '%B %d, %Y',
)


@dataclass
class ShapeConfig:
    """Global configuration for the shape engine."""
    ignore_additional_props: bool = False
    additional_prop_marker: str = "additionalProp"
    date_formats: tuple[str, ...] = DEFAULT_DATE_FORMATS
    log_level: LogLevel = LogLevel.INFO

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> ShapeConfig:
        """Build a config from a plain mapping (e.g. a suite's `config` block)."""
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("config", f"expected a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                raise ConfigError(key, "unknown option")
            kwargs[key] = value

        if 'log_level' in kwargs:
            try:
                kwargs['log_level'] = LogLevel(str(kwargs['log_level']).upper())
            except ValueError:
                raise ConfigError('log_level', f"unknown level {kwargs['log_level']!r}")
        if 'date_formats' in kwargs:
            formats = kwargs['date_formats']
            if isinstance(formats, str) or not isinstance(formats, (list, tuple)):
                raise ConfigError('date_formats', "expected a list of strptime formats")
            kwargs['date_formats'] = tuple(formats)
        if 'ignore_additional_props' in kwargs and not isinstance(kwargs['ignore_additional_props'], bool):
            raise ConfigError('ignore_additional_props', "expected a boolean")
        if 'additional_prop_marker' in kwargs:
            marker = kwargs['additional_prop_marker']
            if not isinstance(marker, str) or not marker:
                raise ConfigError('additional_prop_marker', "expected a non-empty string")

        return cls(**kwargs)


@dataclass
class ComparisonResult:
    """Outcome of a single shape comparison."""
    matched: bool
    mode: ComparisonMode
    only_in_actual: list[Signature] = field(default_factory=list)
    only_in_expected: list[Signature] = field(default_factory=list)
    message: str = ""

    def __bool__(self) -> bool:
        return self.matched

    def to_dict(self) -> dict:
        return {
            "matched": self.matched,
            "mode": self.mode.value,
            "only_in_actual": [s.to_dict() for s in self.only_in_actual],
            "only_in_expected": [s.to_dict() for s in self.only_in_expected],
            "message": self.message,
        }
