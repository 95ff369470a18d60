"""Custom exceptions for the jsonshape comparison engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ComparisonResult


class JsonShapeError(Exception):
    """Base exception for jsonshape errors."""
    pass


class InvalidArgumentError(JsonShapeError):
    """Raised when a document or case input is missing or unusable."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedValueKindError(JsonShapeError):
    """Raised when the extractor meets a value that is not a JSON kind."""
    def __init__(self, path: str, value_type: str):
        super().__init__(f"Unsupported value kind '{value_type}' at path: {path or '$'}")
        self.path = path
        self.value_type = value_type


class ConfigError(JsonShapeError):
    """Raised when a configuration mapping is invalid."""
    def __init__(self, key: str, message: str):
        super().__init__(f"Invalid config '{key}': {message}")
        self.key = key
        self.message = message


class SuiteFileError(JsonShapeError):
    """Raised when a suite file cannot be read or parsed."""
    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot load suite '{path}': {reason}")
        self.path = path
        self.reason = reason


class SchemaMismatchError(JsonShapeError, AssertionError):
    """Raised by the assertion helpers when two shapes do not match."""
    def __init__(self, message: str, result: ComparisonResult):
        super().__init__(message)
        self.message = message
        self.result = result
