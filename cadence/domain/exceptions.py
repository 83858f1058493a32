"""Custom exceptions for Cadence."""

from __future__ import annotations

from typing import Any


class CadenceError(Exception):
    """Base exception for Cadence."""

    pass


class ValidationError(CadenceError):
    """Raised when input validation fails."""

    pass


class PatternNotFoundError(CadenceError):
    """Raised when a pattern is not found."""

    def __init__(self, pattern_id: str) -> None:
        self.pattern_id = pattern_id
        super().__init__(f"Pattern with ID '{pattern_id}' not found")


class SnapshotValidationError(CadenceError):
    """Raised when imported learning data does not match the snapshot schema."""

    def __init__(self, message: str, errors: list[Any] | None = None) -> None:
        self.errors = errors or []
        super().__init__(message)
