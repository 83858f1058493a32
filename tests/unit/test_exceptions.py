"""Unit tests for the exception hierarchy."""

from __future__ import annotations

from cadence.domain.exceptions import (
    CadenceError,
    PatternNotFoundError,
    SnapshotValidationError,
    ValidationError,
)


class TestExceptions:
    def test_hierarchy(self) -> None:
        assert issubclass(ValidationError, CadenceError)
        assert issubclass(PatternNotFoundError, CadenceError)
        assert issubclass(SnapshotValidationError, CadenceError)

    def test_pattern_not_found(self) -> None:
        error = PatternNotFoundError("abc")
        assert error.pattern_id == "abc"
        assert str(error) == "Pattern with ID 'abc' not found"

    def test_snapshot_validation_errors(self) -> None:
        assert SnapshotValidationError("bad").errors == []
        error = SnapshotValidationError("bad", errors=[{"loc": ("patterns",)}])
        assert error.errors == [{"loc": ("patterns",)}]
