"""Unit tests for pyaquifer custom exceptions (core/exceptions.py)."""

from __future__ import annotations

import pytest

from pyaquifer.core.exceptions import (
    AquiferConfigError,
    AquiferIOError,
    DeckError,
    FileFormatError,
    GridError,
    PyAquiferError,
    ValidationError,
)
from pyaquifer.core.results import DuplicateConnectionCell


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_pyaquifer_error_is_exception(self) -> None:
        assert issubclass(PyAquiferError, Exception)

    def test_grid_error_inherits(self) -> None:
        assert issubclass(GridError, PyAquiferError)

    def test_deck_error_inherits(self) -> None:
        assert issubclass(DeckError, PyAquiferError)

    def test_validation_error_inherits(self) -> None:
        assert issubclass(ValidationError, PyAquiferError)

    def test_config_error_inherits(self) -> None:
        assert issubclass(AquiferConfigError, PyAquiferError)

    def test_file_format_error_inherits_from_io(self) -> None:
        assert issubclass(FileFormatError, AquiferIOError)
        assert issubclass(FileFormatError, PyAquiferError)


class TestExceptionInstantiation:
    """Tests for exception creation and attributes."""

    def test_deck_error_keyword(self) -> None:
        err = DeckError("bad record", keyword="AQUNUM")
        assert str(err) == "bad record"
        assert err.keyword == "AQUNUM"

    def test_validation_error_default_errors(self) -> None:
        err = ValidationError("invalid")
        assert err.errors == []

    def test_validation_error_with_errors(self) -> None:
        err = ValidationError("invalid", errors=["a", "b"])
        assert err.errors == ["a", "b"]

    def test_file_format_error_record_number(self) -> None:
        err = FileFormatError("bad marker", record_number=3)
        assert err.record_number == 3

    def test_config_error_carries_issue(self) -> None:
        issue = DuplicateConnectionCell(aquifer_id=2, ijk=(1, 2, 3))
        err = AquiferConfigError(issue)
        assert err.issue is issue
        assert str(err) == issue.message

    def test_catch_as_base(self) -> None:
        with pytest.raises(PyAquiferError):
            raise GridError("outside")
