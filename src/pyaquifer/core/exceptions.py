"""Custom exceptions for pyaquifer package."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyaquifer.core.results import ConfigIssue


class PyAquiferError(Exception):
    """Base exception for all pyaquifer errors."""

    pass


class GridError(PyAquiferError):
    """Error related to grid lookups (out of bounds, inactive cells)."""

    pass


class DeckError(PyAquiferError):
    """Error raised when a deck record is malformed or incomplete."""

    def __init__(self, message: str, keyword: str | None = None) -> None:
        super().__init__(message)
        self.keyword = keyword


class ValidationError(PyAquiferError):
    """Error raised when component validation fails."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class AquiferConfigError(PyAquiferError):
    """
    Fatal aquifer configuration error.

    Raised when an inconsistent input deck is detected while building the
    aquifer model. The offending issue is kept on :attr:`issue`.
    """

    def __init__(self, issue: ConfigIssue) -> None:
        super().__init__(issue.message)
        self.issue = issue


class AquiferIOError(PyAquiferError):
    """Error related to serialization and restart file I/O."""

    pass


class FileFormatError(AquiferIOError):
    """Error raised when a serialized buffer or file is invalid."""

    def __init__(self, message: str, record_number: int | None = None) -> None:
        super().__init__(message)
        self.record_number = record_number
