"""Core data structures for pyaquifer."""

from __future__ import annotations

from pyaquifer.core.base_component import BaseComponent
from pyaquifer.core.deck import Deck, DeckItem, DeckKeyword, DeckRecord
from pyaquifer.core.exceptions import (
    AquiferConfigError,
    AquiferIOError,
    DeckError,
    FileFormatError,
    GridError,
    PyAquiferError,
    ValidationError,
)
from pyaquifer.core.field_props import FieldProperties
from pyaquifer.core.grid import CartesianGrid, FaceDir
from pyaquifer.core.nnc import NNC, NNCEntry
from pyaquifer.core.results import (
    AnalyticConnectionConflict,
    ConfigIssue,
    DuplicateCellAssignment,
    DuplicateConnectionCell,
    InvalidAquiferCell,
    Result,
    UnknownAquiferId,
)
from pyaquifer.core.units import UnitSystem

__all__ = [
    # Exceptions
    "PyAquiferError",
    "GridError",
    "DeckError",
    "ValidationError",
    "AquiferConfigError",
    "AquiferIOError",
    "FileFormatError",
    # Issues
    "ConfigIssue",
    "DuplicateCellAssignment",
    "DuplicateConnectionCell",
    "InvalidAquiferCell",
    "UnknownAquiferId",
    "AnalyticConnectionConflict",
    "Result",
    # Collaborators
    "BaseComponent",
    "CartesianGrid",
    "FaceDir",
    "FieldProperties",
    "Deck",
    "DeckItem",
    "DeckKeyword",
    "DeckRecord",
    "NNC",
    "NNCEntry",
    "UnitSystem",
]
