"""Pytest configuration and fixtures for pyaquifer tests."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

from pyaquifer.core.deck import Deck
from pyaquifer.core.field_props import FieldProperties
from pyaquifer.core.grid import CartesianGrid
from pyaquifer.sample_models import (
    create_sample_deck,
    create_sample_field_props,
    create_sample_grid,
)


@pytest.fixture
def sample_grid() -> CartesianGrid:
    """5 x 3 x 2 grid, 100 x 100 x 10 cells, top at 2000."""
    return create_sample_grid()


@pytest.fixture
def sample_field_props(sample_grid: CartesianGrid) -> FieldProperties:
    """PORO 0.25, PVTNUM 1 and SATNUM 2 everywhere."""
    return create_sample_field_props(sample_grid)


@pytest.fixture
def sample_deck() -> Deck:
    """Deck declaring one aquifer of each kind for the sample grid."""
    return create_sample_deck()


@pytest.fixture
def small_grid() -> CartesianGrid:
    """3 x 3 x 1 grid with unit cells, all active."""
    return CartesianGrid(3, 3, 1)


@pytest.fixture
def small_field_props(small_grid: CartesianGrid) -> FieldProperties:
    """Distinct porosity per active cell of the small grid."""
    n = small_grid.n_active
    return FieldProperties(
        small_grid,
        double_props={"PORO": np.linspace(0.1, 0.3, n)},
        int_props={"PVTNUM": np.full(n, 2), "SATNUM": np.arange(1, n + 1)},
    )


@pytest.fixture
def aqunum_row() -> dict[str, Any]:
    """AQUNUM record items for cell (1, 1, 1) of aquifer 1, properties defaulted."""
    return {
        "AQUIFER_ID": 1,
        "I": 1,
        "J": 1,
        "K": 1,
        "CROSS_SECTION": 100.0,
        "LENGTH": 50.0,
        "PERM": 200.0,
    }


@pytest.fixture
def aqucon_row() -> dict[str, Any]:
    """AQUCON record items connecting aquifer 1 to the I- face of column I = 1."""
    return {
        "ID": 1,
        "I1": 1,
        "I2": 1,
        "J1": 1,
        "J2": 3,
        "K1": 1,
        "K2": 1,
        "CONNECT_FACE": "I-",
    }
