"""
Sample model generators for pyaquifer documentation and testing.

This module provides functions to create a small synthetic case: a
box-shaped grid, its field properties and a deck declaring one aquifer of
each kind. The case is designed to showcase pyaquifer's capabilities
without requiring a real input deck.

Example
-------
>>> from pyaquifer.sample_models import create_sample_aquifer_config
>>> config = create_sample_aquifer_config()
>>> print(f"{len(config.numerical)} numerical, {len(config.fetp)} Fetkovich")
2 numerical, 1 Fetkovich
"""

from __future__ import annotations

import numpy as np

from pyaquifer.components.aquifer_config import AquiferConfig
from pyaquifer.core.deck import Deck
from pyaquifer.core.field_props import FieldProperties
from pyaquifer.core.grid import CartesianGrid
from pyaquifer.core.units import UnitSystem


def create_sample_grid(
    nx: int = 5,
    ny: int = 3,
    nz: int = 2,
    dx: float = 100.0,
    dy: float = 100.0,
    dz: float = 10.0,
    top: float = 2000.0,
) -> CartesianGrid:
    """
    Create a sample box grid with all cells active.

    Parameters
    ----------
    nx, ny, nz : int, optional
        Grid dimensions. Default is 5 x 3 x 2.
    dx, dy, dz : float, optional
        Cell sizes. Default is 100 x 100 x 10.
    top : float, optional
        Depth of the top of the first layer. Default is 2000.0.

    Returns
    -------
    CartesianGrid
        Sample grid.
    """
    return CartesianGrid(nx, ny, nz, dx=dx, dy=dy, dz=dz, tops=top)


def create_sample_field_props(
    grid: CartesianGrid,
    porosity: float = 0.25,
    satnum: int = 2,
) -> FieldProperties:
    """
    Create uniform field properties for a grid.

    Parameters
    ----------
    grid : CartesianGrid
        Grid the properties belong to.
    porosity : float, optional
        Porosity of every active cell. Default is 0.25.
    satnum : int, optional
        Saturation table of every active cell. Default is 2.

    Returns
    -------
    FieldProperties
        PORO, PVTNUM (all 1) and SATNUM arrays.
    """
    n = grid.n_active
    return FieldProperties(
        grid,
        double_props={"PORO": np.full(n, porosity)},
        int_props={"PVTNUM": np.ones(n, dtype=np.int32), "SATNUM": np.full(n, satnum)},
    )


def create_sample_deck(unit_system: UnitSystem = UnitSystem.METRIC) -> Deck:
    """
    Create a deck with aquifer keywords for :func:`create_sample_grid`.

    The deck declares:

    - numerical aquifer 1: cells (5, 1, 1) and (5, 2, 1) with properties
      inherited from the grid, connected along the I- face of I = 1 in
      layer 1
    - numerical aquifer 2: cell (5, 3, 2) with explicit properties,
      connected along the I- face of I = 1 in layer 2
    - Fetkovich aquifer 1 and Carter-Tracy aquifer 1, connected along the
      J- face of J = 1 for I = 2..4
    - constant-flux aquifer 3

    Parameters
    ----------
    unit_system : UnitSystem, optional
        Unit system of the deck values. Default is METRIC.

    Returns
    -------
    Deck
        Sample deck.
    """
    deck = Deck(unit_system=unit_system)
    deck.add_keyword(
        "AQUNUM",
        [
            {"AQUIFER_ID": 1, "I": 5, "J": 1, "K": 1, "CROSS_SECTION": 1.0e5,
             "LENGTH": 5000.0, "PERM": 500.0},
            {"AQUIFER_ID": 1, "I": 5, "J": 2, "K": 1, "CROSS_SECTION": 1.0e5,
             "LENGTH": 5000.0, "PERM": 500.0, "INITIAL_PRESSURE": 200.0},
            {"AQUIFER_ID": 2, "I": 5, "J": 3, "K": 2, "CROSS_SECTION": 2.0e4,
             "LENGTH": 1000.0, "PORO": 0.3, "PERM": 100.0, "DEPTH": 2100.0,
             "INITIAL_PRESSURE": 210.0, "PVT_TABLE_NUM": 2, "SAT_TABLE_NUM": 3},
        ],
    )  # fmt: skip
    deck.add_keyword(
        "AQUCON",
        [
            {"ID": 1, "I1": 1, "I2": 1, "J1": 1, "J2": 3, "K1": 1, "K2": 1,
             "CONNECT_FACE": "I-"},
            {"ID": 2, "I1": 1, "I2": 1, "J1": 1, "J2": 3, "K1": 2, "K2": 2,
             "CONNECT_FACE": "I-", "TRANS_MULT": 0.5},
        ],
    )  # fmt: skip
    deck.add_keyword(
        "AQUFETP",
        [
            {"AQUIFER_ID": 1, "DAT_DEPTH": 2005.0, "P0": 205.0, "V0": 1.0e9,
             "C_T": 1.0e-4, "PI": 500.0},
        ],
    )  # fmt: skip
    deck.add_keyword(
        "AQUCT",
        [
            {"AQUIFER_ID": 1, "DAT_DEPTH": 2005.0, "PERM_AQ": 100.0, "PORO_AQ": 0.2,
             "C_T": 1.0e-4, "RAD": 1000.0, "THICKNESS_AQ": 20.0, "INFLUENCE_ANGLE": 180.0},
        ],
    )  # fmt: skip
    deck.add_keyword("AQUFLUX", [{"AQUIFER_ID": 3, "FLUX": 0.01}])
    deck.add_keyword(
        "AQUANCON",
        [
            {"AQUIFER_ID": 1, "I1": 2, "I2": 4, "J1": 1, "J2": 1, "K1": 1, "K2": 2,
             "FACE": "J-"},
        ],
    )  # fmt: skip
    return deck


def create_sample_aquifer_config() -> AquiferConfig:
    """
    Build the aquifer configuration of the sample case.

    Returns
    -------
    AquiferConfig
        Configuration with analytic connections loaded.
    """
    grid = create_sample_grid()
    deck = create_sample_deck()
    config = AquiferConfig.from_deck(deck, grid, create_sample_field_props(grid))
    config.load_connections(deck, grid)
    return config
