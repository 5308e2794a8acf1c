"""
pyaquifer - Aquifer models for reservoir simulation input.

This package provides tools for:
- Building analytic (Fetkovich, Carter-Tracy, constant flux) and
  numerical aquifers from deck keywords
- Computing aquifer connections and the reservoir transmissibilities
  they replace
- Writing and reading aquifer restart files (binary and HDF5)
"""

from __future__ import annotations

__version__ = "0.1.0"

from pyaquifer.components.analytic import (
    AquiferConstantFlux,
    AquiferCT,
    Aquifetp,
    CarterTracyAquifer,
    ConstantFluxAquifer,
    FetkovichAquifer,
)
from pyaquifer.components.aquancon import Aquancon
from pyaquifer.components.aquifer_config import AquiferConfig
from pyaquifer.components.aquifer_data import AquiferData, AquiferType
from pyaquifer.components.numerical import (
    NumericalAquifers,
    SingleNumericalAquifer,
    build_numerical_aquifers,
)
from pyaquifer.components.numerical_cell import NumericalAquiferCell
from pyaquifer.components.numerical_connection import NumericalAquiferConnection
from pyaquifer.core.deck import Deck
from pyaquifer.core.exceptions import (
    AquiferConfigError,
    AquiferIOError,
    FileFormatError,
    GridError,
    PyAquiferError,
    ValidationError,
)
from pyaquifer.core.field_props import FieldProperties
from pyaquifer.core.grid import CartesianGrid, FaceDir
from pyaquifer.core.units import UnitSystem
from pyaquifer.sample_models import (
    create_sample_aquifer_config,
    create_sample_deck,
    create_sample_field_props,
    create_sample_grid,
)

__all__ = [
    "__version__",
    # Collaborators
    "CartesianGrid",
    "FaceDir",
    "FieldProperties",
    "Deck",
    "UnitSystem",
    # Analytic aquifers
    "FetkovichAquifer",
    "CarterTracyAquifer",
    "ConstantFluxAquifer",
    "Aquifetp",
    "AquiferCT",
    "AquiferConstantFlux",
    "Aquancon",
    # Numerical aquifers
    "NumericalAquiferCell",
    "NumericalAquiferConnection",
    "SingleNumericalAquifer",
    "NumericalAquifers",
    "build_numerical_aquifers",
    # Aggregate
    "AquiferConfig",
    "AquiferData",
    "AquiferType",
    # Exceptions
    "PyAquiferError",
    "GridError",
    "ValidationError",
    "AquiferConfigError",
    "AquiferIOError",
    "FileFormatError",
    # Sample models
    "create_sample_grid",
    "create_sample_field_props",
    "create_sample_deck",
    "create_sample_aquifer_config",
]
