"""Aquifer model components."""

from __future__ import annotations

from pyaquifer.components.analytic import (
    AquiferConstantFlux,
    AquiferCT,
    AquiferKind,
    Aquifetp,
    CarterTracyAquifer,
    ConstantFluxAquifer,
    FetkovichAquifer,
)
from pyaquifer.components.aquancon import Aquancon, AquancCell
from pyaquifer.components.aquifer_config import AquiferConfig
from pyaquifer.components.aquifer_data import AquiferData, AquiferType, FetkovichData
from pyaquifer.components.numerical import (
    NumericalAquifers,
    NumericalAquifersBuilder,
    SingleNumericalAquifer,
    build_numerical_aquifers,
)
from pyaquifer.components.numerical_cell import NumericalAquiferCell
from pyaquifer.components.numerical_connection import (
    NumericalAquiferConnection,
    NumericalAquiferConnections,
    generate_connections,
)

__all__ = [
    # Analytic
    "AquiferKind",
    "FetkovichAquifer",
    "CarterTracyAquifer",
    "ConstantFluxAquifer",
    "Aquifetp",
    "AquiferCT",
    "AquiferConstantFlux",
    "AquancCell",
    "Aquancon",
    # Numerical
    "NumericalAquiferCell",
    "NumericalAquiferConnection",
    "NumericalAquiferConnections",
    "generate_connections",
    "SingleNumericalAquifer",
    "NumericalAquifers",
    "NumericalAquifersBuilder",
    "build_numerical_aquifers",
    # Aggregate and output
    "AquiferConfig",
    "AquiferData",
    "AquiferType",
    "FetkovichData",
]
