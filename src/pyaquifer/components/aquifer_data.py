"""
Per-aquifer solution data for restart and summary output.

The simulator fills one :class:`AquiferData` per aquifer at each report
step. Summary vectors are looked up by keyword with :meth:`AquiferData.get`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyaquifer.components.analytic import FetkovichAquifer


class AquiferType(Enum):
    """Model kind reported for an aquifer."""

    FETKOVICH = 1
    CARTER_TRACY = 2
    NUMERICAL = 3


@dataclass(frozen=True)
class FetkovichData:
    """Static Fetkovich quantities reported alongside the dynamic data."""

    init_volume: float
    prod_index: float
    time_constant: float

    @classmethod
    def from_aquifer(cls, aquifer: FetkovichAquifer) -> FetkovichData:
        return cls(
            init_volume=aquifer.initial_volume,
            prod_index=aquifer.productivity_index,
            time_constant=aquifer.time_constant,
        )


# summary keyword -> AquiferData attribute
_SUMMARY_KEYS = {
    "AAQR": "flux_rate",
    "ANQR": "flux_rate",
    "AAQT": "volume",
    "ANQT": "volume",
    "AAQP": "pressure",
    "ANQP": "pressure",
}


@dataclass
class AquiferData:
    """
    Dynamic state of one aquifer.

    Attributes:
        aquifer_id: One-based aquifer ID
        type: Model kind
        pressure: Aquifer pressure
        flux_rate: Influx rate into the reservoir
        volume: Cumulative influx volume
        init_pressure: Initial aquifer pressure
        datum_depth: Depth the pressure refers to
        fetkovich: Fetkovich quantities, for Fetkovich aquifers only
    """

    aquifer_id: int = 0
    type: AquiferType = AquiferType.FETKOVICH
    pressure: float = 0.0
    flux_rate: float = 0.0
    volume: float = 0.0
    init_pressure: float = 0.0
    datum_depth: float = 0.0
    fetkovich: FetkovichData | None = None

    def get(self, key: str) -> float:
        """Return the value of a summary vector (0.0 for unknown keys)."""
        attr = _SUMMARY_KEYS.get(key)
        if attr is None:
            return 0.0
        return float(getattr(self, attr))


Aquifers = dict[int, AquiferData]
