"""
Unit systems for deck values.

Deck values are given in the deck's unit system (METRIC or FIELD) and
converted to SI when extracted with :meth:`DeckRecord.get_si`. Each
conversion is ``si = value * scale + offset``.
"""

from __future__ import annotations

from enum import Enum

_DAY = 86400.0
_BAR = 1.0e5
_PSI = 6894.75729
_FOOT = 0.3048
_STB = 0.158987294928
_MILLIDARCY = 9.869233e-16

# dimension -> (scale, offset)
_METRIC: dict[str, tuple[float, float]] = {
    "1": (1.0, 0.0),
    "Length": (1.0, 0.0),
    "Area": (1.0, 0.0),
    "Volume": (1.0, 0.0),
    "Pressure": (_BAR, 0.0),
    "Compressibility": (1.0 / _BAR, 0.0),
    "Permeability": (_MILLIDARCY, 0.0),
    "Temperature": (1.0, 273.15),
    "Salinity": (1.0, 0.0),  # kg/m3
    "FluxPerArea": (1.0 / _DAY, 0.0),  # m3/day/m2
    "ProductivityIndex": (1.0 / (_DAY * _BAR), 0.0),  # m3/day/bar
}

_FIELD: dict[str, tuple[float, float]] = {
    "1": (1.0, 0.0),
    "Length": (_FOOT, 0.0),
    "Area": (_FOOT**2, 0.0),
    "Volume": (_STB, 0.0),
    "Pressure": (_PSI, 0.0),
    "Compressibility": (1.0 / _PSI, 0.0),
    "Permeability": (_MILLIDARCY, 0.0),
    "Temperature": (5.0 / 9.0, 273.15 - 32.0 * 5.0 / 9.0),
    "Salinity": (0.45359237 / _STB, 0.0),  # lb/stb
    "FluxPerArea": (_STB / (_DAY * _FOOT**2), 0.0),  # stb/day/ft2
    "ProductivityIndex": (_STB / (_DAY * _PSI), 0.0),  # stb/day/psi
}


class UnitSystem(Enum):
    """Unit system of an input deck."""

    METRIC = "metric"
    FIELD = "field"

    def _table(self) -> dict[str, tuple[float, float]]:
        return _METRIC if self is UnitSystem.METRIC else _FIELD

    def to_si(self, dimension: str, value: float) -> float:
        """
        Convert a value of the given dimension to SI.

        Args:
            dimension: Dimension name (e.g. 'Pressure', 'Length')
            value: Value in this unit system

        Returns:
            Value in SI units
        """
        try:
            scale, offset = self._table()[dimension]
        except KeyError:
            raise ValueError(f"Unknown dimension '{dimension}'") from None
        return value * scale + offset

    def from_si(self, dimension: str, value: float) -> float:
        """Convert an SI value of the given dimension back to this unit system."""
        try:
            scale, offset = self._table()[dimension]
        except KeyError:
            raise ValueError(f"Unknown dimension '{dimension}'") from None
        return (value - offset) / scale
