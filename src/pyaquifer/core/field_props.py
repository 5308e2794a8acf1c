"""
Field property arrays keyed by active cell index.

:class:`FieldProperties` is the read-only property oracle consulted when
numerical aquifer cells inherit porosity and table numbers from the
reservoir. Double arrays (e.g. ``PORO``) and integer arrays (e.g.
``PVTNUM``, ``SATNUM``) have one value per active cell.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyaquifer.core.exceptions import GridError

if TYPE_CHECKING:
    from pyaquifer.core.grid import CartesianGrid

# Integer properties that default to table 1 everywhere
DEFAULT_INT_PROPERTIES = ("PVTNUM", "SATNUM")


class FieldProperties:
    """
    Property arrays for the active cells of a grid.

    Args:
        grid: Grid the properties belong to
        double_props: Mapping of name to float array (length n_active)
        int_props: Mapping of name to int array (length n_active)
    """

    def __init__(
        self,
        grid: CartesianGrid,
        double_props: Mapping[str, ArrayLike] | None = None,
        int_props: Mapping[str, ArrayLike] | None = None,
    ) -> None:
        self.n_active = grid.n_active
        self._double: dict[str, NDArray[np.float64]] = {}
        self._int: dict[str, NDArray[np.int32]] = {}

        for name, values in (double_props or {}).items():
            self._double[name.upper()] = self._check(name, np.asarray(values, dtype=np.float64))
        for name, values in (int_props or {}).items():
            self._int[name.upper()] = self._check(name, np.asarray(values, dtype=np.int32))
        for name in DEFAULT_INT_PROPERTIES:
            if name not in self._int:
                self._int[name] = np.ones(self.n_active, dtype=np.int32)

    def _check(self, name: str, arr: NDArray) -> NDArray:
        if arr.shape != (self.n_active,):
            raise GridError(
                f"Property {name} has shape {arr.shape}, expected ({self.n_active},)"
            )
        return arr

    def has_double(self, name: str) -> bool:
        return name.upper() in self._double

    def has_int(self, name: str) -> bool:
        return name.upper() in self._int

    def get_double(self, name: str) -> NDArray[np.float64]:
        """Return a float property array; raises KeyError if absent."""
        try:
            return self._double[name.upper()]
        except KeyError:
            raise KeyError(f"No double property '{name}'") from None

    def get_int(self, name: str) -> NDArray[np.int32]:
        """Return an integer property array; raises KeyError if absent."""
        try:
            return self._int[name.upper()]
        except KeyError:
            raise KeyError(f"No integer property '{name}'") from None

    def __repr__(self) -> str:
        names = sorted(self._double) + sorted(self._int)
        return f"FieldProperties(n_active={self.n_active}, properties={names})"
