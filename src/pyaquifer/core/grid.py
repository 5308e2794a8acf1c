"""
Structured grid classes for aquifer model coupling.

This module provides:

- :class:`FaceDir`: The six principal face directions (X-, X+, Y-, Y+, Z-, Z+)
- :class:`CartesianGrid`: A corner-free structured 3D grid with an
  active-cell map, answering the global/active index, depth, face-area
  and adjacency queries the aquifer model needs

Cells are addressed with zero-based (i, j, k). Global indices follow
the usual ordering with i running fastest: ``i + j*nx + k*nx*ny``.

Example
-------
>>> import numpy as np
>>> from pyaquifer.core.grid import CartesianGrid, FaceDir
>>> grid = CartesianGrid(nx=3, ny=1, nz=1, dx=10.0, dy=10.0, dz=5.0, tops=1000.0)
>>> grid.global_index(2, 0, 0)
2
>>> grid.has_active_reservoir_neighbor(0, 0, 0, FaceDir.XPLUS)
True
>>> grid.has_active_reservoir_neighbor(0, 0, 0, FaceDir.XMINUS)
False
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyaquifer.core.exceptions import GridError


class FaceDir(Enum):
    """Face direction of a cell."""

    XMINUS = "X-"
    XPLUS = "X+"
    YMINUS = "Y-"
    YPLUS = "Y+"
    ZMINUS = "Z-"
    ZPLUS = "Z+"

    @classmethod
    def from_string(cls, text: str) -> FaceDir:
        """
        Parse a face direction string.

        Accepts ``X-``/``I-`` style names, case-insensitive.

        Raises:
            ValueError: If the string is not a face direction
        """
        s = text.strip().upper().replace("I", "X").replace("J", "Y").replace("K", "Z")
        for member in cls:
            if member.value == s:
                return member
        raise ValueError(f"Invalid face direction '{text}'")

    @property
    def axis(self) -> int:
        """Principal axis: 0 = X, 1 = Y, 2 = Z."""
        return "XYZ".index(self.value[0])

    @property
    def offset(self) -> tuple[int, int, int]:
        """(di, dj, dk) step to the neighbouring cell across this face."""
        step = 1 if self.value[1] == "+" else -1
        delta = [0, 0, 0]
        delta[self.axis] = step
        return (delta[0], delta[1], delta[2])

    @property
    def code(self) -> int:
        """Integer code used in serialized data (1..6)."""
        return list(FaceDir).index(self) + 1

    @classmethod
    def from_code(cls, code: int) -> FaceDir:
        members = list(cls)
        if not 1 <= code <= len(members):
            raise ValueError(f"Invalid face direction code {code}")
        return members[code - 1]


def _cell_array(value: ArrayLike, shape: tuple[int, ...], name: str) -> NDArray[np.float64]:
    arr = np.asarray(value, dtype=np.float64)
    if arr.ndim == 0:
        return np.full(shape, float(arr))
    if arr.shape != shape:
        raise GridError(f"{name} shape {arr.shape} does not match expected {shape}")
    return arr


class CartesianGrid:
    """
    Structured 3D grid with an active-cell map.

    Parameters
    ----------
    nx, ny, nz : int
        Grid dimensions.
    dx, dy, dz : float or array_like
        Cell sizes, scalar or shape ``(nx, ny, nz)``.
    tops : float or array_like
        Depth of the top of the first layer, scalar or shape ``(nx, ny)``.
    actnum : array_like of bool, optional
        Active flag per cell, shape ``(nx, ny, nz)``. Default all active.
    """

    def __init__(
        self,
        nx: int,
        ny: int,
        nz: int,
        dx: ArrayLike = 1.0,
        dy: ArrayLike = 1.0,
        dz: ArrayLike = 1.0,
        tops: ArrayLike = 0.0,
        actnum: ArrayLike | None = None,
    ) -> None:
        if min(nx, ny, nz) <= 0:
            raise GridError(f"Invalid grid dimensions ({nx}, {ny}, {nz})")
        self.nx = nx
        self.ny = ny
        self.nz = nz
        shape = (nx, ny, nz)
        self.dx = _cell_array(dx, shape, "dx")
        self.dy = _cell_array(dy, shape, "dy")
        self.dz = _cell_array(dz, shape, "dz")
        self.tops = _cell_array(tops, (nx, ny), "tops")

        if actnum is None:
            self._actnum = np.ones(shape, dtype=bool)
        else:
            self._actnum = np.asarray(actnum, dtype=bool)
            if self._actnum.shape != shape:
                raise GridError(
                    f"actnum shape {self._actnum.shape} does not match expected {shape}"
                )

        # global (Fortran-ordered) -> active index, -1 for inactive cells
        flat = self._actnum.ravel(order="F")
        self._active_index = np.full(flat.size, -1, dtype=np.int64)
        self._active_index[flat] = np.arange(int(flat.sum()))

    # ------------------------------------------------------------------
    # Sizes
    # ------------------------------------------------------------------

    @property
    def dims(self) -> tuple[int, int, int]:
        return (self.nx, self.ny, self.nz)

    @property
    def n_cells(self) -> int:
        return self.nx * self.ny * self.nz

    @property
    def n_active(self) -> int:
        return int(self._actnum.sum())

    @property
    def actnum(self) -> NDArray[np.bool_]:
        """Active flags indexed by global index."""
        return self._actnum.ravel(order="F").copy()

    # ------------------------------------------------------------------
    # Index lookups
    # ------------------------------------------------------------------

    def in_bounds(self, i: int, j: int, k: int) -> bool:
        return 0 <= i < self.nx and 0 <= j < self.ny and 0 <= k < self.nz

    def global_index(self, i: int, j: int, k: int) -> int:
        """Return the global index of cell (i, j, k)."""
        if not self.in_bounds(i, j, k):
            raise GridError(f"Cell ({i}, {j}, {k}) is outside grid of size {self.dims}")
        return i + j * self.nx + k * self.nx * self.ny

    def ijk(self, global_index: int) -> tuple[int, int, int]:
        """Return the (i, j, k) of a global index."""
        if not 0 <= global_index < self.n_cells:
            raise GridError(f"Global index {global_index} out of range [0, {self.n_cells - 1}]")
        k, rem = divmod(global_index, self.nx * self.ny)
        j, i = divmod(rem, self.nx)
        return (i, j, k)

    def active_index(self, global_index: int) -> int:
        """Return the active index of a global cell; inactive cells are an error."""
        if not 0 <= global_index < self.n_cells:
            raise GridError(f"Global index {global_index} out of range [0, {self.n_cells - 1}]")
        idx = int(self._active_index[global_index])
        if idx < 0:
            i, j, k = self.ijk(global_index)
            raise GridError(f"Cell ({i}, {j}, {k}) is not active")
        return idx

    def cell_active(self, i: int, j: int, k: int) -> bool:
        return bool(self._actnum[i, j, k])

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def cell_depth(self, global_index: int) -> float:
        """Return the depth of the centre of a cell."""
        i, j, k = self.ijk(global_index)
        above = float(self.dz[i, j, :k].sum())
        return float(self.tops[i, j]) + above + 0.5 * float(self.dz[i, j, k])

    def cell_volume(self, global_index: int) -> float:
        i, j, k = self.ijk(global_index)
        return float(self.dx[i, j, k] * self.dy[i, j, k] * self.dz[i, j, k])

    def face_area(self, global_index: int, face_dir: FaceDir) -> float:
        """Return the area of one face of a cell."""
        i, j, k = self.ijk(global_index)
        dx, dy, dz = self.dx[i, j, k], self.dy[i, j, k], self.dz[i, j, k]
        if face_dir.axis == 0:
            return float(dy * dz)
        if face_dir.axis == 1:
            return float(dx * dz)
        return float(dx * dy)

    # ------------------------------------------------------------------
    # Adjacency
    # ------------------------------------------------------------------

    def cell_inside_reservoir_and_active(
        self, i: int, j: int, k: int, actnum: NDArray[np.bool_] | None = None
    ) -> bool:
        """
        Check whether (i, j, k) lies inside the grid and is active.

        Args:
            i, j, k: Zero-based cell coordinates
            actnum: Optional active map indexed by global index, overriding
                the grid's own

        Returns:
            True if the cell is inside the grid and active
        """
        if not self.in_bounds(i, j, k):
            return False
        if actnum is None:
            return self.cell_active(i, j, k)
        return bool(actnum[self.global_index(i, j, k)])

    def has_active_reservoir_neighbor(
        self,
        i: int,
        j: int,
        k: int,
        face_dir: FaceDir,
        actnum: NDArray[np.bool_] | None = None,
    ) -> bool:
        """Check whether the neighbour of (i, j, k) across ``face_dir`` is active."""
        di, dj, dk = face_dir.offset
        return self.cell_inside_reservoir_and_active(i + di, j + dj, k + dk, actnum)

    def __repr__(self) -> str:
        return f"CartesianGrid(dims={self.dims}, n_active={self.n_active})"
