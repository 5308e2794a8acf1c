"""
Connections between numerical aquifers and reservoir cells.

Connections are declared with the ``AQUCON`` keyword as a rectangular
cell range plus a face direction. :func:`generate_connections` expands a
range into individual cell connections; by default only cells on the
reservoir boundary (whose neighbour across the face is not an active
cell) are connected. :class:`NumericalAquiferConnections` merges the
generated connections of all records per aquifer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pyaquifer.core.deck import Deck, DeckRecord, to_bool
from pyaquifer.core.grid import FaceDir
from pyaquifer.core.results import DuplicateConnectionCell, Result, UnknownAquiferId

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from pyaquifer.core.grid import CartesianGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NumericalAquiferConnection:
    """
    A coupling face between a numerical aquifer and a reservoir cell.

    Attributes:
        aquifer_id: Aquifer ID
        I, J, K: Zero-based coordinates of the reservoir cell
        global_index: Global index of the reservoir cell
        face_dir: Face of the reservoir cell the aquifer attaches to
        trans_multi: Transmissibility multiplier
        trans_option: Transmissibility calculation option
        connect_active_cell: True if internal cells may be connected
        ve_frac_relperm: Vertical-equilibrium fraction for relative permeability
        ve_frac_cappress: Vertical-equilibrium fraction for capillary pressure
    """

    aquifer_id: int
    I: int  # noqa: E741
    J: int
    K: int
    global_index: int
    face_dir: FaceDir
    trans_multi: float = 1.0
    trans_option: int = 0
    connect_active_cell: bool = False
    ve_frac_relperm: float = 1.0
    ve_frac_cappress: float = 1.0

    @property
    def ijk(self) -> tuple[int, int, int]:
        return (self.I, self.J, self.K)

    def __repr__(self) -> str:
        return (
            f"NumericalAquiferConnection(aquifer={self.aquifer_id}, "
            f"ijk=({self.I}, {self.J}, {self.K}), face={self.face_dir.value})"
        )


def generate_connections(
    record: DeckRecord,
    grid: CartesianGrid,
    actnum: NDArray[np.bool_] | None = None,
) -> list[NumericalAquiferConnection]:
    """
    Expand one AQUCON record into cell connections.

    Cells in the inclusive range are visited with i fastest. Cells
    outside the grid and inactive cells are skipped. Unless
    ``ALLOW_INTERNAL_CELLS`` is set, a cell is also skipped when its
    neighbour across the connection face is an active reservoir cell.

    Args:
        record: AQUCON record (1-based, inclusive range)
        grid: Grid used for indices and adjacency
        actnum: Active map indexed by global index (default: the grid's)

    Returns:
        Connections in range order
    """
    if actnum is None:
        actnum = grid.actnum

    aquifer_id = record.get("ID")
    i1, i2 = record.get("I1") - 1, record.get("I2") - 1
    j1, j2 = record.get("J1") - 1, record.get("J2") - 1
    k1, k2 = record.get("K1") - 1, record.get("K2") - 1

    allow_internal_cells = to_bool(record.get_trimmed_string("ALLOW_INTERNAL_CELLS"))
    face_dir = FaceDir.from_string(record.get_trimmed_string("CONNECT_FACE"))
    trans_multi = float(record.get("TRANS_MULT"))
    trans_option = int(record.get("TRANS_OPTION"))
    ve_frac_relperm = float(record.get("VEFRAC"))
    ve_frac_cappress = float(record.get("VEFRACP"))

    connections = []
    for k in range(k1, k2 + 1):
        for j in range(j1, j2 + 1):
            for i in range(i1, i2 + 1):
                if not grid.in_bounds(i, j, k):
                    continue
                global_index = grid.global_index(i, j, k)
                if not actnum[global_index]:
                    continue
                if allow_internal_cells or not grid.has_active_reservoir_neighbor(
                    i, j, k, face_dir, actnum
                ):
                    connections.append(
                        NumericalAquiferConnection(
                            aquifer_id=aquifer_id,
                            I=i,
                            J=j,
                            K=k,
                            global_index=global_index,
                            face_dir=face_dir,
                            trans_multi=trans_multi,
                            trans_option=trans_option,
                            connect_active_cell=allow_internal_cells,
                            ve_frac_relperm=ve_frac_relperm,
                            ve_frac_cappress=ve_frac_cappress,
                        )
                    )
    logger.debug(
        "AQUCON record for aquifer %d generated %d connection(s)", aquifer_id, len(connections)
    )
    return connections


@dataclass
class NumericalAquiferConnections:
    """
    Connections of all numerical aquifers, keyed by aquifer and cell.

    Attributes:
        connections: aquifer id -> (global index -> connection), in
            insertion order
    """

    connections: dict[int, dict[int, NumericalAquiferConnection]] = field(default_factory=dict)

    def add(self, con: NumericalAquiferConnection) -> DuplicateConnectionCell | None:
        """
        Register one connection.

        Returns:
            A DuplicateConnectionCell issue if the cell is already connected
            to the same aquifer, otherwise None
        """
        aqu_cons = self.connections.setdefault(con.aquifer_id, {})
        if con.global_index in aqu_cons:
            return DuplicateConnectionCell(
                aquifer_id=con.aquifer_id, ijk=(con.I + 1, con.J + 1, con.K + 1)
            )
        aqu_cons[con.global_index] = con
        return None

    @classmethod
    def from_deck(
        cls,
        deck: Deck,
        grid: CartesianGrid,
        actnum: NDArray[np.bool_] | None = None,
    ) -> Result[NumericalAquiferConnections]:
        """Generate and merge the connections of every AQUCON record."""
        result = cls()
        for record in deck.records("AQUCON"):
            for con in generate_connections(record, grid, actnum):
                issue = result.add(con)
                if issue is not None:
                    return Result.failure(issue)
        return Result.success(result)

    def has_aquifer(self, aquifer_id: int) -> bool:
        return aquifer_id in self.connections

    def get_connections(self, aquifer_id: int) -> Result[dict[int, NumericalAquiferConnection]]:
        """Return the connections of one aquifer, or an UnknownAquiferId issue."""
        cons = self.connections.get(aquifer_id)
        if cons is None:
            return Result.failure(UnknownAquiferId(aquifer_id=aquifer_id, what="connections"))
        return Result.success(cons)

    def __len__(self) -> int:
        return sum(len(c) for c in self.connections.values())
