"""
Connection geometry of analytic aquifers (keyword ``AQUANCON``).

Each record names an analytic aquifer, an inclusive cell range and a
face. Active cells in the range are connected unless their neighbour
across the face is active, which is allowed only when
``CONNECT_ADJOINING_ACTIVE_CELL`` is set. The influx coefficient of a
cell is the explicit ``INFLUX_COEFF`` or the face area, multiplied by
``INFLUX_MULT``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from pyaquifer.core.base_component import BaseComponent
from pyaquifer.core.deck import Deck, to_bool
from pyaquifer.core.grid import FaceDir
from pyaquifer.core.results import AnalyticConnectionConflict, Result

if TYPE_CHECKING:
    from pyaquifer.core.grid import CartesianGrid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AquancCell:
    """
    One reservoir cell connected to an analytic aquifer.

    Attributes:
        aquifer_id: Analytic aquifer ID
        global_index: Global index of the connected cell
        influx_coeff: Influx coefficient (area)
        face_dir: Connected face of the cell
    """

    aquifer_id: int
    global_index: int
    influx_coeff: float
    face_dir: FaceDir

    def __repr__(self) -> str:
        return (
            f"AquancCell(aquifer={self.aquifer_id}, global_index={self.global_index}, "
            f"face={self.face_dir.value})"
        )


@dataclass
class Aquancon(BaseComponent):
    """
    Analytic aquifer connections grouped per aquifer.

    Attributes:
        cells: aquifer id -> connected cells, in input order
    """

    component_name: ClassVar[str] = "analytic connection"

    cells: dict[int, list[AquancCell]] = field(default_factory=dict)

    @classmethod
    def from_deck(cls, deck: Deck, grid: CartesianGrid) -> Result[Aquancon]:
        """
        Expand every AQUANCON record against the grid.

        Returns:
            The connections, or an AnalyticConnectionConflict issue if a
            cell is connected to two different aquifers
        """
        work: dict[int, AquancCell] = {}
        for record in deck.records("AQUANCON"):
            aquifer_id = record.get("AQUIFER_ID")
            i1, i2 = record.get("I1") - 1, record.get("I2") - 1
            j1, j2 = record.get("J1") - 1, record.get("J2") - 1
            k1, k2 = record.get("K1") - 1, record.get("K2") - 1
            face_dir = FaceDir.from_string(record.get_trimmed_string("FACE"))
            connect_active = to_bool(record.get_trimmed_string("CONNECT_ADJOINING_ACTIVE_CELL"))
            influx_mult = float(record.get("INFLUX_MULT"))
            explicit_coeff = None
            if not record.default_applied("INFLUX_COEFF"):
                explicit_coeff = record.get_si("INFLUX_COEFF")

            for k in range(k1, k2 + 1):
                for j in range(j1, j2 + 1):
                    for i in range(i1, i2 + 1):
                        if not grid.cell_inside_reservoir_and_active(i, j, k):
                            continue
                        if not connect_active and grid.has_active_reservoir_neighbor(
                            i, j, k, face_dir
                        ):
                            continue
                        global_index = grid.global_index(i, j, k)
                        coeff = explicit_coeff
                        if coeff is None:
                            coeff = grid.face_area(global_index, face_dir)
                        cell = AquancCell(aquifer_id, global_index, coeff * influx_mult, face_dir)

                        previous = work.get(global_index)
                        if previous is not None:
                            if previous.aquifer_id != aquifer_id:
                                return Result.failure(
                                    AnalyticConnectionConflict(
                                        aquifer_id=previous.aquifer_id,
                                        ijk=(i + 1, j + 1, k + 1),
                                        other_aquifer_id=aquifer_id,
                                    )
                                )
                            logger.warning(
                                "Cell (%d, %d, %d) is connected to analytic aquifer %d "
                                "more than once; the last connection is used",
                                i + 1,
                                j + 1,
                                k + 1,
                                aquifer_id,
                            )
                            del work[global_index]
                        work[global_index] = cell

        result = cls()
        for cell in work.values():
            result.cells.setdefault(cell.aquifer_id, []).append(cell)
        return Result.success(result)

    @property
    def active(self) -> bool:
        return bool(self.cells)

    @property
    def data(self) -> Mapping[int, list[AquancCell]]:
        return self.cells

    @property
    def n_items(self) -> int:
        return sum(len(c) for c in self.cells.values())

    def has_aquifer(self, aquifer_id: int) -> bool:
        return aquifer_id in self.cells

    def __getitem__(self, aquifer_id: int) -> list[AquancCell]:
        return self.cells[aquifer_id]

    def errors(self) -> list[str]:
        return [
            f"Analytic connection {cell}: influx coefficient must not be negative"
            for cells in self.cells.values()
            for cell in cells
            if cell.influx_coeff < 0.0
        ]

    def __repr__(self) -> str:
        return f"Aquancon(n_aquifers={len(self.cells)}, n_cells={self.n_items})"
