"""
Numerical aquifer cells.

A numerical aquifer cell is a grid cell promoted to aquifer storage
(keyword ``AQUNUM``). Its porosity, depth and table numbers default to
the reservoir values of the same cell unless given explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pyaquifer.core.deck import DeckRecord

if TYPE_CHECKING:
    from pyaquifer.core.field_props import FieldProperties
    from pyaquifer.core.grid import CartesianGrid


@dataclass(frozen=True)
class NumericalAquiferCell:
    """
    One grid cell belonging to a numerical aquifer.

    Attributes:
        aquifer_id: ID of the owning aquifer
        I, J, K: Zero-based grid coordinates
        global_index: Global index of the cell
        area: Cross-sectional area
        length: Length of the aquifer cell
        permeability: Permeability
        porosity: Porosity (explicit or inherited from PORO)
        depth: Cell depth (explicit or the grid cell depth)
        pvttable: PVT table number (explicit or inherited from PVTNUM)
        sattable: Saturation table number (explicit or inherited from SATNUM)
        init_pressure: Initial pressure, None if not given
        transmissibility: 2 * permeability * area / length
    """

    aquifer_id: int
    I: int  # noqa: E741
    J: int
    K: int
    global_index: int
    area: float
    length: float
    permeability: float
    porosity: float
    depth: float
    pvttable: int
    sattable: int
    init_pressure: float | None = None
    transmissibility: float = field(init=False)

    def __post_init__(self) -> None:
        trans = 2.0 * self.permeability * self.area / self.length if self.length > 0.0 else 0.0
        object.__setattr__(self, "transmissibility", trans)

    @classmethod
    def from_record(
        cls,
        record: DeckRecord,
        grid: CartesianGrid,
        field_props: FieldProperties,
    ) -> NumericalAquiferCell:
        """
        Build a cell from an AQUNUM record.

        Args:
            record: AQUNUM record (1-based I, J, K)
            grid: Grid used to resolve indices and depth
            field_props: Reservoir properties for defaulted items

        Raises:
            GridError: If the cell is outside the grid or inactive
        """
        i = record.get("I") - 1
        j = record.get("J") - 1
        k = record.get("K") - 1
        global_index = grid.global_index(i, j, k)
        active_index = grid.active_index(global_index)

        if record.default_applied("PORO"):
            porosity = float(field_props.get_double("PORO")[active_index])
        else:
            porosity = record.get_si("PORO")

        if record.default_applied("DEPTH"):
            depth = grid.cell_depth(global_index)
        else:
            depth = record.get_si("DEPTH")

        init_pressure = None
        if not record.default_applied("INITIAL_PRESSURE"):
            init_pressure = record.get_si("INITIAL_PRESSURE")

        if record.default_applied("PVT_TABLE_NUM"):
            pvttable = int(field_props.get_int("PVTNUM")[active_index])
        else:
            pvttable = record.get("PVT_TABLE_NUM")

        if record.default_applied("SAT_TABLE_NUM"):
            sattable = int(field_props.get_int("SATNUM")[active_index])
        else:
            sattable = record.get("SAT_TABLE_NUM")

        return cls(
            aquifer_id=record.get("AQUIFER_ID"),
            I=i,
            J=j,
            K=k,
            global_index=global_index,
            area=record.get_si("CROSS_SECTION"),
            length=record.get_si("LENGTH"),
            permeability=record.get_si("PERM"),
            porosity=porosity,
            depth=depth,
            pvttable=pvttable,
            sattable=sattable,
            init_pressure=init_pressure,
        )

    @property
    def cell_volume(self) -> float:
        return self.area * self.length

    @property
    def pore_volume(self) -> float:
        return self.porosity * self.cell_volume

    @property
    def ijk(self) -> tuple[int, int, int]:
        return (self.I, self.J, self.K)

    def same_coordinates(self, i: int, j: int, k: int) -> bool:
        return self.I == i and self.J == j and self.K == k

    def errors(self) -> list[str]:
        errors = []
        where = f"aquifer {self.aquifer_id} cell ({self.I + 1}, {self.J + 1}, {self.K + 1})"
        if self.area <= 0.0:
            errors.append(f"Numerical {where}: cross-section area must be positive")
        if self.length <= 0.0:
            errors.append(f"Numerical {where}: length must be positive")
        if self.permeability < 0.0:
            errors.append(f"Numerical {where}: permeability must not be negative")
        if not 0.0 <= self.porosity <= 1.0:
            errors.append(f"Numerical {where}: porosity must be in [0, 1]")
        return errors

    def __repr__(self) -> str:
        return (
            f"NumericalAquiferCell(aquifer={self.aquifer_id}, "
            f"ijk=({self.I}, {self.J}, {self.K}), global_index={self.global_index})"
        )
