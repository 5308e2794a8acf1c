"""
Numerical aquifer registry.

This module groups numerical aquifer cells and their reservoir
connections per aquifer id:

- :class:`SingleNumericalAquifer`: cells and connections of one aquifer
- :class:`NumericalAquifers`: id -> SingleNumericalAquifer registry
- :class:`NumericalAquifersBuilder`: two-phase construction (add cells,
  add connections, :meth:`~NumericalAquifersBuilder.finalize`)
- :func:`build_numerical_aquifers`: build the registry from a deck

A grid cell can be an aquifer cell of at most one aquifer. Every
aquifer must have connections declared with ``AQUCON``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableSequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar

from pyaquifer.components.numerical_cell import NumericalAquiferCell
from pyaquifer.components.numerical_connection import (
    NumericalAquiferConnection,
    NumericalAquiferConnections,
)
from pyaquifer.core.base_component import BaseComponent
from pyaquifer.core.exceptions import AquiferConfigError
from pyaquifer.core.grid import FaceDir
from pyaquifer.core.results import (
    ConfigIssue,
    DuplicateCellAssignment,
    InvalidAquiferCell,
    Result,
    UnknownAquiferId,
)

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from pyaquifer.core.deck import Deck, DeckRecord
    from pyaquifer.core.field_props import FieldProperties
    from pyaquifer.core.grid import CartesianGrid
    from pyaquifer.core.nnc import NNC

logger = logging.getLogger(__name__)

TransSets = tuple[set[int], set[int], set[int]]


@dataclass(frozen=True)
class SingleNumericalAquifer:
    """
    Cells and connections of one numerical aquifer.

    Instances are immutable; :class:`NumericalAquifersBuilder` collects
    cells and connections and creates them in
    :meth:`~NumericalAquifersBuilder.finalize`.

    Attributes:
        id: Aquifer ID
        cells: Aquifer cells in input order
        connections: Reservoir connections in input order
    """

    id: int
    cells: tuple[NumericalAquiferCell, ...] = ()
    connections: tuple[NumericalAquiferConnection, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "cells", tuple(self.cells))
        object.__setattr__(self, "connections", tuple(self.connections))

    @property
    def n_cells(self) -> int:
        return len(self.cells)

    @property
    def n_connections(self) -> int:
        return len(self.connections)

    @property
    def total_pore_volume(self) -> float:
        return sum(cell.pore_volume for cell in self.cells)

    def has_cell(self, i: int, j: int, k: int) -> bool:
        return any(cell.same_coordinates(i, j, k) for cell in self.cells)

    def update_cell_props(
        self,
        grid: CartesianGrid,
        pore_volume: MutableSequence[float],
        satnum: MutableSequence[int],
        pvtnum: MutableSequence[int],
        cell_depth: MutableSequence[float],
    ) -> None:
        """Overwrite per-active-cell arrays with this aquifer's cell values."""
        for cell in self.cells:
            active_index = grid.active_index(cell.global_index)
            pore_volume[active_index] = cell.pore_volume
            satnum[active_index] = cell.sattable
            pvtnum[active_index] = cell.pvttable
            cell_depth[active_index] = cell.depth

    def trans_to_remove(
        self, grid: CartesianGrid, actnum: NDArray[np.bool_] | None = None
    ) -> TransSets:
        """
        Return the reservoir transmissibilities replaced by this aquifer.

        For each cell and face, if the neighbour across the face is an
        active reservoir cell, the transmissibility between them is
        marked. Transmissibilities are owned by the lower-indexed cell on
        an axis, so a positive face marks the cell itself and a negative
        face marks the neighbour.

        Returns:
            (X, Y, Z) sets of global indices
        """
        trans: TransSets = (set(), set(), set())
        for cell in self.cells:
            i, j, k = cell.ijk
            for face_dir in FaceDir:
                if not grid.has_active_reservoir_neighbor(i, j, k, face_dir, actnum):
                    continue
                di, dj, dk = face_dir.offset
                if di + dj + dk > 0:
                    trans[face_dir.axis].add(cell.global_index)
                else:
                    trans[face_dir.axis].add(grid.global_index(i + di, j + dj, k + dk))
        return trans

    def append_nnc(self, nnc: NNC) -> None:
        """Append aquifer non-neighbour connections; none are needed yet."""
        return None

    def errors(self) -> list[str]:
        return [msg for cell in self.cells for msg in cell.errors()]

    def __repr__(self) -> str:
        return (
            f"SingleNumericalAquifer(id={self.id}, n_cells={self.n_cells}, "
            f"n_connections={self.n_connections})"
        )


class NumericalAquifers(BaseComponent):
    """
    Registry of numerical aquifers keyed by aquifer id.

    Instances are read-only once built; use :class:`NumericalAquifersBuilder`
    or :meth:`from_deck` to create one.

    Example
    -------
    >>> from pyaquifer.components.numerical import NumericalAquifers
    >>> NumericalAquifers().empty
    True
    """

    component_name: ClassVar[str] = "numerical aquifer"

    def __init__(self, aquifers: Mapping[int, SingleNumericalAquifer] | None = None) -> None:
        self._aquifers: dict[int, SingleNumericalAquifer] = dict(aquifers or {})

    @classmethod
    def from_deck(
        cls,
        deck: Deck,
        grid: CartesianGrid,
        field_props: FieldProperties,
        actnum: NDArray[np.bool_] | None = None,
    ) -> NumericalAquifers:
        """
        Build the registry from AQUNUM and AQUCON records.

        Raises:
            AquiferConfigError: On duplicate cells or connections, an
                aquifer cell outside the grid or inactive, or an aquifer
                without connections
        """
        return build_numerical_aquifers(deck, grid, field_props, actnum).unwrap()

    @property
    def aquifers(self) -> Mapping[int, SingleNumericalAquifer]:
        return MappingProxyType(self._aquifers)

    @property
    def n_items(self) -> int:
        return len(self._aquifers)

    @property
    def n_cells(self) -> int:
        return sum(aq.n_cells for aq in self._aquifers.values())

    @property
    def n_connections(self) -> int:
        return sum(aq.n_connections for aq in self._aquifers.values())

    def has_aquifer(self, aquifer_id: int) -> bool:
        return aquifer_id in self._aquifers

    def get_aquifer(self, aquifer_id: int) -> SingleNumericalAquifer:
        """
        Return one aquifer.

        Raises:
            AquiferConfigError: If the id is unknown
        """
        aquifer = self._aquifers.get(aquifer_id)
        if aquifer is None:
            raise AquiferConfigError(UnknownAquiferId(aquifer_id=aquifer_id, what="cells"))
        return aquifer

    def all_cells(self) -> Iterator[NumericalAquiferCell]:
        for aquifer in self._aquifers.values():
            yield from aquifer.cells

    def update_cell_props(
        self,
        grid: CartesianGrid,
        pore_volume: MutableSequence[float],
        satnum: MutableSequence[int],
        pvtnum: MutableSequence[int],
        cell_depth: MutableSequence[float],
    ) -> None:
        """
        Overwrite reservoir cell properties with aquifer cell values.

        Args:
            grid: Grid used to map global to active indices
            pore_volume: Pore volume per active cell (modified in place)
            satnum: SATNUM per active cell (modified in place)
            pvtnum: PVTNUM per active cell (modified in place)
            cell_depth: Depth per active cell (modified in place)
        """
        for aquifer in self._aquifers.values():
            aquifer.update_cell_props(grid, pore_volume, satnum, pvtnum, cell_depth)

    def trans_to_remove(
        self, grid: CartesianGrid, actnum: NDArray[np.bool_] | None = None
    ) -> TransSets:
        """Union of :meth:`SingleNumericalAquifer.trans_to_remove` over all aquifers."""
        trans: TransSets = (set(), set(), set())
        for aquifer in self._aquifers.values():
            for axis, indices in enumerate(aquifer.trans_to_remove(grid, actnum)):
                trans[axis].update(indices)
        return trans

    def append_nnc(self, nnc: NNC) -> None:
        for aquifer in self._aquifers.values():
            aquifer.append_nnc(nnc)

    def errors(self) -> list[str]:
        errors = [msg for aq in self._aquifers.values() for msg in aq.errors()]
        for aquifer in self._aquifers.values():
            if not aquifer.connections:
                errors.append(f"Numerical aquifer {aquifer.id} has no connections")
        return errors

    def __contains__(self, aquifer_id: object) -> bool:
        return aquifer_id in self._aquifers

    def __iter__(self) -> Iterator[SingleNumericalAquifer]:
        return iter(self._aquifers.values())

    def __len__(self) -> int:
        return len(self._aquifers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumericalAquifers):
            return NotImplemented
        return self._aquifers == other._aquifers

    def __repr__(self) -> str:
        return (
            f"NumericalAquifers(n_aquifers={len(self)}, n_cells={self.n_cells}, "
            f"n_connections={self.n_connections})"
        )


class NumericalAquifersBuilder:
    """
    Two-phase builder for :class:`NumericalAquifers`.

    Cells are added first; connections are then bound to the aquifers
    that own cells; :meth:`finalize` freezes the aquifers and hands out
    the registry. Methods return an issue instead of raising, and a
    builder that reported an issue should be discarded.
    """

    def __init__(self) -> None:
        self._cells: dict[int, list[NumericalAquiferCell]] = {}
        self._connections: dict[int, list[NumericalAquiferConnection]] = {}
        self._owner: dict[int, NumericalAquiferCell] = {}

    def add_cell(self, cell: NumericalAquiferCell) -> DuplicateCellAssignment | None:
        previous = self._owner.get(cell.global_index)
        if previous is not None:
            return DuplicateCellAssignment(
                aquifer_id=cell.aquifer_id,
                ijk=(cell.I + 1, cell.J + 1, cell.K + 1),
                previous_aquifer_id=previous.aquifer_id,
            )
        self._owner[cell.global_index] = cell
        self._cells.setdefault(cell.aquifer_id, []).append(cell)
        self._connections.setdefault(cell.aquifer_id, [])
        return None

    def add_connection(self, con: NumericalAquiferConnection) -> bool:
        """
        Bind a connection unless it sits on one of its aquifer's own cells.

        Returns:
            True if the connection was added
        """
        owner = self._owner.get(con.global_index)
        if owner is not None and owner.aquifer_id == con.aquifer_id:
            logger.warning(
                "Cell (%d, %d, %d) is a cell of numerical aquifer %d; "
                "connection to it is ignored",
                con.I + 1,
                con.J + 1,
                con.K + 1,
                con.aquifer_id,
            )
            return False
        self._connections.setdefault(con.aquifer_id, []).append(con)
        return True

    def add_connections(self, connections: NumericalAquiferConnections) -> ConfigIssue | None:
        """Bind connections to every aquifer that has cells."""
        for aquifer_id in self._cells:
            result = connections.get_connections(aquifer_id)
            if not result.ok:
                return result.issue
            for con in result.unwrap().values():
                self.add_connection(con)
        return None

    def finalize(self) -> NumericalAquifers:
        aquifers = NumericalAquifers(
            {
                aquifer_id: SingleNumericalAquifer(
                    aquifer_id, tuple(cells), tuple(self._connections[aquifer_id])
                )
                for aquifer_id, cells in self._cells.items()
            }
        )
        self._cells = {}
        self._connections = {}
        self._owner = {}
        return aquifers


def _check_cell(record: DeckRecord, grid: CartesianGrid) -> InvalidAquiferCell | None:
    """Return an issue if an AQUNUM cell is outside the grid or inactive."""
    ijk = (record.get("I"), record.get("J"), record.get("K"))
    i, j, k = (n - 1 for n in ijk)
    aquifer_id = record.get("AQUIFER_ID")
    if not grid.in_bounds(i, j, k):
        return InvalidAquiferCell(aquifer_id, ijk, f"is outside grid of size {grid.dims}")
    if not grid.cell_active(i, j, k):
        return InvalidAquiferCell(aquifer_id, ijk, "is not active")
    return None


def build_numerical_aquifers(
    deck: Deck,
    grid: CartesianGrid,
    field_props: FieldProperties,
    actnum: NDArray[np.bool_] | None = None,
) -> Result[NumericalAquifers]:
    """
    Build the numerical aquifer registry from a deck.

    Every record of every AQUNUM occurrence becomes a cell; AQUCON
    records are then expanded and bound to the owning aquifers.

    Args:
        deck: Input deck
        grid: Grid for index, depth and adjacency lookups
        field_props: Reservoir properties for defaulted cell items
        actnum: Active map for connection generation (default: the grid's)

    Returns:
        The registry, or the first configuration issue found
    """
    if not deck.has_keyword("AQUNUM"):
        return Result.success(NumericalAquifers())

    builder = NumericalAquifersBuilder()
    for record in deck.records("AQUNUM"):
        issue: ConfigIssue | None = _check_cell(record, grid)
        if issue is None:
            issue = builder.add_cell(NumericalAquiferCell.from_record(record, grid, field_props))
        if issue is not None:
            return Result.failure(issue)

    cons_result = NumericalAquiferConnections.from_deck(deck, grid, actnum)
    if not cons_result.ok:
        return Result.failure(cons_result.issue)  # type: ignore[arg-type]

    issue = builder.add_connections(cons_result.unwrap())
    if issue is not None:
        return Result.failure(issue)

    aquifers = builder.finalize()
    logger.info(
        "Built %d numerical aquifer(s) with %d cell(s) and %d connection(s)",
        len(aquifers),
        aquifers.n_cells,
        aquifers.n_connections,
    )
    return Result.success(aquifers)
