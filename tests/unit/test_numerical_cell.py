"""Unit tests for numerical aquifer cells (components/numerical_cell.py)."""

from __future__ import annotations

import numpy as np
import pytest

from pyaquifer.components.numerical_cell import NumericalAquiferCell
from pyaquifer.core.deck import DeckRecord
from pyaquifer.core.exceptions import GridError
from pyaquifer.core.field_props import FieldProperties
from pyaquifer.core.grid import CartesianGrid


class TestFromRecord:
    """Tests for building cells from AQUNUM records."""

    def test_defaults_from_reservoir(
        self, small_grid: CartesianGrid, small_field_props: FieldProperties, aqunum_row: dict
    ) -> None:
        record = DeckRecord.from_values("AQUNUM", {**aqunum_row, "I": 2, "J": 2})
        cell = NumericalAquiferCell.from_record(record, small_grid, small_field_props)
        # cell (1, 1, 0) has global and active index 4
        assert (cell.I, cell.J, cell.K) == (1, 1, 0)
        assert cell.global_index == 4
        assert cell.porosity == pytest.approx(small_field_props.get_double("PORO")[4])
        assert cell.pvttable == 2
        assert cell.sattable == 5
        assert cell.depth == pytest.approx(small_grid.cell_depth(4))
        assert cell.init_pressure is None

    def test_explicit_values_win(
        self, small_grid: CartesianGrid, small_field_props: FieldProperties, aqunum_row: dict
    ) -> None:
        record = DeckRecord.from_values(
            "AQUNUM",
            {**aqunum_row, "PORO": 0.35, "DEPTH": 1234.0, "INITIAL_PRESSURE": 100.0,
             "PVT_TABLE_NUM": 7, "SAT_TABLE_NUM": 8},
        )  # fmt: skip
        cell = NumericalAquiferCell.from_record(record, small_grid, small_field_props)
        assert cell.porosity == 0.35
        assert cell.depth == 1234.0
        assert cell.init_pressure == pytest.approx(100.0e5)
        assert cell.pvttable == 7
        assert cell.sattable == 8

    def test_si_conversion(
        self, small_grid: CartesianGrid, small_field_props: FieldProperties, aqunum_row: dict
    ) -> None:
        record = DeckRecord.from_values("AQUNUM", aqunum_row)
        cell = NumericalAquiferCell.from_record(record, small_grid, small_field_props)
        assert cell.area == 100.0
        assert cell.length == 50.0
        assert cell.permeability == pytest.approx(200.0 * 9.869233e-16)

    def test_outside_grid(
        self, small_grid: CartesianGrid, small_field_props: FieldProperties, aqunum_row: dict
    ) -> None:
        record = DeckRecord.from_values("AQUNUM", {**aqunum_row, "I": 4})
        with pytest.raises(GridError):
            NumericalAquiferCell.from_record(record, small_grid, small_field_props)

    def test_inactive_cell(self, aqunum_row: dict) -> None:
        actnum = np.ones((2, 1, 1), dtype=bool)
        actnum[0, 0, 0] = False
        grid = CartesianGrid(2, 1, 1, actnum=actnum)
        props = FieldProperties(grid, double_props={"PORO": [0.2]})
        record = DeckRecord.from_values("AQUNUM", aqunum_row)
        with pytest.raises(GridError):
            NumericalAquiferCell.from_record(record, grid, props)


class TestDerivedQuantities:
    """Tests for volumes and transmissibility."""

    def _cell(self, **kwargs: object) -> NumericalAquiferCell:
        values: dict = {
            "aquifer_id": 1,
            "I": 0,
            "J": 0,
            "K": 0,
            "global_index": 0,
            "area": 10.0,
            "length": 4.0,
            "permeability": 2.0,
            "porosity": 0.25,
            "depth": 100.0,
            "pvttable": 1,
            "sattable": 1,
        }
        values.update(kwargs)
        return NumericalAquiferCell(**values)

    def test_volumes(self) -> None:
        cell = self._cell()
        assert cell.cell_volume == 40.0
        assert cell.pore_volume == 10.0

    def test_transmissibility(self) -> None:
        assert self._cell().transmissibility == pytest.approx(2.0 * 2.0 * 10.0 / 4.0)

    def test_transmissibility_zero_length(self) -> None:
        assert self._cell(length=0.0).transmissibility == 0.0

    def test_same_coordinates(self) -> None:
        cell = self._cell(I=1, J=2, K=3)
        assert cell.same_coordinates(1, 2, 3)
        assert not cell.same_coordinates(1, 2, 0)
        assert cell.ijk == (1, 2, 3)

    def test_equality(self) -> None:
        assert self._cell() == self._cell()
        assert self._cell() != self._cell(porosity=0.3)

    def test_errors(self) -> None:
        assert self._cell().errors() == []
        assert len(self._cell(length=0.0, porosity=1.2).errors()) == 2
