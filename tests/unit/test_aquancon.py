"""Unit tests for analytic aquifer connections (components/aquancon.py)."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from pyaquifer.components.aquancon import Aquancon, AquancCell
from pyaquifer.core.deck import Deck
from pyaquifer.core.exceptions import ValidationError
from pyaquifer.core.grid import CartesianGrid, FaceDir
from pyaquifer.core.results import AnalyticConnectionConflict


def _row(**kwargs: object) -> dict:
    row: dict = {
        "AQUIFER_ID": 1,
        "I1": 1,
        "I2": 3,
        "J1": 1,
        "J2": 1,
        "K1": 1,
        "K2": 1,
        "FACE": "J-",
    }
    row.update(kwargs)
    return row


def _deck(*rows: dict) -> Deck:
    deck = Deck()
    deck.add_keyword("AQUANCON", list(rows))
    return deck


class TestFromDeck:
    """Tests for expanding AQUANCON records."""

    def test_sample(self, sample_deck: Deck, sample_grid: CartesianGrid) -> None:
        aquancon = Aquancon.from_deck(sample_deck, sample_grid).unwrap()
        assert aquancon.active
        assert aquancon.n_items == 6
        cells = aquancon[1]
        assert [c.global_index for c in cells] == [1, 2, 3, 16, 17, 18]
        assert all(c.face_dir is FaceDir.YMINUS for c in cells)
        assert all(c.influx_coeff == pytest.approx(1000.0) for c in cells)

    def test_default_coefficient_is_face_area(self) -> None:
        grid = CartesianGrid(3, 3, 1, dx=2.0, dy=3.0, dz=5.0)
        cells = Aquancon.from_deck(_deck(_row()), grid).unwrap()[1]
        assert cells[0].influx_coeff == pytest.approx(2.0 * 5.0)

    def test_explicit_coefficient_and_multiplier(self, small_grid: CartesianGrid) -> None:
        deck = _deck(_row(INFLUX_COEFF=40.0, INFLUX_MULT=0.5))
        cells = Aquancon.from_deck(deck, small_grid).unwrap()[1]
        assert all(c.influx_coeff == pytest.approx(20.0) for c in cells)

    def test_internal_face_skipped(self, small_grid: CartesianGrid) -> None:
        result = Aquancon.from_deck(_deck(_row(FACE="J+")), small_grid).unwrap()
        assert not result.active

    def test_internal_face_allowed(self, small_grid: CartesianGrid) -> None:
        deck = _deck(_row(FACE="J+", CONNECT_ADJOINING_ACTIVE_CELL="YES"))
        assert Aquancon.from_deck(deck, small_grid).unwrap().n_items == 3

    def test_inactive_cells_skipped(self) -> None:
        actnum = np.ones((3, 3, 1), dtype=bool)
        actnum[1, 0, 0] = False
        grid = CartesianGrid(3, 3, 1, actnum=actnum)
        cells = Aquancon.from_deck(_deck(_row()), grid).unwrap()[1]
        assert [c.global_index for c in cells] == [0, 2]

    def test_conflict_between_aquifers(self, small_grid: CartesianGrid) -> None:
        deck = _deck(_row(), _row(AQUIFER_ID=2, I1=3, I2=3))
        result = Aquancon.from_deck(deck, small_grid)
        assert isinstance(result.issue, AnalyticConnectionConflict)
        assert result.issue.aquifer_id == 1
        assert result.issue.other_aquifer_id == 2
        assert result.issue.ijk == (3, 1, 1)

    def test_repeat_same_aquifer_keeps_last(
        self, small_grid: CartesianGrid, caplog: pytest.LogCaptureFixture
    ) -> None:
        deck = _deck(_row(), _row(I1=2, I2=2, INFLUX_COEFF=7.0))
        with caplog.at_level(logging.WARNING, logger="pyaquifer.components.aquancon"):
            cells = Aquancon.from_deck(deck, small_grid).unwrap()[1]
        assert [c.global_index for c in cells] == [0, 2, 1]
        assert cells[-1].influx_coeff == 7.0
        assert "more than once" in caplog.text

    def test_several_aquifers(self, small_grid: CartesianGrid) -> None:
        deck = _deck(_row(), _row(AQUIFER_ID=2, I1=1, I2=1, J1=1, J2=3, FACE="I-"))
        result = Aquancon.from_deck(deck, small_grid)
        # cell (1, 1, 1) is claimed by both aquifers
        assert not result.ok

    def test_empty_deck(self, small_grid: CartesianGrid) -> None:
        aquancon = Aquancon.from_deck(Deck(), small_grid).unwrap()
        assert not aquancon.active
        assert aquancon == Aquancon()


class TestAquancon:
    """Tests for queries and validation."""

    def test_has_aquifer(self) -> None:
        aquancon = Aquancon({4: [AquancCell(4, 0, 1.0, FaceDir.XMINUS)]})
        assert aquancon.has_aquifer(4)
        assert not aquancon.has_aquifer(1)
        assert aquancon.data[4][0].global_index == 0

    def test_validate_negative_coefficient(self) -> None:
        aquancon = Aquancon({1: [AquancCell(1, 0, -1.0, FaceDir.XMINUS)]})
        with pytest.raises(ValidationError):
            aquancon.validate()
