"""Unit tests for the sample case (sample_models.py)."""

from __future__ import annotations

import pytest

from pyaquifer.core.units import UnitSystem
from pyaquifer.sample_models import (
    create_sample_aquifer_config,
    create_sample_deck,
    create_sample_field_props,
    create_sample_grid,
)


class TestSampleModels:
    """Tests for the sample generators."""

    def test_grid(self) -> None:
        grid = create_sample_grid(nx=2, ny=2, nz=1)
        assert grid.dims == (2, 2, 1)

    def test_field_props(self) -> None:
        grid = create_sample_grid()
        props = create_sample_field_props(grid, porosity=0.1)
        assert props.get_double("PORO")[0] == pytest.approx(0.1)

    def test_deck_keywords(self) -> None:
        deck = create_sample_deck()
        for name in ("AQUNUM", "AQUCON", "AQUFETP", "AQUCT", "AQUFLUX", "AQUANCON"):
            assert deck.has_keyword(name)

    def test_field_deck(self) -> None:
        deck = create_sample_deck(UnitSystem.FIELD)
        record = next(deck.records("AQUFETP"))
        assert record.get_si("DAT_DEPTH") == pytest.approx(2005.0 * 0.3048)

    def test_config(self) -> None:
        config = create_sample_aquifer_config()
        assert config.active()
        assert config.numerical.n_cells == 3
        assert config.connections.n_items == 6
