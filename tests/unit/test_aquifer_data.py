"""Unit tests for aquifer output records (components/aquifer_data.py)."""

from __future__ import annotations

import pytest

from pyaquifer.components.analytic import FetkovichAquifer
from pyaquifer.components.aquifer_data import AquiferData, AquiferType, FetkovichData


class TestAquiferData:
    """Tests for summary vector lookup."""

    def _data(self) -> AquiferData:
        return AquiferData(
            aquifer_id=1,
            type=AquiferType.NUMERICAL,
            pressure=2.0e7,
            flux_rate=0.5,
            volume=1.0e4,
        )

    @pytest.mark.parametrize(
        "key, expected",
        [
            ("AAQR", 0.5),
            ("ANQR", 0.5),
            ("AAQT", 1.0e4),
            ("ANQT", 1.0e4),
            ("AAQP", 2.0e7),
            ("ANQP", 2.0e7),
        ],
    )
    def test_get(self, key: str, expected: float) -> None:
        assert self._data().get(key) == expected

    def test_unknown_key(self) -> None:
        assert self._data().get("FOPR") == 0.0

    def test_defaults(self) -> None:
        data = AquiferData()
        assert data.aquifer_id == 0
        assert data.fetkovich is None


class TestFetkovichData:
    """Tests for the Fetkovich quantities."""

    def test_from_aquifer(self) -> None:
        aq = FetkovichAquifer(
            id=1,
            datum_depth=0.0,
            initial_volume=1.0e6,
            total_compressibility=2.0e-9,
            productivity_index=4.0e-6,
        )
        data = FetkovichData.from_aquifer(aq)
        assert data.init_volume == 1.0e6
        assert data.prod_index == 4.0e-6
        assert data.time_constant == pytest.approx(aq.time_constant)
