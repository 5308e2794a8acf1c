"""Unit tests for analytic aquifer models (components/analytic.py)."""

from __future__ import annotations

import pytest

from pyaquifer.components.analytic import (
    CARTER_TRACY_C2,
    AquiferConstantFlux,
    AquiferCT,
    AquiferKind,
    Aquifetp,
    CarterTracyAquifer,
    ConstantFluxAquifer,
    FetkovichAquifer,
)
from pyaquifer.core.deck import Deck, DeckRecord
from pyaquifer.core.exceptions import ValidationError
from pyaquifer.core.units import UnitSystem


def _fetkovich(**kwargs: object) -> FetkovichAquifer:
    values: dict = {
        "id": 1,
        "datum_depth": 2000.0,
        "initial_volume": 1.0e6,
        "total_compressibility": 1.0e-9,
        "productivity_index": 1.0e-6,
    }
    values.update(kwargs)
    return FetkovichAquifer(**values)


class TestFetkovich:
    """Tests for Fetkovich aquifers."""

    def test_from_record_si(self) -> None:
        record = DeckRecord.from_values(
            "AQUFETP",
            {"AQUIFER_ID": 2, "DAT_DEPTH": 1500.0, "P0": 200.0, "V0": 1.0e8, "C_T": 1.0e-4,
             "PI": 100.0},
        )  # fmt: skip
        aq = FetkovichAquifer.from_record(record)
        assert aq.kind is AquiferKind.FETKOVICH
        assert aq.id == 2
        assert aq.initial_pressure == pytest.approx(200.0e5)
        assert aq.total_compressibility == pytest.approx(1.0e-9)
        assert aq.productivity_index == pytest.approx(100.0 / (86400.0 * 1.0e5))
        assert aq.pvt_table == 1
        assert aq.temperature is None

    def test_initial_pressure_defaulted(self) -> None:
        record = DeckRecord.from_values(
            "AQUFETP",
            {"AQUIFER_ID": 1, "DAT_DEPTH": 1500.0, "V0": 1.0e8, "C_T": 1.0e-4, "PI": 100.0},
        )
        assert FetkovichAquifer.from_record(record).initial_pressure is None

    def test_time_constant(self) -> None:
        aq = _fetkovich()
        assert aq.time_constant == pytest.approx(1.0e-9 * 1.0e6 / 1.0e-6)

    def test_errors(self) -> None:
        assert _fetkovich().errors() == []
        assert len(_fetkovich(productivity_index=0.0).errors()) == 1


class TestCarterTracy:
    """Tests for Carter-Tracy aquifers."""

    def _record(self) -> DeckRecord:
        return DeckRecord.from_values(
            "AQUCT",
            {"AQUIFER_ID": 1, "DAT_DEPTH": 2000.0, "PERM_AQ": 100.0, "PORO_AQ": 0.2,
             "C_T": 1.0e-4, "RAD": 500.0, "THICKNESS_AQ": 10.0, "TABLE_NUM_INFLUENCE_FN": 2},
        )  # fmt: skip

    def test_from_record_without_tables(self) -> None:
        aq = CarterTracyAquifer.from_record(self._record())
        assert aq.kind is AquiferKind.CARTER_TRACY
        assert aq.influence_table == 2
        assert aq.influence_angle == 360.0
        assert aq.dimensionless_time == ()

    def test_from_record_with_tables(self) -> None:
        requested: list[int] = []

        def tables(table_id: int) -> tuple[list[float], list[float]]:
            requested.append(table_id)
            return [0.1, 1.0], [0.2, 0.8]

        aq = CarterTracyAquifer.from_record(self._record(), tables)
        assert requested == [2]
        assert aq.dimensionless_time == (0.1, 1.0)
        assert aq.dimensionless_pressure == (0.2, 0.8)

    def test_influx_constant(self) -> None:
        aq = CarterTracyAquifer(
            id=1,
            datum_depth=0.0,
            permeability=1.0e-13,
            porosity=0.2,
            total_compressibility=1.0e-9,
            inner_radius=100.0,
            thickness=10.0,
            influence_angle=180.0,
        )
        expected = CARTER_TRACY_C2 * 10.0 * 0.5 * 0.2 * 1.0e-9 * 100.0**2
        assert aq.influx_constant == pytest.approx(expected)

    def test_errors(self) -> None:
        aq = CarterTracyAquifer(
            id=1,
            datum_depth=0.0,
            permeability=1.0e-13,
            porosity=1.5,
            total_compressibility=1.0e-9,
            inner_radius=100.0,
            thickness=10.0,
            influence_angle=400.0,
        )
        assert len(aq.errors()) == 2


class TestConstantFlux:
    """Tests for constant-flux aquifers."""

    def test_from_record(self) -> None:
        record = DeckRecord.from_values(
            "AQUFLUX", {"AQUIFER_ID": 4, "FLUX": 0.5, "TEMP": 50.0}, UnitSystem.METRIC
        )
        aq = ConstantFluxAquifer.from_record(record)
        assert aq.kind is AquiferKind.CONSTANT_FLUX
        assert aq.flux == pytest.approx(0.5 / 86400.0)
        assert aq.temperature == pytest.approx(323.15)
        assert aq.datum_pressure is None
        assert aq.salt_concentration == 0.0


class TestCollections:
    """Tests for the per-kind collections."""

    def test_later_record_replaces_earlier(self) -> None:
        fetp = Aquifetp()
        fetp.add(_fetkovich(id=1))
        fetp.add(_fetkovich(id=2))
        fetp.add(_fetkovich(id=1, initial_volume=5.0e6))
        assert len(fetp) == 2
        assert fetp[1].initial_volume == 5.0e6
        assert [aq.id for aq in fetp] == [1, 2]

    def test_has_aquifer(self) -> None:
        fetp = Aquifetp()
        fetp.add(_fetkovich(id=3))
        assert fetp.has_aquifer(3)
        assert not fetp.has_aquifer(1)
        assert fetp.n_items == 1

    def test_validate(self) -> None:
        fetp = Aquifetp()
        fetp.add(_fetkovich(initial_volume=-1.0))
        with pytest.raises(ValidationError) as exc_info:
            fetp.validate()
        assert len(exc_info.value.errors) == 1

    def test_from_deck(self, sample_deck: Deck) -> None:
        assert len(Aquifetp.from_deck(sample_deck)) == 1
        assert len(AquiferCT.from_deck(sample_deck)) == 1
        assert AquiferConstantFlux.from_deck(sample_deck).has_aquifer(3)

    def test_from_empty_deck(self) -> None:
        assert len(Aquifetp.from_deck(Deck())) == 0

    def test_handle_aquflux(self) -> None:
        aquflux = AquiferConstantFlux()
        aquflux.handle_aquflux(DeckRecord.from_values("AQUFLUX", {"AQUIFER_ID": 1, "FLUX": 1.0}))
        aquflux.handle_aquflux(DeckRecord.from_values("AQUFLUX", {"AQUIFER_ID": 1, "FLUX": 2.0}))
        assert len(aquflux) == 1
        assert aquflux[1].flux == pytest.approx(2.0 / 86400.0)
