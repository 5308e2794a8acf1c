"""Unit tests for deck records (core/deck.py)."""

from __future__ import annotations

import pytest

from pyaquifer.core.deck import KEYWORDS, Deck, DeckRecord, to_bool
from pyaquifer.core.exceptions import DeckError
from pyaquifer.core.units import UnitSystem


class TestToBool:
    """Tests for YES/NO parsing."""

    @pytest.mark.parametrize("text", ["YES", "yes", " Y ", "TRUE", "1"])
    def test_true(self, text: str) -> None:
        assert to_bool(text)

    @pytest.mark.parametrize("text", ["NO", "n", "False", "0"])
    def test_false(self, text: str) -> None:
        assert not to_bool(text)

    def test_invalid(self) -> None:
        with pytest.raises(DeckError):
            to_bool("MAYBE")


class TestDeckRecord:
    """Tests for DeckRecord construction and access."""

    def test_defaults_applied(self, aqucon_row: dict) -> None:
        record = DeckRecord.from_values("AQUCON", aqucon_row)
        assert record.default_applied("TRANS_MULT")
        assert record.get("TRANS_MULT") == 1.0
        assert record.get_trimmed_string("ALLOW_INTERNAL_CELLS") == "NO"
        assert not record.default_applied("CONNECT_FACE")

    def test_item_without_default(self, aqunum_row: dict) -> None:
        record = DeckRecord.from_values("AQUNUM", aqunum_row)
        assert record.default_applied("PORO")
        assert not record.has_value("PORO")
        with pytest.raises(DeckError):
            record.get("PORO")

    def test_none_counts_as_defaulted(self, aqunum_row: dict) -> None:
        record = DeckRecord.from_values("AQUNUM", {**aqunum_row, "DEPTH": None})
        assert record.default_applied("DEPTH")

    def test_values_converted_to_item_type(self, aqunum_row: dict) -> None:
        record = DeckRecord.from_values("AQUNUM", {**aqunum_row, "LENGTH": 5})
        assert isinstance(record.get("LENGTH"), float)

    def test_missing_required_item(self) -> None:
        with pytest.raises(DeckError, match="must be given"):
            DeckRecord.from_values("AQUNUM", {"AQUIFER_ID": 1})

    def test_unknown_item(self, aqucon_row: dict) -> None:
        with pytest.raises(DeckError):
            DeckRecord.from_values("AQUCON", {**aqucon_row, "BOGUS": 1})

    def test_unknown_keyword(self) -> None:
        with pytest.raises(DeckError) as exc_info:
            DeckRecord.from_values("AQUXYZ", {})
        assert exc_info.value.keyword == "AQUXYZ"

    def test_positional_access(self, aqucon_row: dict) -> None:
        record = DeckRecord.from_values("AQUCON", aqucon_row)
        assert len(record) == len(KEYWORDS["AQUCON"].items)
        assert record[0].name == "ID"
        assert record[0].value == 1

    def test_get_si_field_units(self, aqunum_row: dict) -> None:
        record = DeckRecord.from_values("AQUNUM", aqunum_row, UnitSystem.FIELD)
        assert record.get("LENGTH") == 50.0
        assert record.get_si("LENGTH") == pytest.approx(50.0 * 0.3048)


class TestDeck:
    """Tests for Deck keyword occurrences."""

    def test_add_and_query(self, aqucon_row: dict) -> None:
        deck = Deck()
        assert not deck.has_keyword("AQUCON")
        deck.add_keyword("AQUCON", [aqucon_row])
        assert deck.has_keyword("AQUCON")
        assert len(deck) == 1

    def test_records_across_occurrences(self, aqucon_row: dict) -> None:
        deck = Deck()
        deck.add_keyword("AQUCON", [aqucon_row])
        deck.add_keyword("AQUCON", [{**aqucon_row, "ID": 2}, {**aqucon_row, "ID": 3}])
        assert len(deck.get_keyword_list("AQUCON")) == 2
        assert [r.get("ID") for r in deck.records("AQUCON")] == [1, 2, 3]

    def test_records_carry_unit_system(self, aqunum_row: dict) -> None:
        deck = Deck(unit_system=UnitSystem.FIELD)
        keyword = deck.add_keyword("AQUNUM", [aqunum_row])
        assert keyword[0].unit_system is UnitSystem.FIELD

    def test_records_of_missing_keyword(self) -> None:
        assert list(Deck().records("AQUNUM")) == []
