"""
Resolved deck records for aquifer keywords.

The deck tokenizer and keyword grammar live outside this package. What
arrives here are resolved records: ordered items with a value, a flag
telling whether the value was given explicitly or defaulted, and a
physical dimension used for unit conversion.

Supported keywords:

- ``AQUNUM``   numerical aquifer cells
- ``AQUCON``   numerical aquifer connections
- ``AQUFETP``  Fetkovich analytic aquifers
- ``AQUCT``    Carter-Tracy analytic aquifers
- ``AQUFLUX``  constant-flux analytic aquifers
- ``AQUANCON`` analytic aquifer connections

Example
-------
>>> from pyaquifer.core.deck import Deck
>>> deck = Deck()
>>> deck.add_keyword("AQUFLUX", [{"AQUIFER_ID": 1, "FLUX": 0.5}])
>>> deck.get_keyword_list("AQUFLUX")[0][0].get("FLUX")
0.5
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pyaquifer.core.exceptions import DeckError
from pyaquifer.core.units import UnitSystem

TRUE_STRINGS = ("YES", "Y", "TRUE", "T", "1")
FALSE_STRINGS = ("NO", "N", "FALSE", "F", "0")


@dataclass(frozen=True)
class ItemSchema:
    """
    Description of one item of a keyword record.

    Attributes:
        name: Item name
        type: Python type of the value (int, float or str)
        default: Default value applied when the item is omitted (None = no default)
        dimension: Physical dimension for SI conversion ('1' = dimensionless)
        required: True if the item must be given explicitly
    """

    name: str
    type: type
    default: Any = None
    dimension: str = "1"
    required: bool = False


@dataclass(frozen=True)
class KeywordSchema:
    """Ordered item schemas of a keyword."""

    name: str
    items: tuple[ItemSchema, ...]

    def item(self, name: str) -> ItemSchema:
        for item in self.items:
            if item.name == name:
                return item
        raise DeckError(f"Keyword {self.name} has no item '{name}'", keyword=self.name)


def _ids(*names: str) -> tuple[ItemSchema, ...]:
    return tuple(ItemSchema(n, int, required=True) for n in names)


KEYWORDS: dict[str, KeywordSchema] = {
    "AQUNUM": KeywordSchema(
        "AQUNUM",
        _ids("AQUIFER_ID", "I", "J", "K")
        + (
            ItemSchema("CROSS_SECTION", float, dimension="Area", required=True),
            ItemSchema("LENGTH", float, dimension="Length", required=True),
            ItemSchema("PORO", float),
            ItemSchema("PERM", float, dimension="Permeability", required=True),
            ItemSchema("DEPTH", float, dimension="Length"),
            ItemSchema("INITIAL_PRESSURE", float, dimension="Pressure"),
            ItemSchema("PVT_TABLE_NUM", int),
            ItemSchema("SAT_TABLE_NUM", int),
        ),
    ),
    "AQUCON": KeywordSchema(
        "AQUCON",
        _ids("ID", "I1", "I2", "J1", "J2", "K1", "K2")
        + (
            ItemSchema("CONNECT_FACE", str, required=True),
            ItemSchema("TRANS_MULT", float, 1.0),
            ItemSchema("TRANS_OPTION", int, 0),
            ItemSchema("ALLOW_INTERNAL_CELLS", str, "NO"),
            ItemSchema("VEFRAC", float, 1.0),
            ItemSchema("VEFRACP", float, 1.0),
        ),
    ),
    "AQUFETP": KeywordSchema(
        "AQUFETP",
        _ids("AQUIFER_ID")
        + (
            ItemSchema("DAT_DEPTH", float, dimension="Length", required=True),
            ItemSchema("P0", float, dimension="Pressure"),
            ItemSchema("V0", float, dimension="Volume", required=True),
            ItemSchema("C_T", float, dimension="Compressibility", required=True),
            ItemSchema("PI", float, dimension="ProductivityIndex", required=True),
            ItemSchema("TABLE_NUM_WATER_PRESS", int, 1),
            ItemSchema("SALINITY", float, 0.0, dimension="Salinity"),
            ItemSchema("TEMP", float, dimension="Temperature"),
        ),
    ),
    "AQUCT": KeywordSchema(
        "AQUCT",
        _ids("AQUIFER_ID")
        + (
            ItemSchema("DAT_DEPTH", float, dimension="Length", required=True),
            ItemSchema("P_INI", float, dimension="Pressure"),
            ItemSchema("PERM_AQ", float, dimension="Permeability", required=True),
            ItemSchema("PORO_AQ", float, 1.0),
            ItemSchema("C_T", float, dimension="Compressibility", required=True),
            ItemSchema("RAD", float, dimension="Length", required=True),
            ItemSchema("THICKNESS_AQ", float, dimension="Length", required=True),
            ItemSchema("INFLUENCE_ANGLE", float, 360.0),
            ItemSchema("TABLE_NUM_WATER_PRESS", int, 1),
            ItemSchema("TABLE_NUM_INFLUENCE_FN", int, 1),
        ),
    ),
    "AQUFLUX": KeywordSchema(
        "AQUFLUX",
        _ids("AQUIFER_ID")
        + (
            ItemSchema("FLUX", float, dimension="FluxPerArea", required=True),
            ItemSchema("SC_0", float, 0.0, dimension="Salinity"),
            ItemSchema("TEMP", float, dimension="Temperature"),
            ItemSchema("PRESSURE", float, dimension="Pressure"),
        ),
    ),
    "AQUANCON": KeywordSchema(
        "AQUANCON",
        _ids("AQUIFER_ID", "I1", "I2", "J1", "J2", "K1", "K2")
        + (
            ItemSchema("FACE", str, required=True),
            ItemSchema("INFLUX_COEFF", float, dimension="Area"),
            ItemSchema("INFLUX_MULT", float, 1.0),
            ItemSchema("CONNECT_ADJOINING_ACTIVE_CELL", str, "NO"),
        ),
    ),
}


def to_bool(value: str) -> bool:
    """Interpret a YES/NO style deck string."""
    s = value.strip().upper()
    if s in TRUE_STRINGS:
        return True
    if s in FALSE_STRINGS:
        return False
    raise DeckError(f"Cannot interpret '{value}' as a boolean")


@dataclass(frozen=True)
class DeckItem:
    """
    One resolved item of a deck record.

    Attributes:
        name: Item name
        value: Item value (explicit or default), None if absent without default
        default_applied: True if the value was not given explicitly
        dimension: Physical dimension of the value
    """

    name: str
    value: Any
    default_applied: bool
    dimension: str = "1"

    @property
    def has_value(self) -> bool:
        return self.value is not None


@dataclass
class DeckRecord:
    """
    An ordered collection of items for one record of a keyword.

    Items are accessed by name (:meth:`get`, :meth:`get_si`) or by
    position (``record[0]``).
    """

    keyword: str
    items: list[DeckItem]
    unit_system: UnitSystem = UnitSystem.METRIC

    @classmethod
    def from_values(
        cls,
        keyword: str,
        values: Mapping[str, Any],
        unit_system: UnitSystem = UnitSystem.METRIC,
    ) -> DeckRecord:
        """
        Build a record from explicitly given item values.

        Items missing from ``values`` (or given as None) are defaulted
        according to the keyword schema.

        Raises:
            DeckError: Unknown keyword or item, or a required item is missing
        """
        try:
            schema = KEYWORDS[keyword]
        except KeyError:
            raise DeckError(f"Unsupported keyword '{keyword}'", keyword=keyword) from None

        unknown = set(values) - {item.name for item in schema.items}
        if unknown:
            raise DeckError(
                f"Keyword {keyword} has no item(s) {sorted(unknown)}", keyword=keyword
            )

        items: list[DeckItem] = []
        for item in schema.items:
            raw = values.get(item.name)
            if raw is None:
                if item.required:
                    raise DeckError(
                        f"Keyword {keyword}: item {item.name} must be given", keyword=keyword
                    )
                items.append(DeckItem(item.name, item.default, True, item.dimension))
            else:
                items.append(DeckItem(item.name, item.type(raw), False, item.dimension))
        return cls(keyword=keyword, items=items, unit_system=unit_system)

    def _item(self, name: str) -> DeckItem:
        for item in self.items:
            if item.name == name:
                return item
        raise DeckError(f"Record of {self.keyword} has no item '{name}'", keyword=self.keyword)

    def __getitem__(self, index: int) -> DeckItem:
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def default_applied(self, name: str) -> bool:
        """Return True if the item was not given explicitly."""
        return self._item(name).default_applied

    def has_value(self, name: str) -> bool:
        """Return True if the item has a value (explicit or default)."""
        return self._item(name).has_value

    def get(self, name: str) -> Any:
        """Return the raw value of an item."""
        item = self._item(name)
        if item.value is None:
            raise DeckError(
                f"Item {name} of {self.keyword} has no value and no default",
                keyword=self.keyword,
            )
        return item.value

    def get_si(self, name: str) -> float:
        """Return the value of a numeric item converted to SI units."""
        item = self._item(name)
        return self.unit_system.to_si(item.dimension, float(self.get(name)))

    def get_trimmed_string(self, name: str) -> str:
        return str(self.get(name)).strip()


@dataclass
class DeckKeyword:
    """One occurrence of a keyword with its records."""

    name: str
    records: list[DeckRecord] = field(default_factory=list)

    def __iter__(self) -> Iterator[DeckRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> DeckRecord:
        return self.records[index]

    def __len__(self) -> int:
        return len(self.records)


@dataclass
class Deck:
    """
    Ordered keyword occurrences of an input deck.

    A keyword may occur several times; occurrences are kept in input
    order and are cumulative.
    """

    keywords: list[DeckKeyword] = field(default_factory=list)
    unit_system: UnitSystem = UnitSystem.METRIC

    def add_keyword(self, name: str, rows: Iterable[Mapping[str, Any]]) -> DeckKeyword:
        """
        Append a keyword occurrence built from item-value mappings.

        Args:
            name: Keyword name
            rows: One mapping of item name to value per record

        Returns:
            The new keyword occurrence
        """
        keyword = DeckKeyword(
            name=name,
            records=[DeckRecord.from_values(name, row, self.unit_system) for row in rows],
        )
        self.keywords.append(keyword)
        return keyword

    def has_keyword(self, name: str) -> bool:
        return any(kw.name == name for kw in self.keywords)

    def get_keyword_list(self, name: str) -> list[DeckKeyword]:
        """Return all occurrences of a keyword, in input order."""
        return [kw for kw in self.keywords if kw.name == name]

    def records(self, name: str) -> Iterator[DeckRecord]:
        """Iterate over the records of every occurrence of a keyword."""
        for keyword in self.get_keyword_list(name):
            yield from keyword

    def __len__(self) -> int:
        return len(self.keywords)
