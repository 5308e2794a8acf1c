"""
Analytic aquifer models.

This module provides the analytic aquifer kinds as a closed set of
variants, each carrying its own parameter set:

- :class:`FetkovichAquifer` (keyword ``AQUFETP``)
- :class:`CarterTracyAquifer` (keyword ``AQUCT``)
- :class:`ConstantFluxAquifer` (keyword ``AQUFLUX``)

and an id-keyed collection per kind (:class:`Aquifetp`,
:class:`AquiferCT`, :class:`AquiferConstantFlux`). Aquifer ids are unique
within a kind; a later record with the same id replaces the earlier one.
All values are stored in SI units.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Generic, TypeVar, Union

from pyaquifer.core.base_component import BaseComponent
from pyaquifer.core.deck import Deck, DeckRecord

# Carter-Tracy influx constant factor, SI (2*pi)
CARTER_TRACY_C2 = 6.283


class AquiferKind(Enum):
    """Kind of an analytic aquifer."""

    FETKOVICH = "fetkovich"
    CARTER_TRACY = "carter_tracy"
    CONSTANT_FLUX = "constant_flux"


def _optional_si(record: DeckRecord, name: str) -> float | None:
    if record.default_applied(name) or not record.has_value(name):
        return None
    return record.get_si(name)


@dataclass(frozen=True)
class FetkovichAquifer:
    """
    Fetkovich analytic aquifer.

    Attributes:
        id: Aquifer ID
        datum_depth: Datum depth of the aquifer
        initial_volume: Initial water volume V0
        total_compressibility: Total (rock + water) compressibility C_t
        productivity_index: Aquifer productivity index J
        pvt_table: Water PVT table number
        initial_pressure: Initial pressure at datum; None = equilibrate
        salinity: Salt concentration
        temperature: Aquifer temperature, if given
    """

    kind: ClassVar[AquiferKind] = AquiferKind.FETKOVICH

    id: int
    datum_depth: float
    initial_volume: float
    total_compressibility: float
    productivity_index: float
    pvt_table: int = 1
    initial_pressure: float | None = None
    salinity: float = 0.0
    temperature: float | None = None

    @classmethod
    def from_record(cls, record: DeckRecord) -> FetkovichAquifer:
        return cls(
            id=record.get("AQUIFER_ID"),
            datum_depth=record.get_si("DAT_DEPTH"),
            initial_volume=record.get_si("V0"),
            total_compressibility=record.get_si("C_T"),
            productivity_index=record.get_si("PI"),
            pvt_table=record.get("TABLE_NUM_WATER_PRESS"),
            initial_pressure=_optional_si(record, "P0"),
            salinity=record.get_si("SALINITY"),
            temperature=_optional_si(record, "TEMP"),
        )

    @property
    def time_constant(self) -> float:
        """Time constant C_t * V0 / J."""
        return self.total_compressibility * self.initial_volume / self.productivity_index

    def errors(self) -> list[str]:
        errors = []
        if self.productivity_index <= 0.0:
            errors.append(f"Fetkovich aquifer {self.id}: productivity index must be positive")
        if self.initial_volume <= 0.0:
            errors.append(f"Fetkovich aquifer {self.id}: initial volume must be positive")
        if self.total_compressibility <= 0.0:
            errors.append(f"Fetkovich aquifer {self.id}: compressibility must be positive")
        return errors


@dataclass(frozen=True)
class CarterTracyAquifer:
    """
    Carter-Tracy analytic aquifer.

    Attributes:
        id: Aquifer ID
        datum_depth: Datum depth of the aquifer
        permeability: Aquifer permeability k_a
        porosity: Aquifer porosity
        total_compressibility: Total compressibility C_t
        inner_radius: Inner radius r_o of the aquifer
        thickness: Aquifer thickness h
        influence_angle: Angle of influence in degrees (0, 360]
        pvt_table: Water PVT table number
        influence_table: Influence function table number
        initial_pressure: Initial pressure at datum; None = equilibrate
        dimensionless_time: Influence function abscissa (t_D)
        dimensionless_pressure: Influence function values (p_D)
    """

    kind: ClassVar[AquiferKind] = AquiferKind.CARTER_TRACY

    id: int
    datum_depth: float
    permeability: float
    porosity: float
    total_compressibility: float
    inner_radius: float
    thickness: float
    influence_angle: float = 360.0
    pvt_table: int = 1
    influence_table: int = 1
    initial_pressure: float | None = None
    dimensionless_time: tuple[float, ...] = ()
    dimensionless_pressure: tuple[float, ...] = ()

    @classmethod
    def from_record(
        cls, record: DeckRecord, tables: InfluenceTableProvider | None = None
    ) -> CarterTracyAquifer:
        table_id = record.get("TABLE_NUM_INFLUENCE_FN")
        td: tuple[float, ...] = ()
        pd: tuple[float, ...] = ()
        if tables is not None:
            t, p = tables(table_id)
            td = tuple(float(v) for v in t)
            pd = tuple(float(v) for v in p)
        return cls(
            id=record.get("AQUIFER_ID"),
            datum_depth=record.get_si("DAT_DEPTH"),
            permeability=record.get_si("PERM_AQ"),
            porosity=record.get_si("PORO_AQ"),
            total_compressibility=record.get_si("C_T"),
            inner_radius=record.get_si("RAD"),
            thickness=record.get_si("THICKNESS_AQ"),
            influence_angle=record.get_si("INFLUENCE_ANGLE"),
            pvt_table=record.get("TABLE_NUM_WATER_PRESS"),
            influence_table=table_id,
            initial_pressure=_optional_si(record, "P_INI"),
            dimensionless_time=td,
            dimensionless_pressure=pd,
        )

    @property
    def influx_constant(self) -> float:
        """Influx constant c2 * h * theta/360 * phi * C_t * r_o^2."""
        return (
            CARTER_TRACY_C2
            * self.thickness
            * self.influence_angle
            / 360.0
            * self.porosity
            * self.total_compressibility
            * self.inner_radius**2
        )

    def errors(self) -> list[str]:
        errors = []
        if self.permeability <= 0.0:
            errors.append(f"Carter-Tracy aquifer {self.id}: permeability must be positive")
        if not 0.0 < self.porosity <= 1.0:
            errors.append(f"Carter-Tracy aquifer {self.id}: porosity must be in (0, 1]")
        if self.inner_radius <= 0.0 or self.thickness <= 0.0:
            errors.append(f"Carter-Tracy aquifer {self.id}: radius and thickness must be positive")
        if not 0.0 < self.influence_angle <= 360.0:
            errors.append(f"Carter-Tracy aquifer {self.id}: influence angle must be in (0, 360]")
        if len(self.dimensionless_time) != len(self.dimensionless_pressure):
            errors.append(f"Carter-Tracy aquifer {self.id}: influence table columns differ")
        return errors


@dataclass(frozen=True)
class ConstantFluxAquifer:
    """
    Analytic aquifer with a prescribed flux per unit area.

    Attributes:
        id: Aquifer ID
        flux: Flux per unit connection area
        salt_concentration: Salt concentration of the influx
        temperature: Temperature of the influx, if given
        datum_pressure: Datum pressure, if given
    """

    kind: ClassVar[AquiferKind] = AquiferKind.CONSTANT_FLUX

    id: int
    flux: float
    salt_concentration: float = 0.0
    temperature: float | None = None
    datum_pressure: float | None = None

    @classmethod
    def from_record(cls, record: DeckRecord) -> ConstantFluxAquifer:
        return cls(
            id=record.get("AQUIFER_ID"),
            flux=record.get_si("FLUX"),
            salt_concentration=record.get_si("SC_0"),
            temperature=_optional_si(record, "TEMP"),
            datum_pressure=_optional_si(record, "PRESSURE"),
        )

    def errors(self) -> list[str]:
        return []


AnalyticAquifer = Union[FetkovichAquifer, CarterTracyAquifer, ConstantFluxAquifer]

# table id -> (t_D, p_D)
InfluenceTableProvider = Callable[[int], tuple[list[float], list[float]]]

A = TypeVar("A", FetkovichAquifer, CarterTracyAquifer, ConstantFluxAquifer)


@dataclass
class _AnalyticCollection(BaseComponent, Generic[A]):
    """Id-keyed aquifers of one kind, in input order."""

    component_name: ClassVar[str] = "analytic aquifer"

    aquifers: dict[int, A] = field(default_factory=dict)

    def add(self, aquifer: A) -> None:
        """Insert an aquifer, replacing any previous one with the same id."""
        self.aquifers[aquifer.id] = aquifer

    def has_aquifer(self, aquifer_id: int) -> bool:
        return aquifer_id in self.aquifers

    def __getitem__(self, aquifer_id: int) -> A:
        return self.aquifers[aquifer_id]

    def __iter__(self) -> Iterator[A]:
        return iter(self.aquifers.values())

    def __len__(self) -> int:
        return len(self.aquifers)

    @property
    def n_items(self) -> int:
        return len(self.aquifers)

    def errors(self) -> list[str]:
        return [msg for aq in self.aquifers.values() for msg in aq.errors()]


@dataclass
class Aquifetp(_AnalyticCollection[FetkovichAquifer]):
    """Fetkovich aquifers declared with AQUFETP."""

    @classmethod
    def from_deck(cls, deck: Deck) -> Aquifetp:
        result = cls()
        for record in deck.records("AQUFETP"):
            result.add(FetkovichAquifer.from_record(record))
        return result

    def __repr__(self) -> str:
        return f"Aquifetp(n_aquifers={len(self)})"


@dataclass
class AquiferCT(_AnalyticCollection[CarterTracyAquifer]):
    """Carter-Tracy aquifers declared with AQUCT."""

    @classmethod
    def from_deck(cls, deck: Deck, tables: InfluenceTableProvider | None = None) -> AquiferCT:
        result = cls()
        for record in deck.records("AQUCT"):
            result.add(CarterTracyAquifer.from_record(record, tables))
        return result

    def __repr__(self) -> str:
        return f"AquiferCT(n_aquifers={len(self)})"


@dataclass
class AquiferConstantFlux(_AnalyticCollection[ConstantFluxAquifer]):
    """Constant-flux aquifers declared with AQUFLUX."""

    @classmethod
    def from_deck(cls, deck: Deck) -> AquiferConstantFlux:
        result = cls()
        for record in deck.records("AQUFLUX"):
            result.add(ConstantFluxAquifer.from_record(record))
        return result

    def handle_aquflux(self, record: DeckRecord) -> None:
        """Apply an AQUFLUX record given in the schedule section."""
        self.add(ConstantFluxAquifer.from_record(record))

    def __repr__(self) -> str:
        return f"AquiferConstantFlux(n_aquifers={len(self)})"
