"""Non-neighbour connections (NNC) between grid cells."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True)
class NNCEntry:
    """A connection between two cells that are not grid neighbours."""

    cell1: int
    cell2: int
    trans: float

    def __repr__(self) -> str:
        return f"NNCEntry({self.cell1} <-> {self.cell2}, trans={self.trans})"


@dataclass
class NNC:
    """Collection of non-neighbour connections, in insertion order."""

    entries: list[NNCEntry] = field(default_factory=list)

    def add_nnc(self, cell1: int, cell2: int, trans: float) -> None:
        """Add a connection; the lower global index is stored first."""
        lo, hi = sorted((cell1, cell2))
        self.entries.append(NNCEntry(lo, hi, trans))

    def __iter__(self) -> Iterator[NNCEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
