"""
Configuration issues and build results.

Building the aquifer model can fail for reasons that indicate an
inconsistent input deck. Such failures are reported as issue values
(:class:`ConfigIssue` subclasses) inside a :class:`Result`, so that
builders can be composed without try/except chains. The top-level
entry points call :meth:`Result.unwrap`, which raises
:class:`~pyaquifer.core.exceptions.AquiferConfigError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pyaquifer.core.exceptions import AquiferConfigError

T = TypeVar("T")


@dataclass(frozen=True)
class ConfigIssue:
    """
    Base class for configuration issues.

    Attributes:
        aquifer_id: Aquifer the issue refers to
        ijk: 1-based (I, J, K) of the offending cell, if known
    """

    aquifer_id: int
    ijk: tuple[int, int, int] | None = None

    @property
    def cell_text(self) -> str:
        if self.ijk is None:
            return ""
        i, j, k = self.ijk
        return f" cell ({i}, {j}, {k})"

    @property
    def message(self) -> str:
        return f"Aquifer {self.aquifer_id}:{self.cell_text} invalid configuration"


@dataclass(frozen=True)
class DuplicateCellAssignment(ConfigIssue):
    """A grid cell is declared as a numerical aquifer cell more than once."""

    previous_aquifer_id: int = 0

    @property
    def message(self) -> str:
        return (
            f"The{self.cell_text} is declared as a numerical aquifer cell for aquifer "
            f"{self.aquifer_id}, but is already a cell of aquifer {self.previous_aquifer_id}"
        )


@dataclass(frozen=True)
class DuplicateConnectionCell(ConfigIssue):
    """A cell is declared more than once as connected to the same aquifer."""

    @property
    def message(self) -> str:
        return (
            f"The{self.cell_text} is declared more than once as a connection "
            f"for numerical aquifer {self.aquifer_id}"
        )


@dataclass(frozen=True)
class InvalidAquiferCell(ConfigIssue):
    """A numerical aquifer cell cannot be resolved on the grid."""

    reason: str = "is outside the grid"

    @property
    def message(self) -> str:
        return f"The{self.cell_text} of numerical aquifer {self.aquifer_id} {self.reason}"


@dataclass(frozen=True)
class UnknownAquiferId(ConfigIssue):
    """A query referenced an aquifer id with no declared data."""

    what: str = "connections"

    @property
    def message(self) -> str:
        return f"Numerical aquifer {self.aquifer_id} does not have any {self.what}"


@dataclass(frozen=True)
class AnalyticConnectionConflict(ConfigIssue):
    """A cell is connected to two different analytic aquifers."""

    other_aquifer_id: int = 0

    @property
    def message(self) -> str:
        return (
            f"The{self.cell_text} is connected to analytic aquifer {self.aquifer_id} "
            f"and to analytic aquifer {self.other_aquifer_id}"
        )


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a build step: either a value or an issue.

    Use :meth:`success` / :meth:`failure` to construct.
    """

    value: T | None = None
    issue: ConfigIssue | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, issue: ConfigIssue) -> Result[T]:
        return cls(issue=issue)

    @property
    def ok(self) -> bool:
        return self.issue is None

    def unwrap(self) -> T:
        """Return the value, raising AquiferConfigError if the step failed."""
        if self.issue is not None:
            raise AquiferConfigError(self.issue)
        return self.value  # type: ignore[return-value]
