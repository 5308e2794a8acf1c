"""
Aquifer configuration aggregate.

:class:`AquiferConfig` unifies the analytic aquifers (Fetkovich,
Carter-Tracy, constant flux), the numerical aquifer registry and the
analytic connection geometry. It is the object handed to the simulator
and written to restart files.

Aquifer ids are independent namespaces per model kind: the same id may
appear as, e.g., a Fetkovich and a numerical aquifer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pyaquifer.components.analytic import (
    AnalyticAquifer,
    AquiferConstantFlux,
    AquiferCT,
    Aquifetp,
    InfluenceTableProvider,
)
from pyaquifer.components.aquancon import Aquancon
from pyaquifer.components.numerical import NumericalAquifers
from pyaquifer.core.exceptions import ValidationError

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from pyaquifer.core.deck import Deck
    from pyaquifer.core.field_props import FieldProperties
    from pyaquifer.core.grid import CartesianGrid

logger = logging.getLogger(__name__)


@dataclass
class AquiferConfig:
    """
    All aquifers of a simulation case.

    ``AquiferConfig()`` is the empty configuration.

    Attributes:
        fetp: Fetkovich aquifers
        ct: Carter-Tracy aquifers
        aquflux: Constant-flux aquifers
        numerical: Numerical aquifer registry
        connections: Analytic aquifer connection geometry
    """

    fetp: Aquifetp = field(default_factory=Aquifetp)
    ct: AquiferCT = field(default_factory=AquiferCT)
    aquflux: AquiferConstantFlux = field(default_factory=AquiferConstantFlux)
    numerical: NumericalAquifers = field(default_factory=NumericalAquifers)
    connections: Aquancon = field(default_factory=Aquancon)

    @classmethod
    def from_deck(
        cls,
        deck: Deck,
        grid: CartesianGrid,
        field_props: FieldProperties,
        tables: InfluenceTableProvider | None = None,
        actnum: NDArray[np.bool_] | None = None,
    ) -> AquiferConfig:
        """
        Build analytic and numerical aquifers from a deck.

        Analytic connection geometry is not computed here; call
        :meth:`load_connections` for that.

        Args:
            deck: Input deck
            grid: Simulation grid
            field_props: Reservoir field properties
            tables: Optional Carter-Tracy influence table provider
            actnum: Active map for numerical connections (default: the grid's)

        Raises:
            AquiferConfigError: If the numerical aquifer input is inconsistent
        """
        config = cls(
            fetp=Aquifetp.from_deck(deck),
            ct=AquiferCT.from_deck(deck, tables),
            aquflux=AquiferConstantFlux.from_deck(deck),
            numerical=NumericalAquifers.from_deck(deck, grid, field_props, actnum),
        )
        logger.info(
            "Aquifer configuration: %d Fetkovich, %d Carter-Tracy, %d constant flux, "
            "%d numerical",
            len(config.fetp),
            len(config.ct),
            len(config.aquflux),
            len(config.numerical),
        )
        return config

    def load_connections(self, deck: Deck, grid: CartesianGrid) -> None:
        """
        Compute the analytic aquifer connections from AQUANCON records.

        Raises:
            AquiferConfigError: If a cell is connected to two aquifers
        """
        self.connections = Aquancon.from_deck(deck, grid).unwrap()

    def update_numerical_aquifers(self, numerical: NumericalAquifers) -> None:
        """Replace the numerical aquifer registry."""
        self.numerical = numerical

    def active(self) -> bool:
        return self.has_analytical_aquifer() or self.has_numerical_aquifer()

    def has_analytical_aquifer(self) -> bool:
        return len(self.fetp) > 0 or len(self.ct) > 0 or len(self.aquflux) > 0

    def has_numerical_aquifer(self) -> bool:
        return len(self.numerical) > 0

    def has_aquifer(self, aquifer_id: int) -> bool:
        """Return True if any model kind has an aquifer with this id."""
        return (
            self.fetp.has_aquifer(aquifer_id)
            or self.ct.has_aquifer(aquifer_id)
            or self.aquflux.has_aquifer(aquifer_id)
            or self.numerical.has_aquifer(aquifer_id)
        )

    def analytic_aquifers(self, aquifer_id: int | None = None) -> list[AnalyticAquifer]:
        """
        Return analytic aquifers of all kinds.

        Args:
            aquifer_id: If given, only aquifers with this id

        Returns:
            Fetkovich, then Carter-Tracy, then constant-flux aquifers
        """
        aquifers: list[AnalyticAquifer] = [*self.fetp, *self.ct, *self.aquflux]
        if aquifer_id is None:
            return aquifers
        return [aq for aq in aquifers if aq.id == aquifer_id]

    def validate(self) -> None:
        """
        Validate every component.

        Raises:
            ValidationError: Listing the problems of all components
        """
        errors: list[str] = []
        for component in (self.fetp, self.ct, self.aquflux, self.numerical, self.connections):
            errors.extend(component.errors())
        if errors:
            raise ValidationError(f"{len(errors)} aquifer configuration problem(s)", errors)

    def __repr__(self) -> str:
        return (
            f"AquiferConfig(fetp={len(self.fetp)}, ct={len(self.ct)}, "
            f"aquflux={len(self.aquflux)}, numerical={len(self.numerical)}, "
            f"connections={self.connections.n_items})"
        )
