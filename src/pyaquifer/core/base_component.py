"""
Common interface of aquifer components.

The analytic aquifer collections, the numerical aquifer registry and the
analytic connection geometry report their problems as plain messages
through :meth:`BaseComponent.errors`. :meth:`BaseComponent.validate`
turns them into one :class:`~pyaquifer.core.exceptions.ValidationError`,
and :class:`~pyaquifer.components.aquifer_config.AquiferConfig` merges the
messages of all its parts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from pyaquifer.core.exceptions import ValidationError


class BaseComponent(ABC):
    """
    Base class for aquifer components.

    Subclasses implement :meth:`errors` and :attr:`n_items`, and name
    themselves in :attr:`component_name` for validation messages.
    """

    component_name: ClassVar[str] = "aquifer component"

    @abstractmethod
    def errors(self) -> list[str]:
        """Return one message per problem; an empty list means valid."""

    @property
    @abstractmethod
    def n_items(self) -> int:
        """Number of aquifers or connection cells held."""

    @property
    def empty(self) -> bool:
        return self.n_items == 0

    def validate(self) -> None:
        """
        Raise if the component has problems.

        Raises:
            ValidationError: Listing every message of :meth:`errors`
        """
        errors = self.errors()
        if errors:
            raise ValidationError(f"{len(errors)} {self.component_name} problem(s)", errors=errors)
