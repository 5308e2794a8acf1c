"""Unit tests for the shared component interface (core/base_component.py)."""

from __future__ import annotations

import pytest

from pyaquifer.components.analytic import Aquifetp, FetkovichAquifer
from pyaquifer.components.aquancon import Aquancon, AquancCell
from pyaquifer.components.numerical import NumericalAquifers, SingleNumericalAquifer
from pyaquifer.core.base_component import BaseComponent
from pyaquifer.core.exceptions import ValidationError
from pyaquifer.core.grid import FaceDir


class TestBaseComponent:
    """Tests for validation and emptiness shared by all components."""

    def test_cannot_instantiate(self) -> None:
        with pytest.raises(TypeError):
            BaseComponent()  # type: ignore[abstract]

    def test_components_are_base_components(self) -> None:
        for component in (Aquifetp(), Aquancon(), NumericalAquifers()):
            assert isinstance(component, BaseComponent)
            assert component.empty
            assert component.errors() == []
            component.validate()

    def test_validate_names_component(self) -> None:
        aquifers = NumericalAquifers({1: SingleNumericalAquifer(1)})
        with pytest.raises(ValidationError, match="1 numerical aquifer problem"):
            aquifers.validate()
        assert not aquifers.empty

    def test_validate_lists_every_error(self) -> None:
        fetp = Aquifetp()
        fetp.add(FetkovichAquifer(1, 0.0, -1.0, -1.0, 1.0))
        with pytest.raises(ValidationError, match="analytic aquifer problem") as exc_info:
            fetp.validate()
        assert exc_info.value.errors == fetp.errors()

    def test_aquancon_errors(self) -> None:
        aquancon = Aquancon({1: [AquancCell(1, 0, -1.0, FaceDir.XMINUS)]})
        assert len(aquancon.errors()) == 1
        with pytest.raises(ValidationError, match="analytic connection problem"):
            aquancon.validate()
