"""Unit tests for configuration issues and results (core/results.py)."""

from __future__ import annotations

import pytest

from pyaquifer.core.exceptions import AquiferConfigError
from pyaquifer.core.results import (
    AnalyticConnectionConflict,
    ConfigIssue,
    DuplicateCellAssignment,
    DuplicateConnectionCell,
    Result,
    UnknownAquiferId,
)


class TestIssueMessages:
    """Issue messages name the aquifer and the 1-based cell."""

    def test_duplicate_cell_assignment(self) -> None:
        issue = DuplicateCellAssignment(aquifer_id=2, ijk=(3, 4, 5), previous_aquifer_id=1)
        assert "cell (3, 4, 5)" in issue.message
        assert "aquifer 2" in issue.message
        assert "aquifer 1" in issue.message

    def test_duplicate_connection_cell(self) -> None:
        issue = DuplicateConnectionCell(aquifer_id=7, ijk=(1, 1, 1))
        assert "cell (1, 1, 1)" in issue.message
        assert "numerical aquifer 7" in issue.message

    def test_unknown_aquifer_id(self) -> None:
        issue = UnknownAquiferId(aquifer_id=4)
        assert issue.message == "Numerical aquifer 4 does not have any connections"

    def test_unknown_aquifer_id_what(self) -> None:
        issue = UnknownAquiferId(aquifer_id=4, what="cells")
        assert issue.message.endswith("cells")

    def test_analytic_conflict(self) -> None:
        issue = AnalyticConnectionConflict(aquifer_id=1, ijk=(2, 2, 1), other_aquifer_id=3)
        assert "analytic aquifer 1" in issue.message
        assert "analytic aquifer 3" in issue.message

    def test_issues_are_config_issues(self) -> None:
        for issue in (
            DuplicateCellAssignment(1),
            DuplicateConnectionCell(1),
            UnknownAquiferId(1),
            AnalyticConnectionConflict(1),
        ):
            assert isinstance(issue, ConfigIssue)

    def test_cell_text_empty_without_ijk(self) -> None:
        assert ConfigIssue(aquifer_id=1).cell_text == ""


class TestResult:
    """Tests for the Result type."""

    def test_success(self) -> None:
        result = Result.success(42)
        assert result.ok
        assert result.unwrap() == 42

    def test_failure(self) -> None:
        issue = UnknownAquiferId(aquifer_id=9)
        result: Result[int] = Result.failure(issue)
        assert not result.ok
        assert result.issue is issue

    def test_unwrap_failure_raises(self) -> None:
        issue = DuplicateConnectionCell(aquifer_id=1, ijk=(1, 2, 1))
        with pytest.raises(AquiferConfigError) as exc_info:
            Result.failure(issue).unwrap()
        assert exc_info.value.issue == issue
