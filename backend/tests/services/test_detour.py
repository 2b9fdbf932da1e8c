from detour_ranker.services.detour import (
    ROUTE_NOT_FOUND,
    Routed,
    Unroutable,
    build_match_result,
    compute_detour,
    leg_from_cell,
)
from detour_ranker.services.distance_matrix_service import MatrixCell


class TestComputeDetour:
    def test_formula(self) -> None:
        """300 + 600 + 200 - 500 = 600"""
        assert compute_detour(Routed(300), 600, Routed(200), 500) == 600

    def test_zero_durations_are_values(self) -> None:
        assert compute_detour(Routed(0), 0, Routed(0), 0) == 0

    def test_negative_detour_is_not_clamped(self) -> None:
        assert compute_detour(Routed(10), 100, Routed(10), 500) == -380

    def test_unroutable_leg_gives_no_detour(self) -> None:
        assert compute_detour(Unroutable("ZERO_RESULTS"), 600, Routed(200), 500) is None
        assert compute_detour(Routed(300), 600, Unroutable("NOT_FOUND"), 500) is None
        assert compute_detour(Unroutable("NOT_FOUND"), 600, Unroutable("NOT_FOUND"), 500) is None


class TestLegFromCell:
    def test_ok_cell_is_routed(self) -> None:
        assert leg_from_cell(MatrixCell(status="OK", duration=42)) == Routed(42)

    def test_non_ok_cell_is_unroutable(self) -> None:
        assert leg_from_cell(MatrixCell(status="ZERO_RESULTS")) == Unroutable("ZERO_RESULTS")


class TestBuildMatchResult:
    def test_routed_match_has_detour_and_no_error(self) -> None:
        match = build_match_result("c1", Routed(300), 600, Routed(200), 500)
        assert match.id == "c1"
        assert match.detour_seconds == 600
        assert match.error is None

    def test_unroutable_match_has_error_and_no_detour(self) -> None:
        match = build_match_result("c2", Routed(300), 600, Unroutable("ZERO_RESULTS"), 500)
        assert match.id == "c2"
        assert match.detour_seconds is None
        assert match.error == ROUTE_NOT_FOUND
