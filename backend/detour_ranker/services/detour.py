"""
Detour arithmetic.

A candidate's detour is the extra time the primary trip spends when it
drives to the candidate's origin, takes the candidate's own direct route,
and then continues from the candidate's destination to its own:

    detour = leg_a + candidate_direct + leg_b - primary_direct

Legs come from the duration matrix as tagged values. An unroutable leg
yields no detour at all; a default duration is never substituted. Results
are not clamped, so inconsistent provider data can produce a negative
detour and it is passed through as-is.
"""
from dataclasses import dataclass
from typing import Optional, Union

from detour_ranker.models import MatchResult, Seconds, TripId
from detour_ranker.services.distance_matrix_service import MatrixCell

ROUTE_NOT_FOUND = "Route not found"


@dataclass(frozen=True)
class Routed:
    seconds: Seconds


@dataclass(frozen=True)
class Unroutable:
    status: str


LegDuration = Union[Routed, Unroutable]


def leg_from_cell(cell: MatrixCell) -> LegDuration:
    if cell.ok and cell.duration is not None:
        return Routed(cell.duration)
    return Unroutable(cell.status)


def compute_detour(
    leg_a: LegDuration,
    candidate_direct: Seconds,
    leg_b: LegDuration,
    primary_direct: Seconds,
) -> Optional[Seconds]:
    """Return the detour in seconds, or None when either leg is unroutable."""
    if not isinstance(leg_a, Routed) or not isinstance(leg_b, Routed):
        return None
    return leg_a.seconds + candidate_direct + leg_b.seconds - primary_direct


def build_match_result(
    candidate_id: Optional[TripId],
    leg_a: LegDuration,
    candidate_direct: Seconds,
    leg_b: LegDuration,
    primary_direct: Seconds,
) -> MatchResult:
    detour = compute_detour(leg_a, candidate_direct, leg_b, primary_direct)
    if detour is None:
        return MatchResult(id=candidate_id, detour_seconds=None, error=ROUTE_NOT_FOUND)
    return MatchResult(id=candidate_id, detour_seconds=detour)
