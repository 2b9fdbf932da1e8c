"""
Match pipelines: single-trip ranking and the multi-trip calendar check.

Lifecycle of one primary trip:
1. Validate the request (no provider call happens on bad input)
2. Look up both leg batches concurrently:
   primary origin -> every candidate origin, and
   every candidate destination -> primary destination
3. Compute a detour per candidate
4. Rank (single trip) or reduce to a match count and best detour (calendar check)

Calendar-check groups run one after the other. The first provider failure
aborts the whole batch; partial results are never returned.
"""
import asyncio
import logging
from typing import List, Optional, Sequence, cast

from detour_ranker.models import (
    CalendarCheckRequest,
    CalendarCheckSummary,
    MatchResult,
    RankMatchesRequest,
    Seconds,
    TripDescriptor,
    TripGroup,
)
from detour_ranker.services.detour import build_match_result, leg_from_cell
from detour_ranker.services.distance_matrix_service import (
    DistanceMatrixService,
    DurationMatrix,
)
from detour_ranker.services.ranking import rank_matches
from detour_ranker.services.validation import ValidationService

logger = logging.getLogger(__name__)

DEFAULT_DETOUR_THRESHOLD = 1800  # seconds


class MatchingService:
    def __init__(
        self,
        distance_matrix: DistanceMatrixService,
        validation_service: Optional[ValidationService] = None,
        default_detour_threshold: Seconds = DEFAULT_DETOUR_THRESHOLD,
    ):
        self.distance_matrix = distance_matrix
        self.validation = validation_service or ValidationService()
        self.default_detour_threshold = default_detour_threshold

    async def rank_matches(self, request: RankMatchesRequest) -> List[MatchResult]:
        """Score every candidate against the main trip, best detour first."""
        self.validation.validate_rank_request(request)
        main_trip = cast(TripDescriptor, request.main_trip)
        candidates = cast(List[TripDescriptor], request.candidates)

        if not candidates:
            return []

        matches = await self.score_candidates(main_trip, candidates)
        return rank_matches(matches)

    async def calendar_check(self, request: CalendarCheckRequest) -> List[CalendarCheckSummary]:
        """Summarize match viability for each trip group, in input order."""
        self.validation.validate_calendar_request(request)

        trips = cast(List[TripGroup], request.trips)
        global_threshold = (
            request.detour_threshold
            if request.detour_threshold is not None
            else self.default_detour_threshold
        )
        logger.info(f"Calendar check for {len(trips)} trips (threshold={global_threshold}s)")

        results: List[CalendarCheckSummary] = []
        for group in trips:
            main_trip = cast(TripDescriptor, group.main_trip)
            candidates = cast(List[TripDescriptor], group.candidates)
            threshold = (
                group.detour_threshold
                if group.detour_threshold is not None
                else global_threshold
            )

            if not candidates:
                results.append(CalendarCheckSummary(id=main_trip.id))
                continue

            matches = await self.score_candidates(main_trip, candidates)
            results.append(summarize_matches(main_trip.id, matches, threshold))

        return results

    async def score_candidates(
        self,
        main_trip: TripDescriptor,
        candidates: Sequence[TripDescriptor],
    ) -> List[MatchResult]:
        """One MatchResult per candidate, in candidate order."""
        to_pickup, to_destination = await self._lookup_legs(main_trip, candidates)

        matches = []
        for i, candidate in enumerate(candidates):
            match = build_match_result(
                candidate.id,
                leg_a=leg_from_cell(to_pickup.cell(0, i)),
                candidate_direct=candidate.direct_duration,  # type: ignore[arg-type]
                leg_b=leg_from_cell(to_destination.cell(i, 0)),
                primary_direct=main_trip.direct_duration,  # type: ignore[arg-type]
            )
            if not match.is_routed:
                logger.warning(f"No route for candidate {candidate.id!r} of trip {main_trip.id!r}")
            matches.append(match)
        return matches

    async def _lookup_legs(
        self,
        main_trip: TripDescriptor,
        candidates: Sequence[TripDescriptor],
    ) -> tuple[DurationMatrix, DurationMatrix]:
        # Both lookups always run to completion before a failure is raised
        results = await asyncio.gather(
            self.distance_matrix.get_matrix(
                [main_trip.origin], [c.origin for c in candidates]
            ),
            self.distance_matrix.get_matrix(
                [c.destination for c in candidates], [main_trip.destination]
            ),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        to_pickup, to_destination = results
        return to_pickup, to_destination  # type: ignore[return-value]


def summarize_matches(
    trip_id,
    matches: Sequence[MatchResult],
    threshold: Seconds,
) -> CalendarCheckSummary:
    within = [
        m.detour_seconds
        for m in matches
        if m.detour_seconds is not None and m.detour_seconds <= threshold
    ]
    return CalendarCheckSummary(
        id=trip_id,
        has_match=bool(within),
        match_count=len(within),
        best_detour=min(within) if within else None,
    )
