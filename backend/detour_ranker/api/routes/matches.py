"""
API Routes for shared-ride matching

Request Lifecycle for POST /matches/ranked:
1. API key gate (verify_api_key)
2. Body parsed into RankMatchesRequest (camelCase keys)
3. MatchingService validates, looks up both leg batches, scores candidates
4. Matches returned best detour first, unroutable ones last

POST /matches/calendar-check runs the same pipeline per trip group and
returns one summary per group instead of a ranking.
"""
from typing import Any

from fastapi import APIRouter, Depends

from detour_ranker.api.deps import MatchingDep, verify_api_key
from detour_ranker.core.exceptions import DetourRankerError
from detour_ranker.models import (
    CalendarCheckRequest,
    CalendarCheckResponse,
    ErrorResponse,
    RankMatchesRequest,
    RankMatchesResponse,
)
import logging
logger = logging.getLogger(__name__)

# ============= MATCH ROUTES =============
router_matches = APIRouter(
    prefix="/matches",
    tags=["matches"],
    dependencies=[Depends(verify_api_key)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router_matches.post("/ranked", response_model=RankMatchesResponse)
async def rank_matches(
    request: RankMatchesRequest,
    matching: MatchingDep,
) -> Any:
    """
    Rank candidate trips by the detour they add to the main trip.
    """
    try:
        matches = await matching.rank_matches(request)
    except DetourRankerError as e:
        logger.error(f"/matches/ranked failed: {e.message}")
        raise

    return RankMatchesResponse(matches=matches)


@router_matches.post("/calendar-check", response_model=CalendarCheckResponse)
async def calendar_check(
    request: CalendarCheckRequest,
    matching: MatchingDep,
) -> Any:
    """
    For each trip group, count candidates within the detour threshold and
    report the best detour. Any provider failure fails the whole batch.
    """
    try:
        results = await matching.calendar_check(request)
    except DetourRankerError as e:
        logger.error(f"/matches/calendar-check failed: {e.message}")
        raise

    return CalendarCheckResponse(results=results)
