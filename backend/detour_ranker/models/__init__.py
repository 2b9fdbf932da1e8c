"""Model shortcuts for the FastAPI app."""

from .trip_models import (  # noqa: F401
    CalendarCheckRequest,
    CalendarCheckResponse,
    CalendarCheckSummary,
    ErrorResponse,
    MatchResult,
    RankMatchesRequest,
    RankMatchesResponse,
    Seconds,
    TripDescriptor,
    TripGroup,
    TripId,
)
