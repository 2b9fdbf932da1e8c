from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# Durations are seconds; ints stay ints so detours serialize the way they came in
Seconds = Union[int, float]
# Opaque caller identifier, echoed back exactly as sent
TripId = Any


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ============= REQUEST MODELS =============
class TripDescriptor(CamelModel):
    """
    A primary or candidate trip.

    Every routing field is optional here so that a missing value reaches
    ``ValidationService`` and is reported with its position in the request,
    rather than as a generic schema error.
    """
    id: Optional[TripId] = None
    origin_lat: Optional[float] = None
    origin_lng: Optional[float] = None
    dest_lat: Optional[float] = None
    dest_lng: Optional[float] = None
    direct_duration: Optional[Seconds] = None

    @property
    def origin(self) -> tuple[float, float]:
        return (self.origin_lat, self.origin_lng)  # type: ignore[return-value]

    @property
    def destination(self) -> tuple[float, float]:
        return (self.dest_lat, self.dest_lng)  # type: ignore[return-value]


class RankMatchesRequest(CamelModel):
    main_trip: Optional[TripDescriptor] = None
    candidates: Optional[List[TripDescriptor]] = None


class TripGroup(CamelModel):
    main_trip: Optional[TripDescriptor] = None
    candidates: Optional[List[TripDescriptor]] = None
    # Overrides the request-wide threshold for this group only
    detour_threshold: Optional[Seconds] = None


class CalendarCheckRequest(CamelModel):
    trips: Optional[List[TripGroup]] = None
    detour_threshold: Optional[Seconds] = None


# ============= RESPONSE MODELS =============
class MatchResult(CamelModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[TripId] = None
    detour_seconds: Optional[Seconds] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def check_detour_or_error(self) -> "MatchResult":
        if (self.detour_seconds is None) == (self.error is None):
            raise ValueError("A match carries either a detour or an error, not both")
        return self

    @property
    def is_routed(self) -> bool:
        return self.detour_seconds is not None


class CalendarCheckSummary(CamelModel):
    id: Optional[TripId] = None
    has_match: bool = False
    match_count: int = Field(default=0, ge=0)
    best_detour: Optional[Seconds] = None


class RankMatchesResponse(CamelModel):
    success: bool = True
    matches: List[MatchResult]


class CalendarCheckResponse(CamelModel):
    success: bool = True
    results: List[CalendarCheckSummary]


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
