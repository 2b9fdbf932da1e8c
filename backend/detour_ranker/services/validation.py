from typing import List, Optional, Sequence

from detour_ranker.core.exceptions import ValidationError
from detour_ranker.models import (
    CalendarCheckRequest,
    RankMatchesRequest,
    TripDescriptor,
)

# Wire names, checked in this order
REQUIRED_FIELDS = (
    ("originLat", "origin_lat"),
    ("originLng", "origin_lng"),
    ("destLat", "dest_lat"),
    ("destLng", "dest_lng"),
    ("directDuration", "direct_duration"),
)


class ValidationService:
    """
    Checks match requests before any call to the duration-matrix provider.

    Fails fast: the first missing field raises ``ValidationError`` naming the
    trip (``mainTrip``, ``candidates[i]``, ``trips[t].candidates[c]`` ...)
    and the field. Zero is a value, only absent/null counts as missing.
    """

    def validate_rank_request(self, request: RankMatchesRequest) -> None:
        if request.main_trip is None or request.candidates is None:
            raise ValidationError("Request body must include mainTrip and candidates")

        self._validate_trip(request.main_trip, "mainTrip")
        self._validate_candidates(request.candidates, "candidates")

    def validate_calendar_request(self, request: CalendarCheckRequest) -> None:
        if not request.trips:
            raise ValidationError("Request body must include a non-empty trips array")

        self._validate_threshold(request.detour_threshold, "detourThreshold")

        # All groups are checked up front so a late bad group never follows
        # provider calls made for the earlier ones
        for t, group in enumerate(request.trips):
            prefix = f"trips[{t}]"
            if group.main_trip is None or group.candidates is None:
                raise ValidationError(f"{prefix} must include mainTrip and candidates")

            self._validate_trip(group.main_trip, f"{prefix}.mainTrip")
            self._validate_candidates(group.candidates, f"{prefix}.candidates")
            self._validate_threshold(group.detour_threshold, f"{prefix}.detourThreshold")

    def _validate_candidates(self, candidates: Sequence[TripDescriptor], path: str) -> None:
        for i, candidate in enumerate(candidates):
            self._validate_trip(candidate, f"{path}[{i}]")

    def _validate_trip(self, trip: TripDescriptor, path: str) -> None:
        missing = self.missing_fields(trip)
        if missing:
            raise ValidationError(f"{path} is missing required field: {missing[0]}")

    def _validate_threshold(self, threshold: Optional[float], path: str) -> None:
        if threshold is not None and threshold < 0:
            raise ValidationError(f"{path} must not be negative")

    @staticmethod
    def missing_fields(trip: TripDescriptor) -> List[str]:
        return [
            wire_name
            for wire_name, attr in REQUIRED_FIELDS
            if getattr(trip, attr) is None
        ]
