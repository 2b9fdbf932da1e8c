from typing import Any, Dict, Optional

from detour_ranker.models import TripDescriptor

MAIN_ORIGIN = (37.7749, -122.4194)
MAIN_DESTINATION = (37.3382, -121.8863)


def trip_payload(
    trip_id: Optional[Any],
    origin: tuple,
    destination: tuple,
    direct_duration: float,
) -> Dict[str, Any]:
    """A trip the way clients send it (camelCase JSON)."""
    return {
        "id": trip_id,
        "originLat": origin[0],
        "originLng": origin[1],
        "destLat": destination[0],
        "destLng": destination[1],
        "directDuration": direct_duration,
    }


def make_trip(
    trip_id: Optional[Any] = None,
    origin: tuple = MAIN_ORIGIN,
    destination: tuple = MAIN_DESTINATION,
    direct_duration: float = 500,
) -> TripDescriptor:
    return TripDescriptor.model_validate(
        trip_payload(trip_id, origin, destination, direct_duration)
    )


def make_candidate(index: int, direct_duration: float = 600) -> TripDescriptor:
    """Candidate with distinct origin/destination derived from its index."""
    return make_trip(
        trip_id=f"c{index}",
        origin=candidate_origin(index),
        destination=candidate_destination(index),
        direct_duration=direct_duration,
    )


def candidate_origin(index: int) -> tuple:
    return (37.70 + index / 100, -122.40)


def candidate_destination(index: int) -> tuple:
    return (37.30 + index / 100, -121.90)
