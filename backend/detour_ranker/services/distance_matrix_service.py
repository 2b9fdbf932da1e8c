import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

from detour_ranker.core.exceptions import GatewayError

logger = logging.getLogger(__name__)

# Internal coordinate type: (lat, lng)
LatLng = Tuple[float, float]

ELEMENT_OK = "OK"


@dataclass(frozen=True)
class MatrixCell:
    """One origin/destination pair as reported by the provider."""
    status: str
    duration: Optional[float] = None  # seconds, only when status is OK

    @property
    def ok(self) -> bool:
        return self.status == ELEMENT_OK


@dataclass(frozen=True)
class DurationMatrix:
    """origins x destinations grid of cells, row per origin."""
    rows: List[List[MatrixCell]]

    def cell(self, origin_index: int, destination_index: int) -> MatrixCell:
        return self.rows[origin_index][destination_index]

    @property
    def shape(self) -> Tuple[int, int]:
        return (len(self.rows), len(self.rows[0]) if self.rows else 0)


class DistanceMatrixService:
    """
    Gateway to the Google Distance Matrix API.

    One ``get_matrix`` call is exactly one outbound request: no retries,
    no splitting into smaller batches, no caching. A failed request (or a
    non-OK top-level status) raises ``GatewayError``; pairs the provider
    could not route come back inline as non-OK cells.
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.client = client or httpx.AsyncClient(timeout=timeout)
        self.calls = 0

    @staticmethod
    def format_coordinate(value: float) -> str:
        """Plain decimal notation, never exponent form (1e-05 -> 0.00001)"""
        return format(Decimal(repr(float(value))), "f")

    @classmethod
    def format_points(cls, points: Sequence[LatLng]) -> str:
        """Convert list of (lat, lng) to 'lat,lng|lat,lng|...'"""
        return "|".join(
            f"{cls.format_coordinate(lat)},{cls.format_coordinate(lng)}" for lat, lng in points
        )

    async def get_matrix(
        self,
        origins: Sequence[LatLng],
        destinations: Sequence[LatLng],
    ) -> DurationMatrix:
        """Get the travel duration between every origin and every destination."""
        if not origins or not destinations:
            raise ValueError("Both origins and destinations must be non-empty")

        if not self.api_key:
            raise GatewayError("GOOGLE_MAPS_API_KEY is not configured")

        params = {
            "origins": self.format_points(origins),
            "destinations": self.format_points(destinations),
            "key": self.api_key,
        }

        self.calls += 1
        logger.info(f"Distance Matrix lookup: {len(origins)} origins x {len(destinations)} destinations")
        try:
            response = await self.client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise GatewayError(f"Distance Matrix request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise GatewayError(
                f"Distance Matrix returned a non-JSON response (HTTP {response.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise GatewayError("Distance Matrix returned an unexpected response body")

        status = data.get("status")
        if status != "OK":
            raise GatewayError(
                f"Distance Matrix API error: {status} – {data.get('error_message') or ''}",
                status=status,
            )

        return self._parse_rows(data, len(origins), len(destinations))

    def _parse_rows(self, data: Dict[str, Any], n_origins: int, n_destinations: int) -> DurationMatrix:
        raw_rows = data.get("rows")
        if not isinstance(raw_rows, list) or len(raw_rows) != n_origins:
            raise GatewayError(
                f"Distance Matrix returned {len(raw_rows) if isinstance(raw_rows, list) else 0} rows, "
                f"expected {n_origins}",
                status="OK",
            )

        rows: List[List[MatrixCell]] = []
        for raw_row in raw_rows:
            if not isinstance(raw_row, dict):
                raise GatewayError("Distance Matrix row is not an object", status="OK")
            elements = raw_row.get("elements")
            if not isinstance(elements, list) or len(elements) != n_destinations:
                raise GatewayError(
                    f"Distance Matrix row has the wrong number of elements, expected {n_destinations}",
                    status="OK",
                )
            rows.append([self._parse_element(element) for element in elements])

        return DurationMatrix(rows=rows)

    @staticmethod
    def _parse_element(element: Dict[str, Any]) -> MatrixCell:
        if not isinstance(element, dict):
            raise GatewayError("Distance Matrix element is not an object", status="OK")

        status = str(element.get("status", "UNKNOWN"))
        if status != ELEMENT_OK:
            return MatrixCell(status=status)

        try:
            duration = float(element["duration"]["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise GatewayError("Distance Matrix element is OK but has no duration", status="OK") from e

        # Google reports whole seconds; keep ints as ints
        return MatrixCell(status=status, duration=int(duration) if duration.is_integer() else duration)

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()
