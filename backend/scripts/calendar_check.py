"""Run a calendar check from a JSON file against the configured provider.

Usage examples:
- Check every trip group in a file with the default threshold:
  ./.venv/bin/python scripts/calendar_check.py --input trips.json

- Replace the request-wide detour threshold (seconds); groups that carry
  their own detourThreshold keep it:
  ./.venv/bin/python scripts/calendar_check.py --input trips.json --threshold 1200

The input is either the same body POST /matches/calendar-check accepts
(``{"trips": [...], "detourThreshold": 1800}``) or a bare list of trip groups.

Notes:
- Needs GOOGLE_MAPS_API_KEY in the environment or in .env.
- Exits with status 1 when the input cannot be read or parsed, and on a
  validation or provider error; nothing is printed for the groups that were
  already checked.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Optional

# Add project root to path (same pattern as other scripts)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError as SchemaError

from detour_ranker.core.config import settings
from detour_ranker.core.exceptions import DetourRankerError
from detour_ranker.models import CalendarCheckRequest
from detour_ranker.services.distance_matrix_service import DistanceMatrixService
from detour_ranker.services.matching import MatchingService


def _load_request(path: str, threshold: Optional[int]) -> CalendarCheckRequest:
    with open(path, encoding="utf-8") as f:
        payload: Any = json.load(f)

    if isinstance(payload, list):
        payload = {"trips": payload}

    request = CalendarCheckRequest.model_validate(payload)
    if threshold is not None:
        request = request.model_copy(update={"detour_threshold": threshold})
    return request


async def _run(request: CalendarCheckRequest) -> list[dict[str, Any]]:
    distance_matrix = DistanceMatrixService(
        api_key=settings.GOOGLE_MAPS_API_KEY,
        base_url=settings.DISTANCE_MATRIX_URL,
        timeout=settings.DISTANCE_MATRIX_TIMEOUT,
    )
    matching = MatchingService(
        distance_matrix,
        default_detour_threshold=settings.DEFAULT_DETOUR_THRESHOLD,
    )
    try:
        results = await matching.calendar_check(request)
    finally:
        await distance_matrix.close()

    print(f"Checked {len(results)} trips with {distance_matrix.calls} Distance Matrix calls.", file=sys.stderr)
    return [r.model_dump(by_alias=True) for r in results]


def main() -> None:
    parser = argparse.ArgumentParser(description="Check shared-ride match viability for many trips")
    parser.add_argument("--input", required=True, help="JSON file with trip groups")
    parser.add_argument(
        "--threshold",
        type=int,
        help="Request-wide detour threshold in seconds; per-group thresholds in the file still win",
    )

    args = parser.parse_args()

    try:
        request = _load_request(args.input, args.threshold)
    except (OSError, json.JSONDecodeError, SchemaError) as e:
        print(f"Could not read {args.input}: {e}", file=sys.stderr)
        raise SystemExit(1)

    try:
        results = asyncio.run(_run(request))
    except DetourRankerError as e:
        print(f"Calendar check failed: {e.message}", file=sys.stderr)
        raise SystemExit(1)

    print(json.dumps({"success": True, "results": results}, indent=2))


if __name__ == "__main__":
    main()
