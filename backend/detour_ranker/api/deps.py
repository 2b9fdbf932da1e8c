from collections.abc import AsyncGenerator
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status

from detour_ranker.core.config import Settings, settings
from detour_ranker.services.distance_matrix_service import DistanceMatrixService
from detour_ranker.services.matching import MatchingService


def get_settings() -> Settings:
    return settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


async def get_distance_matrix_service(
    current_settings: SettingsDep,
) -> AsyncGenerator[DistanceMatrixService, None]:
    service = DistanceMatrixService(
        api_key=current_settings.GOOGLE_MAPS_API_KEY,
        base_url=current_settings.DISTANCE_MATRIX_URL,
        timeout=current_settings.DISTANCE_MATRIX_TIMEOUT,
    )
    try:
        yield service
    finally:
        await service.close()


DistanceMatrixDep = Annotated[DistanceMatrixService, Depends(get_distance_matrix_service)]


def get_matching_service(
    distance_matrix: DistanceMatrixDep,
    current_settings: SettingsDep,
) -> MatchingService:
    return MatchingService(
        distance_matrix,
        default_detour_threshold=current_settings.DEFAULT_DETOUR_THRESHOLD,
    )


MatchingDep = Annotated[MatchingService, Depends(get_matching_service)]


def verify_api_key(
    current_settings: SettingsDep,
    x_api_key: Annotated[Optional[str], Header()] = None,
) -> None:
    """
    Require ``x-api-key`` to match the configured API_KEY.

    The gate is open when no API_KEY is configured.
    """
    if not current_settings.API_KEY:
        return
    if x_api_key != current_settings.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
