from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from detour_ranker.api.deps import get_distance_matrix_service, get_settings
from detour_ranker.core.config import Settings
from detour_ranker.main import app
from tests.utils.fakes import FakeDistanceMatrix


@pytest.fixture
def distance_matrix() -> FakeDistanceMatrix:
    return FakeDistanceMatrix()


@pytest.fixture
def test_settings() -> Settings:
    # Explicit values so a developer's .env cannot close the API key gate
    return Settings(API_KEY=None, DEFAULT_DETOUR_THRESHOLD=1800)


@pytest.fixture
def client(
    distance_matrix: FakeDistanceMatrix, test_settings: Settings
) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_distance_matrix_service] = lambda: distance_matrix
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
