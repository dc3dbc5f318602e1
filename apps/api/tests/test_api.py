"""
API Tests - Contour endpoint with in-memory repositories
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.api.dependencies import get_regenerate_contours
from src.application.use_cases import RegenerateSurveyContours
from src.domain.errors import ContourGenerationFailed
from src.domain.value_objects import ContourSettings
from src.main import app
from tests.fakes import (
    HOMOGENEOUS_SAMPLES,
    SAMPLES,
    InMemoryContourRepository,
    InMemorySampleSource,
)


SURVEYS = {
    "river-a": SAMPLES,
    "flat": HOMOGENEOUS_SAMPLES,
    "sparse": SAMPLES[:2],
}


class FailingUseCase:
    async def execute(self, **kwargs):
        raise ContourGenerationFailed("grid exploded", cause=RuntimeError("grid exploded"))


@pytest.fixture
def repo():
    return InMemoryContourRepository(existing=2)


@pytest.fixture
def test_client(repo):
    """Create test client with in-memory repositories."""
    app.dependency_overrides[get_regenerate_contours] = lambda: RegenerateSurveyContours(
        InMemorySampleSource(SURVEYS), repo, ContourSettings()
    )
    yield AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health_check(test_client):
    """Test health endpoint."""
    async with test_client as client:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data


@pytest.mark.asyncio
async def test_root_endpoint(test_client):
    """Test root endpoint."""
    async with test_client as client:
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["name"] == "Bathymetric Contour API"


@pytest.mark.asyncio
async def test_openapi_docs(test_client):
    """Test OpenAPI docs are available."""
    async with test_client as client:
        response = await client.get("/openapi.json")
        assert response.status_code == 200
        data = response.json()
        assert "/api/v1/contours/generate" in data["paths"]


class TestGenerateContours:
    """Contour generation endpoint tests."""

    @pytest.mark.asyncio
    async def test_generate(self, test_client, repo):
        async with test_client as client:
            response = await client.post(
                "/api/v1/contours/generate",
                json={"survey_id": "river-a", "user_id": "u1", "interval": 1.0},
            )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Contours generated"
        assert data["used_fallback"] is False
        assert data["levels"] == [-3.0, -2.0, -1.0]
        assert data["point_count"] == 3
        assert data["deleted"] == 2
        assert data["inserted"] == len(repo.inserted)
        assert data["inserted"] > 0
        assert data["warning"] is None

    @pytest.mark.asyncio
    async def test_homogeneous_survey_uses_fallback(self, test_client):
        async with test_client as client:
            response = await client.post(
                "/api/v1/contours/generate",
                json={"survey_id": "flat", "user_id": "u1"},
            )
        assert response.status_code == 200
        data = response.json()
        assert data["used_fallback"] is True
        assert data["inserted"] == 1
        assert "fallback" in data["message"]
        assert data["warning"] is not None
        assert data["parameters"]["type"] == "fallback_manual"

    @pytest.mark.asyncio
    async def test_lenient_parameters(self, test_client):
        async with test_client as client:
            response = await client.post(
                "/api/v1/contours/generate",
                json={
                    "survey_id": "river-a",
                    "user_id": 7,
                    "interval": "abc",
                    "gridResolution": "5000",
                },
            )
        assert response.status_code == 200
        assert response.json()["parameters"]["gridResolution"] == 300

    @pytest.mark.asyncio
    async def test_unknown_survey(self, test_client):
        async with test_client as client:
            response = await client.post(
                "/api/v1/contours/generate",
                json={"survey_id": "missing", "user_id": "u1"},
            )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_insufficient_samples(self, test_client):
        async with test_client as client:
            response = await client.post(
                "/api/v1/contours/generate",
                json={"survey_id": "sparse", "user_id": "u1"},
            )
        assert response.status_code == 400
        assert "At least 3" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_missing_survey_id(self, test_client):
        async with test_client as client:
            response = await client.post(
                "/api/v1/contours/generate",
                json={"user_id": "u1"},
            )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_internal_failure(self, test_client):
        app.dependency_overrides[get_regenerate_contours] = lambda: FailingUseCase()
        async with test_client as client:
            response = await client.post(
                "/api/v1/contours/generate",
                json={"survey_id": "river-a", "user_id": "u1"},
            )
        assert response.status_code == 500
        assert "grid exploded" in response.json()["detail"]
