"""
Use Case Tests - contour regeneration with in-memory repositories
"""

import pytest

from src.application.use_cases import RegenerateSurveyContours, SurveySamplesNotFound
from src.domain.errors import InsufficientSamples
from src.domain.value_objects import ContourSettings
from tests.fakes import (
    HOMOGENEOUS_SAMPLES,
    SAMPLES,
    InMemoryContourRepository,
    InMemorySampleSource,
)


def make_use_case(samples=None, repo=None) -> tuple[RegenerateSurveyContours, InMemoryContourRepository]:
    repo = repo or InMemoryContourRepository()
    source = InMemorySampleSource({"survey-1": SAMPLES if samples is None else samples})
    return RegenerateSurveyContours(source, repo, ContourSettings()), repo


class TestRegenerateSurveyContours:
    """Tests for the contour regeneration use case."""

    @pytest.mark.asyncio
    async def test_replaces_contours(self):
        use_case, repo = make_use_case(repo=InMemoryContourRepository(existing=4))

        report = await use_case.execute("survey-1", "user-1")

        assert report.deleted == 4
        assert report.inserted == report.result.total_lines
        assert report.inserted == len(repo.inserted)
        assert report.failed_depths == []
        assert repo.calls[0] == "delete"
        assert all(call == "insert" for call in repo.calls[1:])

    @pytest.mark.asyncio
    async def test_line_geometry_and_metadata(self):
        use_case, repo = make_use_case()

        await use_case.execute("survey-1", "user-1")

        line = repo.inserted[0]
        assert line["geometry"]["type"] == "LineString"
        assert len(line["geometry"]["coordinates"]) >= 2
        assert line["survey_id"] == "survey-1"
        metadata = line["metadata"]
        assert metadata["layerType"] == "kontur_batimetri"
        assert metadata["survey_id"] == "survey-1"
        assert metadata["user_id"] == "user-1"
        assert metadata["depth"] == line["depth"]
        assert metadata["type"] == "variable"
        assert "generated_at" in metadata

    @pytest.mark.asyncio
    async def test_no_samples_for_survey(self):
        use_case, _ = make_use_case(samples=[])

        with pytest.raises(SurveySamplesNotFound):
            await use_case.execute("survey-1", "user-1")

    @pytest.mark.asyncio
    async def test_validation_error_propagates(self):
        use_case, repo = make_use_case(samples=SAMPLES[:2])

        with pytest.raises(InsufficientSamples):
            await use_case.execute("survey-1", "user-1")

        assert repo.calls == []

    @pytest.mark.asyncio
    async def test_failed_insert_does_not_abort_others(self):
        repo = InMemoryContourRepository(failing_depths=(-2.0,))
        use_case, _ = make_use_case(repo=repo)

        report = await use_case.execute("survey-1", "user-1", interval=0.5)

        failed_lines = next(f for f in report.result.features if f.level == -2.0).line_count
        assert failed_lines > 0
        assert report.failed_depths == [-2.0]
        assert report.partial is True
        assert report.inserted == report.result.total_lines - failed_lines
        assert report.inserted > 0
        assert all(line["depth"] != -2.0 for line in repo.inserted)

    @pytest.mark.asyncio
    async def test_fallback_ring_stored_as_line(self):
        use_case, repo = make_use_case(samples=HOMOGENEOUS_SAMPLES)

        report = await use_case.execute("survey-1", "user-1")

        assert report.result.used_fallback is True
        assert report.inserted == 1
        geometry = repo.inserted[0]["geometry"]
        assert geometry["type"] == "LineString"
        assert len(geometry["coordinates"]) == 17
        assert repo.inserted[0]["metadata"]["type"] == "fallback_manual"
        assert repo.inserted[0]["depth"] == -4.2

    @pytest.mark.asyncio
    async def test_request_overrides_clamped(self):
        use_case, _ = make_use_case()

        report = await use_case.execute("survey-1", "user-1", grid_resolution=1000)

        assert report.result.parameters["gridResolution"] == 300
