"""
Application Use Cases

Business logic orchestration for the bathymetric contour service.
Each use case represents a single user action.
"""

import logging
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from shapely.geometry import LineString, mapping
from starlette.concurrency import run_in_threadpool

from src.domain.entities import ContourRegenerationReport, GenerationResult, LayerType
from src.domain.services.contour_engine import ContourOrchestrator
from src.domain.value_objects import ContourSettings

logger = logging.getLogger(__name__)


class SurveySamplesNotFound(LookupError):
    """No sampling points are stored for a survey."""

    def __init__(self, survey_id: str):
        self.survey_id = survey_id
        super().__init__(f"No sampling points found for survey: {survey_id}")


class ContourPersistenceError(Exception):
    """A single contour line could not be stored."""

    def __init__(self, depth: float, cause: BaseException | None = None):
        self.depth = depth
        self.cause = cause
        super().__init__(f"Failed to insert contour line at depth={depth}: {cause}")


# =============================================================================
# Repository Interfaces (Ports)
# =============================================================================

class SampleSource(Protocol):
    """Port for reading survey sampling points."""

    async def fetch_samples(self, survey_id: str, user_id: str) -> list[dict[str, Any]]: ...


class ContourRepository(Protocol):
    """Port for contour line persistence."""

    async def delete_for_survey(self, survey_id: str, user_id: str) -> int: ...
    async def insert_contour_line(
        self,
        geometry: dict[str, Any],
        depth: float,
        metadata: dict[str, Any],
        survey_id: str,
        user_id: str,
    ) -> UUID: ...


# =============================================================================
# Use Cases
# =============================================================================

class RegenerateSurveyContours:
    """
    Use case: Regenerate and store the contour lines of one survey.

    The delete of old lines and the inserts of new ones share the caller's
    transaction, so readers never see a survey without contours. A failed
    insert is recorded and the remaining lines are still written.
    """

    def __init__(
        self,
        sample_source: SampleSource,
        contour_repo: ContourRepository,
        settings: ContourSettings | None = None,
    ):
        self.sample_source = sample_source
        self.contour_repo = contour_repo
        self.settings = settings or ContourSettings()

    async def execute(
        self,
        survey_id: str,
        user_id: str,
        interval: float | None = None,
        grid_resolution: int | None = None,
    ) -> ContourRegenerationReport:
        """
        Regenerate contours for a survey.

        Args:
            survey_id: Survey whose sampling points are contoured
            user_id: Owner of the survey
            interval: Optional contour interval override (clamped)
            grid_resolution: Optional grid resolution override (clamped)

        Returns:
            ContourRegenerationReport with insert counts and failed depths
        """
        samples = await self.sample_source.fetch_samples(survey_id, user_id)
        if not samples:
            raise SurveySamplesNotFound(survey_id)

        settings = self.settings.with_overrides(
            interval=interval,
            grid_resolution=grid_resolution,
        )
        orchestrator = ContourOrchestrator(settings)

        # CPU-bound; keep it off the event loop
        result = await run_in_threadpool(orchestrator.generate, samples)

        report = ContourRegenerationReport(survey_id=survey_id, result=result)
        report.deleted = await self.contour_repo.delete_for_survey(survey_id, user_id)
        await self._store_lines(report, result, survey_id, user_id)

        logger.info(
            f"Stored {report.inserted} contour lines for survey {survey_id}"
            f"{' (fallback)' if result.used_fallback else ''}"
        )
        return report

    async def _store_lines(
        self,
        report: ContourRegenerationReport,
        result: GenerationResult,
        survey_id: str,
        user_id: str,
    ) -> None:
        generated_at = datetime.utcnow().isoformat()

        for feature in result.features:
            metadata = {
                "layerType": LayerType.CONTOUR.value,
                "survey_id": survey_id,
                "user_id": user_id,
                "generated_at": generated_at,
                "depth": feature.level,
                **result.parameters,
            }
            for ring in feature.rings:
                geometry = mapping(LineString(ring))
                try:
                    await self.contour_repo.insert_contour_line(
                        geometry, feature.level, metadata, survey_id, user_id
                    )
                except ContourPersistenceError as e:
                    logger.error(f"Failed to insert contour line depth={feature.level}: {e.cause}")
                    if feature.level not in report.failed_depths:
                        report.failed_depths.append(feature.level)
                    continue
                report.inserted += 1
