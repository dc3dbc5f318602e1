"""
API Dependencies

Dependency injection for FastAPI routes.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.use_cases import RegenerateSurveyContours
from src.domain.value_objects import ContourSettings
from src.infrastructure.config import get_processing_config
from src.infrastructure.database import get_async_session
from src.infrastructure.repositories import (
    SQLAlchemyContourRepository,
    SQLAlchemySampleRepository,
)


async def get_db() -> AsyncSession:
    """Get database session."""
    async for session in get_async_session():
        yield session


def get_contour_settings() -> ContourSettings:
    """Contouring defaults from the processing config."""
    return get_processing_config().contour_settings


def get_regenerate_contours(
    db: Annotated[AsyncSession, Depends(get_db)],
    contour_settings: Annotated[ContourSettings, Depends(get_contour_settings)],
) -> RegenerateSurveyContours:
    """Build the contour regeneration use case on a request-scoped session."""
    return RegenerateSurveyContours(
        sample_source=SQLAlchemySampleRepository(db),
        contour_repo=SQLAlchemyContourRepository(db),
        settings=contour_settings,
    )


# Type aliases for cleaner route signatures
RegenerateContours = Annotated[RegenerateSurveyContours, Depends(get_regenerate_contours)]
