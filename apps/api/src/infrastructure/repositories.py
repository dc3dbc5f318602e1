"""
Repository Implementations

Concrete implementations of the application repository ports.
"""

import math
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.use_cases import ContourPersistenceError
from src.domain.entities import LayerType
from src.domain.services.sample_validation import to_float
from src.infrastructure.models import SpatialFeatureModel


# Sampling point metadata keys holding the depth, in priority order
DEPTH_METADATA_KEYS = ("depth_value", "kedalaman")


def _survey_filter(survey_id: str):
    return or_(
        SpatialFeatureModel.survey_id == survey_id,
        SpatialFeatureModel.feature_metadata["survey_id"].astext == survey_id,
    )


class SQLAlchemySampleRepository:
    """Sampling point source using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_samples(self, survey_id: str, user_id: str) -> list[dict[str, Any]]:
        """Get the sampling points of a survey as {x, y, depth} records."""
        result = await self.session.execute(
            select(SpatialFeatureModel)
            .where(SpatialFeatureModel.layer_type == LayerType.SAMPLING_POINT.value)
            .where(_survey_filter(survey_id))
            .where(SpatialFeatureModel.user_id == user_id)
            .order_by(SpatialFeatureModel.created_at, SpatialFeatureModel.id)
        )
        models = result.scalars().all()
        return [self._to_sample(m) for m in models]

    def _to_sample(self, model: SpatialFeatureModel) -> dict[str, Any]:
        """Convert a point feature to a raw sample record."""
        coordinates = (model.geometry or {}).get("coordinates") or [None, None]
        x, y = (list(coordinates) + [None, None])[:2]
        return {
            "x": x,
            "y": y,
            "depth": self._depth(model.feature_metadata or {}),
        }

    def _depth(self, metadata: dict[str, Any]) -> float:
        for key in DEPTH_METADATA_KEYS:
            value = to_float(metadata.get(key))
            if value is not None:
                return value
        # Missing depth is NaN and gets discarded downstream, never 0.0
        return math.nan


class SQLAlchemyContourRepository:
    """Contour line repository using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def delete_for_survey(self, survey_id: str, user_id: str) -> int:
        """Delete the stored contour lines of a survey."""
        result = await self.session.execute(
            delete(SpatialFeatureModel)
            .where(SpatialFeatureModel.layer_type == LayerType.CONTOUR.value)
            .where(SpatialFeatureModel.feature_metadata["survey_id"].astext == survey_id)
            .where(SpatialFeatureModel.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0

    async def insert_contour_line(
        self,
        geometry: dict[str, Any],
        depth: float,
        metadata: dict[str, Any],
        survey_id: str,
        user_id: str,
    ) -> UUID:
        """
        Insert one contour line.

        Runs in a savepoint so a failed insert leaves the surrounding
        transaction usable for the remaining lines.
        """
        now = datetime.utcnow()
        model = SpatialFeatureModel(
            id=uuid4(),
            layer_type=LayerType.CONTOUR.value,
            geometry=_jsonable(geometry),
            feature_metadata=metadata,
            survey_id=survey_id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.session.begin_nested():
                self.session.add(model)
                await self.session.flush()
        except SQLAlchemyError as e:
            raise ContourPersistenceError(depth, e) from e
        return model.id


def _jsonable(geometry: dict[str, Any]) -> dict[str, Any]:
    """Shapely mappings hold tuples; store plain lists."""
    return {
        "type": geometry["type"],
        "coordinates": [list(pt) for pt in geometry["coordinates"]],
    }
