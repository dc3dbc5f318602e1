"""
SQLAlchemy ORM Models

Database models for the bathymetric contour service.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime, Index, String
from sqlalchemy.dialects.postgresql import JSON, UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class SpatialFeatureModel(Base):
    """
    Spatial feature database model.

    One table holds every survey layer, told apart by `layer_type`:
    sampling points carry their depth in `metadata`, contour lines carry
    their depth and generation parameters there.
    """

    __tablename__ = "spatial_features"
    __table_args__ = (
        Index("ix_spatial_features_layer_survey", "layer_type", "survey_id", "user_id"),
    )

    id: Mapped[UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    layer_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    geometry: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)  # GeoJSON, EPSG:4326
    # "metadata" is reserved on declarative classes
    feature_metadata: Mapped[dict[str, Any]] = mapped_column("metadata", JSON, default=dict)
    survey_id: Mapped[str | None] = mapped_column(String(100), index=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
