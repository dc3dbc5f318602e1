"""
Data Transfer Objects (DTOs)

Pydantic v2 models for API request/response validation.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.domain.entities import ContourRegenerationReport


# =============================================================================
# Base Models
# =============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common configuration."""
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# =============================================================================
# Contour DTOs
# =============================================================================

class ContourGenerationRequest(BaseDTO):
    """
    Request to regenerate the contours of a survey.

    Interval and grid resolution are clamped by the engine, not rejected.
    Non-numeric values fall back to the defaults.
    """
    survey_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    interval: float | None = Field(default=1.0)
    grid_resolution: int | None = Field(default=100, alias="gridResolution")

    @field_validator("survey_id", "user_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("interval", mode="before")
    @classmethod
    def lenient_interval(cls, v: Any) -> Any:
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @field_validator("grid_resolution", mode="before")
    @classmethod
    def lenient_resolution(cls, v: Any) -> Any:
        try:
            return int(float(v))
        except (TypeError, ValueError, OverflowError):
            return None


class ContourGenerationResponse(BaseDTO):
    """Result of a contour regeneration."""
    success: bool = True
    message: str
    survey_id: str
    inserted: int
    deleted: int
    failed_depths: list[float] = Field(default_factory=list)
    used_fallback: bool
    levels: list[float]
    point_count: int
    total_lines: int
    parameters: dict[str, Any]
    warning: str | None = None

    @classmethod
    def from_report(cls, report: ContourRegenerationReport) -> "ContourGenerationResponse":
        result = report.result

        if result.used_fallback:
            message = "Contours generated (using simple fallback)"
        elif result.levels_used.is_homogeneous:
            message = "Contours generated (homogeneous data)"
        else:
            message = "Contours generated"

        warnings = []
        if result.used_fallback:
            warnings.append("Insufficient depth variation, showing approximate contour")
        if report.partial:
            warnings.append(
                f"Failed to store contour lines at depths: {report.failed_depths}"
            )

        return cls(
            message=message,
            survey_id=report.survey_id,
            inserted=report.inserted,
            deleted=report.deleted,
            failed_depths=report.failed_depths,
            used_fallback=result.used_fallback,
            levels=list(result.levels_used.levels),
            point_count=result.point_count,
            total_lines=result.total_lines,
            parameters=result.parameters,
            warning="; ".join(warnings) if warnings else None,
        )


# =============================================================================
# Health
# =============================================================================

class HealthResponse(BaseDTO):
    """Health check response."""
    status: str
    version: str
    database: str
    timestamp: datetime
