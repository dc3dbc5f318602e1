"""
Contour Routes

API endpoints for bathymetric contour generation.
"""

import structlog
from fastapi import APIRouter, HTTPException, status

from src.api.dependencies import RegenerateContours
from src.application.dtos import ContourGenerationRequest, ContourGenerationResponse
from src.application.use_cases import SurveySamplesNotFound
from src.domain.errors import ContourGenerationFailed, SampleValidationError


router = APIRouter(prefix="/contours", tags=["contours"])
logger = structlog.get_logger()


@router.post("/generate", response_model=ContourGenerationResponse)
async def generate_contours(
    request: ContourGenerationRequest,
    use_case: RegenerateContours,
):
    """
    Regenerate the depth contours of a survey from its sampling points.

    Old contour lines of the survey are replaced. When the soundings are
    too uniform to contour, a single approximate ring is stored and the
    response carries a warning.
    """
    try:
        report = await use_case.execute(
            survey_id=request.survey_id,
            user_id=request.user_id,
            interval=request.interval,
            grid_resolution=request.grid_resolution,
        )
    except SurveySamplesNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except SampleValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ContourGenerationFailed as e:
        logger.error(
            "Contour generation failed",
            survey_id=request.survey_id,
            error=str(e),
            cause=repr(e.cause),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate bathymetric contours: {e}",
        )

    logger.info(
        "Contours generated",
        survey_id=request.survey_id,
        inserted=report.inserted,
        deleted=report.deleted,
        used_fallback=report.result.used_fallback,
        failed_depths=report.failed_depths,
    )
    return ContourGenerationResponse.from_report(report)
