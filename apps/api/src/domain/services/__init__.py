"""
Domain Services Package

Contouring services for bathymetric survey soundings.
"""

from .sample_validation import build_sample_set
from .level_selection import LevelSelector
from .interpolation import DepthGrid, GridInterpolator
from .contour_generation import ContourExtractor
from .fallback import FallbackContourBuilder
from .contour_engine import ContourOrchestrator, generate_survey_contours

__all__ = [
    "build_sample_set",
    "LevelSelector",
    "DepthGrid",
    "GridInterpolator",
    "ContourExtractor",
    "FallbackContourBuilder",
    "ContourOrchestrator",
    "generate_survey_contours",
]
