"""
Contour Engine

Top-level entry point turning raw soundings into a GenerationResult.
"""

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from src.domain.entities import (
    GenerationResult,
    LevelMode,
    LevelSet,
    Sample,
    SampleSet,
)
from src.domain.errors import (
    ContourGenerationFailed,
    FallbackImpossible,
    SampleValidationError,
)
from src.domain.services.contour_generation import ContourExtractor
from src.domain.services.fallback import FallbackContourBuilder
from src.domain.services.interpolation import GridInterpolator
from src.domain.services.level_selection import LevelSelector
from src.domain.services.sample_validation import build_sample_set
from src.domain.value_objects import ContourSettings

logger = logging.getLogger(__name__)


class ContourOrchestrator:
    """
    Runs the full contouring pipeline for one survey.

    validate -> select levels -> IDW grid -> marching squares -> fallback
    when no line was traced. Pure and synchronous; every call allocates its
    own grid, so one instance can serve concurrent invocations.
    """

    def __init__(self, settings: ContourSettings | None = None):
        self.settings = settings or ContourSettings()
        self.level_selector = LevelSelector(self.settings)
        self.interpolator = GridInterpolator(
            power=self.settings.idw_power,
            epsilon=self.settings.coincidence_epsilon,
        )
        self.extractor = ContourExtractor(
            max_abs_x=self.settings.max_abs_x,
            max_abs_y=self.settings.max_abs_y,
        )
        self.fallback_builder = FallbackContourBuilder(
            segments=self.settings.fallback_segments,
        )

    def generate(self, raw_samples: Iterable[Mapping[str, Any] | Sample]) -> GenerationResult:
        """
        Generate contours from raw samples.

        Raises:
            SampleValidationError: input cannot be contoured (propagated as is)
            ContourGenerationFailed: unexpected internal failure
        """
        try:
            sample_set = build_sample_set(raw_samples, min_samples=self.settings.min_samples)
            return self._generate(sample_set)
        except SampleValidationError:
            raise
        except FallbackImpossible as e:
            raise ContourGenerationFailed(f"Fallback contour failed: {e}", cause=e) from e
        except Exception as e:
            logger.exception("Contour generation failed")
            raise ContourGenerationFailed(f"Contour generation failed: {e}", cause=e) from e

    def _generate(self, sample_set: SampleSet) -> GenerationResult:
        resolution = self.settings.grid_resolution
        levels = self.level_selector.select(sample_set)

        grid = self.interpolator.interpolate(sample_set, width=resolution, height=resolution)
        features = self.extractor.extract(grid, levels)
        total_lines = sum(f.line_count for f in features)

        if total_lines > 0:
            logger.info(f"Generated {total_lines} contour lines over {len(levels)} levels")
            return GenerationResult(
                features=tuple(features),
                used_fallback=False,
                levels_used=levels,
                point_count=len(sample_set),
                parameters=self._parameters(sample_set, levels, resolution),
            )

        logger.warning("No contour lines traced, using fallback ring")
        depth = self._fallback_depth(sample_set, levels)
        ring = self.fallback_builder.build(sample_set, depth)
        return GenerationResult(
            features=(ring,),
            used_fallback=True,
            levels_used=LevelSet(levels=(depth,), mode=LevelMode.FALLBACK),
            point_count=len(sample_set),
            parameters={
                "type": "fallback_manual",
                "depth": depth,
                "gridResolution": resolution,
                "pointCount": len(sample_set),
            },
        )

    def _fallback_depth(self, sample_set: SampleSet, levels: LevelSet) -> float:
        if levels.is_homogeneous:
            return round(levels.levels[0], self.settings.level_decimals) + 0.0
        min_z, max_z = sample_set.depth_range
        return round((min_z + max_z) / 2, self.settings.level_decimals) + 0.0

    def _parameters(
        self, sample_set: SampleSet, levels: LevelSet, resolution: int
    ) -> dict[str, Any]:
        if levels.is_homogeneous:
            return {
                "type": "homogeneous",
                "depth": levels.levels[0],
                "gridResolution": resolution,
                "pointCount": len(sample_set),
            }
        min_z, max_z = sample_set.depth_range
        return {
            "type": "variable",
            "levels": list(levels.levels),
            "gridResolution": resolution,
            "depthRange": [min_z, max_z],
            "pointCount": len(sample_set),
        }


def generate_survey_contours(
    raw_samples: Iterable[Mapping[str, Any] | Sample],
    interval: float = 1.0,
    grid_resolution: int = 100,
) -> GenerationResult:
    """
    Convenience function to contour a list of soundings.

    Interval and grid resolution are clamped to their allowed ranges.
    """
    settings = ContourSettings(interval=interval, grid_resolution=grid_resolution)
    return ContourOrchestrator(settings).generate(raw_samples)
