"""
Level Selection Service

Chooses the depth thresholds to contour at and detects homogeneous input.
"""

import logging
import math

from src.domain.entities import LevelMode, LevelSet, SampleSet
from src.domain.value_objects import ContourSettings

logger = logging.getLogger(__name__)


class LevelSelector:
    """
    Picks contour levels from sample depth statistics.

    A survey whose depths are all equal once rounded to
    `homogeneity_decimals` is homogeneous and contoured at that single
    depth. Otherwise levels are stepped at `interval` across the depth
    range, padded by a buffer and then clipped to just outside the
    observed range.
    """

    def __init__(self, settings: ContourSettings | None = None):
        self.settings = settings or ContourSettings()

    def unique_depths(self, depths: list[float]) -> list[float]:
        """Distinct depths after rounding, in first-seen order."""
        seen: dict[float, None] = {}
        for depth in depths:
            seen.setdefault(round(depth, self.settings.homogeneity_decimals) + 0.0, None)
        return list(seen)

    def select(self, sample_set: SampleSet) -> LevelSet:
        return self.select_for_depths(sample_set.depths)

    def select_for_depths(self, depths: list[float]) -> LevelSet:
        if not depths:
            raise ValueError("Cannot select levels without depths")

        unique = self.unique_depths(depths)
        if len(unique) == 1:
            logger.info(f"Homogeneous depths detected: all samples = {unique[0]} m")
            return LevelSet(levels=(unique[0],), mode=LevelMode.HOMOGENEOUS)

        min_z = min(depths)
        max_z = max(depths)
        levels = self._stepped_levels(min_z, max_z)

        if not levels:
            levels = [self._round_level((min_z + max_z) / 2)]

        logger.info(f"Depth range {min_z:.2f} -> {max_z:.2f} m, levels: {levels}")
        return LevelSet(levels=tuple(levels), mode=LevelMode.VARIABLE)

    def _stepped_levels(self, min_z: float, max_z: float) -> list[float]:
        interval = self.settings.interval
        buffer = max(interval / 2, self.settings.min_level_buffer)
        margin = self.settings.level_clip_margin

        start = math.floor((min_z - buffer) / interval) * interval
        stop = max_z + buffer
        lower = min_z - margin
        upper = max_z + margin

        levels: list[float] = []
        step = 0
        current = start
        while current <= stop:
            level = self._round_level(current)
            if lower <= level <= upper and (not levels or level > levels[-1]):
                levels.append(level)
            step += 1
            current = start + step * interval
        return levels

    def _round_level(self, value: float) -> float:
        # + 0.0 normalizes -0.0
        return round(value, self.settings.level_decimals) + 0.0
