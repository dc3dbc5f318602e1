"""
Contour Extraction Service

Traces depth isolines through an interpolated grid with marching squares.
"""

import logging
import math

import numpy as np
from skimage.measure import find_contours

from src.domain.entities import ContourFeature, LevelSet, Polyline
from src.domain.services.interpolation import DepthGrid

logger = logging.getLogger(__name__)


class ContourExtractor:
    """
    Extracts contour polylines from a depth grid at each requested level.

    Uses scikit-image marching squares for tracing. Traced vertices are
    mapped from grid index space back to world coordinates with the grid's
    bounding box, then filtered: a polyline with any non-finite or
    out-of-range vertex is dropped whole, as is any polyline with fewer
    than `min_points` vertices.
    """

    def __init__(
        self,
        max_abs_x: float = 180.0,
        max_abs_y: float = 90.0,
        min_points: int = 2,
    ):
        """
        Args:
            max_abs_x: Largest accepted |x| (longitude bound)
            max_abs_y: Largest accepted |y| (latitude bound)
            min_points: Minimum vertices for a polyline to be kept
        """
        self.max_abs_x = max_abs_x
        self.max_abs_y = max_abs_y
        self.min_points = min_points

    def extract(self, grid: DepthGrid, levels: LevelSet) -> list[ContourFeature]:
        """
        Extract contours at every level.

        Returns:
            One ContourFeature per level, in level order
        """
        features = []
        dropped = 0

        for level in levels:
            raw_contours = find_contours(grid.values, level)

            rings: list[Polyline] = []
            for coords in raw_contours:
                polyline = self._to_world(grid, coords)
                if self.is_valid(polyline):
                    rings.append(polyline)
                else:
                    dropped += 1

            logger.debug(f"Level {level}: {len(rings)} lines ({len(raw_contours)} traced)")
            features.append(ContourFeature(level=float(level), rings=tuple(rings)))

        if dropped:
            logger.warning(f"Dropped {dropped} invalid contour lines")

        return features

    def is_valid(self, polyline: Polyline) -> bool:
        if len(polyline) < self.min_points:
            return False
        return all(self.is_valid_coordinate(x, y) for x, y in polyline)

    def is_valid_coordinate(self, x: float, y: float) -> bool:
        return (
            math.isfinite(x)
            and math.isfinite(y)
            and abs(x) <= self.max_abs_x
            and abs(y) <= self.max_abs_y
        )

    def _to_world(self, grid: DepthGrid, coords: np.ndarray) -> Polyline:
        world_coords = []
        for row, col in coords:
            x, y = grid.node_to_world(float(col), float(row))
            world_coords.append((x, y))
        return tuple(world_coords)
