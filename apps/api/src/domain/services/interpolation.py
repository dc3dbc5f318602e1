"""
Grid Interpolation Service

Builds a regular depth grid from scattered soundings using inverse-distance
weighting (IDW).
"""

from dataclasses import dataclass
import logging

import numpy as np

from src.domain.entities import SampleSet
from src.domain.value_objects import BoundingBox

logger = logging.getLogger(__name__)


@dataclass
class DepthGrid:
    """Interpolated depth surface; values[row, col], row along y, col along x."""
    values: np.ndarray
    bbox: BoundingBox

    @property
    def width(self) -> int:
        return self.values.shape[1]

    @property
    def height(self) -> int:
        return self.values.shape[0]

    def node_to_world(self, col: float, row: float) -> tuple[float, float]:
        return self.bbox.grid_to_world(col, row, self.width, self.height)


class GridInterpolator:
    """
    Inverse-distance-weighted interpolation onto a regular grid.

    The grid spans the tight bounding box of the samples, both edges
    included. A node closer than `epsilon` to a sample takes that
    sample's depth exactly.
    """

    def __init__(self, power: float = 2.0, epsilon: float = 1e-8):
        self.power = power
        self.epsilon = epsilon

    def interpolate(self, sample_set: SampleSet, width: int, height: int) -> DepthGrid:
        """
        Interpolate sample depths onto a width x height grid.

        Args:
            sample_set: Validated samples
            width: Number of grid columns (x direction)
            height: Number of grid rows (y direction)

        Returns:
            DepthGrid covering the samples' bounding box
        """
        bbox = sample_set.bounding_box
        xs = np.asarray(sample_set.xs, dtype=np.float64)
        ys = np.asarray(sample_set.ys, dtype=np.float64)
        zs = np.asarray(sample_set.depths, dtype=np.float64)

        logger.debug(f"Interpolating {len(zs)} samples onto {width}x{height} grid")

        node_xs = self._axis(bbox.min_x, bbox.max_x, width)
        node_ys = self._axis(bbox.min_y, bbox.max_y, height)

        values = np.empty((height, width), dtype=np.float64)
        for row, node_y in enumerate(node_ys):
            values[row, :] = self._interpolate_row(node_xs, node_y, xs, ys, zs)

        return DepthGrid(values=values, bbox=bbox)

    def value_at(self, x: float, y: float, sample_set: SampleSet) -> float:
        """IDW estimate at a single location."""
        xs = np.asarray(sample_set.xs, dtype=np.float64)
        ys = np.asarray(sample_set.ys, dtype=np.float64)
        zs = np.asarray(sample_set.depths, dtype=np.float64)
        return float(self._interpolate_row(np.array([x], dtype=np.float64), y, xs, ys, zs)[0])

    def _axis(self, lo: float, hi: float, count: int) -> np.ndarray:
        if count == 1:
            return np.array([lo], dtype=np.float64)
        index = np.arange(count, dtype=np.float64)
        return lo + (hi - lo) * index / (count - 1)

    def _interpolate_row(
        self,
        node_xs: np.ndarray,
        node_y: float,
        xs: np.ndarray,
        ys: np.ndarray,
        zs: np.ndarray,
    ) -> np.ndarray:
        if len(zs) == 0:
            return np.zeros(len(node_xs), dtype=np.float64)

        dx = node_xs[:, None] - xs[None, :]
        dy = node_y - ys[None, :]
        dist = np.sqrt(dx * dx + dy * dy)

        coincident = dist < self.epsilon
        safe_dist = np.where(coincident, 1.0, dist)
        weights = np.where(coincident, 0.0, 1.0 / safe_dist ** self.power)

        weight_sum = weights.sum(axis=1)
        weighted = (weights * zs[None, :]).sum(axis=1)

        result = np.zeros(len(node_xs), dtype=np.float64)
        positive = weight_sum > 0
        result[positive] = weighted[positive] / weight_sum[positive]
        # IDW is a convex combination; clip rounding drift so a constant field stays exact
        result[positive] = np.clip(result[positive], zs.min(), zs.max())

        # Exact hits win, first sample in input order
        hit = coincident.any(axis=1)
        if hit.any():
            first = coincident.argmax(axis=1)
            result[hit] = zs[first[hit]]

        return result
