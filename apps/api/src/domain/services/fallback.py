"""
Fallback Contour Service

Synthetic circular contour used when real contouring yields no lines.
"""

import logging
import math

from src.domain.entities import ContourFeature, Coordinate, SampleSet
from src.domain.errors import FallbackImpossible

logger = logging.getLogger(__name__)


class FallbackContourBuilder:
    """
    Builds a closed ring around the sample centroid.

    The radius is the mean distance from the centroid to the samples. The
    result is an approximation, not data-driven, and callers must flag it
    as such.
    """

    def __init__(self, segments: int = 16):
        self.segments = segments

    def build(
        self,
        sample_set: SampleSet,
        depth: float,
        centroid: Coordinate | None = None,
    ) -> ContourFeature:
        """
        Args:
            sample_set: Samples the ring should enclose
            depth: Depth assigned to the ring
            centroid: Ring center; defaults to the sample centroid

        Returns:
            ContourFeature with one closed ring of segments + 1 points
        """
        if len(sample_set) == 0:
            raise FallbackImpossible("Cannot build fallback contour without samples")

        if centroid is None:
            centroid = sample_set.centroid
        if centroid is None or not all(math.isfinite(c) for c in centroid):
            raise FallbackImpossible("Cannot build fallback contour without a centroid")

        cx, cy = centroid
        radius = sum(math.hypot(s.x - cx, s.y - cy) for s in sample_set) / len(sample_set)

        ring = []
        for i in range(self.segments + 1):
            angle = i * 2 * math.pi / self.segments
            ring.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
        # Exact closure regardless of trig rounding
        ring[-1] = ring[0]

        logger.info(f"Fallback ring at depth {depth} m, radius {radius:.6f} around ({cx:.6f}, {cy:.6f})")
        return ContourFeature(level=float(depth), rings=(tuple(ring),))
