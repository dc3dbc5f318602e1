"""
Domain Value Objects

Immutable value objects that represent domain concepts.
"""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    """Planar bounding box of a sample set."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, xs, ys) -> "BoundingBox":
        return cls(
            min_x=float(min(xs)),
            min_y=float(min(ys)),
            max_x=float(max(xs)),
            max_y=float(max(ys)),
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def grid_to_world(
        self, col: float, row: float, width: int, height: int
    ) -> tuple[float, float]:
        """
        Map a (possibly fractional) grid index to world coordinates.

        Column runs along x, row along y. Both extremes of the box are
        grid nodes when width and height are greater than one.
        """
        fx = col / (width - 1) if width > 1 else 0.0
        fy = row / (height - 1) if height > 1 else 0.0
        return (
            self.min_x + self.width * fx,
            self.min_y + self.height * fy,
        )


@dataclass(frozen=True)
class ContourSettings:
    """
    Tunable contouring parameters.

    Interval and grid resolution are always clamped to their bounds, so
    request values outside the allowed range are pulled back to the nearest
    bound instead of rejected. Unreadable or zero values fall back to the
    defaults 1.0 and 100.
    """
    interval: float = 1.0
    grid_resolution: int = 100
    idw_power: float = 2.0

    min_interval: float = 0.1
    max_interval: float = 10.0
    min_grid_resolution: int = 50
    max_grid_resolution: int = 300

    min_samples: int = 3
    homogeneity_decimals: int = 3
    level_decimals: int = 2
    level_clip_margin: float = 0.1
    min_level_buffer: float = 0.5

    coincidence_epsilon: float = 1e-8
    fallback_segments: int = 16

    max_abs_x: float = 180.0
    max_abs_y: float = 90.0

    def __post_init__(self):
        object.__setattr__(self, "interval", self.clamp_interval(self.interval))
        object.__setattr__(
            self, "grid_resolution", self.clamp_grid_resolution(self.grid_resolution)
        )

    def clamp_interval(self, value: Any) -> float:
        try:
            interval = float(value)
        except (TypeError, ValueError):
            interval = 1.0
        if interval != interval or interval == 0:
            interval = 1.0
        return max(self.min_interval, min(self.max_interval, interval))

    def clamp_grid_resolution(self, value: Any) -> int:
        try:
            resolution = int(value)
        except (TypeError, ValueError, OverflowError):
            resolution = 100
        if resolution == 0:
            resolution = 100
        return max(self.min_grid_resolution, min(self.max_grid_resolution, resolution))

    def with_overrides(
        self,
        interval: float | None = None,
        grid_resolution: int | None = None,
    ) -> "ContourSettings":
        """Return a copy with request overrides applied and clamped."""
        changes: dict[str, Any] = {}
        if interval is not None:
            changes["interval"] = interval
        if grid_resolution is not None:
            changes["grid_resolution"] = grid_resolution
        return replace(self, **changes) if changes else self
