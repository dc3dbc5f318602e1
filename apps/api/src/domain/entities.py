"""
Domain Entities

Core entities of the bathymetric contour engine.
These are pure Python classes with no framework dependencies and exist only
for the duration of one contouring run.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.domain.value_objects import BoundingBox


Coordinate = tuple[float, float]
Polyline = tuple[Coordinate, ...]


class LayerType(str, Enum):
    """Survey layers stored in the spatial features table."""
    SAMPLING_POINT = "valid_sampling_point"
    CONTOUR = "kontur_batimetri"


class LevelMode(str, Enum):
    """How a level set was chosen."""
    HOMOGENEOUS = "homogeneous"
    VARIABLE = "variable"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class Sample:
    """A single depth sounding."""
    x: float
    y: float
    z: float


@dataclass(frozen=True)
class SampleSet:
    """
    Validated collection of finite soundings for one survey.

    Built by `build_sample_set`; holds at least the minimum number of
    samples required for contouring.
    """
    samples: tuple[Sample, ...]
    discarded: int = 0

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    @property
    def xs(self) -> list[float]:
        return [s.x for s in self.samples]

    @property
    def ys(self) -> list[float]:
        return [s.y for s in self.samples]

    @property
    def depths(self) -> list[float]:
        return [s.z for s in self.samples]

    @property
    def depth_range(self) -> tuple[float, float]:
        depths = self.depths
        return min(depths), max(depths)

    @property
    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points(self.xs, self.ys)

    @property
    def centroid(self) -> Coordinate | None:
        if not self.samples:
            return None
        n = len(self.samples)
        return (sum(self.xs) / n, sum(self.ys) / n)


@dataclass(frozen=True)
class LevelSet:
    """Strictly increasing, non-empty sequence of contour depths."""
    levels: tuple[float, ...]
    mode: LevelMode

    def __post_init__(self):
        if not self.levels:
            raise ValueError("LevelSet requires at least one level")
        for level in self.levels:
            if not math.isfinite(level):
                raise ValueError(f"Non-finite contour level: {level}")
        for lower, upper in zip(self.levels, self.levels[1:]):
            if not lower < upper:
                raise ValueError("Contour levels must be strictly increasing")

    def __len__(self) -> int:
        return len(self.levels)

    def __iter__(self):
        return iter(self.levels)

    @property
    def is_homogeneous(self) -> bool:
        return self.mode == LevelMode.HOMOGENEOUS


@dataclass(frozen=True)
class ContourFeature:
    """All contour polylines traced at one depth level."""
    level: float
    rings: tuple[Polyline, ...] = ()

    @property
    def line_count(self) -> int:
        return len(self.rings)

    def to_geojson(self) -> dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": {
                "type": "MultiLineString",
                "coordinates": [[list(pt) for pt in ring] for ring in self.rings],
            },
            "properties": {
                "depth": self.level,
            },
        }


@dataclass(frozen=True)
class GenerationResult:
    """
    Output of one contouring run, handed to the persistence collaborator.

    `parameters` carries the generation metadata stored next to every
    contour line (mode, levels or depth, grid resolution, depth range).
    """
    features: tuple[ContourFeature, ...]
    used_fallback: bool
    levels_used: LevelSet
    point_count: int
    parameters: dict[str, Any] = field(default_factory=dict)

    @property
    def total_lines(self) -> int:
        return sum(f.line_count for f in self.features)

    def to_geojson(self) -> dict[str, Any]:
        """Convert result to a GeoJSON FeatureCollection."""
        return {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in self.features],
            "properties": {
                "used_fallback": self.used_fallback,
                "levels": list(self.levels_used.levels),
                "point_count": self.point_count,
                "total_lines": self.total_lines,
                **self.parameters,
            },
        }


@dataclass
class ContourRegenerationReport:
    """Outcome of regenerating and persisting the contours of one survey."""
    survey_id: str
    result: GenerationResult
    deleted: int = 0
    inserted: int = 0
    failed_depths: list[float] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.failed_depths)
