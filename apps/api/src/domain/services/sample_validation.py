"""
Sample Validation Service

Converts raw sounding records into a validated SampleSet.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from src.domain.entities import Sample, SampleSet
from src.domain.errors import InsufficientSamples, InvalidCoordinate, NoFiniteDepths

logger = logging.getLogger(__name__)

DEPTH_KEYS = ("depth", "z")


def to_float(value: Any) -> float | None:
    """
    Convert a number or numeric string to float.

    Returns None when the value has no numeric reading. Booleans are
    rejected even though they are ints.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _coordinate(value: Any, field: str, index: int) -> float:
    number = to_float(value)
    if number is None or not math.isfinite(number):
        raise InvalidCoordinate(field, value, index)
    return number


def _depth(raw: Mapping[str, Any]) -> float:
    for key in DEPTH_KEYS:
        if key in raw:
            number = to_float(raw[key])
            return number if number is not None else math.nan
    return math.nan


def build_sample_set(raw_samples: Iterable[Mapping[str, Any] | Sample], min_samples: int = 3) -> SampleSet:
    """
    Validate raw samples and build a SampleSet.

    Args:
        raw_samples: Mappings with x, y and depth (or z), or Sample objects
        min_samples: Minimum number of finite samples required

    Returns:
        SampleSet with non-finite depths removed

    Raises:
        InvalidCoordinate: x or y is not a finite number, or a record is neither
            a mapping nor a Sample
        NoFiniteDepths: list is non-empty but no depth is finite
        InsufficientSamples: fewer than min_samples finite samples remain
    """
    samples: list[Sample] = []
    total = 0

    for index, raw in enumerate(raw_samples):
        total += 1
        if isinstance(raw, Sample):
            x = _coordinate(raw.x, "x", index)
            y = _coordinate(raw.y, "y", index)
            z = to_float(raw.z)
        elif isinstance(raw, Mapping):
            x = _coordinate(raw.get("x"), "x", index)
            y = _coordinate(raw.get("y"), "y", index)
            z = _depth(raw)
        else:
            raise InvalidCoordinate("sample", raw, index)

        if z is None or not math.isfinite(z):
            continue
        samples.append(Sample(x=x, y=y, z=z))

    discarded = total - len(samples)
    if discarded:
        logger.info(f"Discarded {discarded} of {total} samples with non-finite depth")

    if total > 0 and not samples:
        raise NoFiniteDepths(total)
    if len(samples) < min_samples:
        raise InsufficientSamples(len(samples), min_samples)

    return SampleSet(samples=tuple(samples), discarded=discarded)
