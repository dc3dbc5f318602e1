"""
Domain Errors

Failure taxonomy for the bathymetric contour engine.
"""


class ContourEngineError(Exception):
    """Base class for all contour engine failures."""


class SampleValidationError(ContourEngineError, ValueError):
    """Input samples cannot be contoured. User-correctable."""


class InsufficientSamples(SampleValidationError):
    """Fewer than the minimum number of finite samples remain."""

    def __init__(self, count: int, minimum: int = 3):
        self.count = count
        self.minimum = minimum
        super().__init__(
            f"At least {minimum} sampling points are required to generate contours "
            f"(got {count})"
        )


class NoFiniteDepths(SampleValidationError):
    """Every depth value in a non-empty sample list is non-finite."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"All {count} depth values are invalid (NaN/Infinity)")


class InvalidCoordinate(SampleValidationError):
    """A sample coordinate could not be converted to a finite number."""

    def __init__(self, field: str, value: object, index: int | None = None):
        self.field = field
        self.value = value
        self.index = index
        where = f" at sample {index}" if index is not None else ""
        super().__init__(f"Invalid {field} coordinate{where}: {value!r}")


class ContourGenerationFailed(ContourEngineError):
    """Unexpected internal failure while building or tracing the grid."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class FallbackImpossible(ContourEngineError):
    """The fallback ring cannot be built (no samples or no centroid)."""
