"""Exception hierarchy for the ray caster.

Every error raised deliberately by this package derives from RaycasterError,
so callers can catch the whole family at once. Validation errors also derive
from ValueError and render failures from RuntimeError.
"""


class RaycasterError(Exception):
    """Base class for all ray caster errors."""


class DegenerateGeometryError(RaycasterError, ValueError):
    """Raised for geometry that has no defined meaning.

    Examples are normalizing a zero-length vector, building a ray from two
    coincident points, or a sphere with a non-positive radius.
    """


class RenderConfigurationError(RaycasterError, ValueError):
    """Raised when render parameters are invalid (e.g. width <= 1)."""


class RenderError(RaycasterError, RuntimeError):
    """Raised when a render request cannot complete."""
