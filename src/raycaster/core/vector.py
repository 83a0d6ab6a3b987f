"""Immutable 3D vector arithmetic for the ray caster.

This module provides the Vector3 value type used for both points and
directions throughout the renderer. Vectors are frozen dataclasses of three
floats; every operation returns a new vector.

Equality is approximate: two vectors compare equal when every component
differs by at most EPSILON. This absorbs floating-point error in tests and
is never used to branch during rendering.

Example:
    >>> a = Vector3(1.0, 0.0, 0.0)
    >>> b = Vector3(0.0, 1.0, 0.0)
    >>> a.cross(b)
    Vector3(x=0.0, y=0.0, z=1.0)
    >>> (a + b).normalized().norm()
    1.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.raycaster.core.errors import DegenerateGeometryError

# Tolerance for approximate vector equality
EPSILON = 1e-6


@dataclass(frozen=True, eq=False)
class Vector3:
    """A vector (or point) in 3D space.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def add(self, other: Vector3) -> Vector3:
        """Return the componentwise sum self + other."""
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vector3) -> Vector3:
        """Return the componentwise difference self - other."""
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def negate(self) -> Vector3:
        """Return the vector pointing the opposite way."""
        return Vector3(-self.x, -self.y, -self.z)

    def scale(self, s: float) -> Vector3:
        """Return this vector multiplied by the scalar s."""
        return Vector3(self.x * s, self.y * s, self.z * s)

    def dot(self, other: Vector3) -> float:
        """Compute the dot product of two vectors.

        Args:
            other: Second vector.

        Returns:
            The dot product self . other.
        """
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        """Compute the right-handed cross product self x other.

        Args:
            other: Second vector.

        Returns:
            A vector perpendicular to both inputs.
        """
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        """Compute the Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Vector3:
        """Normalize the vector to unit length.

        Returns:
            A unit vector in the same direction as this one.

        Raises:
            DegenerateGeometryError: If the vector has zero length or a
                non-finite component, since it has no direction.
        """
        length = self.norm()
        if length == 0.0 or not math.isfinite(length):
            raise DegenerateGeometryError(f"Cannot normalize vector {self!r}")
        return Vector3(self.x / length, self.y / length, self.z / length)

    def cos_angle(self, other: Vector3) -> float:
        """Compute the cosine of the angle between two vectors.

        Raises:
            DegenerateGeometryError: If either vector has zero length.
        """
        denominator = self.norm() * other.norm()
        if denominator == 0.0:
            raise DegenerateGeometryError("Angle with a zero-length vector is undefined")
        return self.dot(other) / denominator

    def to_array(self) -> npt.NDArray[np.float64]:
        """Return the components as a NumPy array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain (x, y, z) tuple."""
        return (self.x, self.y, self.z)

    @classmethod
    def of(cls, value: Vector3 | tuple[float, float, float]) -> Vector3:
        """Coerce a Vector3 or an (x, y, z) sequence into a Vector3."""
        if isinstance(value, Vector3):
            return value
        x, y, z = value
        return cls(float(x), float(y), float(z))

    # =========================================================================
    # Operators
    # =========================================================================

    def __add__(self, other: Vector3) -> Vector3:
        return self.add(other)

    def __sub__(self, other: Vector3) -> Vector3:
        return self.sub(other)

    def __neg__(self) -> Vector3:
        return self.negate()

    def __mul__(self, s: float) -> Vector3:
        return self.scale(s)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return (
            abs(self.x - other.x) <= EPSILON
            and abs(self.y - other.y) <= EPSILON
            and abs(self.z - other.z) <= EPSILON
        )

    # Approximate equality cannot be made consistent with hashing
    __hash__ = None  # type: ignore[assignment]


# Points and vectors share one representation
Point3D = Vector3

ORIGIN = Vector3(0.0, 0.0, 0.0)
