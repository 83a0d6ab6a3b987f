"""Ray data structure for ray casting.

A ray is an origin point plus a unit direction. The intersection routines
assume the direction has unit length, so the Ray constructor normalizes
whatever direction it is given.

Example:
    >>> from src.raycaster.core.vector import Vector3
    >>> ray = Ray.from_points(Vector3(10, 0, 0), Vector3(0, 0, 0))
    >>> ray.direction
    Vector3(x=-1.0, y=0.0, z=0.0)
    >>> ray_at(ray, 9.0)
    Vector3(x=1.0, y=0.0, z=0.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.raycaster.core.vector import Point3D, Vector3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Always unit length; a
            non-normalized direction passed in is normalized on construction.

    Raises:
        DegenerateGeometryError: If the direction has zero length.
    """

    origin: Point3D
    direction: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", self.direction.normalized())

    @classmethod
    def from_points(cls, start: Point3D, end: Point3D) -> Ray:
        """Create the ray starting at start and passing through end.

        Args:
            start: The ray origin.
            end: Any other point on the ray.

        Returns:
            A ray with origin start and direction normalize(end - start).

        Raises:
            DegenerateGeometryError: If start and end coincide.
        """
        return cls(origin=start, direction=end.sub(start))


def ray_at(ray: Ray, t: float) -> Point3D:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The distance along the ray. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin.add(ray.direction.scale(t))
