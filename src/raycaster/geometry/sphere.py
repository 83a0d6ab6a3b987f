"""Sphere primitive with analytic ray-sphere intersection.

This module provides the Sphere primitive. Because ray directions are always
unit length, the intersection reduces to a quadratic with a unit leading
coefficient:

    t^2 + b*t + c = 0

where:
    b = 2 * dot(direction, origin - center)
    c = |origin - center|^2 - radius^2

The discriminant b^2 - 4c decides whether real roots exist. Of the two roots
d1 >= d2, the nearest forward one is reported:

    d2 >= 0           both roots ahead: d2 is the entry point, outer hit
    d1 >= 0 > d2      origin inside the sphere: d1 is the exit point, inner hit
    d1 < 0            sphere is entirely behind the origin: no hit

This deliberately departs from the classic case table, which flags the
straddling case as an outer hit and reports max(d1, d2) with an inner flag
when both roots are negative. Here a hit is never behind the ray origin, so
images of scenes with spheres behind or around the eye differ from that
table's output on purpose.

Example:
    >>> from src.raycaster.core.ray import Ray
    >>> from src.raycaster.core.vector import Vector3
    >>> sphere = Sphere(Vector3(0, 0, 0), 1.0, Material((1, 1, 1), (0, 0, 0), 1))
    >>> hit = sphere.closest_intersection(
    ...     Ray.from_points(Vector3(10, 0, 0), Vector3(0, 0, 0))
    ... )
    >>> hit.distance, hit.outer
    (9.0, True)
"""

from __future__ import annotations

import math

from src.raycaster.core.errors import DegenerateGeometryError
from src.raycaster.core.ray import Ray, ray_at
from src.raycaster.core.vector import Point3D, Vector3
from src.raycaster.geometry.primitive import Intersection, Material, Primitive


def solve_sphere_quadratic(ray: Ray, center: Point3D, radius: float) -> tuple[float, float] | None:
    """Solve the ray-sphere quadratic for a unit-length ray direction.

    Args:
        ray: The ray to test.
        center: Sphere center.
        radius: Sphere radius.

    Returns:
        The roots (d1, d2) with d1 >= d2, or None if the discriminant is
        negative.
    """
    oc = ray.origin.sub(center)
    b = 2.0 * ray.direction.dot(oc)
    c = oc.dot(oc) - radius * radius
    discriminant = b * b - 4.0 * c

    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    return (-b + sqrt_d) / 2.0, (-b - sqrt_d) / 2.0


class Sphere(Primitive):
    """A sphere defined by center point, radius, and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: Diffuse/specular coefficients and shininess.
    """

    __slots__ = ("_center", "_radius", "_material")

    def __init__(self, center: Point3D, radius: float, material: Material) -> None:
        """Create a sphere.

        Raises:
            DegenerateGeometryError: If radius is not a positive finite number.
        """
        if not math.isfinite(radius) or radius <= 0.0:
            raise DegenerateGeometryError(f"Sphere radius must be positive, got {radius}")
        self._center = Vector3.of(center)
        self._radius = float(radius)
        self._material = material

    @property
    def center(self) -> Point3D:
        return self._center

    @property
    def radius(self) -> float:
        return self._radius

    @property
    def material(self) -> Material:
        return self._material

    def closest_intersection(self, ray: Ray) -> Intersection | None:
        """Test for ray-sphere intersection.

        Args:
            ray: The ray to test (unit direction).

        Returns:
            An Intersection at the nearest forward root, or None if the ray
            misses or the sphere lies entirely behind the ray origin.
        """
        roots = solve_sphere_quadratic(ray, self._center, self._radius)
        if roots is None:
            return None
        d1, d2 = roots

        if d2 >= 0.0:
            distance = d2
            outer = True
        elif d1 >= 0.0:
            # Origin is inside: the only forward root is the exit point
            distance = d1
            outer = False
        else:
            return None

        point = ray_at(ray, distance)
        # Point-to-center direction; shading flips it to face outward
        normal = self._center.sub(point).normalized()

        return Intersection(
            point=point,
            distance=distance,
            outer=outer,
            normal=normal,
            material=self._material,
        )

    def __repr__(self) -> str:
        return f"Sphere(center={self._center!r}, radius={self._radius}, material={self._material!r})"
