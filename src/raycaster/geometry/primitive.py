"""Primitive interface, materials, and intersection records.

Every renderable object implements the Primitive interface: given a ray it
returns the nearest forward Intersection, or None. The closest-hit resolver
and the shading engine only ever talk to this interface, so new primitive
kinds can be added without touching either of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.raycaster.core.ray import Ray
from src.raycaster.core.vector import Point3D, Vector3


@dataclass(frozen=True)
class Material:
    """Phong reflectance coefficients of a surface.

    Attributes:
        kd: Diffuse coefficients per channel as (R, G, B).
        kr: Specular (reflective) coefficients per channel as (R, G, B).
        shininess: Specular exponent; larger values give tighter highlights.
    """

    kd: tuple[float, float, float]
    kr: tuple[float, float, float]
    shininess: float

    def __post_init__(self) -> None:
        if len(self.kd) != 3 or len(self.kr) != 3:
            raise ValueError("Material coefficients must have exactly 3 channels")
        object.__setattr__(self, "kd", tuple(float(k) for k in self.kd))
        object.__setattr__(self, "kr", tuple(float(k) for k in self.kr))


@dataclass(frozen=True)
class Intersection:
    """Record of a ray-primitive intersection.

    Attributes:
        point: The 3D point where the ray hit the surface.
        distance: Distance from the ray origin to point along the ray.
            Always non-negative.
        outer: True if the ray origin lies outside the primitive, False if
            the ray started inside it.
        normal: Unit surface normal at point, as reported by the primitive.
            Spheres report the point-to-center direction.
        material: Reflectance coefficients of the primitive that was hit.
    """

    point: Point3D
    distance: float
    outer: bool
    normal: Vector3
    material: Material

    @property
    def kd(self) -> tuple[float, float, float]:
        """Diffuse coefficients of the hit surface."""
        return self.material.kd

    @property
    def kr(self) -> tuple[float, float, float]:
        """Specular coefficients of the hit surface."""
        return self.material.kr

    @property
    def shininess(self) -> float:
        """Specular exponent of the hit surface."""
        return self.material.shininess


class Primitive(ABC):
    """A geometric object that rays can intersect."""

    @abstractmethod
    def closest_intersection(self, ray: Ray) -> Intersection | None:
        """Find the nearest forward intersection of ray with this primitive.

        Args:
            ray: The ray to test. Its direction is unit length.

        Returns:
            The nearest Intersection with non-negative distance, or None if
            the ray misses.
        """
