"""Geometry module for shape primitives.

This module provides geometric primitives and intersection algorithms:

Components:
    primitive: Primitive interface, Material, and Intersection records
    sphere: Sphere primitive with analytic ray-sphere intersection

Every primitive implements closest_intersection(ray), returning the nearest
forward Intersection or None. New primitive kinds only need to implement
that method to be rendered.
"""

from .primitive import Intersection, Material, Primitive
from .sphere import Sphere, solve_sphere_quadratic

__all__ = [
    "Primitive",
    "Material",
    "Intersection",
    "Sphere",
    "solve_sphere_quadratic",
]
