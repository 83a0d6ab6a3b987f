"""Core rendering module.

This module contains the fundamental building blocks of the ray caster:

Components:
    vector: Immutable 3D vector/point arithmetic
    ray: Ray data structure
    errors: Exception hierarchy
    config: Render configuration and shading constants
    integrator: Phong shading with shadow rays
    scheduler: Recursive fork/join row scheduler and frame buffers
    producer: Frame producer driving a full render request
"""

from .config import AMBIENT_INTENSITY, LEAF_ROWS, SHADOW_EPSILON, RenderConfig
from .errors import (
    DegenerateGeometryError,
    RaycasterError,
    RenderConfigurationError,
    RenderError,
)
from .ray import Ray, ray_at
from .vector import EPSILON, ORIGIN, Point3D, Vector3

# Note: integrator, scheduler and producer are NOT imported here to avoid circular imports.
# Import directly from src.raycaster.core.producer when needed:
#   from src.raycaster.core.producer import RayCasterProducer

__all__ = [
    "Vector3",
    "Point3D",
    "ORIGIN",
    "EPSILON",
    "Ray",
    "ray_at",
    "RenderConfig",
    "AMBIENT_INTENSITY",
    "SHADOW_EPSILON",
    "LEAF_ROWS",
    "RaycasterError",
    "DegenerateGeometryError",
    "RenderConfigurationError",
    "RenderError",
]
