"""Scene-level closest-hit resolution.

This module scans every primitive of a scene for a ray and keeps the
intersection with the smallest distance. There is no acceleration structure;
the primitive list is scanned linearly in order.

The same resolver answers both primary visibility queries (eye through a
pixel) and shadow queries (light toward a surface point).

Example:
    >>> from src.raycaster.scene.intersection import intersect_scene
    >>> hit = intersect_scene(scene, ray)
    >>> if hit is not None:
    ...     print(hit.distance, hit.material)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from src.raycaster.core.ray import Ray
from src.raycaster.geometry.primitive import Intersection, Primitive

if TYPE_CHECKING:
    from src.raycaster.scene.manager import LightSource


class SceneLike(Protocol):
    """Anything exposing an ordered primitive list and light list."""

    @property
    def primitives(self) -> Sequence[Primitive]: ...

    @property
    def lights(self) -> Sequence[LightSource]: ...


def intersect_scene(scene: SceneLike, ray: Ray) -> Intersection | None:
    """Test ray against all primitives in the scene.

    Ties are broken by primitive order: a later primitive replaces the
    current best only if its distance is strictly smaller.

    Args:
        scene: The scene to test.
        ray: The ray to trace.

    Returns:
        The closest Intersection, or None if the scene is empty or nothing
        is hit.
    """
    closest: Intersection | None = None

    for primitive in scene.primitives:
        hit = primitive.closest_intersection(ray)
        if hit is None:
            continue
        if closest is None or hit.distance < closest.distance:
            closest = hit

    return closest
