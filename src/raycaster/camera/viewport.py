"""Viewport model for primary ray generation.

This module turns a look-at camera description into the screen geometry the
renderer walks pixel by pixel. The viewport is a rectangle centered on the
view point, perpendicular to the viewing direction, with a world-space size
given by the horizontal and vertical extents.

The basis is built from the view parameters:
- og: unit viewing direction, from eye toward view
- y_axis: view_up orthogonalized against og (Gram-Schmidt), pointing up on screen
- x_axis: og x y_axis, pointing right on screen

Pixel (0, 0) is the upper-left corner of the viewport and pixel
(width - 1, height - 1) the lower-right one.

Example:
    >>> from src.raycaster.camera.viewport import CameraView, setup_viewport
    >>> camera = CameraView(
    ...     eye=(10.0, 0.0, 0.0),
    ...     view=(0.0, 0.0, 0.0),
    ...     view_up=(0.0, 0.0, 10.0),
    ...     horizontal=20.0,
    ...     vertical=20.0,
    ... )
    >>> viewport = setup_viewport(camera, 64, 64)
    >>> ray = viewport.primary_ray(32, 32)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.raycaster.core.errors import DegenerateGeometryError, RenderConfigurationError
from src.raycaster.core.ray import Ray
from src.raycaster.core.vector import Point3D, Vector3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class CameraView:
    """Configuration for a look-at camera with a flat screen.

    Attributes:
        eye: Observer position in world space.
        view: Point the observer looks at; the center of the screen.
        view_up: Approximate up direction; need not be unit length or
            perpendicular to the viewing direction.
        horizontal: Width of the screen in world units.
        vertical: Height of the screen in world units.
    """

    eye: Point3D
    view: Point3D
    view_up: Vector3
    horizontal: float
    vertical: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "eye", Vector3.of(self.eye))
        object.__setattr__(self, "view", Vector3.of(self.view))
        object.__setattr__(self, "view_up", Vector3.of(self.view_up))


@dataclass(frozen=True)
class Viewport:
    """Screen geometry for one render request.

    Attributes:
        eye: Ray origin for every primary ray.
        x_axis: Unit vector pointing right along the screen.
        y_axis: Unit vector pointing up along the screen.
        corner: World position of the upper-left screen corner.
        horizontal: Screen width in world units.
        vertical: Screen height in world units.
        width: Image width in pixels.
        height: Image height in pixels.
    """

    eye: Point3D
    x_axis: Vector3
    y_axis: Vector3
    corner: Point3D
    horizontal: float
    vertical: float
    width: int
    height: int

    def screen_point(self, x: int, y: int) -> Point3D:
        """Map pixel (x, y) to its world-space point on the screen."""
        return (
            self.corner
            + self.x_axis * (x * self.horizontal / (self.width - 1))
            - self.y_axis * (y * self.vertical / (self.height - 1))
        )

    def primary_ray(self, x: int, y: int) -> Ray:
        """Generate the ray from the eye through pixel (x, y)."""
        return Ray.from_points(self.eye, self.screen_point(x, y))


# =============================================================================
# Viewport Setup
# =============================================================================


def validate_dimensions(width: int, height: int) -> None:
    """Check the pixel dimensions of a render request.

    Pixel-to-world mapping divides by width - 1 and height - 1, so both
    dimensions must be at least 2.

    Raises:
        RenderConfigurationError: If width or height is less than 2.
    """
    if width <= 1 or height <= 1:
        raise RenderConfigurationError(
            f"Image dimensions must both exceed 1 pixel, got {width}x{height}"
        )


def setup_viewport(camera: CameraView, width: int, height: int) -> Viewport:
    """Compute the viewport basis and screen corner for a camera.

    Args:
        camera: Camera position, orientation, and screen extents.
        width: Image width in pixels (at least 2).
        height: Image height in pixels (at least 2).

    Returns:
        The Viewport used to generate primary rays.

    Raises:
        RenderConfigurationError: If the dimensions or extents are invalid.
        DegenerateGeometryError: If eye and view coincide, or view_up is
            parallel to the viewing direction.
    """
    validate_dimensions(width, height)
    for name, extent in (("horizontal", camera.horizontal), ("vertical", camera.vertical)):
        if not math.isfinite(extent) or extent <= 0.0:
            raise RenderConfigurationError(f"Screen {name} extent must be positive, got {extent}")

    og = camera.view.sub(camera.eye).normalized()
    up = camera.view_up

    try:
        y_axis = up.sub(og.scale(og.dot(up))).normalized()
    except DegenerateGeometryError:
        raise DegenerateGeometryError(
            f"view_up {up!r} is parallel to the viewing direction {og!r}"
        ) from None
    x_axis = og.cross(y_axis).normalized()

    corner = (
        camera.view
        - x_axis * (camera.horizontal / 2.0)
        + y_axis * (camera.vertical / 2.0)
    )

    return Viewport(
        eye=camera.eye,
        x_axis=x_axis,
        y_axis=y_axis,
        corner=corner,
        horizontal=float(camera.horizontal),
        vertical=float(camera.vertical),
        width=width,
        height=height,
    )
