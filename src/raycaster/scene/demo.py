"""Predefined demo scene.

This module provides a factory for a small showcase scene: a large diffuse
sphere at the origin surrounded by smaller colored, shiny spheres, lit by two
point lights. The matching camera sits on the positive x-axis looking at the
origin with the z-axis up, over a 20 x 20 world-unit screen.

Example:
    >>> from src.raycaster.scene.demo import create_demo_scene
    >>> manager, camera = create_demo_scene()
    >>> manager.get_sphere_count()
    5
"""

from __future__ import annotations

from src.raycaster.camera.viewport import CameraView
from src.raycaster.scene.manager import SceneManager

# =============================================================================
# Demo Camera
# =============================================================================

DEMO_EYE = (10.0, 0.0, 0.0)
DEMO_VIEW = (0.0, 0.0, 0.0)
DEMO_VIEW_UP = (0.0, 0.0, 10.0)
DEMO_SCREEN_SIZE = 20.0

# =============================================================================
# Demo Lights
# =============================================================================

# (position, intensity)
DEMO_LIGHTS = (
    ((10.0, 5.0, 5.0), (200, 200, 200)),
    ((10.0, -5.0, -2.0), (160, 255, 160)),
)

# =============================================================================
# Demo Spheres
# =============================================================================

# (center, radius, kd, kr, shininess)
DEMO_SPHERES = (
    ((0.0, 0.0, 0.0), 2.0, (1.0, 1.0, 1.0), (0.5, 0.5, 0.5), 10.0),
    ((0.0, 3.5, 0.0), 1.0, (0.9, 0.1, 0.1), (0.8, 0.8, 0.8), 50.0),
    ((0.0, -3.5, 0.0), 1.0, (0.1, 0.9, 0.1), (0.8, 0.8, 0.8), 50.0),
    ((0.0, 0.0, 3.5), 1.0, (0.1, 0.1, 0.9), (0.5, 0.5, 0.5), 20.0),
    ((-3.0, 2.0, -3.0), 1.5, (0.8, 0.8, 0.2), (0.2, 0.2, 0.2), 5.0),
)


def create_demo_scene() -> tuple[SceneManager, CameraView]:
    """Create the demo scene and its camera.

    Returns:
        A tuple of (SceneManager, CameraView) where the manager holds the
        spheres and lights and the camera is configured for the standard view.
    """
    manager = SceneManager()

    for center, radius, kd, kr, shininess in DEMO_SPHERES:
        manager.add_phong_sphere(center, radius, kd, kr, shininess)

    for position, intensity in DEMO_LIGHTS:
        manager.add_light(position, intensity)

    camera = CameraView(
        eye=DEMO_EYE,
        view=DEMO_VIEW,
        view_up=DEMO_VIEW_UP,
        horizontal=DEMO_SCREEN_SIZE,
        vertical=DEMO_SCREEN_SIZE,
    )
    return manager, camera
