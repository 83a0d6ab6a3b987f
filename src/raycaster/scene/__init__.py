"""Scene module for scene management and ray-scene queries.

Components:
    manager: Immutable Scene, LightSource, and the SceneManager builder
    intersection: Closest-hit resolver shared by primary and shadow rays
    demo: Predefined demo scene and camera
"""

from .demo import create_demo_scene
from .intersection import SceneLike, intersect_scene
from .manager import (
    LightInfo,
    LightSource,
    Scene,
    SceneConfig,
    SceneManager,
    SphereInfo,
)

__all__ = [
    # Intersection module
    "SceneLike",
    "intersect_scene",
    # Manager module
    "Scene",
    "LightSource",
    "SceneManager",
    "SceneConfig",
    "SphereInfo",
    "LightInfo",
    # Demo module
    "create_demo_scene",
]
