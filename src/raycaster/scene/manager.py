"""Scene model and scene manager.

This module provides the immutable Scene handed to the renderer and the
SceneManager used to build one. A Scene is an ordered tuple of primitives
plus an ordered tuple of point light sources; it is never mutated while a
render is in progress.

The SceneManager keeps a registry of materials addressed by integer IDs and
records every sphere and light it is given, so a scene can be serialized to
a plain dictionary (and from there to JSON) and rebuilt later.

Example:
    >>> from src.raycaster.scene.manager import SceneManager
    >>> manager = SceneManager()
    >>> shiny_red = manager.add_material(kd=(1, 0, 0), kr=(0.5, 0.5, 0.5), shininess=10)
    >>> manager.add_sphere(center=(0, 0, 0), radius=1.0, material_id=shiny_red)
    0
    >>> manager.add_light(position=(10, 5, 5), intensity=(200, 200, 200))
    0
    >>> scene = manager.build()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.raycaster.core.vector import Point3D, Vector3
from src.raycaster.geometry.primitive import Material, Primitive
from src.raycaster.geometry.sphere import Sphere

# Channel order used for per-channel tuples throughout the package
CHANNELS = ("red", "green", "blue")


@dataclass(frozen=True)
class LightSource:
    """A point light source.

    Attributes:
        position: Location of the light in world space.
        intensity: Integer intensity per channel as (R, G, B). Conceptually
            0-255, but the shading math does not clamp it.
    """

    position: Point3D
    intensity: tuple[int, int, int]

    def __post_init__(self) -> None:
        if len(self.intensity) != 3:
            raise ValueError("Light intensity must have exactly 3 channels")
        object.__setattr__(self, "position", Vector3.of(self.position))
        object.__setattr__(self, "intensity", tuple(int(i) for i in self.intensity))


@dataclass(frozen=True)
class Scene:
    """An immutable collection of primitives and light sources.

    Attributes:
        primitives: Primitives in the order the resolver scans them.
        lights: Light sources in evaluation order.
    """

    primitives: tuple[Primitive, ...] = ()
    lights: tuple[LightSource, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "primitives", tuple(self.primitives))
        object.__setattr__(self, "lights", tuple(self.lights))

    def is_empty(self) -> bool:
        """Return True if the scene holds no primitives."""
        return not self.primitives


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index of the sphere in the manager.
        center: The center of the sphere.
        radius: The radius of the sphere.
        material_id: The material ID assigned to the sphere.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


@dataclass
class LightInfo:
    """Information about a light in the scene."""

    light_index: int
    position: tuple[float, float, float]
    intensity: tuple[int, int, int]


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        materials: List of material configurations.
        spheres: List of sphere configurations.
        lights: List of light configurations.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)


def _check_coefficients(name: str, values: tuple[float, float, float]) -> None:
    if len(values) != 3:
        raise ValueError(f"{name} must have exactly 3 channels, got {len(values)}")
    for channel, value in zip(CHANNELS, values):
        if value < 0.0:
            raise ValueError(f"{name} {channel} coefficient must be non-negative, got {value}")


class SceneManager:
    """Builder for immutable scenes with a material registry.

    Attributes:
        materials: Registered materials; the list index is the material ID.
        spheres: SphereInfo for every sphere added.
        lights: LightInfo for every light added.
    """

    def __init__(self) -> None:
        """Initialize an empty scene."""
        self.materials: list[Material] = []
        self.spheres: list[SphereInfo] = []
        self.lights: list[LightInfo] = []
        self._primitives: list[Primitive] = []
        self._light_sources: list[LightSource] = []

    def clear(self) -> None:
        """Clear all materials, primitives, and lights."""
        self.materials.clear()
        self.spheres.clear()
        self.lights.clear()
        self._primitives.clear()
        self._light_sources.clear()

    # =========================================================================
    # Material Management
    # =========================================================================

    def add_material(
        self,
        kd: tuple[float, float, float],
        kr: tuple[float, float, float],
        shininess: float,
    ) -> int:
        """Add a Phong material to the scene.

        Args:
            kd: Diffuse coefficients as (R, G, B).
            kr: Specular coefficients as (R, G, B).
            shininess: Specular exponent (non-negative).

        Returns:
            The material ID for this material.

        Raises:
            ValueError: If any coefficient or the shininess is negative.
        """
        _check_coefficients("kd", kd)
        _check_coefficients("kr", kr)
        if shininess < 0.0:
            raise ValueError(f"shininess must be non-negative, got {shininess}")

        self.materials.append(Material(kd=tuple(kd), kr=tuple(kr), shininess=float(shininess)))
        return len(self.materials) - 1

    def get_material(self, material_id: int) -> Material | None:
        """Get a material by ID, or None if the ID is not registered."""
        if 0 <= material_id < len(self.materials):
            return self.materials[material_id]
        return None

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return len(self.materials)

    # =========================================================================
    # Primitive and Light Management
    # =========================================================================

    def add_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        material_id: int,
    ) -> int:
        """Add a sphere to the scene.

        Args:
            center: The center point of the sphere as (x, y, z).
            radius: The radius of the sphere (must be positive).
            material_id: The material ID to assign to the sphere.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If material_id is invalid.
            DegenerateGeometryError: If radius is not positive.
        """
        material = self.get_material(material_id)
        if material is None:
            raise ValueError(f"Invalid material_id: {material_id}")

        sphere = Sphere(Vector3.of(center), radius, material)
        self._primitives.append(sphere)

        sphere_index = len(self.spheres)
        self.spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=sphere.center.to_tuple(),
                radius=sphere.radius,
                material_id=material_id,
            )
        )
        return sphere_index

    def add_phong_sphere(
        self,
        center: tuple[float, float, float],
        radius: float,
        kd: tuple[float, float, float],
        kr: tuple[float, float, float],
        shininess: float,
    ) -> int:
        """Add a sphere together with its own material in one call.

        Returns:
            The index of the added sphere.
        """
        material_id = self.add_material(kd, kr, shininess)
        return self.add_sphere(center, radius, material_id)

    def add_light(
        self,
        position: tuple[float, float, float],
        intensity: tuple[int, int, int],
    ) -> int:
        """Add a point light to the scene.

        Args:
            position: Light position as (x, y, z).
            intensity: Integer intensity per channel as (R, G, B).

        Returns:
            The index of the added light.
        """
        light = LightSource(position=Vector3.of(position), intensity=tuple(intensity))
        self._light_sources.append(light)

        light_index = len(self.lights)
        self.lights.append(
            LightInfo(
                light_index=light_index,
                position=light.position.to_tuple(),
                intensity=light.intensity,
            )
        )
        return light_index

    def get_sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return len(self.spheres)

    def get_light_count(self) -> int:
        """Get the number of lights in the scene."""
        return len(self.lights)

    def get_primitive_count(self) -> int:
        """Get the total number of primitives in the scene."""
        return len(self._primitives)

    def build(self) -> Scene:
        """Freeze the current contents into an immutable Scene.

        Later changes to the manager do not affect scenes already built.
        """
        return Scene(primitives=tuple(self._primitives), lights=tuple(self._light_sources))

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene as a SceneConfig."""
        config = SceneConfig()
        for material in self.materials:
            config.materials.append(
                {
                    "kd": list(material.kd),
                    "kr": list(material.kr),
                    "shininess": material.shininess,
                }
            )
        for sphere in self.spheres:
            config.spheres.append(
                {
                    "center": list(sphere.center),
                    "radius": sphere.radius,
                    "material_id": sphere.material_id,
                }
            )
        for light in self.lights:
            config.lights.append(
                {
                    "position": list(light.position),
                    "intensity": list(light.intensity),
                }
            )
        return config

    def from_config(self, config: SceneConfig) -> None:
        """Replace the scene contents with those described by config.

        Raises:
            ValueError: If a material, sphere, or light entry is invalid.
            KeyError: If an entry is missing a required key.
        """
        self.clear()
        for mat in config.materials:
            self.add_material(tuple(mat["kd"]), tuple(mat["kr"]), mat["shininess"])
        for sph in config.spheres:
            self.add_sphere(tuple(sph["center"]), sph["radius"], sph["material_id"])
        for light in config.lights:
            self.add_light(tuple(light["position"]), tuple(light["intensity"]))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene as a JSON-compatible dictionary."""
        config = self.to_config()
        return {
            "materials": config.materials,
            "spheres": config.spheres,
            "lights": config.lights,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Replace the scene contents with those described by a dictionary."""
        config = SceneConfig(
            materials=list(data.get("materials", [])),
            spheres=list(data.get("spheres", [])),
            lights=list(data.get("lights", [])),
        )
        self.from_config(config)

    def __repr__(self) -> str:
        return (
            f"SceneManager(materials={len(self.materials)}, "
            f"spheres={len(self.spheres)}, lights={len(self.lights)})"
        )
