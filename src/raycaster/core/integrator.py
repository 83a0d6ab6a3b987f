"""Phong shading integrator.

This module computes the color of a surface point seen from the eye. For each
hit the integrator:

    1. Seeds every channel with the ambient intensity.
    2. For each light, casts a shadow ray from the light toward the hit point
       and resolves it against the whole scene.
    3. If the light is not occluded, adds a diffuse term
           max(0, L.N) * I * kd
       and a specular term
           max(0, R.V)^shininess * I * kr
       per channel, where L points from the hit toward the light, N is the
       outward-facing surface normal, V points toward the eye, and R is L
       reflected about N.

All arithmetic is done in floats and left unclamped. pixel_color clamps to
[0, 255] only when a pixel is finally written.

Example:
    >>> from src.raycaster.core.integrator import trace_pixel
    >>> color = trace_pixel(scene, ray, eye, RenderConfig())
"""

from __future__ import annotations

from src.raycaster.core.config import RenderConfig
from src.raycaster.core.ray import Ray
from src.raycaster.core.vector import Point3D, Vector3
from src.raycaster.geometry.primitive import Intersection
from src.raycaster.scene.intersection import SceneLike, intersect_scene
from src.raycaster.scene.manager import LightSource

# Largest value a channel can hold in the frame buffers
MAX_INTENSITY = 255

Color = tuple[float, float, float]


def is_light_visible(
    scene: SceneLike,
    light: LightSource,
    point: Point3D,
    shadow_epsilon: float,
) -> bool:
    """Test whether light reaches point without being blocked.

    The shadow ray runs from the light toward the point. The light counts as
    visible if nothing is hit, or if the nearest hit is not meaningfully
    closer to the light than the point itself (the nearest hit is then the
    shaded surface).

    Args:
        scene: The scene providing potential occluders.
        light: The light source to test.
        point: The surface point being shaded.
        shadow_epsilon: Distance tolerance for the comparison.

    Returns:
        True if the light contributes to the point.
    """
    if point.sub(light.position).norm() == 0.0:
        # Light sits on the point: nothing can lie in between
        return True

    shadow_ray = Ray.from_points(light.position, point)
    occluder = intersect_scene(scene, shadow_ray)
    if occluder is None:
        return True

    point_distance = point.sub(light.position).norm()
    occluder_distance = occluder.point.sub(light.position).norm()
    return point_distance <= occluder_distance + shadow_epsilon


def diffuse_term(to_light: Vector3, normal: Vector3, intensity: int, kd: float) -> float:
    """Compute the Lambertian contribution of one light for one channel."""
    cosine = to_light.dot(normal)
    return cosine * intensity * kd if cosine > 0.0 else 0.0


def specular_term(
    to_light: Vector3,
    normal: Vector3,
    to_eye: Vector3,
    intensity: int,
    kr: float,
    shininess: float,
) -> float:
    """Compute the Phong highlight of one light for one channel.

    A non-positive base contributes nothing, which also avoids raising a
    negative number to a fractional power.
    """
    reflected = normal.scale(2.0 * to_light.dot(normal)).sub(to_light).normalized()
    cosine = reflected.dot(to_eye)
    if cosine <= 0.0:
        return 0.0
    return cosine**shininess * intensity * kr


def shade(
    scene: SceneLike,
    hit: Intersection,
    eye: Point3D,
    config: RenderConfig,
    incoming: Vector3 | None = None,
) -> Color:
    """Compute the unclamped Phong color of a hit.

    When the hit point coincides with the eye (the eye sits on a surface),
    the view direction is taken opposite to the incoming ray, or along the
    outward normal if no ray is given. A light sitting exactly on the hit
    point has no direction and adds no diffuse or specular term.

    Args:
        scene: The scene (used for shadow rays).
        hit: The intersection seen from the eye.
        eye: The observer position.
        config: Ambient intensity and shadow tolerance.
        incoming: Direction of the primary ray that produced the hit.

    Returns:
        The (R, G, B) intensity as floats, not clamped.
    """
    rgb = [config.ambient, config.ambient, config.ambient]

    # Spheres report the point-to-center direction; face it outward
    normal = hit.normal.negate()
    to_eye = eye.sub(hit.point)
    if to_eye.norm() == 0.0:
        to_eye = incoming.negate() if incoming is not None else normal
    else:
        to_eye = to_eye.normalized()

    for light in scene.lights:
        if not is_light_visible(scene, light, hit.point, config.shadow_epsilon):
            continue

        to_light = light.position.sub(hit.point)
        if to_light.norm() == 0.0:
            continue
        to_light = to_light.normalized()
        for channel in range(3):
            intensity = light.intensity[channel]
            rgb[channel] += diffuse_term(to_light, normal, intensity, hit.kd[channel])
            rgb[channel] += specular_term(
                to_light, normal, to_eye, intensity, hit.kr[channel], hit.shininess
            )

    return rgb[0], rgb[1], rgb[2]


def clamp_channel(value: float) -> int:
    """Truncate a channel intensity to an integer in [0, MAX_INTENSITY]."""
    if value >= MAX_INTENSITY:
        return MAX_INTENSITY
    if value <= 0.0:
        return 0
    return int(value)


def pixel_color(color: Color) -> tuple[int, int, int]:
    """Clamp an unclamped color to the frame buffer range."""
    return clamp_channel(color[0]), clamp_channel(color[1]), clamp_channel(color[2])


def trace_pixel(scene: SceneLike, ray: Ray, eye: Point3D, config: RenderConfig) -> tuple[int, int, int]:
    """Trace one primary ray and return the final pixel color.

    Args:
        scene: The scene to render.
        ray: The primary ray from the eye through the pixel.
        eye: The observer position.
        config: Shading configuration.

    Returns:
        The clamped (R, G, B) color, or config.background on a miss.
    """
    hit = intersect_scene(scene, ray)
    if hit is None:
        return config.background
    return pixel_color(shade(scene, hit, eye, config, ray.direction))
