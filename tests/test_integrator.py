"""Tests for the Phong shading integrator.

This module tests:
- Ambient seeding and background color
- Diffuse and specular terms for a known configuration
- Shadow testing (occluded, self-hit tolerance, unobstructed)
- Channel clamping
- Color derived from the nearest primitive's material only
"""

import pytest

from src.raycaster.core.config import RenderConfig
from src.raycaster.core.integrator import (
    clamp_channel,
    diffuse_term,
    is_light_visible,
    pixel_color,
    shade,
    specular_term,
    trace_pixel,
)
from src.raycaster.core.ray import Ray
from src.raycaster.core.vector import Vector3
from src.raycaster.geometry.primitive import Material
from src.raycaster.geometry.sphere import Sphere
from src.raycaster.scene.manager import LightSource, Scene

EYE = Vector3(10.0, 0.0, 0.0)
ORIGIN = Vector3(0.0, 0.0, 0.0)


def _primary_ray() -> Ray:
    return Ray.from_points(EYE, ORIGIN)


class TestTerms:
    """Tests for the individual lighting terms."""

    def test_diffuse_facing_light(self):
        """Test full diffuse contribution when the light is along the normal."""
        n = Vector3(1.0, 0.0, 0.0)
        assert diffuse_term(n, n, 200, 0.5) == pytest.approx(100.0)

    def test_diffuse_facing_away(self):
        """Test no diffuse contribution from behind the surface."""
        n = Vector3(1.0, 0.0, 0.0)
        assert diffuse_term(-n, n, 200, 0.5) == 0.0

    def test_specular_mirror_direction(self):
        """Test full highlight when the eye is on the mirror direction."""
        n = Vector3(0.0, 1.0, 0.0)
        to_light = Vector3(1.0, 1.0, 0.0).normalized()
        to_eye = Vector3(-1.0, 1.0, 0.0).normalized()
        assert specular_term(to_light, n, to_eye, 100, 0.5, 10.0) == pytest.approx(50.0)

    def test_specular_falloff(self):
        """Test the highlight decays with the shininess exponent."""
        n = Vector3(0.0, 1.0, 0.0)
        to_light = Vector3(0.0, 1.0, 0.0)
        to_eye = Vector3(1.0, 1.0, 0.0).normalized()
        cosine = to_eye.y
        assert specular_term(to_light, n, to_eye, 100, 1.0, 4.0) == pytest.approx(
            100.0 * cosine**4
        )

    def test_specular_negative_base_is_zero(self):
        """Test no highlight when the reflection points away from the eye."""
        n = Vector3(0.0, 1.0, 0.0)
        to_light = Vector3(1.0, 1.0, 0.0).normalized()
        to_eye = Vector3(1.0, -1.0, 0.0).normalized()
        assert specular_term(to_light, n, to_eye, 100, 1.0, 2.5) == 0.0


class TestShading:
    """Tests for shading a hit."""

    def test_ambient_only_without_lights(self, unit_sphere):
        """Test a lit-less scene shades hits with the ambient term."""
        scene = Scene(primitives=(unit_sphere,))
        hit = unit_sphere.closest_intersection(_primary_ray())
        assert shade(scene, hit, EYE, RenderConfig()) == (15.0, 15.0, 15.0)

    def test_diffuse_only_material(self, matte_red):
        """Test light at the eye on a matte red sphere adds 100 red."""
        sphere = Sphere(ORIGIN, 1.0, matte_red)
        scene = Scene(primitives=(sphere,), lights=(LightSource(EYE, (100, 100, 100)),))
        hit = sphere.closest_intersection(_primary_ray())

        r, g, b = shade(scene, hit, EYE, RenderConfig())

        assert r == pytest.approx(115.0)
        assert g == pytest.approx(15.0)
        assert b == pytest.approx(15.0)

    def test_diffuse_and_specular(self):
        """Test diffuse plus specular when light, eye and normal are aligned."""
        material = Material(kd=(1.0, 0.0, 0.0), kr=(0.5, 0.5, 0.5), shininess=10.0)
        sphere = Sphere(ORIGIN, 1.0, material)
        scene = Scene(primitives=(sphere,), lights=(LightSource(EYE, (100, 100, 100)),))
        hit = sphere.closest_intersection(_primary_ray())

        color = shade(scene, hit, EYE, RenderConfig())

        assert color == pytest.approx((165.0, 65.0, 65.0))

    def test_lights_accumulate(self, matte_red):
        """Test contributions of several visible lights add up unclamped."""
        sphere = Sphere(ORIGIN, 1.0, matte_red)
        lights = (LightSource(EYE, (200, 0, 0)), LightSource(Vector3(20.0, 0.0, 0.0), (200, 0, 0)))
        scene = Scene(primitives=(sphere,), lights=lights)
        hit = sphere.closest_intersection(_primary_ray())

        r, _, _ = shade(scene, hit, EYE, RenderConfig())

        assert r == pytest.approx(415.0)

    def test_custom_ambient(self, unit_sphere):
        """Test the ambient term comes from the configuration."""
        scene = Scene(primitives=(unit_sphere,))
        hit = unit_sphere.closest_intersection(_primary_ray())
        assert shade(scene, hit, EYE, RenderConfig(ambient=40.0)) == (40.0, 40.0, 40.0)


class TestShadows:
    """Tests for the shadow test."""

    def test_light_behind_sphere_is_occluded(self, white_material):
        """Test a light directly behind the sphere leaves only ambient."""
        sphere = Sphere(ORIGIN, 1.0, white_material)
        scene = Scene(
            primitives=(sphere,),
            lights=(LightSource(Vector3(-10.0, 0.0, 0.0), (255, 255, 255)),),
        )
        hit = sphere.closest_intersection(_primary_ray())

        assert not is_light_visible(scene, scene.lights[0], hit.point, 1e-2)
        assert shade(scene, hit, EYE, RenderConfig()) == (15.0, 15.0, 15.0)

    def test_shaded_surface_does_not_shadow_itself(self, unit_sphere):
        """Test the shadow ray finding the hit surface itself counts as lit."""
        scene = Scene(primitives=(unit_sphere,), lights=(LightSource(EYE, (255, 255, 255)),))
        hit = unit_sphere.closest_intersection(_primary_ray())

        assert is_light_visible(scene, scene.lights[0], hit.point, 1e-2)

    def test_unobstructed_light_in_empty_scene(self):
        """Test a light is visible when nothing can block it."""
        light = LightSource(Vector3(0.0, 10.0, 0.0), (255, 255, 255))
        assert is_light_visible(Scene(lights=(light,)), light, ORIGIN, 1e-2)

    def test_blocker_between_light_and_sphere(self, matte_red):
        """Test a small sphere between light and surface casts a shadow."""
        target = Sphere(ORIGIN, 1.0, matte_red)
        blocker = Sphere(Vector3(5.0, 0.0, 0.0), 0.5, matte_red)
        light = LightSource(Vector3(20.0, 0.0, 0.0), (255, 255, 255))
        scene = Scene(primitives=(target, blocker), lights=(light,))

        hit = target.closest_intersection(Ray.from_points(Vector3(3.0, 0.0, 0.0), ORIGIN))

        assert not is_light_visible(scene, light, hit.point, 1e-2)
        assert shade(scene, hit, Vector3(3.0, 0.0, 0.0), RenderConfig()) == (15.0, 15.0, 15.0)


class TestCoincidentPositions:
    """Tests for an eye or light sitting exactly on the shaded point."""

    def test_eye_on_sphere_surface(self, matte_red):
        """Test a hit at the eye itself shades instead of raising."""
        sphere = Sphere(ORIGIN, 1.0, matte_red)
        eye = Vector3(1.0, 0.0, 0.0)
        scene = Scene(
            primitives=(sphere,),
            lights=(LightSource(Vector3(5.0, 0.0, 0.0), (100, 100, 100)),),
        )
        ray = Ray.from_points(eye, Vector3(10.0, 0.0, 0.0))

        hit = sphere.closest_intersection(ray)
        assert hit.distance == 0.0
        assert hit.point == eye

        assert trace_pixel(scene, ray, eye, RenderConfig()) == (115, 15, 15)

    def test_eye_on_surface_without_incoming_ray(self, white_material):
        """Test shade falls back to the outward normal as view direction."""
        sphere = Sphere(ORIGIN, 1.0, white_material)
        eye = Vector3(1.0, 0.0, 0.0)
        scene = Scene(primitives=(sphere,), lights=(LightSource(Vector3(5.0, 0.0, 0.0), (100, 100, 100)),))
        hit = sphere.closest_intersection(Ray.from_points(eye, Vector3(10.0, 0.0, 0.0)))

        # Diffuse 100 plus a full highlight of 100 along the normal
        assert shade(scene, hit, eye, RenderConfig()) == pytest.approx((215.0, 215.0, 215.0))

    def test_light_on_shaded_point(self, matte_red):
        """Test a light exactly on the hit point adds only ambient."""
        sphere = Sphere(ORIGIN, 1.0, matte_red)
        light = LightSource(Vector3(1.0, 0.0, 0.0), (255, 255, 255))
        scene = Scene(primitives=(sphere,), lights=(light,))
        hit = sphere.closest_intersection(_primary_ray())

        assert is_light_visible(scene, light, hit.point, 1e-2)
        assert shade(scene, hit, EYE, RenderConfig()) == (15.0, 15.0, 15.0)


class TestPixelColor:
    """Tests for clamping and full pixel tracing."""

    @pytest.mark.parametrize(
        "value, expected",
        [(-3.0, 0), (0.0, 0), (14.9, 14), (15.0, 15), (254.99, 254), (255.0, 255), (1000.0, 255)],
    )
    def test_clamp_channel(self, value, expected):
        """Test clamping to [0, 255] with truncation."""
        assert clamp_channel(value) == expected

    def test_pixel_color_clamps_each_channel(self):
        """Test pixel_color clamps channels independently."""
        assert pixel_color((300.0, 15.5, -1.0)) == (255, 15, 0)

    def test_miss_is_background(self, unit_sphere):
        """Test a primary ray missing everything yields the background."""
        scene = Scene(primitives=(unit_sphere,), lights=(LightSource(EYE, (255, 255, 255)),))
        ray = Ray.from_points(EYE, Vector3(10.0, 1.0, 0.0))
        assert trace_pixel(scene, ray, EYE, RenderConfig()) == (0, 0, 0)

    def test_overlapping_spheres_use_nearest_material(self, matte_red):
        """Test the pixel color comes from the nearest primitive only."""
        green = Material(kd=(0.0, 1.0, 0.0), kr=(0.0, 0.0, 0.0), shininess=1.0)
        red_sphere = Sphere(ORIGIN, 2.0, matte_red)
        green_sphere = Sphere(Vector3(1.0, 0.0, 0.0), 2.0, green)
        scene = Scene(
            primitives=(red_sphere, green_sphere),
            lights=(LightSource(EYE, (100, 100, 100)),),
        )

        assert trace_pixel(scene, _primary_ray(), EYE, RenderConfig()) == (15, 115, 15)

    def test_bright_light_is_clamped(self, white_material):
        """Test an overexposed pixel saturates at 255."""
        sphere = Sphere(ORIGIN, 1.0, white_material)
        scene = Scene(primitives=(sphere,), lights=(LightSource(EYE, (1000, 1000, 1000)),))
        assert trace_pixel(scene, _primary_ray(), EYE, RenderConfig()) == (255, 255, 255)
