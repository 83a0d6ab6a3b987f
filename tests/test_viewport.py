"""Unit tests for the viewport model.

Tests cover:
- Camera coercion from tuples
- Orthonormal basis construction
- Screen corner and pixel mapping
- Primary ray generation
- Invalid dimensions, extents, and degenerate orientations
"""

import pytest

from src.raycaster.camera.viewport import CameraView, setup_viewport, validate_dimensions
from src.raycaster.core.errors import DegenerateGeometryError, RenderConfigurationError
from src.raycaster.core.vector import Vector3


@pytest.fixture
def demo_camera():
    """Camera at (10,0,0) looking at the origin with +z up and a 20x20 screen."""
    return CameraView(
        eye=(10.0, 0.0, 0.0),
        view=(0.0, 0.0, 0.0),
        view_up=(0.0, 0.0, 10.0),
        horizontal=20.0,
        vertical=20.0,
    )


class TestCameraView:
    """Tests for CameraView."""

    def test_tuples_are_coerced(self, demo_camera):
        """Test positions given as tuples become vectors."""
        assert isinstance(demo_camera.eye, Vector3)
        assert demo_camera.view_up == Vector3(0.0, 0.0, 10.0)

    def test_camera_is_frozen(self, demo_camera):
        """Test camera fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            demo_camera.horizontal = 1.0


class TestBasis:
    """Tests for the viewport basis."""

    def test_demo_basis(self, demo_camera):
        """Test the basis of the demo camera."""
        viewport = setup_viewport(demo_camera, 64, 48)
        assert viewport.y_axis == Vector3(0.0, 0.0, 1.0)
        assert viewport.x_axis == Vector3(0.0, 1.0, 0.0)

    def test_basis_is_orthonormal(self):
        """Test a skewed view-up still yields an orthonormal basis."""
        camera = CameraView(
            eye=(3.0, -2.0, 5.0),
            view=(0.0, 1.0, 0.0),
            view_up=(0.3, 0.2, 4.0),
            horizontal=4.0,
            vertical=3.0,
        )
        viewport = setup_viewport(camera, 8, 6)
        og = camera.view.sub(camera.eye).normalized()

        assert viewport.x_axis.norm() == pytest.approx(1.0)
        assert viewport.y_axis.norm() == pytest.approx(1.0)
        assert viewport.x_axis.dot(viewport.y_axis) == pytest.approx(0.0, abs=1e-12)
        assert viewport.y_axis.dot(og) == pytest.approx(0.0, abs=1e-12)
        assert viewport.x_axis.dot(og) == pytest.approx(0.0, abs=1e-12)
        # Screen up keeps the sense of view_up
        assert viewport.y_axis.dot(camera.view_up) > 0.0

    def test_up_parallel_to_view_raises(self):
        """Test a view-up along the viewing direction is degenerate."""
        camera = CameraView(
            eye=(10.0, 0.0, 0.0),
            view=(0.0, 0.0, 0.0),
            view_up=(-3.0, 0.0, 0.0),
            horizontal=20.0,
            vertical=20.0,
        )
        with pytest.raises(DegenerateGeometryError, match="parallel"):
            setup_viewport(camera, 16, 16)

    def test_eye_equal_to_view_raises(self):
        """Test a camera looking at its own position is degenerate."""
        camera = CameraView(
            eye=(1.0, 1.0, 1.0),
            view=(1.0, 1.0, 1.0),
            view_up=(0.0, 0.0, 1.0),
            horizontal=2.0,
            vertical=2.0,
        )
        with pytest.raises(DegenerateGeometryError):
            setup_viewport(camera, 16, 16)


class TestPixelMapping:
    """Tests for mapping pixels to the screen."""

    def test_corner(self, demo_camera):
        """Test the upper-left corner lies half an extent left and up of view."""
        viewport = setup_viewport(demo_camera, 64, 48)
        assert viewport.corner == Vector3(0.0, -10.0, 10.0)
        assert viewport.screen_point(0, 0) == viewport.corner

    def test_last_pixel_is_lower_right(self, demo_camera):
        """Test pixel (width-1, height-1) maps to the lower-right corner."""
        viewport = setup_viewport(demo_camera, 64, 48)
        assert viewport.screen_point(63, 47) == Vector3(0.0, 10.0, -10.0)

    def test_non_square_extents(self):
        """Test the vertical extent drives the vertical offset."""
        camera = CameraView(
            eye=(10.0, 0.0, 0.0),
            view=(0.0, 0.0, 0.0),
            view_up=(0.0, 0.0, 1.0),
            horizontal=8.0,
            vertical=2.0,
        )
        viewport = setup_viewport(camera, 5, 3)
        assert viewport.corner == Vector3(0.0, -4.0, 1.0)
        assert viewport.screen_point(4, 2) == Vector3(0.0, 4.0, -1.0)

    def test_center_pixel_ray(self, demo_camera):
        """Test the center pixel of an odd image looks straight at view."""
        viewport = setup_viewport(demo_camera, 3, 3)
        ray = viewport.primary_ray(1, 1)
        assert ray.origin == Vector3(10.0, 0.0, 0.0)
        assert ray.direction == Vector3(-1.0, 0.0, 0.0)

    def test_primary_ray_reaches_screen_point(self, demo_camera):
        """Test a primary ray passes through its screen point."""
        viewport = setup_viewport(demo_camera, 10, 10)
        target = viewport.screen_point(2, 7)
        ray = viewport.primary_ray(2, 7)
        distance = target.sub(ray.origin).norm()
        assert ray.origin + ray.direction * distance == target


class TestValidation:
    """Tests for request validation."""

    @pytest.mark.parametrize("width, height", [(1, 10), (10, 1), (0, 0), (-5, 10)])
    def test_invalid_dimensions(self, width, height):
        """Test both dimensions must exceed one pixel."""
        with pytest.raises(RenderConfigurationError):
            validate_dimensions(width, height)

    def test_minimal_dimensions_accepted(self, demo_camera):
        """Test a 2x2 image is valid."""
        validate_dimensions(2, 2)
        viewport = setup_viewport(demo_camera, 2, 2)
        assert viewport.screen_point(1, 1) == Vector3(0.0, 10.0, -10.0)

    @pytest.mark.parametrize("horizontal, vertical", [(0.0, 1.0), (1.0, -2.0), (float("nan"), 1.0)])
    def test_invalid_extents(self, horizontal, vertical):
        """Test screen extents must be positive and finite."""
        camera = CameraView(
            eye=(10.0, 0.0, 0.0),
            view=(0.0, 0.0, 0.0),
            view_up=(0.0, 0.0, 1.0),
            horizontal=horizontal,
            vertical=vertical,
        )
        with pytest.raises(RenderConfigurationError):
            setup_viewport(camera, 4, 4)

    def test_configuration_errors_are_value_errors(self):
        """Test configuration errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_dimensions(1, 1)
