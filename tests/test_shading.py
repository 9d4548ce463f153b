"""Unit tests for the colorizer.

Tests cover:
- Normal visualization remapping
- Sky gradient formula and its extremes
- Hit/miss decision in ray_color
"""

import math

import pytest
import taichi as ti


def _expected_background(direction):
    norm = math.sqrt(sum(d * d for d in direction))
    t = 0.5 * (direction[1] / norm + 1.0)
    return (
        (1.0 - t) * 1.0 + t * 0.5,
        (1.0 - t) * 1.0 + t * 0.7,
        (1.0 - t) * 1.0 + t * 1.0,
    )


class TestNormalColor:
    """Tests for the normal-visualization branch."""

    @pytest.mark.parametrize(
        "normal,expected",
        [
            ((0.0, 0.0, 1.0), (0.5, 0.5, 1.0)),
            ((-1.0, 0.0, 0.0), (0.0, 0.5, 0.5)),
            ((0.0, 1.0, 0.0), (0.5, 1.0, 0.5)),
        ],
    )
    def test_normal_remapped_to_unit_range(self, normal, expected):
        """Test 0.5 * (normal + 1) per channel."""
        from src.skytracer.core.shading import normal_color, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            result[None] = normal_color(vec3(x, y, z))

        test_kernel(*normal)
        assert tuple(result[None].to_numpy()) == pytest.approx(expected, abs=1e-6)


class TestBackgroundColor:
    """Tests for the sky-gradient branch."""

    @pytest.mark.parametrize(
        "direction",
        [
            (0.0, 1.0, 0.0),
            (0.0, -1.0, 0.0),
            (-1.0, -1.0, -1.0),
            (0.3, 0.2, -1.0),
            (0.0, 0.0, -5.0),
        ],
    )
    def test_gradient_formula(self, direction):
        """Test the white-to-sky-blue interpolation on normalized y."""
        from src.skytracer.core.shading import background_color, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel(x: ti.f32, y: ti.f32, z: ti.f32):
            result[None] = background_color(vec3(x, y, z))

        test_kernel(*direction)
        assert tuple(result[None].to_numpy()) == pytest.approx(_expected_background(direction), abs=1e-6)

    def test_straight_up_is_sky_blue(self):
        """Test t = 1 gives pure sky blue."""
        from src.skytracer.core.shading import SKY_BLUE, background_color, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = background_color(vec3(0.0, 3.0, 0.0))

        test_kernel()
        assert tuple(result[None].to_numpy()) == pytest.approx(SKY_BLUE, abs=1e-6)

    def test_straight_down_is_white(self):
        """Test t = 0 gives pure white."""
        from src.skytracer.core.shading import WHITE, background_color, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = background_color(vec3(0.0, -0.25, 0.0))

        test_kernel()
        assert tuple(result[None].to_numpy()) == pytest.approx(WHITE, abs=1e-6)


class TestRayColor:
    """Tests for the hit/miss decision."""

    def _ray_color(self, direction, center=(0.0, 0.0, -1.0), radius=0.5):
        from src.skytracer.core.ray import Ray
        from src.skytracer.core.shading import T_MAX, ray_color, vec3
        from src.skytracer.geometry.sphere import Sphere

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel(
            dx: ti.f32, dy: ti.f32, dz: ti.f32,
            cx: ti.f32, cy: ti.f32, cz: ti.f32, r: ti.f32,
        ):
            ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(dx, dy, dz))
            sphere = Sphere(center=vec3(cx, cy, cz), radius=r)
            result[None] = ray_color(ray, sphere, T_MAX)

        test_kernel(*direction, *center, radius)
        return tuple(result[None].to_numpy())

    def test_hit_shows_normal(self):
        """Test the straight-ahead ray shows the front-pole normal (0, 0, 1)."""
        color = self._ray_color((0.0, 0.0, -1.0))

        assert color == pytest.approx((0.5, 0.5, 1.0), abs=1e-6)

    def test_miss_shows_background(self):
        """Test a ray past the sphere shows the gradient."""
        direction = (1.0, 1.0, -1.0)
        color = self._ray_color(direction)

        assert color == pytest.approx(_expected_background(direction), abs=1e-6)

    @pytest.mark.parametrize(
        "center,radius",
        [
            ((0.0, 0.0, -1.0), 0.5),
            ((5.0, 5.0, 5.0), 0.1),
            ((-3.0, 0.0, -10.0), 2.0),
        ],
    )
    def test_miss_color_independent_of_sphere(self, center, radius):
        """Test a missing ray's color depends only on its direction."""
        direction = (0.0, -1.0, 0.0)
        color = self._ray_color(direction, center=center, radius=radius)

        assert color == pytest.approx(_expected_background(direction), abs=1e-6)

    def test_sphere_behind_camera_not_shaded(self):
        """Test hits at negative distance do not count."""
        color = self._ray_color((0.0, 0.0, -1.0), center=(0.0, 0.0, 2.0), radius=0.5)

        assert color == pytest.approx(_expected_background((0.0, 0.0, -1.0)), abs=1e-6)
