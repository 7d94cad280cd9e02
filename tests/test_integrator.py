"""Unit tests for the path tracing integrator.

Tests cover:
- Sky gradient endpoints and blending
- Rays that miss everything see the sky regardless of max_depth
- max_depth = 0 is black
- Attenuation products along bounce chains
- Absorption and bounce exhaustion
- Per-pixel sample sums
"""

import numpy as np
import pytest

from spheretrace.core.integrator import T_MIN, ray_color, sample_pixel, sky_color
from spheretrace.core.ray import Ray, vec3
from spheretrace.geometry import Sphere
from spheretrace.materials import Lambertian, Material, Metal
from spheretrace.scene import World


class AbsorbingMaterial(Material):
    """Material that absorbs every ray."""

    def scatter(self, ray_in, hit):
        return None


class TestSkyColor:
    """Tests for the background gradient."""

    def test_straight_up_is_sky_blue(self):
        np.testing.assert_allclose(sky_color(Ray(vec3(), vec3(0.0, 1.0, 0.0))), [0.5, 0.7, 1.0])

    def test_straight_down_is_white(self):
        np.testing.assert_allclose(sky_color(Ray(vec3(), vec3(0.0, -1.0, 0.0))), [1.0, 1.0, 1.0])

    def test_horizon_is_midpoint(self):
        np.testing.assert_allclose(sky_color(Ray(vec3(), vec3(1.0, 0.0, 0.0))), [0.75, 0.85, 1.0])

    def test_direction_length_does_not_matter(self):
        a = sky_color(Ray(vec3(), vec3(1.0, 1.0, 0.0)))
        b = sky_color(Ray(vec3(), vec3(10.0, 10.0, 0.0)))
        np.testing.assert_allclose(a, b)


class TestRayColorMisses:
    """Tests for rays that escape the scene."""

    @pytest.mark.parametrize("max_depth", [1, 2, 10, 50])
    def test_miss_returns_sky_for_any_depth(self, empty_world, max_depth):
        ray = Ray(vec3(), vec3(0.3, 0.4, -1.0))
        np.testing.assert_allclose(ray_color(ray, empty_world, max_depth), sky_color(ray))

    def test_miss_with_spheres_elsewhere(self, single_sphere_world):
        ray = Ray(vec3(), vec3(0.0, 0.0, 1.0))
        np.testing.assert_allclose(ray_color(ray, single_sphere_world, 10), sky_color(ray))


class TestRayColorDepth:
    """Tests for bounce limits."""

    @pytest.mark.parametrize("world_fixture", ["empty_world", "single_sphere_world"])
    def test_zero_depth_is_black(self, request, world_fixture):
        world = request.getfixturevalue(world_fixture)
        for direction in (vec3(0.0, 0.0, -1.0), vec3(0.0, 1.0, 0.0)):
            np.testing.assert_array_equal(ray_color(Ray(vec3(), direction), world, 0), [0.0, 0.0, 0.0])

    def test_negative_depth_is_black(self, empty_world):
        result = ray_color(Ray(vec3(), vec3(0.0, 1.0, 0.0)), empty_world, -3)
        np.testing.assert_array_equal(result, [0.0, 0.0, 0.0])

    def test_depth_one_hit_is_black(self, single_sphere_world):
        """Test the first bounce uses up a single allowed depth."""
        result = ray_color(Ray(vec3(), vec3(0.0, 0.0, -1.0)), single_sphere_world, 1)
        np.testing.assert_array_equal(result, [0.0, 0.0, 0.0])

    def test_trapped_between_mirrors_is_black(self):
        """Test a ray bouncing forever between two mirrors runs out of depth."""
        mirror = Metal((1.0, 1.0, 1.0), 0.0)
        world = World(
            [
                Sphere(vec3(0.0, 0.0, -1002.0), 1000.0, mirror),
                Sphere(vec3(0.0, 0.0, 1002.0), 1000.0, mirror),
            ]
        )
        result = ray_color(Ray(vec3(), vec3(0.0, 0.0, -1.0)), world, 25)
        np.testing.assert_array_equal(result, [0.0, 0.0, 0.0])


class TestRayColorBounces:
    """Tests for attenuation along bounce chains."""

    def test_single_mirror_bounce_attenuates_sky(self):
        """Test one bounce off a mirror floor yields albedo times sky."""
        mirror = Metal((0.8, 0.6, 0.4), 0.0)
        world = World([Sphere(vec3(0.0, -1000.0, 0.0), 1000.0, mirror)])
        ray = Ray(vec3(0.0, 1.0, 0.0), vec3(0.0, -1.0, 0.0))

        result = ray_color(ray, world, 10)
        # Reflected straight up into the zenith color
        np.testing.assert_allclose(result, [0.8 * 0.5, 0.6 * 0.7, 0.4 * 1.0], atol=1e-9)

    def test_absorbed_ray_is_black(self):
        world = World([Sphere(vec3(0.0, 0.0, -2.0), 1.0, AbsorbingMaterial())])
        result = ray_color(Ray(vec3(), vec3(0.0, 0.0, -1.0)), world, 10)
        np.testing.assert_array_equal(result, [0.0, 0.0, 0.0])

    def test_diffuse_result_bounded_by_sky(self, single_sphere_world):
        """Test a gray diffuse sphere never returns more than the brightest sky."""
        ray = Ray(vec3(), vec3(0.0, 0.0, -1.0))
        for _ in range(100):
            color = ray_color(ray, single_sphere_world, 5)
            assert np.all(color >= 0.0)
            assert np.all(color <= 0.5 * np.array([1.0, 1.0, 1.0]) + 1e-12)

    def test_t_min_avoids_self_intersection(self):
        assert T_MIN == 0.001


class TestSamplePixel:
    """Tests for per-pixel sample sums."""

    def test_sum_scales_with_samples(self, empty_world, pinhole_camera):
        """Test an empty scene sums to roughly samples times the sky."""
        total = sample_pixel(empty_world, pinhole_camera, 0, 0, 8, 4, 16, 5)
        assert total.shape == (3,)
        mean = total / 16
        assert np.all(mean >= 0.5) and np.all(mean <= 1.0)

    def test_upper_pixels_are_bluer(self, empty_world, pinhole_camera):
        top = sample_pixel(empty_world, pinhole_camera, 4, 3, 8, 4, 4, 5) / 4
        bottom = sample_pixel(empty_world, pinhole_camera, 4, 0, 8, 4, 4, 5) / 4
        # Red falls off toward the zenith
        assert top[0] < bottom[0]

    def test_zero_samples_is_zero(self, empty_world, pinhole_camera):
        np.testing.assert_array_equal(
            sample_pixel(empty_world, pinhole_camera, 0, 0, 8, 4, 0, 5), [0.0, 0.0, 0.0]
        )

    def test_lambertian_fixture_material(self, single_sphere_world):
        assert isinstance(single_sphere_world.spheres[0].material, Lambertian)
