"""Path tracing integrator for Monte Carlo light transport.

This module implements the radiance estimate for a single camera ray and
the per-pixel sample loop built on top of it.

A path is traced as a bounded loop rather than by recursion: each bounce
multiplies a running attenuation product by the material's attenuation and
replaces the current ray with the scattered one. The path ends when

    - the ray escapes the scene (it picks up the sky color),
    - a material absorbs it (black), or
    - ``max_depth`` bounces have been used up (black).

The only light source is the sky gradient, so every contribution comes
from rays that eventually escape.

Example:
    >>> from spheretrace.core.integrator import ray_color
    >>> from spheretrace.core.ray import Ray, vec3
    >>> from spheretrace.scene import World
    >>> ray_color(Ray(vec3(0, 0, 0), vec3(0, 1, 0)), World(), max_depth=10)
    array([0.5, 0.7, 1. ])
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from spheretrace.core.ray import Ray, Vec3, normalize, random_double, vec3

if TYPE_CHECKING:
    from spheretrace.camera.thin_lens import ThinLensCamera
    from spheretrace.scene.world import World

# =============================================================================
# Rendering Constants
# =============================================================================

# t_min and t_max for ray intersection; t_min avoids self-intersection acne
T_MIN = 0.001
T_MAX = math.inf

# Sky gradient endpoints
HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
ZENITH_COLOR = vec3(0.5, 0.7, 1.0)

BLACK = vec3(0.0, 0.0, 0.0)

for _constant in (HORIZON_COLOR, ZENITH_COLOR, BLACK):
    _constant.flags.writeable = False


def sky_color(ray: Ray) -> Vec3:
    """Background radiance for a ray that escapes the scene.

    Blends linearly from white at the horizon to light blue at the zenith
    based on the normalized y component of the ray direction.
    """
    unit_direction = normalize(ray.direction)
    t = 0.5 * (float(unit_direction[1]) + 1.0)
    return (1.0 - t) * HORIZON_COLOR + t * ZENITH_COLOR


def ray_color(ray: Ray, world: World, max_depth: int) -> Vec3:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        world: The scene to trace against.
        max_depth: Maximum number of bounces. ``max_depth <= 0`` yields
            black without touching the scene.

    Returns:
        The estimated radiance (RGB) for this path sample.
    """
    throughput = vec3(1.0, 1.0, 1.0)

    for _ in range(max_depth):
        record = world.hit(ray, T_MIN, T_MAX)
        if record is None:
            return throughput * sky_color(ray)

        result = record.material.scatter(ray, record)
        if result is None:
            # Ray was absorbed
            return BLACK.copy()

        throughput = throughput * result.attenuation
        ray = result.scattered

    # Out of bounces: no more light is gathered
    return BLACK.copy()


def sample_pixel(
    world: World,
    camera: ThinLensCamera,
    i: int,
    j: int,
    width: int,
    height: int,
    samples: int,
    max_depth: int,
) -> Vec3:
    """Sum ``samples`` jittered radiance samples for pixel (i, j).

    Args:
        world: The scene to trace against.
        camera: The camera generating primary rays.
        i: Pixel column (0 = left).
        j: Pixel row (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Number of samples to take.
        max_depth: Maximum bounces per path.

    Returns:
        The unnormalized color sum; divide by ``samples`` for the mean.
    """
    pixel_color = vec3(0.0, 0.0, 0.0)
    for _ in range(samples):
        u = (i + random_double()) / width
        v = (j + random_double()) / height
        pixel_color += ray_color(camera.get_ray(u, v), world, max_depth)
    return pixel_color
