"""Procedural "random spheres" scene.

The scene consists of:
- A huge diffuse sphere acting as the ground plane
- A grid of small spheres with jittered positions and random materials
  (mostly diffuse, some fuzzy metal, a few glass)
- Three large feature spheres: glass in the middle, diffuse brown on the
  left, mirror metal on the right

Placement is random on every call; the procedure and its parameters are
fixed by RandomSceneParams.

Example:
    >>> from spheretrace.scene.random_scene import create_random_scene
    >>> world = create_random_scene()
    >>> len(world) > 4
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from spheretrace.core.ray import length, random_double, random_vec3, vec3
from spheretrace.geometry.sphere import Sphere
from spheretrace.materials import Dielectric, Lambertian, Material, Metal
from spheretrace.scene.world import World

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RandomSceneParams:
    """Parameters of the procedural scene.

    Attributes:
        grid_extent: Small spheres are placed for grid cells a, b in
            [-grid_extent, grid_extent).
        small_radius: Radius of every small sphere.
        jitter: Maximum random offset of a small sphere inside its cell.
        diffuse_probability: Chance that a small sphere is diffuse.
        metal_probability: Chance that a small sphere is metal; the
            remainder is glass.
        clearance: Small spheres closer than this to the right feature
            sphere's footprint are skipped.
        ground_albedo: Albedo of the ground sphere.
        glass_ior: Index of refraction used for all glass spheres.
    """

    grid_extent: int = 11
    small_radius: float = 0.2
    jitter: float = 0.9
    diffuse_probability: float = 0.8
    metal_probability: float = 0.15
    clearance: float = 0.9
    ground_albedo: tuple[float, float, float] = (0.5, 0.5, 0.5)
    glass_ior: float = 1.5

    def __post_init__(self) -> None:
        if self.diffuse_probability + self.metal_probability > 1.0:
            raise ValueError("diffuse_probability + metal_probability must not exceed 1.0")


def _random_small_material(params: RandomSceneParams, glass: Material) -> Material:
    choose_mat = random_double()
    if choose_mat < params.diffuse_probability:
        return Lambertian(random_vec3() * random_vec3())
    if choose_mat < params.diffuse_probability + params.metal_probability:
        return Metal(random_vec3(0.5, 1.0), random_double(0.0, 0.5))
    return glass


def create_random_scene(params: RandomSceneParams | None = None) -> World:
    """Build the random spheres scene.

    Args:
        params: Scene parameters. Defaults to RandomSceneParams().

    Returns:
        A populated World. It must not be modified once rendering starts.
    """
    if params is None:
        params = RandomSceneParams()

    world = World()

    ground_material = Lambertian(params.ground_albedo)
    world.add(Sphere(vec3(0.0, -1000.0, 0.0), 1000.0, ground_material))

    # Every small glass sphere shares one material instance
    glass = Dielectric(params.glass_ior)
    keep_out = vec3(4.0, params.small_radius, 0.0)

    for a in range(-params.grid_extent, params.grid_extent):
        for b in range(-params.grid_extent, params.grid_extent):
            center = vec3(
                a + params.jitter * random_double(),
                params.small_radius,
                b + params.jitter * random_double(),
            )
            if length(center - keep_out) <= params.clearance:
                continue
            material = _random_small_material(params, glass)
            world.add(Sphere(center, params.small_radius, material))

    world.add(Sphere(vec3(0.0, 1.0, 0.0), 1.0, glass))
    world.add(Sphere(vec3(-4.0, 1.0, 0.0), 1.0, Lambertian((0.4, 0.2, 0.1))))
    world.add(Sphere(vec3(4.0, 1.0, 0.0), 1.0, Metal((0.7, 0.6, 0.5), 0.0)))

    logger.debug("Built random scene with %d spheres", len(world))
    return world
