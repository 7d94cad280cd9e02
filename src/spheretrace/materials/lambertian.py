"""Lambertian (ideal diffuse) material implementation.

Diffuse surfaces scatter light in a cosine-weighted distribution around the
surface normal. Instead of sampling that distribution explicitly, the
scattered direction is ``normal + random_unit_vector()``: the sum of the
normal and a point on the unit sphere tangent to the surface, which yields
the Lambertian distribution directly.

With this sampling the BRDF, cosine and pdf terms cancel, so the
attenuation of every bounce is simply the albedo.

Example:
    >>> from spheretrace.materials.lambertian import Lambertian
    >>> ground = Lambertian(albedo=(0.5, 0.5, 0.5))
    >>> # result = ground.scatter(ray, hit_record)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from spheretrace.core.ray import Ray, Vec3, near_zero, random_unit_vector
from spheretrace.materials.base import Material, ScatterResult, validate_albedo

if TYPE_CHECKING:
    from spheretrace.geometry.sphere import HitRecord


@dataclass(frozen=True, eq=False)
class Lambertian(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
    """

    albedo: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))

    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult:
        """Scatter diffusely about the hit normal.

        Always succeeds. If the sampled direction is degenerate (the random
        unit vector almost exactly cancels the normal), the normal itself
        is used.

        Args:
            ray_in: The incoming ray (unused; diffuse scattering forgets it).
            hit: The intersection record.

        Returns:
            A ScatterResult whose attenuation is the albedo.
        """
        direction = hit.normal + random_unit_vector()

        # Catch degenerate scatter direction
        if near_zero(direction):
            direction = hit.normal

        return ScatterResult(self.albedo, Ray(hit.point, direction))
