"""Metal (specular reflective) material implementation.

This module implements the metal BSDF, which models specular reflection with
optional fuzziness. Perfect metals (fuzz=0) produce mirror-like reflections,
while fuzzier metals offset the mirror direction by a random vector of
length ``fuzz``.

The reflection formula is:
    R = I - 2(I . N)N

where I is the unit incident direction and N is the surface normal.

Example:
    >>> from spheretrace.materials.metal import Metal
    >>> mirror = Metal(albedo=(0.7, 0.6, 0.5), fuzz=0.0)
    >>> # result = mirror.scatter(ray, hit_record)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from spheretrace.core.ray import Ray, Vec3, dot, normalize, random_unit_vector, reflect
from spheretrace.materials.base import Material, ScatterResult, validate_albedo

if TYPE_CHECKING:
    from spheretrace.geometry.sphere import HitRecord


@dataclass(frozen=True, eq=False)
class Metal(Material):
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: The surface roughness. Clamped into [0, 1]:
            0 = perfect mirror, 1 = maximum fuzz.
    """

    albedo: Vec3
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))
        object.__setattr__(self, "fuzz", min(max(float(self.fuzz), 0.0), 1.0))

    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult | None:
        """Reflect about the normal, perturbed by the fuzz factor.

        The ray is absorbed if the perturbed direction ends up below the
        surface.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record.

        Returns:
            A ScatterResult with the albedo as attenuation, or None if the
            ray was absorbed.
        """
        reflected = reflect(normalize(ray_in.direction), hit.normal)
        if self.fuzz > 0.0:
            reflected = reflected + self.fuzz * random_unit_vector()

        if dot(reflected, hit.normal) <= 0.0:
            return None

        return ScatterResult(self.albedo, Ray(hit.point, reflected))
