"""Dielectric (glass/water) material implementation.

This module implements the dielectric BSDF, which models transparent materials
like glass and water with refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.

Example:
    >>> from spheretrace.materials.dielectric import Dielectric
    >>> glass = Dielectric(ior=1.5)
    >>> # result = glass.scatter(ray, hit_record)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from spheretrace.core.ray import (
    Ray,
    Vec3,
    dot,
    normalize,
    random_double,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)
from spheretrace.materials.base import Material, ScatterResult

if TYPE_CHECKING:
    from spheretrace.geometry.sphere import HitRecord

# Dielectrics don't absorb light
_CLEAR = vec3(1.0, 1.0, 1.0)
_CLEAR.flags.writeable = False


@dataclass(frozen=True, eq=False)
class Dielectric(Material):
    """Dielectric (glass/water) material.

    Attributes:
        ior: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    ior: float = 1.5

    def __post_init__(self) -> None:
        if self.ior < 1.0:
            raise ValueError(
                f"Index of refraction = {self.ior} is less than 1.0. "
                "IOR must be >= 1.0 for physically meaningful materials."
            )

    def refraction_ratio(self, front_face: bool) -> float:
        """Ratio n_incident / n_transmitted for a ray hitting a given side.

        Hitting from outside (air to glass) gives 1/ior; hitting from
        inside (glass to air) gives ior.
        """
        return 1.0 / self.ior if front_face else self.ior

    def will_reflect(self, unit_direction: Vec3, normal: Vec3, front_face: bool) -> bool:
        """Determine if total internal reflection will occur."""
        cos_theta = min(-dot(unit_direction, normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))
        return self.refraction_ratio(front_face) * sin_theta > 1.0

    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult:
        """Reflect or refract through the surface.

        Dielectrics always scatter. The ray reflects when refraction is
        impossible (total internal reflection) or, otherwise, with
        probability equal to the Schlick reflectance.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record. ``hit.front_face`` selects the
                refraction ratio.

        Returns:
            A ScatterResult with white attenuation.
        """
        ratio = self.refraction_ratio(hit.front_face)
        unit_direction = normalize(ray_in.direction)

        cos_theta = min(-dot(unit_direction, hit.normal), 1.0)
        cannot_refract = self.will_reflect(unit_direction, hit.normal, hit.front_face)

        if cannot_refract or schlick_fresnel(cos_theta, ratio) > random_double():
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, ratio)

        return ScatterResult(_CLEAR, Ray(hit.point, direction))
