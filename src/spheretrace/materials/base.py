"""Base material interface.

Every material answers one question: given an incoming ray and the surface
it hit, does the ray continue, and if so in which direction and with how
much of its energy? A ``None`` result means the ray was absorbed.

Materials are immutable and carry no per-render state, so one instance can
be shared by any number of spheres and read concurrently by every render
worker.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, NamedTuple

from spheretrace.core.ray import Ray, Vec3, as_vec3

if TYPE_CHECKING:
    from spheretrace.geometry.sphere import HitRecord


class ScatterResult(NamedTuple):
    """Outcome of a successful scatter.

    Attributes:
        attenuation: The color attenuation for this bounce (RGB).
        scattered: The outgoing ray, starting at the hit point.
    """

    attenuation: Vec3
    scattered: Ray


class Material(ABC):
    """Interface shared by all surface materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord) -> ScatterResult | None:
        """Scatter ``ray_in`` off the surface described by ``hit``.

        Args:
            ray_in: The incoming ray.
            hit: The intersection record for the surface that was hit.

        Returns:
            A ScatterResult, or None if the ray was absorbed.
        """


def validate_albedo(albedo: Vec3) -> Vec3:
    """Check an albedo for energy conservation and return it read-only.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """
    albedo = as_vec3(albedo).copy()
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
    albedo.flags.writeable = False
    return albedo
