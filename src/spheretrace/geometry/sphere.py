"""Sphere primitive with robust ray-sphere intersection.

This module provides a Sphere dataclass and intersection method using the
robust quadratic formula from Ray Tracing Gems to avoid floating-point
artifacts.

The robust quadratic formula avoids catastrophic cancellation when b^2 is
nearly equal to 4ac by using a reformulated calculation that maintains
numerical stability.

Example:
    >>> from spheretrace.core.ray import Ray, vec3
    >>> from spheretrace.geometry.sphere import Sphere
    >>> from spheretrace.materials import Lambertian
    >>> sphere = Sphere(center=vec3(0, 0, -1), radius=0.5, material=Lambertian((0.5, 0.5, 0.5)))
    >>> record = sphere.hit(Ray(vec3(0, 0, 0), vec3(0, 0, -1)), 0.001, float("inf"))
    >>> record.t
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from spheretrace.core.ray import Ray, Vec3, dot, frozen
from spheretrace.materials.base import Material


@dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The surface normal at the intersection point (unit length).
            Always faces against the incoming ray, so it points inward
            when the ray hits from inside the sphere.
        t: The parameter value along the ray where intersection occurred.
        front_face: True if the ray hit from outside the surface.
        material: The material of the object that was hit. Not owned by
            the record.
    """

    point: Vec3
    normal: Vec3
    t: float
    front_face: bool
    material: Material


def _solve_quadratic_robust(h: float, a: float, c: float, sqrt_d: float) -> tuple[float, float]:
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant))
    sign_h = -1.0 if h < 0.0 else 1.0
    q = -(h + sign_h * sqrt_d)

    if abs(q) < 1e-12:
        # Tangent ray through the origin; fall back to the textbook formula
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point, radius and a shared material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive float).
        material: The material assigned to the sphere. The same instance
            may be shared across spheres.
    """

    center: Vec3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        object.__setattr__(self, "center", frozen(self.center))
        object.__setattr__(self, "radius", float(self.radius))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for ray-sphere intersection.

        The ray-sphere intersection is found by solving:
            |origin + t * direction - center|^2 = radius^2

        Expanding and rearranging gives the quadratic equation:
            a*t^2 + 2*h*t + c = 0

        where:
            a = dot(direction, direction)
            h = dot(direction, oc)  (half of traditional b)
            c = dot(oc, oc) - radius^2
            oc = origin - center

        Args:
            ray: The ray to test. The direction need not be normalized.
            t_min: Minimum t value to consider a valid hit (avoids
                self-intersection).
            t_max: Maximum t value to consider a valid hit.

        Returns:
            A HitRecord for the nearest root in [t_min, t_max], or None
            if neither root lies in range.
        """
        oc = ray.origin - self.center
        a = dot(ray.direction, ray.direction)
        h = dot(ray.direction, oc)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = h * h - a * c
        if discriminant < 0.0 or a == 0.0:
            return None

        t0, t1 = _solve_quadratic_robust(h, a, c, math.sqrt(discriminant))

        # Find the nearest root that lies in the acceptable range
        t = t0
        if t < t_min or t > t_max:
            t = t1
            if t < t_min or t > t_max:
                return None

        point = ray.at(t)
        outward_normal = (point - self.center) / self.radius

        # Front face: ray direction and outward normal point in opposite directions
        front_face = dot(ray.direction, outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal

        return HitRecord(
            point=point,
            normal=normal,
            t=t,
            front_face=front_face,
            material=self.material,
        )
