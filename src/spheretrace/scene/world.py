"""Scene-level ray intersection over a collection of spheres.

The World is the aggregate the path tracer queries: it tests the ray
against every sphere and keeps the closest hit. There is no spatial index;
the scan is linear with a running best ``t``.

A World is filled once before rendering and only read afterwards, which is
what lets every render thread query it without locking.

Example:
    >>> from spheretrace.core.ray import vec3
    >>> from spheretrace.geometry import Sphere
    >>> from spheretrace.materials import Lambertian
    >>> world = World()
    >>> world.add(Sphere(vec3(0, 0, -1), 0.5, Lambertian((0.8, 0.3, 0.3))))
    >>> len(world)
    1
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from spheretrace.core.ray import Ray
from spheretrace.geometry.sphere import HitRecord, Sphere


class World:
    """An ordered collection of spheres queried as one intersectable."""

    def __init__(self, spheres: Iterable[Sphere] = ()) -> None:
        self._spheres: list[Sphere] = list(spheres)

    def add(self, sphere: Sphere) -> None:
        """Append a sphere. Only valid while the scene is being built."""
        self._spheres.append(sphere)

    @property
    def spheres(self) -> tuple[Sphere, ...]:
        """The spheres in insertion order."""
        return tuple(self._spheres)

    def __len__(self) -> int:
        return len(self._spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self._spheres)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test the ray against all spheres in the scene.

        Args:
            ray: The ray to trace.
            t_min: Minimum t value to consider a valid hit.
            t_max: Maximum t value to consider a valid hit.

        Returns:
            The HitRecord of the closest intersection in [t_min, t_max],
            or None if nothing was hit.
        """
        closest_so_far = t_max
        result = None

        for sphere in self._spheres:
            record = sphere.hit(ray, t_min, closest_so_far)
            if record is not None:
                closest_so_far = record.t
                result = record

        return result

    def __repr__(self) -> str:
        return f"World(spheres={len(self._spheres)})"
