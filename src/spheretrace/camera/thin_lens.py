"""Thin-lens camera model with depth of field.

This module implements a look-at camera that simulates a finite aperture.
Primary rays start at a random point on a lens disk and pass through the
matching point on the focus plane, so geometry on the focus plane stays
sharp while everything nearer or farther blurs in proportion to the
aperture.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

All derived vectors are computed once at construction and stored read-only,
so a single camera can be shared by every render thread.

Example:
    >>> from spheretrace.camera.thin_lens import ThinLensCamera
    >>> camera = ThinLensCamera(
    ...     lookfrom=(13.0, 2.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=20.0,
    ...     aspect_ratio=16.0 / 9.0,
    ...     aperture=0.1,
    ...     focus_distance=10.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5)  # Ray through the image center
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy.typing as npt

from spheretrace.core.ray import Ray, Vec3, cross, frozen, length, normalize, random_in_unit_disk

if TYPE_CHECKING:
    from spheretrace.config import RenderConfig


class ThinLensCamera:
    """Camera that maps normalized image coordinates to world-space rays.

    Attributes:
        origin: Camera position in world space.
        u, v, w: Orthonormal camera basis (right, up, backward).
        horizontal: Full viewport width vector on the focus plane.
        vertical: Full viewport height vector on the focus plane.
        lower_left_corner: Lower-left corner of the viewport on the
            focus plane.
        lens_radius: Half the aperture.
    """

    def __init__(
        self,
        lookfrom: npt.ArrayLike,
        lookat: npt.ArrayLike,
        vup: npt.ArrayLike,
        vfov: float,
        aspect_ratio: float,
        aperture: float = 0.0,
        focus_distance: float = 1.0,
    ) -> None:
        """Initialize camera state from view parameters.

        Args:
            lookfrom: Camera position in world space (x, y, z).
            lookat: Point the camera is looking at (x, y, z).
            vup: Up direction vector, typically (0, 1, 0).
            vfov: Vertical field of view in degrees.
            aspect_ratio: Width divided by height of the output image.
            aperture: Lens diameter. 0 gives a pinhole camera.
            focus_distance: Distance from lookfrom to the plane in focus.

        Raises:
            ValueError: If the parameters do not define a valid view.
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {vfov}")
        if aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        if aperture < 0.0:
            raise ValueError(f"aperture must be non-negative, got {aperture}")
        if focus_distance <= 0.0:
            raise ValueError(f"focus_distance must be positive, got {focus_distance}")

        origin = frozen(lookfrom)
        view = origin - frozen(lookat)
        if length(view) == 0.0:
            raise ValueError("lookfrom and lookat must be distinct points")

        theta = math.radians(vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        w = normalize(view)
        side = cross(frozen(vup), w)
        if length(side) == 0.0:
            raise ValueError("vup must not be parallel to the viewing direction")
        u = normalize(side)
        v = cross(w, u)

        horizontal = focus_distance * viewport_width * u
        vertical = focus_distance * viewport_height * v

        self.vfov = float(vfov)
        self.aspect_ratio = float(aspect_ratio)
        self.aperture = float(aperture)
        self.focus_distance = float(focus_distance)
        self.lens_radius = aperture / 2.0

        self.origin = origin
        self.u = frozen(u)
        self.v = frozen(v)
        self.w = frozen(w)
        self.horizontal = frozen(horizontal)
        self.vertical = frozen(vertical)
        self.lower_left_corner = frozen(
            origin - horizontal / 2.0 - vertical / 2.0 - focus_distance * w
        )

    @classmethod
    def from_config(cls, config: RenderConfig) -> ThinLensCamera:
        """Build the camera described by a render configuration."""
        camera = config.camera
        return cls(
            lookfrom=camera.lookfrom,
            lookat=camera.lookat,
            vup=camera.vup,
            vfov=camera.vfov,
            aspect_ratio=config.aspect_ratio,
            aperture=camera.aperture,
            focus_distance=camera.focus_distance,
        )

    def get_ray(self, s: float, t: float) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        - s = 0: left edge, s = 1: right edge
        - t = 0: bottom edge, t = 1: top edge

        Args:
            s: Horizontal coordinate in [0, 1).
            t: Vertical coordinate in [0, 1).

        Returns:
            A Ray from a random point on the lens toward the matching
            point on the focus plane.
        """
        origin: Vec3 = self.origin
        if self.lens_radius > 0.0:
            rd = self.lens_radius * random_in_unit_disk()
            origin = origin + self.u * rd[0] + self.v * rd[1]

        direction = (
            self.lower_left_corner + s * self.horizontal + t * self.vertical - origin
        )
        return Ray(origin, direction)

    def __repr__(self) -> str:
        return (
            f"ThinLensCamera(origin={self.origin.tolist()}, vfov={self.vfov}, "
            f"aspect_ratio={self.aspect_ratio:.4f}, aperture={self.aperture}, "
            f"focus_distance={self.focus_distance})"
        )
