"""Render configuration.

The configuration replaces the fixed constants of a one-off render script
with explicit values passed into the camera, the scene builder and every
render worker. Defaults reproduce the classic "random spheres" render.

Example:
    >>> from spheretrace.config import RenderConfig
    >>> config = RenderConfig(image_width=400, samples_per_pixel_total=32, worker_count=4)
    >>> config.image_height, config.samples_per_worker
    (225, 8)
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CameraConfig:
    """Viewing parameters for the thin-lens camera.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation.
        vfov: Vertical field of view in degrees.
        aperture: Lens diameter; 0 disables depth of field.
        focus_distance: Distance from lookfrom to the plane in focus.
    """

    lookfrom: tuple[float, float, float] = (13.0, 2.0, 3.0)
    lookat: tuple[float, float, float] = (0.0, 0.0, 0.0)
    vup: tuple[float, float, float] = (0.0, 1.0, 0.0)
    vfov: float = 20.0
    aperture: float = 0.1
    focus_distance: float = 10.0


@dataclass(frozen=True)
class RenderConfig:
    """Image quality and parallelism settings.

    The total sample budget is split evenly across workers: each worker
    renders the whole image with ``samples_per_worker`` samples per pixel
    and the worker images are averaged afterwards.

    Attributes:
        image_width: Output width in pixels.
        aspect_ratio: Width divided by height; the height is derived.
        samples_per_pixel_total: Samples per pixel across all workers.
        worker_count: Number of render threads.
        max_depth: Maximum number of bounces per path.
        camera: Camera parameters.

    Raises:
        ValueError: If any value is out of range, or if the sample budget
            does not divide evenly between the workers.
    """

    image_width: int = 600
    aspect_ratio: float = 16.0 / 9.0
    samples_per_pixel_total: int = 16
    worker_count: int = 16
    max_depth: int = 10
    camera: CameraConfig = field(default_factory=CameraConfig)

    def __post_init__(self) -> None:
        if self.image_width <= 0:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.image_height <= 0:
            raise ValueError(
                f"image_width {self.image_width} and aspect_ratio {self.aspect_ratio} "
                "give an image height of 0"
            )
        if self.samples_per_pixel_total <= 0:
            raise ValueError(
                f"samples_per_pixel_total must be positive, got {self.samples_per_pixel_total}"
            )
        if self.worker_count <= 0:
            raise ValueError(f"worker_count must be positive, got {self.worker_count}")
        if self.samples_per_pixel_total % self.worker_count != 0:
            raise ValueError(
                f"samples_per_pixel_total ({self.samples_per_pixel_total}) must be "
                f"divisible by worker_count ({self.worker_count})"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")

    @property
    def image_height(self) -> int:
        return int(self.image_width / self.aspect_ratio)

    @property
    def samples_per_worker(self) -> int:
        """Samples per pixel rendered by each worker."""
        return self.samples_per_pixel_total // self.worker_count

    def replace(self, **changes: Any) -> RenderConfig:
        """Return a copy with the given fields replaced (and re-validated)."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration, including derived values."""
        data = dataclasses.asdict(self)
        data["image_height"] = self.image_height
        data["samples_per_worker"] = self.samples_per_worker
        return data
