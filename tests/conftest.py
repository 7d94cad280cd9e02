"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules: small scenes,
a pinhole camera looking down -z, tiny render configurations and a fake
clock for the progress tracker.
"""

import pytest

from spheretrace.camera import ThinLensCamera
from spheretrace.config import CameraConfig, RenderConfig
from spheretrace.core.ray import vec3
from spheretrace.geometry import HitRecord, Sphere
from spheretrace.materials import Lambertian
from spheretrace.scene import World


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def fake_clock():
    """A clock that only moves when the test advances it."""
    return FakeClock()


@pytest.fixture
def gray():
    """A mid-gray diffuse material."""
    return Lambertian((0.5, 0.5, 0.5))


@pytest.fixture
def empty_world():
    """A scene with nothing in it; every ray sees the sky."""
    return World()


@pytest.fixture
def single_sphere_world(gray):
    """One gray diffuse sphere of radius 0.5 at (0, 0, -1)."""
    return World([Sphere(vec3(0.0, 0.0, -1.0), 0.5, gray)])


@pytest.fixture
def pinhole_camera():
    """A pinhole camera at the origin looking down -z with a 90 degree vfov."""
    return ThinLensCamera(
        lookfrom=(0.0, 0.0, 0.0),
        lookat=(0.0, 0.0, -1.0),
        vup=(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=2.0,
        aperture=0.0,
        focus_distance=1.0,
    )


@pytest.fixture
def tiny_config():
    """A small render configuration matching pinhole_camera's view."""
    return RenderConfig(
        image_width=8,
        aspect_ratio=2.0,
        samples_per_pixel_total=4,
        worker_count=2,
        max_depth=4,
        camera=CameraConfig(
            lookfrom=(0.0, 0.0, 0.0),
            lookat=(0.0, 0.0, -1.0),
            vfov=90.0,
            aperture=0.0,
            focus_distance=1.0,
        ),
    )


@pytest.fixture
def make_hit(gray):
    """Factory for hit records on a surface facing +y at the origin."""

    def _make_hit(normal=(0.0, 1.0, 0.0), front_face=True, material=None, point=(0.0, 0.0, 0.0)):
        return HitRecord(
            point=vec3(*point),
            normal=vec3(*normal),
            t=1.0,
            front_face=front_face,
            material=material if material is not None else gray,
        )

    return _make_hit
