"""Ray data structure and vector utilities for CPU path tracing.

This module provides the fundamental Ray dataclass and the vector helpers
used throughout the tracer. Vectors and colors are plain NumPy float64
arrays of shape (3,), so every helper here also accepts anything
``np.asarray`` understands.

Random sampling uses one NumPy ``Generator`` per thread. Render workers
therefore never share random state, and seeds are deliberately left to
the operating system's entropy source.

Example:
    >>> from spheretrace.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    array([ 0.,  0., -5.])
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors and RGB colors
Vec3 = npt.NDArray[np.float64]

_thread_state = threading.local()


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Vec3:
    """Build a 3D vector (or RGB color) as a float64 array."""
    return np.array((x, y, z), dtype=np.float64)


def as_vec3(value: npt.ArrayLike) -> Vec3:
    """Convert a tuple, list or array to a float64 3-vector.

    Raises:
        ValueError: If ``value`` does not have exactly three components.
    """
    array = np.asarray(value, dtype=np.float64)
    if array.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {array.shape}")
    return array


def frozen(value: npt.ArrayLike) -> Vec3:
    """Return a read-only float64 copy of a 3-vector."""
    array = as_vec3(value).copy()
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; materials normalize where they need to.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Compute the point ``origin + t * direction``."""
        return self.origin + t * self.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def length_squared(v: Vec3) -> float:
    return float(np.dot(v, v))


def length(v: Vec3) -> float:
    return float(np.sqrt(np.dot(v, v)))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. A zero-length input
        is returned unchanged.
    """
    norm = length(v)
    if norm == 0.0:
        return v
    return v / norm


def dot(a: Vec3, b: Vec3) -> float:
    return float(np.dot(a, b))


def cross(a: Vec3, b: Vec3) -> Vec3:
    return np.cross(a, b)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a unit normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The mirrored direction ``incident - 2 (incident . n) n``.
    """
    return incident - 2.0 * np.dot(incident, normal) * normal


def refract(incident: Vec3, normal: Vec3, eta: float) -> Vec3:
    """Refract a unit incident vector through a surface using Snell's law.

    The caller is responsible for checking total internal reflection first;
    the perpendicular component's magnitude is clamped so a grazing ray
    still yields a finite direction.

    Args:
        incident: The incoming direction (normalized).
        normal: The surface normal facing the incident ray (normalized).
        eta: The ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(float(np.dot(-incident, normal)), 1.0)
    r_out_perp = eta * (incident + cos_theta * normal)
    r_out_parallel = -np.sqrt(abs(1.0 - length_squared(r_out_perp))) * normal
    return r_out_perp + r_out_parallel


def schlick_fresnel(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        The approximate Fresnel reflectance coefficient.
    """
    r0 = ((1.0 - ref_idx) / (1.0 + ref_idx)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


def near_zero(v: Vec3) -> bool:
    """Check if a vector is near zero in all components."""
    return bool(np.all(np.abs(v) < 1e-8))


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def _rng() -> np.random.Generator:
    rng = getattr(_thread_state, "rng", None)
    if rng is None:
        rng = np.random.default_rng()
        _thread_state.rng = rng
    return rng


def random_double(low: float = 0.0, high: float = 1.0) -> float:
    """Draw a uniform random float in ``[low, high)``."""
    return low + (high - low) * float(_rng().random())


def random_vec3(low: float = 0.0, high: float = 1.0) -> Vec3:
    """Draw a vector whose components are uniform in ``[low, high)``."""
    return _rng().uniform(low, high, 3)


def random_in_unit_sphere() -> Vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling to generate uniformly distributed points
    within the unit sphere.
    """
    rng = _rng()
    while True:
        p = rng.uniform(-1.0, 1.0, 3)
        if np.dot(p, p) < 1.0:
            return p


def random_unit_vector() -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere."""
    return normalize(random_in_unit_sphere())


def random_in_unit_disk() -> Vec3:
    """Generate a random point (x, y, 0) inside the unit disk.

    Used by the thin-lens camera to jitter ray origins across the aperture.
    """
    rng = _rng()
    while True:
        x, y = rng.uniform(-1.0, 1.0, 2)
        if x * x + y * y < 1.0:
            return vec3(x, y, 0.0)
