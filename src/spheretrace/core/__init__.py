"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector helpers and thread-local sampling
    integrator: Path tracing radiance estimate and per-pixel sampling
    progress: Thread-safe remaining-scanline tracker
    parallel: Render workers and the thread pool that runs them

Each render thread draws random numbers from its own numpy Generator, so
workers never contend on a shared random state.
"""

from .ray import (
    Ray,
    Vec3,
    as_vec3,
    cross,
    dot,
    frozen,
    length,
    length_squared,
    near_zero,
    normalize,
    random_double,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    random_vec3,
    reflect,
    refract,
    schlick_fresnel,
    vec3,
)

# Note: integrator and parallel are NOT imported here to avoid circular imports
# (materials and geometry import core.ray). Import them directly:
#   from spheretrace.core.parallel import render

__all__ = [
    "Ray",
    "Vec3",
    "vec3",
    "as_vec3",
    "frozen",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_fresnel",
    "near_zero",
    "random_double",
    "random_vec3",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
