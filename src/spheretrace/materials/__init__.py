"""Materials module for surface scattering models.

This module implements the material models that decide how rays bounce:

Components:
    base: Material interface and ScatterResult
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Materials are frozen dataclasses. A single instance may be referenced by
many spheres and read by every render thread at once.
"""

from .base import Material, ScatterResult
from .dielectric import Dielectric
from .lambertian import Lambertian
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "Lambertian",
    "Metal",
    "Dielectric",
]
