"""Multithreaded sphere path tracer.

Renders scenes made of spheres with Monte Carlo path tracing, splitting
the per-pixel sample budget across worker threads and averaging their
images.

Subpackages:
    core: Rays, vector helpers, the path tracing integrator and the
        threaded render loop
    geometry: The sphere primitive and hit records
    materials: Lambertian, metal and dielectric scattering
    scene: The World aggregate and the random-spheres scene builder
    camera: Thin-lens camera with depth of field
    image: Pixel buffers, aggregation and PNG/PPM export
"""

__version__ = "0.1.0"
