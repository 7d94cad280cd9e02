"""Image module for pixel storage, aggregation and export.

Components:
    buffer: Pixel, ImageBuffer and the sample-to-pixel conversion
    export: PNG (Pillow) and plain-text PPM output
"""

from .buffer import ImageBuffer, Pixel, pixel_from_samples
from .export import compute_rmse, image_to_array, save_image, save_png, write_ppm

__all__ = [
    "ImageBuffer",
    "Pixel",
    "pixel_from_samples",
    "image_to_array",
    "save_png",
    "write_ppm",
    "save_image",
    "compute_rmse",
]
