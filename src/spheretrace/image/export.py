"""Image export utilities for rendered images.

This module writes finished image buffers to disk. Pixels are already
gamma corrected and quantized by the render workers, so export is a pure
encoding step.

Supported formats:
    - PNG, and anything else Pillow can write, chosen by file suffix
    - PPM (plain-text P3)

Example:
    >>> from spheretrace.image.export import save_image
    >>> save_image(image, "output.png")  # doctest: +SKIP
    >>> save_image(image, "output.ppm")  # doctest: +SKIP
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from spheretrace.image.buffer import ImageBuffer

PathLike = str | os.PathLike[str]


def image_to_array(image: ImageBuffer) -> npt.NDArray[np.uint8]:
    """Return the image as a (height, width, 3) uint8 array, top row first.

    Raises:
        ValueError: If the image has not been completely filled.
    """
    if not image.is_complete():
        raise ValueError(
            f"image is incomplete: {len(image)} of {image.capacity} pixels written"
        )
    return image.to_array()


def save_png(image: ImageBuffer, filepath: PathLike) -> None:
    """Save the image through Pillow.

    Despite the name, the format follows the file suffix, so any format
    Pillow can write works. The usual case is an 8-bit sRGB PNG.

    Args:
        image: A completely filled image buffer.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image_to_array(image))
    pil_image.save(filepath)


def write_ppm(image: ImageBuffer, stream: TextIO) -> None:
    """Write the image to a text stream as plain-text PPM (P3).

    One pixel per line, ``r g b``, top row first.
    """
    pixels = image_to_array(image)
    stream.write(f"P3\n{image.width} {image.height}\n255\n")
    for r, g, b in pixels.reshape(-1, 3):
        stream.write(f"{r} {g} {b}\n")


def save_image(image: ImageBuffer, filepath: PathLike) -> Path:
    """Save the image, picking the encoder from the file suffix.

    A ``.ppm`` suffix writes plain-text PPM; everything else goes through
    Pillow.

    Args:
        image: A completely filled image buffer.
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        ValueError: If the image is incomplete or Pillow does not know the
            suffix.
        OSError: If the file cannot be written.
    """
    path = Path(filepath)
    if path.suffix.lower() == ".ppm":
        with path.open("w", encoding="ascii") as stream:
            write_ppm(image, stream)
    else:
        save_png(image, path)
    return path


def compute_rmse(image_a: ImageBuffer, image_b: ImageBuffer) -> float:
    """Compute root mean squared error between two images, in 0-255 units.

    Args:
        image_a: First image.
        image_b: Second image (must have the same dimensions).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image dimensions don't match.
    """
    if (image_a.width, image_a.height) != (image_b.width, image_b.height):
        raise ValueError(
            f"Image dimensions must match: {image_a.width}x{image_a.height} "
            f"vs {image_b.width}x{image_b.height}"
        )

    diff = image_a.to_array().astype(np.float64) - image_b.to_array().astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
