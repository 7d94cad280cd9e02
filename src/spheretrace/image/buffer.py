"""Per-worker image buffers and their aggregation.

Each render worker owns one :class:`ImageBuffer` and appends pixels to it
in strict scanline order: the top row first, then left to right within a
row. Because every worker appends in the same order, buffers can be
combined position by position once all workers have finished.

Pixels are 8-bit RGB triples produced by :func:`pixel_from_samples`, which
averages a summed color, applies gamma 2 (square root) and scales to
0-255.

Example:
    >>> from spheretrace.image.buffer import ImageBuffer, Pixel
    >>> a = ImageBuffer(1, 1)
    >>> a.push_pixel(Pixel(10, 20, 30))
    >>> b = ImageBuffer(1, 1)
    >>> b.push_pixel(Pixel(11, 20, 31))
    >>> ImageBuffer.average([a, b]).pixel_at(0, 0)
    Pixel(r=10, g=20, b=30)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NamedTuple

import numpy as np
import numpy.typing as npt

# Gamma-corrected channel values are clamped below 1 so that 256 * c
# never reaches 256
_CLAMP_MAX = 0.999


class Pixel(NamedTuple):
    """An 8-bit RGB pixel."""

    r: int
    g: int
    b: int


def pixel_from_samples(color_sum: npt.ArrayLike, samples: int) -> Pixel:
    """Convert a summed color into an output pixel.

    Args:
        color_sum: Sum of ``samples`` radiance samples (RGB).
        samples: Number of samples in the sum.

    Returns:
        The gamma-corrected (gamma 2), clamped 8-bit pixel.

    Raises:
        ValueError: If samples is not positive.
    """
    if samples <= 0:
        raise ValueError(f"samples must be positive, got {samples}")

    scale = 1.0 / samples
    color = np.nan_to_num(scale * np.asarray(color_sum, dtype=np.float64), nan=0.0)
    color = np.sqrt(np.maximum(color, 0.0))
    r, g, b = (int(256.0 * c) for c in np.clip(color, 0.0, _CLAMP_MAX))
    return Pixel(r, g, b)


class ImageBuffer:
    """A fixed-size RGB image filled in scanline order.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Create an empty buffer.

        Raises:
            ValueError: If width or height is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"image dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self._count = 0

    @property
    def capacity(self) -> int:
        return self.width * self.height

    def __len__(self) -> int:
        """Number of pixels pushed so far."""
        return self._count

    def is_complete(self) -> bool:
        return self._count == self.capacity

    def push_pixel(self, pixel: Pixel | Sequence[int]) -> None:
        """Append the next pixel in scanline order.

        Raises:
            IndexError: If the buffer is already full.
        """
        if self._count >= self.capacity:
            raise IndexError(f"image buffer is full ({self.capacity} pixels)")
        row, column = divmod(self._count, self.width)
        self._pixels[row, column] = pixel
        self._count += 1

    def pixel_at(self, x: int, y: int) -> Pixel:
        """Return the pixel at column x, row y (row 0 is the top)."""
        r, g, b = (int(c) for c in self._pixels[y, x])
        return Pixel(r, g, b)

    def to_array(self) -> npt.NDArray[np.uint8]:
        """Return a copy of the pixels as a (height, width, 3) uint8 array."""
        return self._pixels.copy()

    @classmethod
    def from_array(cls, array: npt.ArrayLike) -> ImageBuffer:
        """Build a complete buffer from a (height, width, 3) array.

        Raises:
            ValueError: If the array does not have shape (height, width, 3)
                or holds values outside 0-255.
        """
        data = np.asarray(array)
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"expected shape (height, width, 3), got {data.shape}")
        if data.size and (data.min() < 0 or data.max() > 255):
            raise ValueError("pixel values must be in 0-255")

        image = cls(data.shape[1], data.shape[0])
        image._pixels[...] = data.astype(np.uint8)
        image._count = image.capacity
        return image

    @classmethod
    def average(cls, images: Sequence[ImageBuffer]) -> ImageBuffer:
        """Average buffers position by position.

        Channels are summed as int64 and floor-divided by the number of
        buffers, so averaging a single buffer returns an identical copy and
        the result does not depend on input order.

        Args:
            images: Buffers with identical dimensions.

        Returns:
            A new buffer holding the per-pixel mean.

        Raises:
            ValueError: If images is empty or the dimensions differ.
        """
        if not images:
            raise ValueError("cannot average an empty sequence of images")

        first = images[0]
        for image in images[1:]:
            if (image.width, image.height) != (first.width, first.height):
                raise ValueError(
                    f"image dimensions differ: {first.width}x{first.height} "
                    f"vs {image.width}x{image.height}"
                )
            if len(image) != len(first):
                raise ValueError(
                    f"image pixel counts differ: {len(first)} vs {len(image)}"
                )

        total = np.zeros((first.height, first.width, 3), dtype=np.int64)
        for image in images:
            total += image._pixels
        result = cls(first.width, first.height)
        result._pixels[...] = (total // len(images)).astype(np.uint8)
        result._count = len(first)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._count == other._count
            and np.array_equal(self._pixels, other._pixels)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ImageBuffer(width={self.width}, height={self.height}, pixels={self._count})"
