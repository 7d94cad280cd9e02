"""Unit tests for image buffers and pixel conversion.

Tests cover:
- Sample sum to pixel conversion (scale, gamma 2, clamp, quantize)
- Scanline-order filling and capacity
- Averaging: identity, permutation invariance, exact floor semantics
- Averaging errors
"""

import itertools

import numpy as np
import pytest

from spheretrace.core.ray import vec3
from spheretrace.image import ImageBuffer, Pixel, pixel_from_samples


def random_image(rng, width=5, height=3):
    return ImageBuffer.from_array(rng.integers(0, 256, size=(height, width, 3)))


class TestPixelFromSamples:
    """Tests for converting summed colors to 8-bit pixels."""

    def test_black(self):
        assert pixel_from_samples(vec3(0.0, 0.0, 0.0), 4) == Pixel(0, 0, 0)

    def test_white_clamps_to_255(self):
        assert pixel_from_samples(vec3(4.0, 4.0, 4.0), 4) == Pixel(255, 255, 255)

    def test_overbright_clamps(self):
        assert pixel_from_samples(vec3(100.0, 0.0, 0.0), 1) == Pixel(255, 0, 0)

    def test_gamma_two(self):
        """Test a mean of 0.25 becomes sqrt(0.25) * 256 = 128."""
        assert pixel_from_samples(vec3(1.0, 1.0, 1.0), 4) == Pixel(128, 128, 128)

    def test_averages_by_sample_count(self):
        assert pixel_from_samples(vec3(0.5, 1.0, 2.0), 2) == pixel_from_samples(
            vec3(0.25, 0.5, 1.0), 1
        )

    def test_negative_and_nan_become_black(self):
        assert pixel_from_samples(np.array([-1.0, np.nan, 0.0]), 1) == Pixel(0, 0, 0)

    def test_rejects_zero_samples(self):
        with pytest.raises(ValueError):
            pixel_from_samples(vec3(1.0, 1.0, 1.0), 0)


class TestImageBufferFilling:
    """Tests for push_pixel and scanline order."""

    def test_new_buffer_is_empty(self):
        image = ImageBuffer(4, 2)
        assert len(image) == 0
        assert image.capacity == 8
        assert not image.is_complete()

    def test_scanline_order(self):
        """Test pixels fill left to right, then the next row down."""
        image = ImageBuffer(3, 2)
        for value in range(6):
            image.push_pixel(Pixel(value, 0, 0))

        assert image.is_complete()
        assert image.pixel_at(0, 0) == Pixel(0, 0, 0)
        assert image.pixel_at(2, 0) == Pixel(2, 0, 0)
        assert image.pixel_at(0, 1) == Pixel(3, 0, 0)
        assert image.pixel_at(2, 1) == Pixel(5, 0, 0)
        np.testing.assert_array_equal(image.to_array()[:, :, 0], [[0, 1, 2], [3, 4, 5]])

    def test_push_past_capacity(self):
        image = ImageBuffer(1, 1)
        image.push_pixel(Pixel(1, 2, 3))
        with pytest.raises(IndexError):
            image.push_pixel(Pixel(4, 5, 6))

    def test_accepts_plain_tuples(self):
        image = ImageBuffer(1, 1)
        image.push_pixel((7, 8, 9))
        assert image.pixel_at(0, 0) == Pixel(7, 8, 9)

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 3)])
    def test_rejects_bad_dimensions(self, width, height):
        with pytest.raises(ValueError):
            ImageBuffer(width, height)

    def test_to_array_is_a_copy(self):
        image = ImageBuffer(1, 1)
        image.push_pixel(Pixel(1, 1, 1))
        array = image.to_array()
        array[0, 0, 0] = 99
        assert image.pixel_at(0, 0) == Pixel(1, 1, 1)

    def test_from_array_validation(self):
        with pytest.raises(ValueError):
            ImageBuffer.from_array(np.zeros((2, 2)))
        with pytest.raises(ValueError):
            ImageBuffer.from_array(np.full((1, 1, 3), 300))


class TestImageAverage:
    """Tests for combining worker buffers."""

    def test_single_image_identity(self):
        image = random_image(np.random.default_rng(1))
        result = ImageBuffer.average([image])
        assert result == image
        assert result is not image

    def test_permutation_invariance(self):
        rng = np.random.default_rng(2)
        images = [random_image(rng) for _ in range(4)]
        expected = ImageBuffer.average(images)

        for permutation in itertools.permutations(images):
            assert ImageBuffer.average(list(permutation)) == expected

    def test_floor_division(self):
        """Test channel means round down like integer division."""
        a = ImageBuffer.from_array(np.array([[[255, 0, 3]]]))
        b = ImageBuffer.from_array(np.array([[[254, 1, 4]]]))
        assert ImageBuffer.average([a, b]).pixel_at(0, 0) == Pixel(254, 0, 3)

    def test_no_overflow_with_many_images(self):
        images = [ImageBuffer.from_array(np.full((2, 2, 3), 255)) for _ in range(16)]
        result = ImageBuffer.average(images)
        np.testing.assert_array_equal(result.to_array(), np.full((2, 2, 3), 255))

    def test_empty_sequence(self):
        with pytest.raises(ValueError, match="empty"):
            ImageBuffer.average([])

    def test_mismatched_dimensions(self):
        rng = np.random.default_rng(3)
        with pytest.raises(ValueError, match="dimensions"):
            ImageBuffer.average([random_image(rng, 5, 3), random_image(rng, 3, 5)])

    def test_mismatched_fill(self):
        full = ImageBuffer.from_array(np.zeros((1, 2, 3)))
        partial = ImageBuffer(2, 1)
        partial.push_pixel(Pixel(0, 0, 0))
        with pytest.raises(ValueError, match="counts"):
            ImageBuffer.average([full, partial])
