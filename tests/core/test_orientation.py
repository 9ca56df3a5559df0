"""
Tests for orientation handling
"""

import numpy as np
import pytest

from core.enums import Orientation
from core.image.buffer import ImageBuffer
from core.image.orientation import normalize_orientation
from image_factory import numbered_image


@pytest.fixture
def buffer():
    """4x3 image with unique pixel values"""
    return ImageBuffer(numbered_image(4, 3))


class TestOrientationEnum:
    """Test EXIF tag resolution"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (1, Orientation.NORMAL),
            (3, Orientation.ROTATE_180),
            (6, Orientation.ROTATE_90),
            (8, Orientation.ROTATE_270),
            ("6", Orientation.ROTATE_90),
        ],
    )
    def test_known_tags(self, value, expected):
        assert Orientation.from_tag(value) is expected

    @pytest.mark.parametrize("value", [None, 0, 2, 4, 5, 7, 9, -1, "garbage", b"\x06"])
    def test_unknown_tags_are_normal(self, value):
        assert Orientation.from_tag(value) is Orientation.NORMAL

    def test_clockwise_degrees(self):
        assert Orientation.NORMAL.clockwise_degrees == 0
        assert Orientation.ROTATE_90.clockwise_degrees == 90
        assert Orientation.ROTATE_180.clockwise_degrees == 180
        assert Orientation.ROTATE_270.clockwise_degrees == 270

    @pytest.mark.parametrize("degrees", [0, 90, 180, 270, 360, -90])
    def test_from_degrees_round_trips(self, degrees):
        assert Orientation.from_degrees(degrees).clockwise_degrees == degrees % 360

    def test_from_degrees_rejects_odd_angles(self):
        with pytest.raises(ValueError):
            Orientation.from_degrees(45)


class TestNormalizeOrientation:
    """Test the orientation normalizer stage"""

    def test_normal_is_noop(self, buffer):
        result = normalize_orientation(buffer, Orientation.NORMAL)
        assert result is buffer

    def test_rotate_90_is_clockwise(self, buffer):
        result = normalize_orientation(buffer, Orientation.ROTATE_90)
        assert result.size == (3, 4)
        original = buffer.pixels
        # Bottom-left corner moves to top-left, top-left to top-right
        assert np.array_equal(result.pixels[0, 0], original[-1, 0])
        assert np.array_equal(result.pixels[0, -1], original[0, 0])

    def test_rotate_180(self, buffer):
        result = normalize_orientation(buffer, Orientation.ROTATE_180)
        assert result.size == (4, 3)
        assert np.array_equal(result.pixels, buffer.pixels[::-1, ::-1])

    def test_rotate_270_is_clockwise(self, buffer):
        result = normalize_orientation(buffer, Orientation.ROTATE_270)
        assert result.size == (3, 4)
        original = buffer.pixels
        # Top-right corner moves to top-left
        assert np.array_equal(result.pixels[0, 0], original[0, -1])

    def test_rotation_is_lossless(self, buffer):
        result = normalize_orientation(buffer, Orientation.ROTATE_90)
        assert sorted(result.pixels.ravel().tolist()) == sorted(buffer.pixels.ravel().tolist())

    def test_rotate_180_twice_keeps_dimensions(self, buffer):
        once = normalize_orientation(buffer, Orientation.ROTATE_180)
        twice = normalize_orientation(once, Orientation.ROTATE_180)
        assert twice.size == buffer.size
        assert np.array_equal(twice.pixels, buffer.pixels)

    def test_rotate_90_then_270_restores(self, buffer):
        turned = normalize_orientation(buffer, Orientation.ROTATE_90)
        restored = normalize_orientation(turned, Orientation.ROTATE_270)
        assert restored.size == buffer.size
        assert np.array_equal(restored.pixels, buffer.pixels)

    def test_input_not_mutated(self, buffer):
        before = buffer.pixels.copy()
        normalize_orientation(buffer, Orientation.ROTATE_90)
        assert np.array_equal(buffer.pixels, before)

    def test_result_is_contiguous(self, buffer):
        result = normalize_orientation(buffer, Orientation.ROTATE_270)
        assert result.pixels.flags["C_CONTIGUOUS"]
