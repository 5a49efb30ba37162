"""
Unit tests for image_codec module.

Tests decoding to RGB arrays, encoding with the default suffix, and the
supported-format helpers.
"""

import tempfile
from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

from IV_Libs.ImageEditingLib.image_codec import (
    build_name_filter,
    decode,
    encode,
    get_supported_read_extensions,
    get_supported_write_extensions,
    is_supported_format,
)
from IV_Libs.errors import DecodeError, EncodeError


class TestDecode:
    """Tests for decode function."""

    def test_decodes_png(self, temp_dir):
        path = temp_dir / "pixel.png"
        PILImage.new("RGB", (3, 2), (10, 20, 30)).save(path)

        image = decode(path)

        assert image.shape == (2, 3, 3)
        assert image.dtype == np.uint8
        assert tuple(image[0, 0]) == (10, 20, 30)

    def test_drops_alpha(self, temp_dir):
        path = temp_dir / "alpha.png"
        PILImage.new("RGBA", (4, 4), (1, 2, 3, 0)).save(path)

        assert decode(path).shape == (4, 4, 3)

    def test_converts_grayscale(self, temp_dir):
        path = temp_dir / "gray.png"
        PILImage.new("L", (4, 4), 77).save(path)

        image = decode(path)

        assert image.shape == (4, 4, 3)
        assert tuple(image[0, 0]) == (77, 77, 77)

    def test_missing_file(self, temp_dir):
        with pytest.raises(DecodeError):
            decode(temp_dir / "missing.png")

    def test_not_an_image(self, temp_dir):
        path = temp_dir / "notes.png"
        path.write_text("hello")

        with pytest.raises(DecodeError) as exc_info:
            decode(path)
        assert "notes.png" in str(exc_info.value)

    def test_decode_error_is_os_error(self, temp_dir):
        with pytest.raises(OSError):
            decode(temp_dir / "missing.png")


class TestEncode:
    """Tests for encode function."""

    def test_round_trip_png(self, temp_dir, gradient_image):
        path = encode(gradient_image, temp_dir / "out.png")

        assert path == temp_dir / "out.png"
        assert np.array_equal(decode(path), gradient_image)

    def test_default_suffix(self, temp_dir, solid_image):
        path = encode(solid_image, temp_dir / "noext")

        assert path.suffix == ".jpg"
        assert path.exists()

    def test_empty_image(self, temp_dir):
        with pytest.raises(EncodeError):
            encode(np.zeros((0, 0, 3), dtype=np.uint8), temp_dir / "empty.png")

    def test_unknown_extension(self, temp_dir, solid_image):
        with pytest.raises(EncodeError):
            encode(solid_image, temp_dir / "out.unknownext")

    def test_missing_directory(self, temp_dir, solid_image):
        with pytest.raises(EncodeError):
            encode(solid_image, temp_dir / "nope" / "out.png")


class TestSupportedFormats:
    """Tests for the supported-format helpers."""

    def test_common_extensions(self):
        read = get_supported_read_extensions()
        write = get_supported_write_extensions()

        for ext in (".png", ".jpg", ".bmp"):
            assert ext in read
            assert ext in write

    def test_name_filter(self):
        name_filter = build_name_filter()

        assert name_filter.startswith("Images (")
        assert "*.png" in name_filter

    def test_is_supported_format(self):
        assert is_supported_format("photo.PNG")
        assert not is_supported_format("notes.txt")


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as directory:
        yield Path(directory)
