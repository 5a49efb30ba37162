"""
Image data models for Image Viewer.

This module defines core data structures used throughout the editing core.

Classes:
    Point: An integer (x, y) coordinate in image or display space
    SelectionRect: A normalized, inclusive rectangle produced by the crop extractor

Functions:
    validate_image: Check that a value is an RGB uint8 image array
    copy_image: Return an independent, contiguous copy of an image
    image_size: (width, height) of an image
    has_area: Whether an image holds at least one pixel

Type Aliases:
    Image: A numpy array of shape (height, width, 3), dtype uint8, RGB order
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import numpy as np

Image = np.ndarray
RgbColor = Tuple[int, int, int]

IMAGE_CHANNELS = 3
IMAGE_DTYPE = np.uint8


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class SelectionRect:
    """Rectangle with inclusive corners.

    ``top_left`` and ``bottom_right`` are both part of the rectangle, so a
    rectangle whose corners coincide covers a single pixel. When clamping has
    pushed ``bottom_right`` above or left of ``top_left`` the rectangle is
    degenerate and covers nothing.
    """
    top_left: Point
    bottom_right: Point

    @property
    def width(self) -> int:
        return max(0, self.bottom_right.x - self.top_left.x + 1)

    @property
    def height(self) -> int:
        return max(0, self.bottom_right.y - self.top_left.y + 1)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Return (left, top, right, bottom) with inclusive right/bottom."""
        return (
            self.top_left.x,
            self.top_left.y,
            self.bottom_right.x,
            self.bottom_right.y,
        )


def validate_image(image: object) -> Image:
    """
    Check that a value is usable as an Image.

    Args:
        image: Value to check

    Returns:
        The same array, for chaining

    Raises:
        TypeError: If image is not a numpy array
        ValueError: If the array is not (H, W, 3) uint8
    """
    if not isinstance(image, np.ndarray):
        raise TypeError(f"Expected numpy image array, got {type(image)}")

    if image.ndim != 3 or image.shape[2] != IMAGE_CHANNELS:
        raise ValueError(f"Expected image of shape (H, W, 3), got {image.shape}")

    if image.dtype != IMAGE_DTYPE:
        raise ValueError(f"Expected uint8 image, got {image.dtype}")

    return image


def copy_image(image: Image) -> Image:
    """Return a C-contiguous copy that shares no memory with ``image``."""
    return np.ascontiguousarray(image).copy()


def image_size(image: Optional[Image]) -> Tuple[int, int]:
    """Return (width, height), or (0, 0) for no image."""
    if image is None:
        return (0, 0)
    return (int(image.shape[1]), int(image.shape[0]))


def has_area(image: Optional[Image]) -> bool:
    width, height = image_size(image)
    return width > 0 and height > 0


def blank_image(width: int, height: int, color: RgbColor = (0, 0, 0)) -> Image:
    """Create a solid-color image; mostly useful for tests and placeholders."""
    image = np.empty((height, width, IMAGE_CHANNELS), dtype=IMAGE_DTYPE)
    image[:, :] = color
    return image
