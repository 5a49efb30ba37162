"""
Selection and crop extraction.

Turns the two points of a mouse-drag gesture (anchor and release) into a
canonical top-left/bottom-right rectangle clamped to the image, and cuts
that rectangle out of an image.

Functions:
    normalize_selection: Order and clamp a two-point selection
    display_to_image: Map a point from zoomed display space to image space
    crop_image: Extract the pixels covered by a SelectionRect
"""

import math
from typing import Tuple

from IV_Libs.ImageEditingLib.image_models import (
    Image,
    Point,
    SelectionRect,
    copy_image,
    validate_image,
)


def normalize_selection(
    anchor: Tuple[int, int],
    release: Tuple[int, int],
    width: int,
    height: int,
) -> SelectionRect:
    """
    Normalize a two-point selection into a rectangle.

    When the release point is above and left of the anchor the two points are
    swapped wholesale; otherwise only the x or only the y components are
    swapped, whichever is reversed. The result is then clamped so that the
    bottom-right corner is at most (width - 1, height - 1) and the top-left
    corner is at least (0, 0). Points outside the image are pulled to the
    border, never rejected, and a rectangle that ends up empty is returned
    as is.

    Args:
        anchor: (x, y) where the drag started
        release: (x, y) where the drag ended
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        SelectionRect with inclusive corners

    Example:
        >>> normalize_selection((50, 10), (10, 50), 100, 100).as_tuple()
        (10, 10, 50, 50)
    """
    ax, ay = int(anchor[0]), int(anchor[1])
    bx, by = int(release[0]), int(release[1])

    if bx < ax and by < ay:
        ax, ay, bx, by = bx, by, ax, ay
    elif bx < ax:
        ax, bx = bx, ax
    elif by < ay:
        ay, by = by, ay

    if bx > width - 1:
        bx = width - 1
    if by > height - 1:
        by = height - 1
    if ax < 0:
        ax = 0
    if ay < 0:
        ay = 0

    return SelectionRect(Point(ax, ay), Point(bx, by))


def display_to_image(point: Tuple[int, int], scale_factor: float) -> Point:
    """
    Convert a point on the zoomed image label to image pixel coordinates.

    Args:
        point: (x, y) in display pixels
        scale_factor: Current view scale (1.0 = actual size)

    Raises:
        ValueError: If scale_factor is not positive
    """
    if scale_factor <= 0:
        raise ValueError(f"scale_factor must be > 0, got {scale_factor}")

    return Point(
        int(math.floor(point[0] / scale_factor)),
        int(math.floor(point[1] / scale_factor)),
    )


def crop_image(image: Image, rect: SelectionRect) -> Image:
    """
    Extract the region covered by ``rect``.

    Degenerate rectangles give an image with zero width or height.

    Args:
        image: Source RGB image (not modified)
        rect: Normalized selection rectangle

    Returns:
        Independent copy of the selected pixels
    """
    image = validate_image(image)

    if rect.is_empty:
        return image[0:0, 0:0].copy()

    left, top, right, bottom = rect.as_tuple()
    return copy_image(image[top:bottom + 1, left:right + 1])
