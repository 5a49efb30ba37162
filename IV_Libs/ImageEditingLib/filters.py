"""
Photographic filter operations.

Provides the fixed filter menu of the viewer, each a pure function of an RGB
uint8 image (and at most one integer parameter) backed by OpenCV:

- Brightness/contrast: fixed contrast multiplier with an adjustable offset
- Sepia: warm brown tone through a 3x3 color transform
- Histogram equalization: equalizes luma while keeping chroma
- Homogeneous, Gaussian, median and bilateral blur: odd square kernels

Example:
    >>> from IV_Libs.ImageEditingLib.image_codec import decode
    >>> img = decode("photo.jpg")
    >>>
    >>> brighter = apply_brightness_contrast(img, beta=40)
    >>> toned = apply_sepia(img)
    >>> soft = apply_gaussian_blur(img, kernel_size=7)
"""

import cv2
import numpy as np

from IV_Libs.ImageEditingLib.image_models import Image, has_area, validate_image
from IV_Libs.constants import (
    BRIGHTNESS_CONTRAST_ALPHA,
    HISTOGRAM_BINS,
    HISTOGRAM_HEIGHT,
    HISTOGRAM_LINE_THICKNESS,
    HISTOGRAM_WIDTH,
    KERNEL_SIZE_MAX,
    KERNEL_SIZE_SMALLEST_VALID,
    SEPIA_MATRIX,
)


def _checked(image: object) -> Image:
    image = validate_image(image)
    if not has_area(image):
        raise ValueError(f"Cannot filter an empty image of shape {image.shape}")
    return image


# ============================================================================
# Kernel Size
# ============================================================================

def coerce_kernel_size(kernel_size: int) -> int:
    """
    Coerce a requested kernel size to a valid odd window.

    Sizes below 3 become 3 and even sizes are rounded up to the next odd
    value; odd sizes of 3 or more are returned unchanged.

    Args:
        kernel_size: Requested window width/height

    Returns:
        An odd kernel size >= 3
    """
    kernel_size = int(kernel_size)
    if kernel_size < KERNEL_SIZE_SMALLEST_VALID:
        return KERNEL_SIZE_SMALLEST_VALID
    if kernel_size % 2 == 0:
        return kernel_size + 1
    return kernel_size


def _checked_kernel(kernel_size: int) -> int:
    kernel_size = coerce_kernel_size(kernel_size)
    if kernel_size > KERNEL_SIZE_MAX:
        raise ValueError(
            f"kernel_size must be at most {KERNEL_SIZE_MAX}, got {kernel_size}"
        )
    return kernel_size


# ============================================================================
# Tone Filters
# ============================================================================

def apply_brightness_contrast(
    image: Image,
    beta: int,
    alpha: float = BRIGHTNESS_CONTRAST_ALPHA,
) -> Image:
    """
    Scale every channel by ``alpha`` and add ``beta``.

    Output values saturate to 0-255 instead of wrapping around.

    Args:
        image: RGB uint8 image
        beta: Brightness offset added after scaling
        alpha: Contrast multiplier (default 2.2)

    Returns:
        New RGB uint8 image

    Raises:
        TypeError: If image is not a numpy array
        ValueError: If image has the wrong shape/dtype or is empty
    """
    image = _checked(image)
    return cv2.addWeighted(image, float(alpha), image, 0.0, float(beta))


def apply_sepia(image: Image) -> Image:
    """
    Apply a sepia tone.

    Args:
        image: RGB uint8 image

    Returns:
        New RGB uint8 image, saturated to 0-255
    """
    image = _checked(image)
    kernel = np.array(SEPIA_MATRIX, dtype=np.float32)
    return cv2.transform(image, kernel)


def apply_histogram_equalization(image: Image) -> Image:
    """
    Equalize the luma histogram of an image.

    The image is converted to YCrCb, the Y plane is equalized and the result
    converted back, so colors keep their hue.

    Args:
        image: RGB uint8 image

    Returns:
        New RGB uint8 image
    """
    image = _checked(image)
    ycrcb = cv2.cvtColor(image, cv2.COLOR_RGB2YCrCb)
    luma, cr, cb = cv2.split(ycrcb)
    luma = cv2.equalizeHist(luma)
    ycrcb = cv2.merge((luma, cr, cb))
    return cv2.cvtColor(ycrcb, cv2.COLOR_YCrCb2RGB)


# ============================================================================
# Blur Filters
# ============================================================================

def apply_homogeneous_blur(image: Image, kernel_size: int) -> Image:
    """
    Apply a normalized box (homogeneous) blur.

    Args:
        image: RGB uint8 image
        kernel_size: Window size; coerced to an odd value >= 3

    Returns:
        Blurred RGB uint8 image

    Raises:
        ValueError: If the coerced kernel exceeds the supported maximum
    """
    image = _checked(image)
    kernel_size = _checked_kernel(kernel_size)
    return cv2.blur(image, (kernel_size, kernel_size))


def apply_gaussian_blur(image: Image, kernel_size: int) -> Image:
    """
    Apply a Gaussian blur, sigma derived from the kernel size.

    Args:
        image: RGB uint8 image
        kernel_size: Window size; coerced to an odd value >= 3

    Returns:
        Blurred RGB uint8 image
    """
    image = _checked(image)
    kernel_size = _checked_kernel(kernel_size)
    return cv2.GaussianBlur(image, (kernel_size, kernel_size), 0)


def apply_median_blur(image: Image, kernel_size: int) -> Image:
    """Apply a median blur with an odd square aperture."""
    image = _checked(image)
    kernel_size = _checked_kernel(kernel_size)
    return cv2.medianBlur(image, kernel_size)


def apply_bilateral_blur(image: Image, kernel_size: int) -> Image:
    """
    Apply an edge-preserving bilateral blur.

    The color sigma is ``2 * kernel_size`` and the space sigma is
    ``kernel_size // 2``.

    Args:
        image: RGB uint8 image
        kernel_size: Pixel neighbourhood diameter; coerced to an odd value >= 3

    Returns:
        Blurred RGB uint8 image
    """
    image = _checked(image)
    kernel_size = _checked_kernel(kernel_size)
    sigma_color = kernel_size * 2
    sigma_space = kernel_size // 2
    return cv2.bilateralFilter(image, kernel_size, sigma_color, sigma_space)


# ============================================================================
# Histogram Plot
# ============================================================================

def render_histogram(
    image: Image,
    width: int = HISTOGRAM_WIDTH,
    height: int = HISTOGRAM_HEIGHT,
) -> Image:
    """
    Draw the per-channel histograms of an image.

    Each channel is binned into 256 buckets, min-max normalized to the plot
    height and drawn as a polyline in its own color on a black canvas.

    Args:
        image: RGB uint8 image
        width: Plot width in pixels
        height: Plot height in pixels

    Returns:
        RGB uint8 plot image of shape (height, width, 3)
    """
    image = _checked(image)

    canvas = np.zeros((height, width, 3), dtype=np.uint8)

    bin_width = int(round(width / HISTOGRAM_BINS))
    colors = ((255, 0, 0), (0, 255, 0), (0, 0, 255))

    for channel, color in enumerate(colors):
        hist = cv2.calcHist([image], [channel], None, [HISTOGRAM_BINS], [0, 256])
        hist = cv2.normalize(hist, None, 0, height, cv2.NORM_MINMAX)
        xs = np.arange(HISTOGRAM_BINS, dtype=np.int32) * bin_width
        ys = height - np.round(hist.ravel()).astype(np.int32)
        points = np.stack((xs, ys), axis=1).astype(np.int32).reshape(-1, 1, 2)
        cv2.polylines(canvas, [points], False, color, HISTOGRAM_LINE_THICKNESS)

    return canvas
