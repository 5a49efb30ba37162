"""
ImageEditingLib - Core image editing functionality

This module provides the image model, the photographic filters and their
registry, selection/crop extraction and the file codec for the Image Viewer
project.
"""

from IV_Libs.ImageEditingLib.image_models import (
    Image,
    Point,
    RgbColor,
    SelectionRect,
    copy_image,
    has_area,
    image_size,
    validate_image,
)
from IV_Libs.ImageEditingLib.filters import (
    apply_bilateral_blur,
    apply_brightness_contrast,
    apply_gaussian_blur,
    apply_histogram_equalization,
    apply_homogeneous_blur,
    apply_median_blur,
    apply_sepia,
    coerce_kernel_size,
    render_histogram,
)
from IV_Libs.ImageEditingLib.filter_registry import (
    FilterRegistry,
    get_default_registry,
    register_default_filters,
)
from IV_Libs.ImageEditingLib.crop import (
    crop_image,
    display_to_image,
    normalize_selection,
)
from IV_Libs.ImageEditingLib.image_codec import (
    build_name_filter,
    decode,
    encode,
    get_supported_read_extensions,
    get_supported_write_extensions,
    is_supported_format,
)

__all__ = [
    "Image",
    "Point",
    "RgbColor",
    "SelectionRect",
    "copy_image",
    "has_area",
    "image_size",
    "validate_image",
    "apply_bilateral_blur",
    "apply_brightness_contrast",
    "apply_gaussian_blur",
    "apply_histogram_equalization",
    "apply_homogeneous_blur",
    "apply_median_blur",
    "apply_sepia",
    "coerce_kernel_size",
    "render_histogram",
    "FilterRegistry",
    "get_default_registry",
    "register_default_filters",
    "crop_image",
    "display_to_image",
    "normalize_selection",
    "build_name_filter",
    "decode",
    "encode",
    "get_supported_read_extensions",
    "get_supported_write_extensions",
    "is_supported_format",
]
