"""
Image file codec for Image Viewer.

Decodes files into RGB uint8 arrays and encodes arrays back to disk through
Pillow. The set of supported formats is whatever the installed Pillow build
can read or write; nothing is hardcoded here.

Functions:
    decode: Read an image file
    encode: Write an image file
    get_supported_read_extensions: Extensions Pillow can open
    get_supported_write_extensions: Extensions Pillow can save
    build_name_filter: QFileDialog name filter for the supported extensions
    is_supported_format: Check a path against the readable extensions
"""

from pathlib import Path
from typing import Dict, List, Union
import logging

import numpy as np
from PIL import Image as PILImage
from PIL import ImageOps, UnidentifiedImageError

from IV_Libs.ImageEditingLib.image_models import Image, has_area, validate_image
from IV_Libs.constants import DEFAULT_SAVE_SUFFIX
from IV_Libs.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _registered_extensions() -> Dict[str, str]:
    PILImage.init()
    return PILImage.registered_extensions()


def get_supported_read_extensions() -> List[str]:
    """
    Get the file extensions the installed Pillow can decode.

    Returns:
        Sorted list of lowercase extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(
        ext.lower()
        for ext, fmt in _registered_extensions().items()
        if fmt in PILImage.OPEN
    )


def get_supported_write_extensions() -> List[str]:
    """
    Get the file extensions the installed Pillow can encode.

    Returns:
        Sorted list of lowercase extensions
    """
    return sorted(
        ext.lower()
        for ext, fmt in _registered_extensions().items()
        if fmt in PILImage.SAVE
    )


def build_name_filter(for_saving: bool = False) -> str:
    """
    Build a QFileDialog name filter listing every supported extension.

    Args:
        for_saving: Use the writable set instead of the readable set

    Returns:
        Filter string such as "Images (*.bmp *.jpg *.png)"
    """
    extensions = (
        get_supported_write_extensions() if for_saving else get_supported_read_extensions()
    )
    patterns = " ".join(f"*{ext}" for ext in extensions)
    return f"Images ({patterns})"


def is_supported_format(file_path: PathLike) -> bool:
    return Path(file_path).suffix.lower() in get_supported_read_extensions()


def decode(file_path: PathLike) -> Image:
    """
    Decode an image file into an RGB uint8 array.

    EXIF orientation is applied, and palette, grayscale and alpha images are
    converted to plain RGB.

    Args:
        file_path: Path of the file to read

    Returns:
        Array of shape (height, width, 3)

    Raises:
        DecodeError: If the file is missing, unreadable or not an image
    """
    path = Path(file_path)

    try:
        with PILImage.open(path) as pil_image:
            pil_image = ImageOps.exif_transpose(pil_image)
            rgb = pil_image.convert("RGB")
    except FileNotFoundError as e:
        raise DecodeError(f"Cannot load {path}: file does not exist") from e
    except UnidentifiedImageError as e:
        raise DecodeError(f"Cannot load {path}: unsupported or corrupt image") from e
    except (OSError, ValueError) as e:
        raise DecodeError(f"Cannot load {path}: {e}") from e

    image = np.array(rgb, dtype=np.uint8)
    logger.info(f"Decoded {path} ({image.shape[1]}x{image.shape[0]})")
    return image


def encode(image: Image, file_path: PathLike) -> Path:
    """
    Encode an image to disk; the format follows the file extension.

    A path without an extension gets the default ``.jpg`` suffix.

    Args:
        image: RGB uint8 array
        file_path: Destination path

    Returns:
        The path actually written

    Raises:
        EncodeError: If the image is empty, the extension is unknown or the
            write fails
    """
    image = validate_image(image)
    path = Path(file_path)

    if not path.suffix:
        path = path.with_suffix(f".{DEFAULT_SAVE_SUFFIX}")

    if not has_area(image):
        raise EncodeError(f"Cannot write {path}: image is empty")

    try:
        PILImage.fromarray(image).save(path)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Cannot write {path}: {e}") from e

    logger.info(f"Wrote {path}")
    return path
