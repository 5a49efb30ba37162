"""
Clipboard access for images.
"""

from typing import Optional
import logging

from PyQt5.QtGui import QClipboard, QGuiApplication

from IV_Libs.ImageEditingLib.image_models import Image
from IV_Libs.ViewerLib.qt_conversion import array_to_qimage, qimage_to_array
from IV_Libs.errors import EmptyClipboardError

logger = logging.getLogger(__name__)


def read_image(clipboard: Optional[QClipboard] = None) -> Image:
    """
    Read the clipboard image.

    Raises:
        EmptyClipboardError: If the clipboard holds no image
    """
    clipboard = clipboard or QGuiApplication.clipboard()

    mime_data = clipboard.mimeData()
    if mime_data is None or not mime_data.hasImage():
        raise EmptyClipboardError("No image in clipboard")

    qimage = clipboard.image()
    if qimage.isNull():
        raise EmptyClipboardError("No image in clipboard")

    logger.debug(f"Read {qimage.width()}x{qimage.height()} image from clipboard")
    return qimage_to_array(qimage)


def write_image(image: Image, clipboard: Optional[QClipboard] = None) -> None:
    clipboard = clipboard or QGuiApplication.clipboard()
    clipboard.setImage(array_to_qimage(image))
