"""
Conversion between image arrays and Qt images.

The one adapter between the editing core (RGB uint8 numpy arrays) and the
toolkit (QImage/QPixmap). Both directions return detached copies, so neither
side keeps a view into the other's memory.
"""

import numpy as np
from PyQt5.QtGui import QImage, QPixmap

from IV_Libs.ImageEditingLib.image_models import Image, has_area, validate_image


def array_to_qimage(image: Image) -> QImage:
    """
    Convert an RGB uint8 array to a QImage in Format_RGB888.

    An empty image converts to a null QImage.
    """
    image = validate_image(image)
    if not has_area(image):
        return QImage()

    image = np.ascontiguousarray(image)
    height, width = image.shape[:2]
    qimage = QImage(image.data, width, height, image.strides[0], QImage.Format_RGB888)
    return qimage.copy()


def qimage_to_array(qimage: QImage) -> Image:
    """
    Convert any QImage to an RGB uint8 array of shape (height, width, 3).

    Raises:
        ValueError: If the QImage is null
    """
    if qimage.isNull():
        raise ValueError("Cannot convert a null QImage")

    converted = qimage.convertToFormat(QImage.Format_RGB888)
    width, height = converted.width(), converted.height()
    bytes_per_line = converted.bytesPerLine()

    pointer = converted.constBits()
    pointer.setsize(converted.sizeInBytes())
    rows = np.frombuffer(pointer, dtype=np.uint8).reshape(height, bytes_per_line)
    return rows[:, :width * 3].reshape(height, width, 3).copy()


def array_to_pixmap(image: Image) -> QPixmap:
    """Convert an array to a QPixmap (requires a running QApplication)."""
    return QPixmap.fromImage(array_to_qimage(image))
