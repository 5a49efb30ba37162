"""
Paint sub-tool.

A dialog with a freehand canvas, a brush color button and a brush size
slider. Every stroke is drawn into a copy of the image and announced through
``image_changed`` so the owner can stage it as the working preview.
"""

from typing import Optional

import cv2
from PyQt5.QtCore import QPoint, Qt, pyqtSignal
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QColorDialog,
    QDialog,
    QDialogButtonBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from IV_Libs.ImageEditingLib.image_models import Image, RgbColor, copy_image
from IV_Libs.ViewerLib.qt_conversion import array_to_pixmap
from IV_Libs.constants import (
    PAINT_DEFAULT_BRUSH_SIZE,
    PAINT_DEFAULT_COLOR,
    PAINT_MAX_BRUSH_SIZE,
    PAINT_MIN_BRUSH_SIZE,
)


class PaintCanvas(QLabel):
    """Label showing the image at 1:1 and painting strokes into it."""

    image_changed = pyqtSignal(object)

    def __init__(self, image: Image, parent=None) -> None:
        super().__init__(parent)
        self.image = copy_image(image)
        self.color: RgbColor = PAINT_DEFAULT_COLOR
        self.brush_size = PAINT_DEFAULT_BRUSH_SIZE
        self._last_point: Optional[QPoint] = None
        self._refresh()

    def _refresh(self) -> None:
        self.setPixmap(array_to_pixmap(self.image))
        self.adjustSize()

    def _draw_to(self, point: QPoint) -> None:
        start = self._last_point or point
        cv2.line(
            self.image,
            (start.x(), start.y()),
            (point.x(), point.y()),
            self.color,
            self.brush_size,
            cv2.LINE_AA,
        )
        self._last_point = point
        self._refresh()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self._last_point = None
            self._draw_to(event.pos())

    def mouseMoveEvent(self, event) -> None:
        if event.buttons() & Qt.LeftButton:
            self._draw_to(event.pos())

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.LeftButton and self._last_point is not None:
            self._last_point = None
            self.image_changed.emit(copy_image(self.image))


class PaintDialog(QDialog):
    def __init__(self, image: Image, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Paint")
        self.setModal(True)

        self.canvas = PaintCanvas(image)
        self.image_changed = self.canvas.image_changed

        self.btn_change_color = QPushButton("Change Color")
        self.slider_size = QSlider(Qt.Horizontal)
        self.slider_size.setRange(PAINT_MIN_BRUSH_SIZE, PAINT_MAX_BRUSH_SIZE)
        self.slider_size.setValue(PAINT_DEFAULT_BRUSH_SIZE)
        self.label_size = QLabel(str(PAINT_DEFAULT_BRUSH_SIZE))

        self._build_ui()
        self._connect_signals()
        self._show_color(self.canvas.color)

    def _build_ui(self) -> None:
        root = QHBoxLayout(self)

        scroll = QScrollArea()
        scroll.setWidget(self.canvas)
        root.addWidget(scroll, stretch=1)

        controls = QVBoxLayout()
        group = QGroupBox("Brush")
        group_layout = QVBoxLayout(group)
        group_layout.addWidget(self.btn_change_color)
        group_layout.addWidget(QLabel("Size"))
        size_row = QWidget()
        size_layout = QHBoxLayout(size_row)
        size_layout.setContentsMargins(0, 0, 0, 0)
        size_layout.addWidget(self.slider_size, stretch=1)
        size_layout.addWidget(self.label_size)
        group_layout.addWidget(size_row)
        controls.addWidget(group)
        controls.addStretch(1)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        controls.addWidget(buttons)

        root.addLayout(controls)

    def _connect_signals(self) -> None:
        self.btn_change_color.clicked.connect(self.pick_color)
        self.slider_size.valueChanged.connect(self.set_brush_size)

    def pick_color(self) -> None:
        r, g, b = self.canvas.color
        color = QColorDialog.getColor(QColor(r, g, b), self, "Pick brush color")
        if not color.isValid():
            return

        self.canvas.color = (color.red(), color.green(), color.blue())
        self._show_color(self.canvas.color)

    def set_brush_size(self, size: int) -> None:
        self.canvas.brush_size = int(size)
        self.label_size.setText(str(size))

    def _show_color(self, color: RgbColor) -> None:
        r, g, b = color
        self.btn_change_color.setStyleSheet(f"border: 2px solid rgb({r}, {g}, {b});")
