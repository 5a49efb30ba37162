"""
Image label with rubber band selection.

While crop mode is on, a mouse drag over the label draws a rubber band and
the release emits the drag's start and end points in label coordinates.
"""

from PyQt5.QtCore import QPoint, QRect, QSize, Qt, pyqtSignal
from PyQt5.QtWidgets import QLabel, QRubberBand


class ImageLabelWithRubberBand(QLabel):
    area_selected = pyqtSignal(QPoint, QPoint)

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.crop_enabled = False
        self._origin = QPoint()
        self._rubber_band = QRubberBand(QRubberBand.Rectangle, self)

    def mousePressEvent(self, event) -> None:
        if self.crop_enabled and event.button() == Qt.LeftButton:
            self._origin = event.pos()
            self._rubber_band.setGeometry(QRect(self._origin, QSize()))
            self._rubber_band.show()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self.crop_enabled and self._rubber_band.isVisible():
            self._rubber_band.setGeometry(QRect(self._origin, event.pos()).normalized())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if self.crop_enabled and self._rubber_band.isVisible():
            self._rubber_band.hide()
            self.area_selected.emit(QPoint(self._origin), event.pos())
        super().mouseReleaseEvent(event)
