"""
Effect preview dialog.

Shows the image before and after an edit side by side, an optional slider
for the edit's single parameter and, for histogram equalization, the
histograms of both images. The dialog itself computes nothing: slider moves
are re-emitted as ``parameter_changed`` and the owner pushes new previews
back through ``set_after_image``.
"""

from typing import Optional, Tuple

from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QSlider,
    QVBoxLayout,
)

from IV_Libs.ImageEditingLib.image_models import Image, has_area, image_size
from IV_Libs.ViewerLib.qt_conversion import array_to_pixmap
from IV_Libs.constants import EFFECT_DIALOG_PREVIEW_SIZE, HISTOGRAM_PREVIEW_SIZE

ParameterRange = Tuple[int, int, int]


class EffectDialog(QDialog):
    parameter_changed = pyqtSignal(int)

    def __init__(
        self,
        title: str,
        before: Image,
        after: Image,
        parameter_range: Optional[ParameterRange] = None,
        histograms: Optional[Tuple[Image, Image]] = None,
        parent=None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)

        self.label_before = self._preview_label()
        self.label_after = self._preview_label()
        self.label_parameter = QLabel("")
        self.slider = QSlider(Qt.Horizontal)

        self._build_ui(histograms)
        self._set_image(self.label_before, before, EFFECT_DIALOG_PREVIEW_SIZE)
        self.set_after_image(after)
        self._configure_slider(parameter_range)

    def _preview_label(self) -> QLabel:
        label = QLabel()
        label.setAlignment(Qt.AlignCenter)
        label.setMinimumSize(EFFECT_DIALOG_PREVIEW_SIZE, EFFECT_DIALOG_PREVIEW_SIZE)
        label.setStyleSheet("border: 1px solid #888;")
        return label

    def _build_ui(self, histograms: Optional[Tuple[Image, Image]]) -> None:
        root = QVBoxLayout(self)

        grid = QGridLayout()
        grid.addWidget(QLabel("Before"), 0, 0, Qt.AlignCenter)
        grid.addWidget(QLabel("After"), 0, 1, Qt.AlignCenter)
        grid.addWidget(self.label_before, 1, 0)
        grid.addWidget(self.label_after, 1, 1)

        if histograms is not None:
            for column, histogram in enumerate(histograms):
                label = QLabel()
                label.setAlignment(Qt.AlignCenter)
                self._set_image(label, histogram, HISTOGRAM_PREVIEW_SIZE)
                grid.addWidget(label, 2, column)

        root.addLayout(grid)

        slider_row = QHBoxLayout()
        slider_row.addWidget(QLabel("Intensity"))
        slider_row.addWidget(self.slider, stretch=1)
        slider_row.addWidget(self.label_parameter)
        root.addLayout(slider_row)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

    def _configure_slider(self, parameter_range: Optional[ParameterRange]) -> None:
        if parameter_range is None:
            self.slider.setEnabled(False)
            return

        minimum, maximum, value = parameter_range
        self.slider.setRange(minimum, maximum)
        self.slider.setValue(value)
        self.slider.setEnabled(True)
        self.show_parameter(value)
        self.slider.valueChanged.connect(self.parameter_changed)

    def show_parameter(self, value: int) -> None:
        self.label_parameter.setText(str(value))

    def set_after_image(self, image: Image) -> None:
        self._set_image(self.label_after, image, EFFECT_DIALOG_PREVIEW_SIZE)

    def _set_image(self, label: QLabel, image: Image, size: int) -> None:
        if not has_area(image):
            width, height = image_size(image)
            label.setText(f"Empty image ({width}x{height})")
            return

        pixmap = array_to_pixmap(image).scaled(
            size,
            size,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        label.setPixmap(pixmap)
