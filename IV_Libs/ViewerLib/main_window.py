"""
Main viewer window.

Menus, toolbar and the scrollable image view. Every edit goes through the
EditSession owned by the window; this module only translates Qt events into
session calls and renders the results.
"""

import logging
from typing import Dict, Optional

from PyQt5.QtCore import QDir, QPoint, QStandardPaths, Qt
from PyQt5.QtGui import QGuiApplication, QKeySequence, QPalette
from PyQt5.QtWidgets import (
    QAction,
    QDialog,
    QFileDialog,
    QMainWindow,
    QMenu,
    QMessageBox,
    QScrollArea,
    QScrollBar,
    QSizePolicy,
    QToolBar,
)

from IV_Libs.ImageEditingLib.crop import display_to_image
from IV_Libs.ImageEditingLib.filters import render_histogram
from IV_Libs.ImageEditingLib.image_codec import build_name_filter
from IV_Libs.ImageEditingLib.image_models import has_area, image_size
from IV_Libs.SessionLib.edit_session import EditSession
from IV_Libs.ViewerLib.clipboard import read_image, write_image
from IV_Libs.ViewerLib.effect_dialog import EffectDialog
from IV_Libs.ViewerLib.paint_dialog import PaintDialog
from IV_Libs.ViewerLib.qt_conversion import array_to_pixmap
from IV_Libs.ViewerLib.selection_label import ImageLabelWithRubberBand
from IV_Libs.constants import (
    ACTION_ABOUT,
    ACTION_COPY,
    ACTION_CROP,
    ACTION_EXIT,
    ACTION_FIT_TO_WINDOW,
    ACTION_NORMAL_SIZE,
    ACTION_OPEN,
    ACTION_PAINT,
    ACTION_PASTE,
    ACTION_REDO,
    ACTION_SAVE_AS,
    ACTION_UNDO,
    ACTION_ZOOM_IN,
    ACTION_ZOOM_OUT,
    APPLICATION_NAME,
    BLUR_FILTER_KINDS,
    DEFAULT_SAVE_SUFFIX,
    DEFAULT_WINDOW_SCREEN_RATIO,
    FILTER_BRIGHTNESS,
    FILTER_HISTOGRAM_EQUALIZATION,
    FILTER_SEPIA,
    STATUS_MESSAGE_TIMEOUT_MS,
)
from IV_Libs.errors import (
    DecodeError,
    EmptyClipboardError,
    EmptyHistoryError,
    EncodeError,
    InvalidStateError,
)

logger = logging.getLogger(__name__)

ABOUT_TEXT = (
    "<p>The <b>Image Viewer</b> displays an image in a scrollable, zoomable "
    "view and applies brightness, sepia, histogram equalization and blur "
    "filters through preview dialogs.</p>"
    "<p>Every accepted edit, crop or paint stroke can be undone and redone. "
    "Turn on Crop Mode and drag over the image to cut out a region.</p>"
)


class ImageViewerWindow(QMainWindow):
    def __init__(self, session: Optional[EditSession] = None) -> None:
        super().__init__()
        self.session = session or EditSession()
        self.action_map: Dict[str, QAction] = {}
        self._first_file_dialog = True

        self.image_label = ImageLabelWithRubberBand()
        self.image_label.setBackgroundRole(QPalette.Base)
        self.image_label.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.image_label.setScaledContents(True)

        self.scroll_area = QScrollArea()
        self.scroll_area.setBackgroundRole(QPalette.Dark)
        self.scroll_area.setWidget(self.image_label)
        self.scroll_area.setVisible(False)
        self.setCentralWidget(self.scroll_area)

        self._build_menus()
        self.addToolBar(Qt.LeftToolBarArea, self._build_toolbar())
        self._connect_signals()

        screen = QGuiApplication.primaryScreen()
        if screen is not None:
            self.resize(screen.availableSize() * DEFAULT_WINDOW_SCREEN_RATIO)

        self.update_actions()

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _add_action(
        self,
        menu: QMenu,
        key: str,
        text: str,
        slot,
        shortcut=None,
        checkable: bool = False,
    ) -> QAction:
        action = menu.addAction(text)
        action.triggered.connect(slot)
        if shortcut is not None:
            action.setShortcut(QKeySequence(shortcut))
        action.setCheckable(checkable)
        self.action_map[key] = action
        return action

    def _build_menus(self) -> None:
        registry = self.session.registry
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        self._add_action(file_menu, ACTION_OPEN, "&Open...", self.open, QKeySequence.Open)
        self._add_action(file_menu, ACTION_SAVE_AS, "&Save As...", self.save_as)
        file_menu.addSeparator()
        self._add_action(file_menu, ACTION_EXIT, "E&xit", self.close, "Ctrl+Q")

        edit_menu = menu_bar.addMenu("&Edit")
        self._add_action(edit_menu, ACTION_COPY, "&Copy", self.copy, QKeySequence.Copy)
        self._add_action(edit_menu, ACTION_CROP, "&Crop Mode", self.crop, "Ctrl+R", checkable=True)
        self._add_action(edit_menu, ACTION_PAINT, "&Paint", self.paint, "Ctrl+P")
        self._add_action(edit_menu, ACTION_UNDO, "&Undo", self.undo, QKeySequence.Undo)
        self._add_action(edit_menu, ACTION_REDO, "&Redo", self.redo, QKeySequence.Redo)
        self._add_action(edit_menu, ACTION_PASTE, "&Paste", self.paste, QKeySequence.Paste)

        view_menu = menu_bar.addMenu("&View")
        self._add_action(view_menu, ACTION_ZOOM_IN, "Zoom &In (25%)", self.zoom_in, QKeySequence.ZoomIn)
        self._add_action(view_menu, ACTION_ZOOM_OUT, "Zoom &Out (25%)", self.zoom_out, QKeySequence.ZoomOut)
        self._add_action(view_menu, ACTION_NORMAL_SIZE, "&Normal Size", self.normal_size, "Ctrl+S")
        view_menu.addSeparator()
        self._add_action(
            view_menu, ACTION_FIT_TO_WINDOW, "&Fit to Window", self.fit_to_window, "Ctrl+F",
            checkable=True,
        )

        filter_menu = menu_bar.addMenu("F&ilter")
        for kind in (FILTER_BRIGHTNESS, FILTER_HISTOGRAM_EQUALIZATION, FILTER_SEPIA):
            self._add_filter_action(filter_menu, kind)

        blur_menu = filter_menu.addMenu("&Blur")
        for kind in BLUR_FILTER_KINDS:
            self._add_filter_action(blur_menu, kind)

        help_menu = menu_bar.addMenu("&Help")
        self._add_action(help_menu, ACTION_ABOUT, "&About", self.about)

        logger.debug(f"Built menus for {len(registry.list_kinds())} filters")

    def _add_filter_action(self, menu: QMenu, kind: str) -> None:
        meta = self.session.registry.get_metadata(kind)
        self._add_action(
            menu,
            kind,
            meta["label"],
            lambda checked=False, k=kind: self.run_filter(k),
            meta["shortcut"] or None,
        )

    def _build_toolbar(self) -> QToolBar:
        toolbar = QToolBar("Image ToolBar")
        for key in (
            ACTION_SAVE_AS,
            ACTION_COPY,
            ACTION_ZOOM_IN,
            ACTION_ZOOM_OUT,
            ACTION_NORMAL_SIZE,
            ACTION_FIT_TO_WINDOW,
            ACTION_CROP,
            ACTION_UNDO,
            ACTION_REDO,
            ACTION_PAINT,
        ):
            toolbar.addAction(self.action_map[key])
        return toolbar

    def _connect_signals(self) -> None:
        self.image_label.area_selected.connect(self.show_selected_area)

    # ------------------------------------------------------------------
    # File
    # ------------------------------------------------------------------

    def _init_file_dialog(self, dialog: QFileDialog, for_saving: bool) -> None:
        if self._first_file_dialog:
            self._first_file_dialog = False
            pictures = QStandardPaths.standardLocations(QStandardPaths.PicturesLocation)
            dialog.setDirectory(pictures[-1] if pictures else QDir.currentPath())

        dialog.setNameFilter(build_name_filter(for_saving=for_saving))
        if for_saving:
            dialog.setAcceptMode(QFileDialog.AcceptSave)
            dialog.setDefaultSuffix(DEFAULT_SAVE_SUFFIX)

    def open(self) -> None:
        dialog = QFileDialog(self, "Open File")
        self._init_file_dialog(dialog, for_saving=False)

        while dialog.exec_() == QDialog.Accepted and not self.load_file(dialog.selectedFiles()[0]):
            pass

    def load_file(self, file_name: str) -> bool:
        try:
            image = self.session.open_file(file_name)
        except DecodeError as e:
            logger.warning(str(e))
            QMessageBox.information(self, APPLICATION_NAME, str(e))
            return False

        self.setWindowFilePath(file_name)
        self._show_new_image()

        width, height = image_size(image)
        self._status(f'Opened "{QDir.toNativeSeparators(file_name)}", {width}x{height}')
        return True

    def save_as(self) -> None:
        dialog = QFileDialog(self, "Save File As")
        self._init_file_dialog(dialog, for_saving=True)

        while dialog.exec_() == QDialog.Accepted and not self.save_file(dialog.selectedFiles()[0]):
            pass

    def save_file(self, file_name: str) -> bool:
        try:
            written = self.session.save_file(file_name)
        except EncodeError as e:
            logger.warning(str(e))
            QMessageBox.information(self, APPLICATION_NAME, str(e))
            return False

        self.setWindowFilePath(str(written))
        self._status(f'Wrote "{QDir.toNativeSeparators(str(written))}"')
        return True

    # ------------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------------

    def copy(self) -> None:
        current = self.session.current_image()
        if has_area(current):
            write_image(current)
            self._status("Copied image to clipboard")

    def paste(self) -> None:
        try:
            image = read_image()
            self.session.load_image(image)
        except EmptyClipboardError as e:
            self._status(str(e))
            return
        except InvalidStateError as e:
            self._reject(e)
            return

        self.setWindowFilePath("")
        self._show_new_image()

        width, height = image_size(image)
        self._status(f"Obtained image from clipboard, {width}x{height}")

    def undo(self) -> None:
        self._step_history(self.session.undo, "Undid")

    def redo(self) -> None:
        self._step_history(self.session.redo, "Redid")

    def _step_history(self, step, verb: str) -> None:
        try:
            command = step()
        except EmptyHistoryError as e:
            self._status(str(e))
            return
        except InvalidStateError as e:
            self._reject(e)
            return

        self._refresh_image()
        self.update_actions()
        self._status(f"{verb} {command.label}")

    def crop(self) -> None:
        enabled = self.action_map[ACTION_CROP].isChecked()
        self.session.set_crop_mode(enabled)
        self.image_label.crop_enabled = enabled
        self.update_actions()

    def show_selected_area(self, begin: QPoint, end: QPoint) -> None:
        scale = self.session.view.scale_factor
        anchor = display_to_image((begin.x(), begin.y()), scale)
        release = display_to_image((end.x(), end.y()), scale)

        try:
            session = self.session.preview.begin_crop(anchor, release)
        except InvalidStateError as e:
            self._reject(e)
            return

        dialog = EffectDialog(
            session.label,
            session.snapshot,
            self.session.state.working(),
            parent=self,
        )
        self._finish_preview(dialog)

    def paint(self) -> None:
        try:
            session = self.session.preview.begin_manual()
        except InvalidStateError as e:
            self._reject(e)
            return

        dialog = PaintDialog(session.snapshot, self)
        dialog.image_changed.connect(self.session.preview.submit)
        self._finish_preview(dialog)

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def run_filter(self, kind: str) -> None:
        preview = self.session.preview
        try:
            session = preview.begin(kind)
        except InvalidStateError as e:
            self._reject(e)
            return

        working = self.session.state.working()
        histograms = None
        if kind == FILTER_HISTOGRAM_EQUALIZATION:
            histograms = (render_histogram(session.snapshot), render_histogram(working))

        parameter_range = preview.parameter_range() if preview.parameter_enabled else None
        dialog = EffectDialog(
            session.label,
            session.snapshot,
            working,
            parameter_range=parameter_range,
            histograms=histograms,
            parent=self,
        )

        def on_parameter_changed(value: int) -> None:
            dialog.show_parameter(preview.on_parameter_changed(value))

        dialog.parameter_changed.connect(on_parameter_changed)
        self._finish_preview(dialog)

    def _finish_preview(self, dialog: QDialog) -> None:
        preview = self.session.preview
        if isinstance(dialog, EffectDialog):
            preview.on_preview_changed = dialog.set_after_image

        try:
            accepted = dialog.exec_() == QDialog.Accepted
        finally:
            preview.on_preview_changed = None

        if accepted:
            command = preview.accept()
            self._refresh_image()
            self._status(f"Applied {command.label}")
        else:
            preview.cancel()
            self._status("Cancelled")

        self.update_actions()

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def zoom_in(self) -> None:
        self._scale_image(self.session.view.zoom_in())

    def zoom_out(self) -> None:
        self._scale_image(self.session.view.zoom_out())

    def normal_size(self) -> None:
        self.image_label.adjustSize()
        self.session.view.reset()
        self.update_actions()

    def fit_to_window(self) -> None:
        enabled = self.action_map[ACTION_FIT_TO_WINDOW].isChecked()
        self.session.set_fit_to_window(enabled)
        self.scroll_area.setWidgetResizable(enabled)
        if not enabled:
            self.normal_size()
        self.update_actions()

    def _scale_image(self, factor: float) -> None:
        width, height = image_size(self.session.current_image())
        self.image_label.resize(*self.session.view.scaled_size(width, height))

        self._adjust_scroll_bar(self.scroll_area.horizontalScrollBar(), factor)
        self._adjust_scroll_bar(self.scroll_area.verticalScrollBar(), factor)
        self.update_actions()

    def _adjust_scroll_bar(self, scroll_bar: QScrollBar, factor: float) -> None:
        scroll_bar.setValue(
            self.session.view.adjusted_scroll_value(scroll_bar.value(), scroll_bar.pageStep(), factor)
        )

    def _show_new_image(self) -> None:
        self.scroll_area.setVisible(True)
        self._refresh_image()
        if not self.session.fit_to_window:
            self.image_label.adjustSize()
        self.update_actions()

    def _refresh_image(self) -> None:
        current = self.session.current_image()
        if not has_area(current):
            self.image_label.clear()
            width, height = image_size(current)
            self.image_label.setText(f"Empty image ({width}x{height})")
            return

        self.image_label.setPixmap(array_to_pixmap(current))
        if not self.session.fit_to_window:
            width, height = image_size(current)
            self.image_label.resize(*self.session.view.scaled_size(width, height))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def update_actions(self) -> None:
        for key, enabled in self.session.action_state().items():
            action = self.action_map.get(key)
            if action is not None:
                action.setEnabled(enabled)

        history = self.session.history
        self.action_map[ACTION_UNDO].setText(f"&Undo {history.undo_text()}".rstrip())
        self.action_map[ACTION_REDO].setText(f"&Redo {history.redo_text()}".rstrip())

    def about(self) -> None:
        QMessageBox.about(self, f"About {APPLICATION_NAME}", ABOUT_TEXT)

    def _status(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)

    def _reject(self, error: Exception) -> None:
        logger.warning(str(error))
        QMessageBox.warning(self, APPLICATION_NAME, str(error))
