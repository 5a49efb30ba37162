"""
Edit session: the document behind one viewer window.

Wires together the image state holder, the undo history, the preview
controller and the view transform, and derives the enabled state of every
action from a handful of inputs.

Classes:
    EditSession: Document facade used by the main window

Functions:
    compute_action_state: Pure enablement function for the action surface
"""

from pathlib import Path
from typing import Dict, Optional, Union
import logging

from IV_Libs.HistoryLib.edit_commands import EditCommand
from IV_Libs.HistoryLib.undo_history import UndoHistory
from IV_Libs.ImageEditingLib.filter_registry import FilterRegistry, get_default_registry
from IV_Libs.ImageEditingLib.image_codec import decode, encode
from IV_Libs.ImageEditingLib.image_models import Image, image_size
from IV_Libs.SessionLib.image_state import ImageStateHolder
from IV_Libs.SessionLib.preview_controller import PreviewController
from IV_Libs.SessionLib.view_transform import ViewTransform
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
    BLUR_FILTER_KINDS,
    FILTER_BRIGHTNESS,
    FILTER_HISTOGRAM_EQUALIZATION,
    FILTER_SEPIA,
)
from IV_Libs.errors import EncodeError, InvalidStateError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def compute_action_state(
    has_image: bool,
    crop_mode: bool,
    fit_to_window: bool,
    can_zoom_in: bool = True,
    can_zoom_out: bool = True,
    can_undo: bool = False,
    can_redo: bool = False,
) -> Dict[str, bool]:
    """
    Derive the enabled state of every viewer action.

    Enablement is never stored; the window recomputes it from these inputs
    after each change and applies the result to its QActions.

    Args:
        has_image: Whether a non-empty image is loaded
        crop_mode: Whether Crop Mode is checked
        fit_to_window: Whether Fit to Window is checked
        can_zoom_in: Whether the view transform allows zooming in further
        can_zoom_out: Whether the view transform allows zooming out further
        can_undo: Whether the history has a done command
        can_redo: Whether the history has an undone command

    Returns:
        Mapping of action name (and filter kind) to enabled flag
    """
    free_zoom = has_image and not crop_mode and not fit_to_window

    state = {
        ACTION_OPEN: True,
        ACTION_PASTE: True,
        ACTION_ABOUT: True,
        ACTION_EXIT: True,
        ACTION_SAVE_AS: has_image,
        ACTION_COPY: has_image,
        ACTION_PAINT: has_image,
        ACTION_CROP: has_image and not fit_to_window,
        ACTION_FIT_TO_WINDOW: has_image and not crop_mode,
        ACTION_NORMAL_SIZE: free_zoom,
        ACTION_ZOOM_IN: free_zoom and can_zoom_in,
        ACTION_ZOOM_OUT: free_zoom and can_zoom_out,
        ACTION_UNDO: can_undo,
        ACTION_REDO: can_redo,
    }

    for kind in (FILTER_BRIGHTNESS, FILTER_HISTOGRAM_EQUALIZATION, FILTER_SEPIA) + BLUR_FILTER_KINDS:
        state[kind] = has_image

    return state


class EditSession:
    """
    Document facade: one loaded image, its history and its preview.

    Example:
        >>> session = EditSession()
        >>> session.open_file("photo.png")
        >>> session.preview.begin("sepia")
        >>> session.preview.accept()
        >>> session.undo()
    """

    def __init__(self, registry: Optional[FilterRegistry] = None) -> None:
        self.registry = registry or get_default_registry()
        self.state = ImageStateHolder()
        self.history = UndoHistory(self.state)
        self.preview = PreviewController(self.state, self.history, self.registry)
        self.view = ViewTransform()
        self.file_path: Optional[Path] = None
        self.crop_mode = False
        self.fit_to_window = False

    def has_image(self) -> bool:
        return self.state.has_image()

    def current_image(self) -> Optional[Image]:
        return self.state.current()

    def load_image(self, image: Image, file_path: Optional[PathLike] = None) -> None:
        """
        Start a new document from ``image``.

        The history is cleared and the zoom reset to 1.0.

        Raises:
            InvalidStateError: If a preview is open
        """
        self._require_no_preview("load a new image")

        self.state.load(image)
        self.history.clear()
        self.view.reset()
        self.file_path = Path(file_path) if file_path is not None else None

        width, height = image_size(image)
        logger.info(f"Loaded {self.file_path or 'image'} ({width}x{height})")

    def open_file(self, file_path: PathLike) -> Image:
        """
        Decode a file and make it the document.

        Raises:
            DecodeError: If the file cannot be read (document unchanged)
            InvalidStateError: If a preview is open
        """
        self._require_no_preview("open a file")
        image = decode(file_path)
        self.load_image(image, file_path)
        return image

    def save_file(self, file_path: PathLike) -> Path:
        """
        Encode the committed image.

        Returns:
            The path written (``.jpg`` appended when no suffix was given)

        Raises:
            EncodeError: If nothing is loaded or the write fails
        """
        current = self.state.current()
        if current is None:
            raise EncodeError(f"Cannot write {file_path}: no image loaded")

        written = encode(current, file_path)
        self.file_path = written
        return written

    def undo(self) -> EditCommand:
        """
        Raises:
            EmptyHistoryError: If nothing can be undone
            InvalidStateError: If a preview is open
        """
        self._require_no_preview("undo")
        return self.history.undo()

    def redo(self) -> EditCommand:
        """
        Raises:
            EmptyHistoryError: If nothing can be redone
            InvalidStateError: If a preview is open
        """
        self._require_no_preview("redo")
        return self.history.redo()

    def set_crop_mode(self, enabled: bool) -> None:
        self.crop_mode = bool(enabled)

    def set_fit_to_window(self, enabled: bool) -> None:
        self.fit_to_window = bool(enabled)
        if not self.fit_to_window:
            self.view.reset()

    def action_state(self) -> Dict[str, bool]:
        return compute_action_state(
            has_image=self.has_image(),
            crop_mode=self.crop_mode,
            fit_to_window=self.fit_to_window,
            can_zoom_in=self.view.can_zoom_in(),
            can_zoom_out=self.view.can_zoom_out(),
            can_undo=self.history.can_undo(),
            can_redo=self.history.can_redo(),
        )

    def _require_no_preview(self, operation: str) -> None:
        if self.preview.is_previewing:
            raise InvalidStateError(f"Cannot {operation} while a preview is open")
