"""
Effect Preview Controller.

Drives the preview of one edit at a time as an explicit state machine:

    IDLE --begin/begin_crop/begin_manual--> PREVIEWING
    PREVIEWING --on_parameter_changed/submit--> PREVIEWING
    PREVIEWING --accept/cancel--> IDLE

Every begin creates a fresh PreviewSession holding the snapshot of the
committed image. Recomputations always start from that snapshot, never from
the previous preview, and the committed image is untouched until accept()
pushes an EditCommand to the history.

Classes:
    PreviewState: IDLE or PREVIEWING
    PreviewSession: Per-preview record (kind, snapshot, parameter, ...)
    PreviewController: The state machine
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Tuple
import logging

from IV_Libs.HistoryLib.edit_commands import EditCommand
from IV_Libs.HistoryLib.undo_history import UndoHistory
from IV_Libs.ImageEditingLib.crop import crop_image, normalize_selection
from IV_Libs.ImageEditingLib.filter_registry import FilterRegistry, get_default_registry
from IV_Libs.ImageEditingLib.image_models import (
    Image,
    SelectionRect,
    copy_image,
    validate_image,
)
from IV_Libs.SessionLib.image_state import ImageStateHolder
from IV_Libs.constants import EDIT_KIND_CROP, EDIT_KIND_PAINT
from IV_Libs.errors import InvalidStateError

logger = logging.getLogger(__name__)

PreviewCallback = Callable[[Image], None]


class PreviewState(Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"


@dataclass(eq=False)
class PreviewSession:
    """State owned by one open preview.

    Attributes:
        kind: Filter kind, "crop" or a manual edit kind such as "paint"
        label: Display name used for the dialog title and undo text
        snapshot: Copy of the committed image when the preview began
        takes_parameter: Whether the slider drives this preview
        parameter: Last coerced parameter value (None for parameterless edits)
        rect: Normalized selection for crop previews
        manual: Whether the working image is supplied through submit()
    """
    kind: str
    label: str
    snapshot: Image = field(repr=False)
    takes_parameter: bool = False
    parameter: Optional[int] = None
    rect: Optional[SelectionRect] = None
    manual: bool = False


class PreviewController:
    """
    Preview/commit protocol for filters, crops and manual edits.

    Example:
        >>> controller = PreviewController(state, history)
        >>> controller.begin("gaussian_blur")
        >>> controller.on_parameter_changed(4)     # coerced to 5
        5
        >>> command = controller.accept()          # pushed to history
    """

    def __init__(
        self,
        state: ImageStateHolder,
        history: UndoHistory,
        registry: Optional[FilterRegistry] = None,
        on_preview_changed: Optional[PreviewCallback] = None,
    ) -> None:
        self._image_state = state
        self._history = history
        self._registry = registry or get_default_registry()
        self._session: Optional[PreviewSession] = None
        self.on_preview_changed = on_preview_changed

    @property
    def state(self) -> PreviewState:
        if self._session is None:
            return PreviewState.IDLE
        return PreviewState.PREVIEWING

    @property
    def is_previewing(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[PreviewSession]:
        return self._session

    @property
    def parameter_enabled(self) -> bool:
        """Whether the parameter control should accept input right now."""
        return self._session is not None and self._session.takes_parameter

    def parameter_range(self) -> Tuple[int, int, int]:
        """
        (minimum, maximum, current value) for the open parameterized preview.

        Raises:
            InvalidStateError: If no parameterized preview is open
        """
        session = self._require_session("parameter_range")
        if not session.takes_parameter:
            raise InvalidStateError(f"'{session.label}' has no adjustable parameter")
        meta = self._registry.get_metadata(session.kind)
        return meta["minimum"], meta["maximum"], session.parameter

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def begin(self, kind: str) -> PreviewSession:
        """
        Open a preview of a registered filter.

        The initial preview uses the filter's default parameter; parameterless
        filters compute their one and only preview here.

        Args:
            kind: Registered filter kind

        Returns:
            The new PreviewSession

        Raises:
            InvalidStateError: If a preview is already open or no image is loaded
            KeyError: If kind is not registered
        """
        self._require_idle(kind)
        meta = self._registry.get_metadata(kind)

        snapshot = self._image_state.begin_preview()
        parameter = meta["default"] if meta["takes_parameter"] else None

        try:
            working = self._registry.apply(kind, snapshot, parameter)
        except Exception:
            self._image_state.discard_preview()
            raise

        session = PreviewSession(
            kind=kind,
            label=meta["label"],
            snapshot=snapshot,
            takes_parameter=meta["takes_parameter"],
            parameter=parameter,
        )
        self._open(session, working)
        return session

    def begin_crop(self, anchor: Tuple[int, int], release: Tuple[int, int]) -> PreviewSession:
        """
        Open a crop preview from a two-point selection.

        Args:
            anchor: (x, y) image coordinates where the drag started
            release: (x, y) image coordinates where the drag ended

        Returns:
            The new PreviewSession; ``session.rect`` holds the selection

        Raises:
            InvalidStateError: If a preview is already open or no image is loaded
        """
        self._require_idle(EDIT_KIND_CROP)

        width, height = self._image_state.size()
        rect = normalize_selection(anchor, release, width, height)
        snapshot = self._image_state.begin_preview()

        session = PreviewSession(
            kind=EDIT_KIND_CROP,
            label="Crop",
            snapshot=snapshot,
            rect=rect,
        )
        self._open(session, crop_image(snapshot, rect))
        return session

    def begin_manual(self, kind: str = EDIT_KIND_PAINT, label: str = "Paint") -> PreviewSession:
        """
        Open a preview whose result is produced by an external tool.

        The working image starts as a copy of the committed image and is
        replaced through submit().

        Raises:
            InvalidStateError: If a preview is already open or no image is loaded
        """
        self._require_idle(kind)

        snapshot = self._image_state.begin_preview()
        session = PreviewSession(kind=kind, label=label, snapshot=snapshot, manual=True)
        self._open(session, copy_image(snapshot))
        return session

    def on_parameter_changed(self, value: int) -> int:
        """
        Recompute the preview for a new parameter value.

        The value is clamped to the filter's range (and kernel sizes coerced
        to odd values >= 3) before the filter runs on the original snapshot.

        Args:
            value: Requested parameter value

        Returns:
            The coerced value actually used

        Raises:
            InvalidStateError: If not previewing a parameterized filter
        """
        session = self._require_session("on_parameter_changed")
        if not session.takes_parameter:
            raise InvalidStateError(f"'{session.label}' has no adjustable parameter")

        coerced = self._registry.clamp_parameter(session.kind, value)
        working = self._registry.apply(session.kind, session.snapshot, coerced)
        session.parameter = coerced

        self._image_state.stage(working)
        logger.debug(f"Recomputed '{session.kind}' preview with parameter {coerced}")
        self._notify(working)
        return coerced

    def submit(self, image: Image) -> None:
        """
        Replace the working image of a manual preview.

        Raises:
            InvalidStateError: If no manual preview is open
        """
        session = self._require_session("submit")
        if not session.manual:
            raise InvalidStateError(f"'{session.label}' preview does not accept submitted images")

        working = copy_image(validate_image(image))
        self._image_state.stage(working)
        self._notify(working)

    def accept(self) -> EditCommand:
        """
        Commit the preview.

        Pushes EditCommand(before=snapshot, after=working) to the history,
        which makes the working image current.

        Returns:
            The pushed command

        Raises:
            InvalidStateError: If no preview is open
        """
        session = self._require_session("accept")

        command = EditCommand(
            before=session.snapshot,
            after=self._image_state.working(),
            label=session.label,
            kind=session.kind,
        )
        self._session = None
        self._history.push(command)
        logger.info(f"Accepted '{session.label}' preview")
        return command

    def cancel(self) -> None:
        """
        Abandon the preview; the committed image and history are unchanged.

        Raises:
            InvalidStateError: If no preview is open
        """
        session = self._require_session("cancel")

        self._image_state.discard_preview()
        self._session = None
        logger.info(f"Cancelled '{session.label}' preview")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_idle(self, kind: str) -> None:
        if self._session is not None:
            logger.warning(
                f"Rejected '{kind}': '{self._session.label}' preview is still open"
            )
            raise InvalidStateError(
                f"Cannot begin '{kind}' while the '{self._session.label}' preview is open"
            )
        if not self._image_state.has_image():
            raise InvalidStateError(f"Cannot begin '{kind}': no image loaded")

    def _require_session(self, operation: str) -> PreviewSession:
        if self._session is None:
            raise InvalidStateError(f"{operation}() requires an open preview")
        return self._session

    def _open(self, session: PreviewSession, working: Image) -> None:
        self._image_state.stage(working)
        self._session = session
        logger.debug(f"Opened '{session.kind}' preview")
        self._notify(working)

    def _notify(self, working: Image) -> None:
        if self.on_preview_changed is not None:
            self.on_preview_changed(working)
