"""
SessionLib - Edit session and preview protocol

This module holds the committed/working image state, the effect preview
state machine, the view transform and the EditSession document facade.
"""

from IV_Libs.SessionLib.image_state import ImageStateHolder
from IV_Libs.SessionLib.preview_controller import (
    PreviewController,
    PreviewSession,
    PreviewState,
)
from IV_Libs.SessionLib.view_transform import ViewTransform
from IV_Libs.SessionLib.edit_session import EditSession, compute_action_state

__all__ = [
    "ImageStateHolder",
    "PreviewController",
    "PreviewSession",
    "PreviewState",
    "ViewTransform",
    "EditSession",
    "compute_action_state",
]
