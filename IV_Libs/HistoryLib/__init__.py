"""
HistoryLib - Edit commands and undo/redo history

This module records accepted edits as reversible before/after snapshots and
manages the linear undo/redo history of the document.
"""

from IV_Libs.HistoryLib.edit_commands import EditCommand
from IV_Libs.HistoryLib.undo_history import UndoHistory

__all__ = [
    "EditCommand",
    "UndoHistory",
]
