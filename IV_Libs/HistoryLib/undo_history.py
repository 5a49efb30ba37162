"""
Linear undo/redo history.

Commands are kept in a list with a cursor separating the done commands
(``commands[:cursor]``) from the undone ones (``commands[cursor:]``).
Pushing after an undo discards the undone tail; there is no redo tree.

Classes:
    UndoHistory: Command history bound to an image state holder
"""

from typing import List
import logging

from IV_Libs.HistoryLib.edit_commands import EditCommand
from IV_Libs.errors import EmptyHistoryError

logger = logging.getLogger(__name__)


class UndoHistory:
    """
    Undo/redo stack driving an ImageStateHolder.

    The holder's committed image always equals the ``after`` of the last done
    command, or the image it held when the history was (re)started if no
    command is done.

    Example:
        >>> history = UndoHistory(state)
        >>> history.push(EditCommand(before=img0, after=img1, label="Sepia"))
        >>> history.undo()      # state.current() is img0 again
        >>> history.redo()      # state.current() is img1 again
    """

    def __init__(self, state) -> None:
        self._state = state
        self._commands: List[EditCommand] = []
        self._cursor = 0

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def commands(self) -> List[EditCommand]:
        """Copy of the command list, done and undone."""
        return list(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._commands)

    def undo_text(self) -> str:
        if not self.can_undo():
            return ""
        return self._commands[self._cursor - 1].label

    def redo_text(self) -> str:
        if not self.can_redo():
            return ""
        return self._commands[self._cursor].label

    def push(self, command: EditCommand) -> None:
        """
        Record and apply a command.

        Any undone commands after the cursor are discarded.

        Args:
            command: The accepted edit
        """
        discarded = len(self._commands) - self._cursor
        del self._commands[self._cursor:]
        self._commands.append(command)
        self._cursor = len(self._commands)
        command.apply(self._state)

        if discarded:
            logger.debug(f"Discarded {discarded} undone command(s)")
        logger.info(f"Applied '{command.label}' (history {self._cursor}/{len(self._commands)})")

    def undo(self) -> EditCommand:
        """
        Reverse the last done command.

        Returns:
            The command that was reversed

        Raises:
            EmptyHistoryError: If there is nothing to undo (no state change)
        """
        if not self.can_undo():
            raise EmptyHistoryError("Nothing to undo")

        command = self._commands[self._cursor - 1]
        command.revert(self._state)
        self._cursor -= 1
        logger.info(f"Undid '{command.label}' (history {self._cursor}/{len(self._commands)})")
        return command

    def redo(self) -> EditCommand:
        """
        Re-apply the first undone command.

        Returns:
            The command that was re-applied

        Raises:
            EmptyHistoryError: If there is nothing to redo (no state change)
        """
        if not self.can_redo():
            raise EmptyHistoryError("Nothing to redo")

        command = self._commands[self._cursor]
        command.apply(self._state)
        self._cursor += 1
        logger.info(f"Redid '{command.label}' (history {self._cursor}/{len(self._commands)})")
        return command

    def clear(self) -> None:
        """Forget every command without touching the state holder."""
        self._commands.clear()
        self._cursor = 0
