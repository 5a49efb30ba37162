"""
Reversible edit commands.

An EditCommand records one accepted transition of the document image as a
pair of full snapshots. Applying it makes ``after`` current, reversing it
makes ``before`` current. Commands are never merged.
"""

from dataclasses import dataclass, field

from IV_Libs.ImageEditingLib.image_models import Image


@dataclass(frozen=True, eq=False)
class EditCommand:
    """One accepted edit.

    Attributes:
        before: Committed image at the moment the preview began
        after: Image the user accepted
        label: Human-readable name shown in undo/redo text (e.g. "Sepia")
        kind: Machine name of the edit (filter kind, "crop" or "paint")
    """
    before: Image = field(repr=False)
    after: Image = field(repr=False)
    label: str = ""
    kind: str = ""

    def apply(self, state) -> None:
        """Make ``after`` the committed image of ``state``."""
        state.commit(self.after)

    def revert(self, state) -> None:
        """Make ``before`` the committed image of ``state``."""
        state.commit(self.before)
