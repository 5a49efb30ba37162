"""
Image state holder.

Keeps the committed document image and the staged preview image of an edit
in progress. No filter logic lives here; the only rule is that the committed
image changes solely through ``commit`` (or ``load`` for a new document).
"""

from typing import Optional
import logging

from IV_Libs.ImageEditingLib.image_models import (
    Image,
    copy_image,
    has_area,
    image_size,
    validate_image,
)

logger = logging.getLogger(__name__)


class ImageStateHolder:
    """Committed image plus the working (preview) image."""

    def __init__(self) -> None:
        self._current: Optional[Image] = None
        self._working: Optional[Image] = None

    def current(self) -> Optional[Image]:
        return self._current

    def working(self) -> Optional[Image]:
        return self._working

    def has_image(self) -> bool:
        return has_area(self._current)

    def size(self):
        """(width, height) of the committed image, (0, 0) when empty."""
        return image_size(self._current)

    def load(self, image: Image) -> None:
        """Replace the document with a freshly loaded image."""
        image = validate_image(image)
        self._current = copy_image(image)
        self._working = None
        logger.debug(f"Loaded image {image.shape[1]}x{image.shape[0]}")

    def begin_preview(self) -> Image:
        """
        Start a preview: working becomes an independent copy of current.

        Returns:
            The snapshot, another independent copy of current

        Raises:
            ValueError: If no image is loaded
        """
        if self._current is None:
            raise ValueError("No image loaded")
        self._working = copy_image(self._current)
        return copy_image(self._current)

    def stage(self, image: Image) -> None:
        """Replace the working image with a new preview result."""
        self._working = validate_image(image)

    def commit(self, image: Image) -> None:
        """Make ``image`` the committed image and clear the working image."""
        self._current = validate_image(image)
        self._working = None

    def discard_preview(self) -> None:
        """Drop the preview; working goes back to the committed image."""
        self._working = self._current
