"""
View transform for the image viewport.

Holds the single zoom factor of the display. It is not persisted and resets
to 1.0 whenever a new image is loaded.
"""

from typing import Tuple

from IV_Libs.constants import (
    DEFAULT_SCALE_FACTOR,
    MAX_SCALE_FACTOR,
    MIN_SCALE_FACTOR,
    ZOOM_IN_FACTOR,
    ZOOM_OUT_FACTOR,
)


class ViewTransform:
    def __init__(self) -> None:
        self.scale_factor = DEFAULT_SCALE_FACTOR

    def reset(self) -> None:
        self.scale_factor = DEFAULT_SCALE_FACTOR

    def can_zoom_in(self) -> bool:
        return self.scale_factor < MAX_SCALE_FACTOR

    def can_zoom_out(self) -> bool:
        return self.scale_factor > MIN_SCALE_FACTOR

    def zoom_in(self) -> float:
        """Zoom in by 25%; returns the factor applied (1.0 at the limit)."""
        if not self.can_zoom_in():
            return 1.0
        return self.scale(ZOOM_IN_FACTOR)

    def zoom_out(self) -> float:
        """Zoom out by 20%; returns the factor applied (1.0 at the limit)."""
        if not self.can_zoom_out():
            return 1.0
        return self.scale(ZOOM_OUT_FACTOR)

    def scale(self, factor: float) -> float:
        self.scale_factor *= factor
        return factor

    def scaled_size(self, width: int, height: int) -> Tuple[int, int]:
        return (int(width * self.scale_factor), int(height * self.scale_factor))

    @staticmethod
    def adjusted_scroll_value(value: int, page_step: int, factor: float) -> int:
        """
        Scroll bar position that keeps the viewport centred after scaling.

        Args:
            value: Current scroll bar value
            page_step: Scroll bar page step (visible extent)
            factor: Zoom factor just applied
        """
        return int(factor * value + ((factor - 1) * page_step / 2))
