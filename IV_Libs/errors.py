"""
Error kinds raised by the Image Viewer core.

Each error derives from the built-in exception that best describes it, so
callers may catch either the specific kind or the familiar base class
(``OSError`` for file problems, ``RuntimeError`` for contract violations,
``LookupError`` for "nothing available").

Classes:
    ImageViewerError: Common base for all application errors
    DecodeError: A file could not be read or is not a supported image
    EncodeError: An image could not be written
    InvalidStateError: An operation was invoked in the wrong preview state
    EmptyHistoryError: Undo or redo requested with nothing available
    EmptyClipboardError: Paste requested with no image on the clipboard
"""


class ImageViewerError(Exception):
    """Base class for Image Viewer errors."""


class DecodeError(ImageViewerError, OSError):
    """Raised when an image file cannot be decoded."""


class EncodeError(ImageViewerError, OSError):
    """Raised when an image cannot be written to disk."""


class InvalidStateError(ImageViewerError, RuntimeError):
    """Raised when the preview state machine receives an illegal transition."""


class EmptyHistoryError(ImageViewerError, LookupError):
    """Raised by undo/redo when there is no command to apply."""


class EmptyClipboardError(ImageViewerError, LookupError):
    """Raised when the clipboard holds no usable image."""
