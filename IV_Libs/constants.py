"""
Constants and configuration values for Image Viewer.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Application
APPLICATION_NAME = "Image Viewer"
ORGANIZATION_NAME = "Image Viewer"

# UI constants
DEFAULT_WINDOW_SCREEN_RATIO = 3 / 5
EFFECT_DIALOG_PREVIEW_SIZE = 420
HISTOGRAM_PREVIEW_SIZE = 256
STATUS_MESSAGE_TIMEOUT_MS = 0

# View transform
ZOOM_IN_FACTOR = 1.25
ZOOM_OUT_FACTOR = 0.8
MAX_SCALE_FACTOR = 3.0
MIN_SCALE_FACTOR = 0.333
DEFAULT_SCALE_FACTOR = 1.0

# Brightness / contrast
BRIGHTNESS_CONTRAST_ALPHA = 2.2
BRIGHTNESS_BETA_MIN = 2
BRIGHTNESS_BETA_MAX = 100
BRIGHTNESS_BETA_DEFAULT = 2

# Kernel based blur filters
KERNEL_SIZE_MIN = 2
KERNEL_SIZE_MAX = 31
KERNEL_SIZE_DEFAULT = 3
KERNEL_SIZE_SMALLEST_VALID = 3

# Sepia transform, applied to RGB channel order (rows produce R, G, B)
SEPIA_MATRIX = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)

# Histogram plot
HISTOGRAM_BINS = 256
HISTOGRAM_WIDTH = 512
HISTOGRAM_HEIGHT = 400
HISTOGRAM_LINE_THICKNESS = 2

# Filter kinds
FILTER_BRIGHTNESS = "brightness"
FILTER_SEPIA = "sepia"
FILTER_HISTOGRAM_EQUALIZATION = "histogram_equalization"
FILTER_HOMOGENEOUS_BLUR = "homogeneous_blur"
FILTER_GAUSSIAN_BLUR = "gaussian_blur"
FILTER_MEDIAN_BLUR = "median_blur"
FILTER_BILATERAL_BLUR = "bilateral_blur"

BLUR_FILTER_KINDS = (
    FILTER_HOMOGENEOUS_BLUR,
    FILTER_GAUSSIAN_BLUR,
    FILTER_MEDIAN_BLUR,
    FILTER_BILATERAL_BLUR,
)

# Non-filter edit kinds
EDIT_KIND_CROP = "crop"
EDIT_KIND_PAINT = "paint"

# Paint sub-tool
PAINT_DEFAULT_COLOR = (0, 0, 0)
PAINT_DEFAULT_BRUSH_SIZE = 5
PAINT_MIN_BRUSH_SIZE = 1
PAINT_MAX_BRUSH_SIZE = 50

# File handling
DEFAULT_SAVE_SUFFIX = "jpg"

# Action names
ACTION_OPEN = "open"
ACTION_SAVE_AS = "save_as"
ACTION_EXIT = "exit"
ACTION_COPY = "copy"
ACTION_PASTE = "paste"
ACTION_CROP = "crop"
ACTION_PAINT = "paint"
ACTION_UNDO = "undo"
ACTION_REDO = "redo"
ACTION_ZOOM_IN = "zoom_in"
ACTION_ZOOM_OUT = "zoom_out"
ACTION_NORMAL_SIZE = "normal_size"
ACTION_FIT_TO_WINDOW = "fit_to_window"
ACTION_ABOUT = "about"
