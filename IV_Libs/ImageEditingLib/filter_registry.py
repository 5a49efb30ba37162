"""
Filter Registry and Manager.

This module provides a centralized registry for the viewer's filters. It maps a
filter kind to its function and to the metadata the preview controller and the
menus need: the display label, whether the filter takes a parameter, and the
parameter's range and default.

Classes:
    FilterRegistry: Registry for filter functions

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_filters: Register all built-in filters
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from IV_Libs.ImageEditingLib.filters import coerce_kernel_size
from IV_Libs.ImageEditingLib.image_models import Image

logger = logging.getLogger(__name__)

# Type alias for filter function: f(image) or f(image, parameter)
FilterFunction = Callable[..., Image]


class FilterRegistry:
    """
    Registry for filter functions.

    Provides centralized management of filters, allowing registration, lookup,
    parameter clamping and application by kind.

    Example:
        >>> registry = FilterRegistry()
        >>> registry.register("sepia", apply_sepia, label="Sepia")
        >>> registry.register(
        ...     "gaussian_blur", apply_gaussian_blur, label="Gaussian Blur",
        ...     takes_parameter=True, minimum=2, maximum=31, default=3,
        ...     odd_only=True,
        ... )
        >>> result = registry.apply("gaussian_blur", image, 4)
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._filters: Dict[str, FilterFunction] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}

    def register(
        self,
        kind: str,
        function: FilterFunction,
        label: str = "",
        description: str = "",
        takes_parameter: bool = False,
        minimum: int = 0,
        maximum: int = 0,
        default: int = 0,
        odd_only: bool = False,
        shortcut: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a filter.

        Args:
            kind: Unique identifier for the filter (e.g., "gaussian_blur")
            function: Callable taking (image) or (image, parameter)
            label: Menu/undo text (defaults to the kind)
            description: Human-readable description
            takes_parameter: Whether the filter exposes a slider parameter
            minimum: Smallest accepted parameter value
            maximum: Largest accepted parameter value
            default: Parameter used for the initial preview
            odd_only: Whether the parameter is a kernel size that must be odd
            shortcut: Keyboard shortcut for the menu action
            tags: Optional list of tags for categorization (e.g., ["blur"])

        Raises:
            ValueError: If kind is empty, function is not callable or the
                parameter range is inconsistent
            RuntimeError: If kind is already registered
        """
        kind = str(kind).strip()

        if not kind:
            raise ValueError("kind cannot be empty")

        if not callable(function):
            raise ValueError(f"function must be callable, got {type(function)}")

        if takes_parameter and not (minimum <= default <= maximum):
            raise ValueError(
                f"default {default} outside range [{minimum}, {maximum}] for '{kind}'"
            )

        if kind in self._filters:
            raise RuntimeError(
                f"Filter '{kind}' is already registered. "
                f"Use unregister() first to replace it."
            )

        self._filters[kind] = function
        self._metadata[kind] = {
            "label": str(label) or kind,
            "description": str(description),
            "takes_parameter": bool(takes_parameter),
            "minimum": int(minimum),
            "maximum": int(maximum),
            "default": int(default),
            "odd_only": bool(odd_only),
            "shortcut": str(shortcut),
            "tags": list(tags) if tags else [],
        }

        logger.debug(f"Registered filter: {kind}")

    def unregister(self, kind: str) -> bool:
        """
        Unregister a filter.

        Returns:
            True if unregistered, False if kind was not registered
        """
        kind = str(kind).strip()

        if kind in self._filters:
            del self._filters[kind]
            del self._metadata[kind]
            logger.debug(f"Unregistered filter: {kind}")
            return True

        return False

    def get_filter(self, kind: str) -> FilterFunction:
        """
        Get the function for a filter kind.

        Raises:
            KeyError: If kind is not registered
        """
        kind = str(kind).strip()

        if kind not in self._filters:
            available = ", ".join(self.list_kinds())
            raise KeyError(
                f"No filter registered for kind '{kind}'. "
                f"Available kinds: {available}"
            )

        return self._filters[kind]

    def has_filter(self, kind: str) -> bool:
        return str(kind).strip() in self._filters

    def clamp_parameter(self, kind: str, value: int) -> int:
        """
        Clamp a requested parameter into the filter's valid range.

        The value is first clamped to [minimum, maximum]. Kernel filters are
        then coerced to an odd size of at least 3, so 0, 1 and 2 become 3 and
        an even size n becomes n + 1.

        Args:
            kind: Registered filter kind
            value: Requested parameter value

        Returns:
            The value that will actually be passed to the filter

        Raises:
            KeyError: If kind is not registered
            ValueError: If the filter takes no parameter
        """
        meta = self.get_metadata(kind)

        if not meta["takes_parameter"]:
            raise ValueError(f"Filter '{kind}' does not take a parameter")

        value = max(meta["minimum"], min(meta["maximum"], int(value)))
        if meta["odd_only"]:
            value = coerce_kernel_size(value)
        return value

    def apply(self, kind: str, image: Image, parameter: Optional[int] = None) -> Image:
        """
        Apply a filter by kind.

        Parameterized filters use ``parameter`` after clamping, or their
        default when it is None. Parameterless filters ignore ``parameter``.

        Args:
            kind: The filter kind to apply
            image: Source image (never modified)
            parameter: Optional parameter value

        Returns:
            The filtered image

        Raises:
            KeyError: If kind is not registered
            Exception: Any exception raised by the filter function
        """
        function = self.get_filter(kind)
        meta = self._metadata[str(kind).strip()]

        if not meta["takes_parameter"]:
            return function(image)

        if parameter is None:
            parameter = meta["default"]
        return function(image, self.clamp_parameter(kind, parameter))

    def list_kinds(self) -> List[str]:
        """Return the registered kinds in registration order."""
        return list(self._filters.keys())

    def get_metadata(self, kind: str) -> Dict[str, Any]:
        """
        Get metadata for a filter kind.

        Returns:
            Dictionary with label, description, takes_parameter, minimum,
            maximum, default, odd_only, shortcut, tags

        Raises:
            KeyError: If kind is not registered
        """
        kind = str(kind).strip()

        if kind not in self._metadata:
            raise KeyError(f"No metadata for filter kind: {kind}")

        return dict(self._metadata[kind])

    def get_all_metadata(self) -> Dict[str, Dict[str, Any]]:
        return {kind: dict(meta) for kind, meta in self._metadata.items()}

    def filter_by_tag(self, tag: str) -> List[str]:
        """
        Get all filter kinds with a specific tag, in registration order.
        """
        tag = str(tag).strip().lower()
        return [
            kind
            for kind, meta in self._metadata.items()
            if tag in [t.lower() for t in meta.get("tags", [])]
        ]

    def clear(self) -> None:
        """Clear all registered filters. Use with caution."""
        self._filters.clear()
        self._metadata.clear()
        logger.warning("Filter registry cleared")


# Global singleton registry
_default_registry: Optional[FilterRegistry] = None


def get_default_registry() -> FilterRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in filters.
    """
    global _default_registry

    if _default_registry is None:
        _default_registry = FilterRegistry()
        register_default_filters(_default_registry)

    return _default_registry


def register_default_filters(registry: FilterRegistry) -> None:
    """
    Register all built-in filters.

    This function registers:
    - Brightness (contrast fixed at 2.2, brightness offset on the slider)
    - Histogram Equalization
    - Sepia
    - Homogeneous, Gaussian, Median and Bilateral blur

    Args:
        registry: The registry to register filters with
    """
    from IV_Libs.ImageEditingLib.filters import (
        apply_bilateral_blur,
        apply_brightness_contrast,
        apply_gaussian_blur,
        apply_histogram_equalization,
        apply_homogeneous_blur,
        apply_median_blur,
        apply_sepia,
    )
    from IV_Libs.constants import (
        BRIGHTNESS_BETA_DEFAULT,
        BRIGHTNESS_BETA_MAX,
        BRIGHTNESS_BETA_MIN,
        FILTER_BILATERAL_BLUR,
        FILTER_BRIGHTNESS,
        FILTER_GAUSSIAN_BLUR,
        FILTER_HISTOGRAM_EQUALIZATION,
        FILTER_HOMOGENEOUS_BLUR,
        FILTER_MEDIAN_BLUR,
        FILTER_SEPIA,
        KERNEL_SIZE_DEFAULT,
        KERNEL_SIZE_MAX,
        KERNEL_SIZE_MIN,
    )

    registry.register(
        kind=FILTER_BRIGHTNESS,
        function=apply_brightness_contrast,
        label="Brightness",
        description="Raise contrast (x2.2) and brightness by an adjustable offset",
        takes_parameter=True,
        minimum=BRIGHTNESS_BETA_MIN,
        maximum=BRIGHTNESS_BETA_MAX,
        default=BRIGHTNESS_BETA_DEFAULT,
        shortcut="Ctrl+B",
        tags=["tone"],
    )

    registry.register(
        kind=FILTER_HISTOGRAM_EQUALIZATION,
        function=apply_histogram_equalization,
        label="Histogram Equalization",
        description="Equalize the luma histogram",
        shortcut="Ctrl+H",
        tags=["tone", "histogram"],
    )

    registry.register(
        kind=FILTER_SEPIA,
        function=apply_sepia,
        label="Sepia",
        description="Warm brown sepia tone",
        shortcut="Ctrl+A",
        tags=["tone", "color"],
    )

    blur_filters = (
        (FILTER_HOMOGENEOUS_BLUR, apply_homogeneous_blur, "Homogeneous Blur",
         "Normalized box blur", "Ctrl+L"),
        (FILTER_GAUSSIAN_BLUR, apply_gaussian_blur, "Gaussian Blur",
         "Gaussian blur", "Ctrl+G"),
        (FILTER_MEDIAN_BLUR, apply_median_blur, "Median Blur",
         "Median blur", "Ctrl+M"),
        (FILTER_BILATERAL_BLUR, apply_bilateral_blur, "Bilateral Blur",
         "Edge-preserving bilateral blur", "Ctrl+T"),
    )

    for kind, function, label, description, shortcut in blur_filters:
        registry.register(
            kind=kind,
            function=function,
            label=label,
            description=description,
            takes_parameter=True,
            minimum=KERNEL_SIZE_MIN,
            maximum=KERNEL_SIZE_MAX,
            default=KERNEL_SIZE_DEFAULT,
            odd_only=True,
            shortcut=shortcut,
            tags=["blur", "kernel"],
        )

    logger.info("Registered default filters")
