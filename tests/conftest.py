"""
Pytest configuration and shared fixtures for Image Viewer tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest

from IV_Libs.ImageEditingLib.filter_registry import (
    FilterRegistry,
    register_default_filters,
)
from IV_Libs.ImageEditingLib.image_models import blank_image


@pytest.fixture
def gradient_image():
    """
    Provide a 100x100 RGB image with distinct values per pixel and channel.

    Returns:
        uint8 array of shape (100, 100, 3)
    """
    ys, xs = np.mgrid[0:100, 0:100]
    image = np.empty((100, 100, 3), dtype=np.uint8)
    image[..., 0] = (xs * 2) % 256
    image[..., 1] = (ys * 2) % 256
    image[..., 2] = (xs + ys) % 256
    return image


@pytest.fixture
def solid_image():
    """Provide a 40x30 mid-gray image."""
    return blank_image(40, 30, (200, 200, 200))


@pytest.fixture
def registry():
    """
    Provide a registry holding the built-in filters.

    A fresh instance per test, so tests may register or unregister freely
    without touching the global singleton.
    """
    fresh = FilterRegistry()
    register_default_filters(fresh)
    return fresh


@pytest.fixture
def sample_rgb_colors():
    """
    Provide a list of sample RGB color tuples for testing.

    Returns:
        List of (R, G, B) tuples with common test colors
    """
    return [
        (255, 0, 0),    # Red
        (0, 255, 0),    # Green
        (0, 0, 255),    # Blue
        (255, 255, 255),  # White
        (0, 0, 0),      # Black
        (128, 128, 128),  # Gray
    ]
