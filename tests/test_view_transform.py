"""
Unit tests for the view transform (zoom factor and scroll adjustment).
"""

import pytest

from IV_Libs.SessionLib.view_transform import ViewTransform


class TestViewTransform:
    """Tests for ViewTransform."""

    def test_starts_at_actual_size(self):
        view = ViewTransform()
        assert view.scale_factor == 1.0
        assert view.scaled_size(200, 100) == (200, 100)

    def test_zoom_in_and_out(self):
        view = ViewTransform()

        assert view.zoom_in() == 1.25
        assert view.scale_factor == pytest.approx(1.25)

        assert view.zoom_out() == 0.8
        assert view.scale_factor == pytest.approx(1.0)

    def test_zoom_in_limit(self):
        view = ViewTransform()
        while view.can_zoom_in():
            view.zoom_in()

        assert view.scale_factor >= 3.0
        assert view.zoom_in() == 1.0

    def test_zoom_out_limit(self):
        view = ViewTransform()
        while view.can_zoom_out():
            view.zoom_out()

        assert view.scale_factor <= 0.333
        assert view.zoom_out() == 1.0

    def test_reset(self):
        view = ViewTransform()
        view.zoom_in()

        view.reset()

        assert view.scale_factor == 1.0

    def test_scaled_size(self):
        view = ViewTransform()
        view.zoom_in()
        assert view.scaled_size(100, 40) == (125, 50)

    def test_adjusted_scroll_value(self):
        assert ViewTransform.adjusted_scroll_value(100, 200, 1.25) == 150
        assert ViewTransform.adjusted_scroll_value(100, 200, 0.8) == 60
