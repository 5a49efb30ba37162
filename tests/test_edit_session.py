"""
Unit tests for the edit session and action enablement.

Tests the document facade end to end (load, preview, accept, cancel, undo,
redo, save) and the pure compute_action_state function.
"""

import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image as PILImage

from IV_Libs.ImageEditingLib.filter_registry import FilterRegistry, register_default_filters
from IV_Libs.ImageEditingLib.filters import apply_sepia
from IV_Libs.ImageEditingLib.image_models import blank_image
from IV_Libs.SessionLib.edit_session import EditSession, compute_action_state
from IV_Libs.SessionLib.preview_controller import PreviewState
from IV_Libs.constants import (
    ACTION_CROP,
    ACTION_FIT_TO_WINDOW,
    ACTION_NORMAL_SIZE,
    ACTION_OPEN,
    ACTION_PASTE,
    ACTION_REDO,
    ACTION_SAVE_AS,
    ACTION_UNDO,
    ACTION_ZOOM_IN,
    ACTION_ZOOM_OUT,
    BLUR_FILTER_KINDS,
    FILTER_GAUSSIAN_BLUR,
    FILTER_SEPIA,
)
from IV_Libs.errors import DecodeError, EmptyHistoryError, EncodeError, InvalidStateError


def _session():
    registry = FilterRegistry()
    register_default_filters(registry)
    return EditSession(registry)


class TestEditSessionScenario(unittest.TestCase):
    """Walk a document through a typical editing session."""

    def setUp(self):
        self.session = _session()
        ys, xs = np.mgrid[0:100, 0:100]
        self.i0 = np.stack([xs % 256, ys % 256, (xs * ys) % 256], axis=-1).astype(np.uint8)
        self.session.load_image(self.i0)

    def test_sepia_blur_cancel_undo(self):
        preview = self.session.preview

        preview.begin(FILTER_SEPIA)
        preview.accept()

        i1 = apply_sepia(self.i0)
        self.assertEqual(self.session.history.cursor, 1)
        command = self.session.history.commands[0]
        self.assertTrue(np.array_equal(command.before, self.i0))
        self.assertTrue(np.array_equal(command.after, i1))
        self.assertTrue(np.array_equal(self.session.current_image(), i1))

        preview.begin(FILTER_GAUSSIAN_BLUR)
        self.assertEqual(preview.on_parameter_changed(4), 5)
        preview.cancel()
        self.assertIs(preview.state, PreviewState.IDLE)
        self.assertTrue(np.array_equal(self.session.current_image(), i1))

        self.session.undo()
        self.assertTrue(np.array_equal(self.session.current_image(), self.i0))
        self.assertEqual(self.session.history.cursor, 0)

        self.session.redo()
        self.assertTrue(np.array_equal(self.session.current_image(), i1))

    def test_undo_rejected_while_previewing(self):
        self.session.preview.begin(FILTER_SEPIA)
        self.session.preview.accept()
        self.session.preview.begin(FILTER_SEPIA)

        with self.assertRaises(InvalidStateError):
            self.session.undo()
        self.assertEqual(self.session.history.cursor, 1)

    def test_load_rejected_while_previewing(self):
        self.session.preview.begin(FILTER_SEPIA)

        with self.assertRaises(InvalidStateError):
            self.session.load_image(blank_image(3, 3))

    def test_load_clears_history_and_zoom(self):
        self.session.preview.begin(FILTER_SEPIA)
        self.session.preview.accept()
        self.session.view.zoom_in()

        self.session.load_image(blank_image(8, 8))

        self.assertEqual(len(self.session.history), 0)
        self.assertEqual(self.session.view.scale_factor, 1.0)

    def test_undo_empty_history(self):
        with self.assertRaises(EmptyHistoryError):
            self.session.undo()

    def test_crop_then_undo_restores_size(self):
        self.session.preview.begin_crop((10, 10), (19, 29))
        self.session.preview.accept()
        self.assertEqual(self.session.state.size(), (10, 20))

        self.session.undo()
        self.assertEqual(self.session.state.size(), (100, 100))

    def test_empty_crop_disables_filters(self):
        self.session.preview.begin_crop((120, 0), (150, 10))
        self.session.preview.accept()

        actions = self.session.action_state()
        self.assertFalse(self.session.has_image())
        self.assertFalse(actions[FILTER_SEPIA])
        self.assertTrue(actions[ACTION_UNDO])

    def test_action_state_follows_history(self):
        self.session.preview.begin(FILTER_SEPIA)
        self.session.preview.accept()
        self.session.undo()

        actions = self.session.action_state()
        self.assertFalse(actions[ACTION_UNDO])
        self.assertTrue(actions[ACTION_REDO])


class TestEditSessionFiles(unittest.TestCase):
    """Open and save through the codec."""

    def setUp(self):
        self.session = _session()
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_open_file(self):
        path = self.root / "input.png"
        PILImage.new("RGB", (12, 7), (10, 20, 30)).save(path)

        image = self.session.open_file(path)

        self.assertEqual(image.shape, (7, 12, 3))
        self.assertEqual(self.session.file_path, path)
        self.assertTrue(self.session.has_image())

    def test_open_bad_file_keeps_document(self):
        self.session.load_image(blank_image(5, 5))
        path = self.root / "broken.png"
        path.write_bytes(b"not an image")

        with self.assertRaises(DecodeError):
            self.session.open_file(path)

        self.assertEqual(self.session.state.size(), (5, 5))

    def test_save_file(self):
        self.session.load_image(blank_image(6, 4, (0, 128, 255)))

        written = self.session.save_file(self.root / "out.png")

        self.assertTrue(written.exists())
        self.assertEqual(self.session.file_path, written)

    def test_save_without_image(self):
        with self.assertRaises(EncodeError):
            self.session.save_file(self.root / "out.png")


class TestComputeActionState(unittest.TestCase):
    """Test the pure enablement function."""

    def test_no_image(self):
        state = compute_action_state(has_image=False, crop_mode=False, fit_to_window=False)

        self.assertTrue(state[ACTION_OPEN])
        self.assertTrue(state[ACTION_PASTE])
        self.assertFalse(state[ACTION_SAVE_AS])
        self.assertFalse(state[ACTION_ZOOM_IN])
        self.assertFalse(state[ACTION_CROP])
        for kind in BLUR_FILTER_KINDS:
            self.assertFalse(state[kind])

    def test_image_loaded(self):
        state = compute_action_state(has_image=True, crop_mode=False, fit_to_window=False)

        self.assertTrue(state[ACTION_SAVE_AS])
        self.assertTrue(state[ACTION_ZOOM_IN])
        self.assertTrue(state[ACTION_ZOOM_OUT])
        self.assertTrue(state[ACTION_NORMAL_SIZE])
        self.assertTrue(state[ACTION_CROP])
        self.assertTrue(state[ACTION_FIT_TO_WINDOW])
        self.assertTrue(state[FILTER_SEPIA])

    def test_crop_mode_disables_zoom_and_fit(self):
        state = compute_action_state(has_image=True, crop_mode=True, fit_to_window=False)

        self.assertTrue(state[ACTION_CROP])
        self.assertFalse(state[ACTION_FIT_TO_WINDOW])
        self.assertFalse(state[ACTION_ZOOM_IN])
        self.assertFalse(state[ACTION_ZOOM_OUT])
        self.assertFalse(state[ACTION_NORMAL_SIZE])

    def test_fit_to_window_disables_zoom_and_crop(self):
        state = compute_action_state(has_image=True, crop_mode=False, fit_to_window=True)

        self.assertFalse(state[ACTION_CROP])
        self.assertTrue(state[ACTION_FIT_TO_WINDOW])
        self.assertFalse(state[ACTION_ZOOM_IN])
        self.assertFalse(state[ACTION_NORMAL_SIZE])

    def test_zoom_limits(self):
        state = compute_action_state(
            has_image=True,
            crop_mode=False,
            fit_to_window=False,
            can_zoom_in=False,
            can_zoom_out=True,
        )

        self.assertFalse(state[ACTION_ZOOM_IN])
        self.assertTrue(state[ACTION_ZOOM_OUT])

    def test_undo_redo_flags(self):
        state = compute_action_state(
            has_image=False, crop_mode=False, fit_to_window=False, can_undo=True
        )

        self.assertTrue(state[ACTION_UNDO])
        self.assertFalse(state[ACTION_REDO])


if __name__ == "__main__":
    unittest.main()
