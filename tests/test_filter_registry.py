"""
Tests for the Filter Registry.

Tests cover:
- Registry creation and basic operations
- Filter registration and lookup
- Metadata management
- Parameter clamping and kernel coercion
- Filter application
- Filtering by tags
- Error handling
- Singleton pattern
"""

import unittest

import numpy as np

from IV_Libs.ImageEditingLib.filter_registry import (
    FilterRegistry,
    get_default_registry,
    register_default_filters,
)
from IV_Libs.ImageEditingLib.image_models import blank_image
from IV_Libs.constants import (
    BLUR_FILTER_KINDS,
    FILTER_BRIGHTNESS,
    FILTER_GAUSSIAN_BLUR,
    FILTER_HISTOGRAM_EQUALIZATION,
    FILTER_SEPIA,
)


def invert(image):
    return 255 - image


def add(image, amount):
    return np.clip(image.astype(int) + amount, 0, 255).astype(np.uint8)


class TestFilterRegistry(unittest.TestCase):
    """Test FilterRegistry basic functionality."""

    def setUp(self):
        """Create a fresh registry for each test."""
        self.registry = FilterRegistry()
        self.image = blank_image(4, 4, (10, 20, 30))

    def test_registry_creation(self):
        self.assertEqual(len(self.registry.list_kinds()), 0)

    def test_register_filter(self):
        self.registry.register("invert", invert)

        self.assertTrue(self.registry.has_filter("invert"))
        self.assertIn("invert", self.registry.list_kinds())

    def test_register_with_metadata(self):
        self.registry.register(
            "add",
            add,
            label="Add",
            description="Adds a constant",
            takes_parameter=True,
            minimum=0,
            maximum=50,
            default=10,
            shortcut="Ctrl+D",
            tags=["tone"],
        )

        meta = self.registry.get_metadata("add")
        self.assertEqual(meta["label"], "Add")
        self.assertEqual(meta["description"], "Adds a constant")
        self.assertTrue(meta["takes_parameter"])
        self.assertEqual((meta["minimum"], meta["maximum"], meta["default"]), (0, 50, 10))
        self.assertEqual(meta["shortcut"], "Ctrl+D")
        self.assertEqual(meta["tags"], ["tone"])

    def test_label_defaults_to_kind(self):
        self.registry.register("invert", invert)
        self.assertEqual(self.registry.get_metadata("invert")["label"], "invert")

    def test_register_duplicate_raises(self):
        self.registry.register("invert", invert)

        with self.assertRaises(RuntimeError):
            self.registry.register("invert", invert)

    def test_register_empty_kind_raises(self):
        with self.assertRaises(ValueError):
            self.registry.register("  ", invert)

    def test_register_non_callable_raises(self):
        with self.assertRaises(ValueError):
            self.registry.register("broken", "not a function")

    def test_register_default_outside_range_raises(self):
        with self.assertRaises(ValueError):
            self.registry.register(
                "add", add, takes_parameter=True, minimum=0, maximum=5, default=9
            )

    def test_unregister(self):
        self.registry.register("invert", invert)

        self.assertTrue(self.registry.unregister("invert"))
        self.assertFalse(self.registry.has_filter("invert"))
        self.assertFalse(self.registry.unregister("invert"))

    def test_get_unknown_filter_raises(self):
        self.registry.register("invert", invert)

        with self.assertRaises(KeyError) as ctx:
            self.registry.get_filter("missing")
        self.assertIn("invert", str(ctx.exception))

    def test_get_metadata_unknown_raises(self):
        with self.assertRaises(KeyError):
            self.registry.get_metadata("missing")

    def test_metadata_is_a_copy(self):
        self.registry.register("invert", invert, label="Invert")

        self.registry.get_metadata("invert")["label"] = "Changed"

        self.assertEqual(self.registry.get_metadata("invert")["label"], "Invert")

    def test_apply_parameterless(self):
        self.registry.register("invert", invert)

        result = self.registry.apply("invert", self.image)

        self.assertEqual(tuple(result[0, 0]), (245, 235, 225))

    def test_apply_uses_default_parameter(self):
        self.registry.register(
            "add", add, takes_parameter=True, minimum=0, maximum=50, default=10
        )

        result = self.registry.apply("add", self.image)

        self.assertEqual(tuple(result[0, 0]), (20, 30, 40))

    def test_apply_clamps_parameter(self):
        self.registry.register(
            "add", add, takes_parameter=True, minimum=0, maximum=50, default=10
        )

        result = self.registry.apply("add", self.image, 500)

        self.assertEqual(tuple(result[0, 0]), (60, 70, 80))

    def test_clamp_parameterless_raises(self):
        self.registry.register("invert", invert)

        with self.assertRaises(ValueError):
            self.registry.clamp_parameter("invert", 3)

    def test_filter_by_tag(self):
        self.registry.register("invert", invert, tags=["Color"])
        self.registry.register("add", add, tags=["tone"])

        self.assertEqual(self.registry.filter_by_tag("color"), ["invert"])
        self.assertEqual(self.registry.filter_by_tag("missing"), [])

    def test_get_all_metadata(self):
        self.registry.register("invert", invert)
        self.registry.register("add", add)

        self.assertEqual(set(self.registry.get_all_metadata()), {"invert", "add"})

    def test_clear(self):
        self.registry.register("invert", invert)

        self.registry.clear()

        self.assertEqual(self.registry.list_kinds(), [])


class TestDefaultFilters(unittest.TestCase):
    """Test the built-in filter set."""

    def setUp(self):
        self.registry = FilterRegistry()
        register_default_filters(self.registry)

    def test_menu_order(self):
        expected = [FILTER_BRIGHTNESS, FILTER_HISTOGRAM_EQUALIZATION, FILTER_SEPIA]
        expected.extend(BLUR_FILTER_KINDS)
        self.assertEqual(self.registry.list_kinds(), expected)

    def test_parameterless_filters(self):
        for kind in (FILTER_SEPIA, FILTER_HISTOGRAM_EQUALIZATION):
            self.assertFalse(self.registry.get_metadata(kind)["takes_parameter"])

    def test_blur_ranges(self):
        for kind in BLUR_FILTER_KINDS:
            meta = self.registry.get_metadata(kind)
            self.assertTrue(meta["takes_parameter"])
            self.assertTrue(meta["odd_only"])
            self.assertEqual((meta["minimum"], meta["maximum"]), (2, 31))

    def test_blur_tag(self):
        self.assertEqual(self.registry.filter_by_tag("blur"), list(BLUR_FILTER_KINDS))

    def test_brightness_range(self):
        meta = self.registry.get_metadata(FILTER_BRIGHTNESS)
        self.assertEqual((meta["minimum"], meta["maximum"], meta["default"]), (2, 100, 2))
        self.assertFalse(meta["odd_only"])

    def test_kernel_parameter_coercion(self):
        self.assertEqual(self.registry.clamp_parameter(FILTER_GAUSSIAN_BLUR, 0), 3)
        self.assertEqual(self.registry.clamp_parameter(FILTER_GAUSSIAN_BLUR, 2), 3)
        self.assertEqual(self.registry.clamp_parameter(FILTER_GAUSSIAN_BLUR, 4), 5)
        self.assertEqual(self.registry.clamp_parameter(FILTER_GAUSSIAN_BLUR, 7), 7)
        self.assertEqual(self.registry.clamp_parameter(FILTER_GAUSSIAN_BLUR, 99), 31)

    def test_brightness_parameter_clamped(self):
        self.assertEqual(self.registry.clamp_parameter(FILTER_BRIGHTNESS, 0), 2)
        self.assertEqual(self.registry.clamp_parameter(FILTER_BRIGHTNESS, 250), 100)
        self.assertEqual(self.registry.clamp_parameter(FILTER_BRIGHTNESS, 40), 40)

    def test_every_filter_has_shortcut(self):
        shortcuts = [meta["shortcut"] for meta in self.registry.get_all_metadata().values()]
        self.assertTrue(all(shortcuts))
        self.assertEqual(len(set(shortcuts)), len(shortcuts))


class TestSingletonRegistry(unittest.TestCase):
    """Test the global default registry."""

    def test_same_instance(self):
        self.assertIs(get_default_registry(), get_default_registry())

    def test_has_default_filters(self):
        registry = get_default_registry()
        for kind in (FILTER_BRIGHTNESS, FILTER_SEPIA) + BLUR_FILTER_KINDS:
            self.assertTrue(registry.has_filter(kind))


if __name__ == "__main__":
    unittest.main()
