"""
Unit tests for the standard layout tables.
"""

import unittest

from pyjoyevents.input import (
    Axis, Button, MappingType,
    map_axis, map_button, axis_index, button_index,
)


class TestStandardMapping(unittest.TestCase):
    """Test index/name resolution under the standard layout."""

    def test_axes(self):
        """Indices 0-3 are the two sticks."""
        self.assertEqual(map_axis(MappingType.STANDARD, 0), Axis.LEFT_STICK_X)
        self.assertEqual(map_axis(MappingType.STANDARD, 1), Axis.LEFT_STICK_Y)
        self.assertEqual(map_axis(MappingType.STANDARD, 2), Axis.RIGHT_STICK_X)
        self.assertEqual(map_axis(MappingType.STANDARD, 3), Axis.RIGHT_STICK_Y)

    def test_buttons(self):
        """Spot-check the 17 button positions."""
        self.assertEqual(map_button(MappingType.STANDARD, 0), Button.SOUTH)
        self.assertEqual(map_button(MappingType.STANDARD, 3), Button.NORTH)
        self.assertEqual(map_button(MappingType.STANDARD, 6), Button.LT2)
        self.assertEqual(map_button(MappingType.STANDARD, 7), Button.RT2)
        self.assertEqual(map_button(MappingType.STANDARD, 8), Button.SELECT)
        self.assertEqual(map_button(MappingType.STANDARD, 11), Button.RIGHT_STICK)
        self.assertEqual(map_button(MappingType.STANDARD, 12), Button.UP)
        self.assertEqual(map_button(MappingType.STANDARD, 15), Button.RIGHT)
        self.assertEqual(map_button(MappingType.STANDARD, 16), Button.HOME)

    def test_inverse_lookups(self):
        """Every named axis and button resolves back to its index."""
        for button in Button:
            index = button_index(MappingType.STANDARD, button)
            self.assertIsNotNone(index)
            self.assertEqual(map_button(MappingType.STANDARD, index), button)

        for axis in Axis:
            index = axis_index(MappingType.STANDARD, axis)
            self.assertIsNotNone(index)
            self.assertEqual(map_axis(MappingType.STANDARD, index), axis)

        self.assertEqual(len(Button), 17)
        self.assertEqual(len(Axis), 4)

    def test_out_of_range(self):
        """Indices outside the layout have no name."""
        self.assertIsNone(map_axis(MappingType.STANDARD, 4))
        self.assertIsNone(map_axis(MappingType.STANDARD, -1))
        self.assertIsNone(map_button(MappingType.STANDARD, 17))
        self.assertIsNone(map_button(MappingType.STANDARD, -1))


class TestUnknownMapping(unittest.TestCase):
    """Test that unknown layouts never resolve."""

    def test_nothing_maps(self):
        """The unknown layout names no axis or button."""
        for index in range(20):
            self.assertIsNone(map_axis(MappingType.UNKNOWN, index))
            self.assertIsNone(map_button(MappingType.UNKNOWN, index))

        self.assertIsNone(axis_index(MappingType.UNKNOWN, Axis.LEFT_STICK_X))
        self.assertIsNone(button_index(MappingType.UNKNOWN, Button.SOUTH))

    def test_from_tag(self):
        """Only the 'standard' tag selects the standard layout."""
        self.assertIs(MappingType.from_tag("standard"), MappingType.STANDARD)
        self.assertIs(MappingType.from_tag(""), MappingType.UNKNOWN)
        self.assertIs(MappingType.from_tag("xr-standard"), MappingType.UNKNOWN)


if __name__ == '__main__':
    unittest.main()
