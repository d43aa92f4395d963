"""
Unit tests for gamepad snapshots and the diff engine.
"""

import math
import unittest

from pyjoyevents.core.exceptions import SnapshotShapeError, StateIndexError
from pyjoyevents.input import (
    AxisChange, ButtonChange, ButtonValueChange, ButtonState,
    GamepadDescription, GamepadState, MappingType, RawGamepad,
    BASELINE_TIMESTAMP, diff,
)


def make_state(axes, buttons, timestamp=0.0):
    """Build a state from plain axis floats and (pressed, value) pairs."""
    return GamepadState(timestamp, tuple(axes),
                        tuple(ButtonState(pressed, value) for pressed, value in buttons))


def with_axes(state, **changes):
    axes = list(state.axes)
    for key, value in changes.items():
        axes[int(key[1:])] = value
    return GamepadState(state.timestamp, tuple(axes), state.buttons)


def with_button(state, index, pressed=None, value=None):
    buttons = list(state.buttons)
    old = buttons[index]
    buttons[index] = ButtonState(old.pressed if pressed is None else pressed,
                                 old.value if value is None else value)
    return GamepadState(state.timestamp, state.axes, tuple(buttons))


class TestDiff(unittest.TestCase):
    """Test change detection between two snapshots."""

    def setUp(self):
        self.empty = make_state([0.0, 0.0], [(False, 0.0), (False, 0.0)])

    def test_empty_against_itself(self):
        """Identical states produce no changes."""
        self.assertEqual(diff(self.empty, self.empty), [])

    def test_button_press_and_release(self):
        """Pressed flag flips in both directions."""
        pressed0 = with_button(self.empty, 0, pressed=True)

        self.assertEqual(diff(pressed0, self.empty), [ButtonChange(0, True)])
        self.assertEqual(diff(self.empty, pressed0), [ButtonChange(0, False)])

    def test_two_buttons(self):
        """Button changes are ordered by index."""
        pressed0 = with_button(self.empty, 0, pressed=True)
        pressed1 = with_button(self.empty, 1, pressed=True)

        self.assertEqual(diff(pressed1, pressed0),
                         [ButtonChange(0, False), ButtonChange(1, True)])
        self.assertEqual(diff(pressed0, pressed1),
                         [ButtonChange(0, True), ButtonChange(1, False)])

    def test_axes_moved(self):
        """Moved axes report their new values."""
        moved = with_axes(self.empty, a0=0.125, a1=-0.5)

        self.assertEqual(diff(moved, self.empty), [AxisChange(0, 0.125), AxisChange(1, -0.5)])

    def test_axes_and_buttons(self):
        """Axis changes come before button changes."""
        moved = with_axes(self.empty, a0=0.125, a1=-0.5)
        pressed1 = with_button(self.empty, 1, pressed=True)

        self.assertEqual(diff(moved, pressed1),
                         [AxisChange(0, 0.125), AxisChange(1, -0.5), ButtonChange(1, False)])
        self.assertEqual(diff(pressed1, moved),
                         [AxisChange(0, 0.0), AxisChange(1, 0.0), ButtonChange(1, True)])

    def test_button_value_is_independent(self):
        """Analog level changes are reported separately from the pressed flag."""
        half = with_button(self.empty, 1, value=0.5)
        self.assertEqual(diff(half, self.empty), [ButtonValueChange(1, 0.5)])

        full = with_button(half, 1, pressed=True, value=1.0)
        self.assertEqual(diff(full, half), [ButtonChange(1, True), ButtonValueChange(1, 1.0)])

    def test_ordering(self):
        """Axes first, then presses, then values, each ascending."""
        current = make_state([0.0, 0.3, 0.7], [(True, 1.0), (False, 0.2), (True, 0.9)])
        previous = make_state([0.0, 0.0, 0.0], [(False, 0.0), (False, 0.0), (False, 0.0)])

        self.assertEqual(diff(current, previous), [
            AxisChange(1, 0.3),
            AxisChange(2, 0.7),
            ButtonChange(0, True),
            ButtonChange(2, True),
            ButtonValueChange(0, 1.0),
            ButtonValueChange(1, 0.2),
            ButtonValueChange(2, 0.9),
        ])

    def test_symmetry(self):
        """Reversing the arguments reports the same slots with the other side's values."""
        a = make_state([0.25, -1.0], [(True, 1.0), (False, 0.0)])
        b = make_state([0.25, 0.5], [(False, 0.0), (False, 0.3)])

        forward = diff(a, b)
        backward = diff(b, a)

        self.assertEqual([type(c) for c in forward], [type(c) for c in backward])
        self.assertEqual([c.index for c in forward], [c.index for c in backward])
        self.assertEqual(forward, [AxisChange(1, -1.0), ButtonChange(0, True),
                                   ButtonValueChange(0, 1.0), ButtonValueChange(1, 0.0)])
        self.assertEqual(backward, [AxisChange(1, 0.5), ButtonChange(0, False),
                                    ButtonValueChange(0, 0.0), ButtonValueChange(1, 0.3)])
        self.assertEqual(diff(a, a), [])
        self.assertEqual(diff(b, b), [])

    def test_signed_zero_is_a_change(self):
        """-0.0 differs from 0.0."""
        negative = with_axes(self.empty, a0=-0.0)

        changes = diff(negative, self.empty)
        self.assertEqual(len(changes), 1)
        self.assertEqual(changes[0].index, 0)
        self.assertEqual(math.copysign(1.0, changes[0].value), -1.0)

    def test_nan_handling(self):
        """NaN compares equal to itself and different from any number."""
        nan_state = with_axes(self.empty, a1=float("nan"))

        self.assertEqual(diff(nan_state, nan_state), [])

        changes = diff(nan_state, self.empty)
        self.assertEqual(len(changes), 1)
        self.assertTrue(math.isnan(changes[0].value))

    def test_shape_mismatch(self):
        """States of different shape cannot be compared."""
        wider = make_state([0.0, 0.0, 0.0], [(False, 0.0), (False, 0.0)])

        with self.assertRaises(SnapshotShapeError):
            diff(wider, self.empty)
        with self.assertRaises(ValueError):
            self.empty.diff(wider)

    def test_method_form(self):
        """GamepadState.diff matches the module function."""
        moved = with_axes(self.empty, a1=0.75)
        self.assertEqual(moved.diff(self.empty), diff(moved, self.empty))


class TestGamepadState(unittest.TestCase):
    """Test snapshot construction and accessors."""

    def setUp(self):
        self.description = GamepadDescription(
            slot=0, name="Test Pad", mapping=MappingType.STANDARD,
            axis_count=4, button_count=17)

    def test_baseline(self):
        """The baseline is zeroed and sized from the description."""
        baseline = GamepadState.baseline(self.description)

        self.assertEqual(baseline.timestamp, BASELINE_TIMESTAMP)
        self.assertEqual(baseline.axes, (0.0,) * 4)
        self.assertEqual(baseline.buttons, (ButtonState(False, 0.0),) * 17)
        self.assertEqual(baseline.shape, (4, 17))
        self.assertEqual(diff(baseline, baseline), [])

    def test_from_raw(self):
        """Raw levels are normalized to bools and floats."""
        raw = RawGamepad("Pad", MappingType.UNKNOWN, 12.5,
                         axes=(0.5, -1), buttons=((1, 1), (False, 0.25)))
        state = GamepadState.from_raw(raw)

        self.assertEqual(state.timestamp, 12.5)
        self.assertEqual(state.axes, (0.5, -1.0))
        self.assertIsInstance(state.axes[1], float)
        self.assertEqual(state.button(0), ButtonState(True, 1.0))
        self.assertEqual(state.button(1), ButtonState(False, 0.25))

    def test_index_out_of_range(self):
        """Out-of-range indices raise instead of clamping."""
        state = GamepadState.baseline(self.description)

        self.assertEqual(state.axis(3), 0.0)
        with self.assertRaises(StateIndexError):
            state.axis(4)
        with self.assertRaises(StateIndexError):
            state.axis(-1)
        with self.assertRaises(IndexError):
            state.button(17)


if __name__ == '__main__':
    unittest.main()
