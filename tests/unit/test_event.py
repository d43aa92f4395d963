"""
Unit tests for raw and mapped events.
"""

import unittest

from pyjoyevents.input import (
    Axis, Button, Connected, Disconnected, Event, GamepadDescription,
    MappedEvent, MappedEventType, MappingType,
    AxisChange, ButtonChange, ButtonValueChange,
)


def describe(mapping=MappingType.STANDARD, slot=0):
    return GamepadDescription(slot=slot, name="Pad", mapping=mapping,
                              axis_count=4, button_count=17)


class TestEventMapping(unittest.TestCase):
    """Test resolving raw events into standard-layout events."""

    def setUp(self):
        self.standard = describe()
        self.unknown = describe(MappingType.UNKNOWN)

    def test_axis(self):
        """Standard axis indices resolve to named axes."""
        mapped = Event(self.standard, AxisChange(3, -0.5)).to_mapped()
        self.assertEqual(mapped, MappedEvent(MappedEventType.AXIS, axis=Axis.RIGHT_STICK_Y, value=-0.5))

    def test_button_press_and_release(self):
        """Pressed changes become press and release events."""
        press = Event(self.standard, ButtonChange(0, True)).to_mapped()
        release = Event(self.standard, ButtonChange(16, False)).to_mapped()

        self.assertEqual(press, MappedEvent(MappedEventType.BUTTON_PRESS, button=Button.SOUTH))
        self.assertEqual(release, MappedEvent(MappedEventType.BUTTON_RELEASE, button=Button.HOME))

    def test_button_value(self):
        """Value changes keep their analog level."""
        mapped = Event(self.standard, ButtonValueChange(6, 0.75)).to_mapped()
        self.assertEqual(mapped, MappedEvent(MappedEventType.BUTTON_VALUE, button=Button.LT2, value=0.75))

    def test_connection_events_do_not_map(self):
        """Connected and Disconnected have no mapped form."""
        self.assertIsNone(Event(self.standard, Connected()).to_mapped())
        self.assertIsNone(Event(self.standard, Disconnected()).to_mapped())

    def test_unknown_layout_does_not_map(self):
        """Input from an unknown layout never maps."""
        for data in (AxisChange(0, 1.0), ButtonChange(0, True), ButtonValueChange(0, 1.0)):
            self.assertIsNone(Event(self.unknown, data).to_mapped())

    def test_unnamed_index_does_not_map(self):
        """Indices beyond the standard layout do not map."""
        self.assertIsNone(Event(self.standard, AxisChange(4, 0.1)).to_mapped())
        self.assertIsNone(Event(self.standard, ButtonChange(17, True)).to_mapped())


class TestEventIdentity(unittest.TestCase):
    """Events compare by the identity of their gamepad description."""

    def test_same_fields_different_connection(self):
        """Equal fields do not make two connections equal."""
        first = describe()
        second = describe()

        self.assertNotEqual(first, second)
        self.assertEqual(Event(first, Connected()), Event(first, Connected()))
        self.assertNotEqual(Event(first, Connected()), Event(second, Connected()))


class TestEventFormatting(unittest.TestCase):
    """Test human-readable event strings."""

    def test_raw_events(self):
        """Raw events print slot and payload."""
        pad = describe(slot=2)

        self.assertEqual(str(Event(pad, Connected())), "Pad 2 connected")
        self.assertEqual(str(Event(pad, Disconnected())), "Pad 2 disconnected")
        self.assertEqual(str(Event(pad, AxisChange(1, 0.5))), "Pad 2 Axis 1: 0.500")
        self.assertEqual(str(Event(pad, ButtonChange(3, True))), "Pad 2 Button 3: pressed")
        self.assertEqual(str(Event(pad, ButtonChange(3, False))), "Pad 2 Button 3: released")
        self.assertEqual(str(Event(pad, ButtonValueChange(7, 0.4))), "Pad 2 Button 7 value: 0.400")

    def test_mapped_events(self):
        """Mapped events print the standard name."""
        self.assertEqual(str(MappedEvent(MappedEventType.AXIS, axis=Axis.LEFT_STICK_X, value=0.25)),
                         "LEFT_STICK_X: 0.250")
        self.assertEqual(str(MappedEvent(MappedEventType.BUTTON_PRESS, button=Button.START)),
                         "START press")
        self.assertEqual(str(MappedEvent(MappedEventType.BUTTON_RELEASE, button=Button.START)),
                         "START release")


if __name__ == '__main__':
    unittest.main()
