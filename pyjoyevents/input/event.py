"""
Event vocabulary produced by the Monitor.

Raw events carry the slot-level index of whatever changed. Mapped events
resolve that index through the gamepad's layout into a named axis or button,
for consumers that do not care which physical controller produced the input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .gamepad import GamepadDescription
from .mapping import Axis, Button, map_axis, map_button
from .snapshot import AxisChange, ButtonChange, ButtonValueChange


@dataclass(frozen=True)
class Connected:
    """A controller appeared in a slot."""

    def __str__(self) -> str:
        return "connected"


@dataclass(frozen=True)
class Disconnected:
    """A controller left its slot."""

    def __str__(self) -> str:
        return "disconnected"


EventData = Union[Connected, Disconnected, AxisChange, ButtonChange, ButtonValueChange]


def format_event_data(data: EventData, precision: int = 3) -> str:
    """Human-readable form of an event payload."""
    if isinstance(data, AxisChange):
        return f"Axis {data.index}: {data.value:.{precision}f}"
    if isinstance(data, ButtonChange):
        return f"Button {data.index}: {'pressed' if data.pressed else 'released'}"
    if isinstance(data, ButtonValueChange):
        return f"Button {data.index} value: {data.value:.{precision}f}"
    return str(data)


class MappedEventType(Enum):
    """Types of mapped events."""
    AXIS = "axis"
    BUTTON_PRESS = "button_press"
    BUTTON_RELEASE = "button_release"
    BUTTON_VALUE = "button_value"


@dataclass(frozen=True)
class MappedEvent:
    """An input event expressed in standard-layout names."""
    event_type: MappedEventType
    axis: Optional[Axis] = None
    button: Optional[Button] = None
    value: Optional[float] = None

    def __str__(self) -> str:
        if self.event_type is MappedEventType.AXIS:
            return f"{self.axis.name}: {self.value:.3f}"
        if self.event_type is MappedEventType.BUTTON_VALUE:
            return f"{self.button.name} value: {self.value:.3f}"
        action = "press" if self.event_type is MappedEventType.BUTTON_PRESS else "release"
        return f"{self.button.name} {action}"


@dataclass(frozen=True)
class Event:
    """A state change of one gamepad connection."""
    gamepad: GamepadDescription
    data: EventData

    def to_mapped(self) -> Optional[MappedEvent]:
        """
        Resolve this event through the gamepad's layout.

        Connected and Disconnected have no mapped form. Neither do input
        events from an unknown layout or with an index the layout does not
        name; all of these return None.
        """
        if not self.gamepad.is_mapped:
            return None

        data = self.data
        mapping = self.gamepad.mapping

        if isinstance(data, AxisChange):
            axis = map_axis(mapping, data.index)
            if axis is not None:
                return MappedEvent(MappedEventType.AXIS, axis=axis, value=data.value)
        elif isinstance(data, ButtonChange):
            button = map_button(mapping, data.index)
            if button is not None:
                event_type = (MappedEventType.BUTTON_PRESS if data.pressed
                              else MappedEventType.BUTTON_RELEASE)
                return MappedEvent(event_type, button=button)
        elif isinstance(data, ButtonValueChange):
            button = map_button(mapping, data.index)
            if button is not None:
                return MappedEvent(MappedEventType.BUTTON_VALUE, button=button, value=data.value)
        return None

    def __str__(self) -> str:
        return f"Pad {self.gamepad.slot} {format_event_data(self.data)}"
