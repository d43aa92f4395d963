"""
Gamepad snapshots and the diff engine.

A GamepadState is one timestamped capture of every axis and button of a
connected controller. ``diff`` compares two captures of the same shape and
returns the changes between them in a fixed order.
"""

import struct
from dataclasses import dataclass
from typing import List, Tuple, Union, TYPE_CHECKING

from ..core.exceptions import SnapshotShapeError, StateIndexError
from .gamepad import GamepadDescription

if TYPE_CHECKING:
    from .sources import RawGamepad


# Timestamp of a baseline snapshot, earlier than any real reading.
BASELINE_TIMESTAMP = -1.0


def same_bits(a: float, b: float) -> bool:
    """Compare two floats by IEEE-754 bit pattern: NaN may equal NaN, 0.0 != -0.0."""
    return struct.pack('<d', a) == struct.pack('<d', b)


@dataclass(frozen=True)
class ButtonState:
    """Pressed flag and analog level (0.0 - 1.0) of one button."""
    pressed: bool = False
    value: float = 0.0


@dataclass(frozen=True)
class AxisChange:
    """An axis moved to ``value``."""
    index: int
    value: float


@dataclass(frozen=True)
class ButtonChange:
    """A button was pressed (``pressed=True``) or released."""
    index: int
    pressed: bool


@dataclass(frozen=True)
class ButtonValueChange:
    """A button's analog level changed to ``value``."""
    index: int
    value: float


Change = Union[AxisChange, ButtonChange, ButtonValueChange]


@dataclass(frozen=True)
class GamepadState:
    """Axis and button levels of one gamepad at one timestamp."""
    timestamp: float
    axes: Tuple[float, ...]
    buttons: Tuple[ButtonState, ...]

    @classmethod
    def baseline(cls, description: GamepadDescription) -> "GamepadState":
        """All axes centered and all buttons released, sized for ``description``."""
        return cls(
            timestamp=BASELINE_TIMESTAMP,
            axes=(0.0,) * description.axis_count,
            buttons=(ButtonState(),) * description.button_count,
        )

    @classmethod
    def from_raw(cls, raw: "RawGamepad") -> "GamepadState":
        """Capture the current levels of a raw device."""
        return cls(
            timestamp=float(raw.timestamp),
            axes=tuple(float(value) for value in raw.axes),
            buttons=tuple(ButtonState(bool(pressed), float(value))
                          for pressed, value in raw.buttons),
        )

    @property
    def axis_count(self) -> int:
        return len(self.axes)

    @property
    def button_count(self) -> int:
        return len(self.buttons)

    @property
    def shape(self) -> Tuple[int, int]:
        """(axis count, button count)"""
        return (len(self.axes), len(self.buttons))

    def axis(self, index: int) -> float:
        """Level of axis ``index``; raises StateIndexError when out of range."""
        if not 0 <= index < len(self.axes):
            raise StateIndexError("axis", index, len(self.axes))
        return self.axes[index]

    def button(self, index: int) -> ButtonState:
        """State of button ``index``; raises StateIndexError when out of range."""
        if not 0 <= index < len(self.buttons):
            raise StateIndexError("button", index, len(self.buttons))
        return self.buttons[index]

    def diff(self, previous: "GamepadState") -> List[Change]:
        """Changes from ``previous`` to this state. See :func:`diff`."""
        return diff(self, previous)


def diff(current: GamepadState, previous: GamepadState) -> List[Change]:
    """
    Compute the changes that turn ``previous`` into ``current``.

    Axis changes come first, then button presses/releases, then button
    value changes, each group in ascending index order. Values are compared
    by bit pattern.

    Raises:
        SnapshotShapeError: if the two states have different shapes
    """
    if current.shape != previous.shape:
        raise SnapshotShapeError(current.shape, previous.shape)

    changes: List[Change] = [
        AxisChange(i, new)
        for i, (old, new) in enumerate(zip(previous.axes, current.axes))
        if not same_bits(old, new)
    ]
    changes.extend(
        ButtonChange(i, new.pressed)
        for i, (old, new) in enumerate(zip(previous.buttons, current.buttons))
        if old.pressed != new.pressed
    )
    changes.extend(
        ButtonValueChange(i, new.value)
        for i, (old, new) in enumerate(zip(previous.buttons, current.buttons))
        if not same_bits(old.value, new.value)
    )
    return changes
