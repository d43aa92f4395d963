"""
Index-to-name tables for the standard gamepad layout.

An unknown layout, or an index the layout does not name, maps to None.
That is an expected outcome, not an error.
"""

from enum import Enum
from typing import Optional

from .gamepad import MappingType


class Button(Enum):
    """A named button on the standard gamepad."""
    SOUTH = "south"              # A (Xbox), cross (PlayStation), B (Nintendo)
    EAST = "east"                # B (Xbox), circle (PlayStation), A (Nintendo)
    WEST = "west"                # X (Xbox), square (PlayStation), Y (Nintendo)
    NORTH = "north"              # Y (Xbox), triangle (PlayStation), X (Nintendo)
    LT1 = "lt1"                  # LB, L1, L
    RT1 = "rt1"                  # RB, R1, R
    LT2 = "lt2"                  # LT, L2, ZL
    RT2 = "rt2"                  # RT, R2, ZR
    SELECT = "select"            # Back / View / Share
    START = "start"              # Forward / Menu / Options
    LEFT_STICK = "left_stick"    # L3
    RIGHT_STICK = "right_stick"  # R3
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"                # Xbox / PS button


class Axis(Enum):
    """A named axis on the standard gamepad. Y axes run up (-1.0) to down (1.0)."""
    LEFT_STICK_X = "left_stick_x"
    LEFT_STICK_Y = "left_stick_y"
    RIGHT_STICK_X = "right_stick_x"
    RIGHT_STICK_Y = "right_stick_y"


# Standard layout: position in the tuple is the raw index.
STANDARD_BUTTONS = (
    Button.SOUTH, Button.EAST, Button.WEST, Button.NORTH,
    Button.LT1, Button.RT1, Button.LT2, Button.RT2,
    Button.SELECT, Button.START,
    Button.LEFT_STICK, Button.RIGHT_STICK,
    Button.UP, Button.DOWN, Button.LEFT, Button.RIGHT,
    Button.HOME,
)

STANDARD_AXES = (
    Axis.LEFT_STICK_X, Axis.LEFT_STICK_Y,
    Axis.RIGHT_STICK_X, Axis.RIGHT_STICK_Y,
)

_STANDARD_BUTTON_INDEX = {button: i for i, button in enumerate(STANDARD_BUTTONS)}
_STANDARD_AXIS_INDEX = {axis: i for i, axis in enumerate(STANDARD_AXES)}


def map_button(mapping: MappingType, index: int) -> Optional[Button]:
    """Get the name (if known) of the button at this index."""
    if mapping is MappingType.STANDARD and 0 <= index < len(STANDARD_BUTTONS):
        return STANDARD_BUTTONS[index]
    return None


def button_index(mapping: MappingType, button: Button) -> Optional[int]:
    """Get the index (if known) of this button."""
    if mapping is MappingType.STANDARD:
        return _STANDARD_BUTTON_INDEX.get(button)
    return None


def map_axis(mapping: MappingType, index: int) -> Optional[Axis]:
    """Get the name (if known) of the axis at this index."""
    if mapping is MappingType.STANDARD and 0 <= index < len(STANDARD_AXES):
        return STANDARD_AXES[index]
    return None


def axis_index(mapping: MappingType, axis: Axis) -> Optional[int]:
    """Get the index (if known) of this axis."""
    if mapping is MappingType.STANDARD:
        return _STANDARD_AXIS_INDEX.get(axis)
    return None
