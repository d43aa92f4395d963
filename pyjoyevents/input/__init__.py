"""
Gamepad state monitoring and event generation
"""

from .gamepad import GamepadDescription, MappingType
from .mapping import (
    Axis,
    Button,
    map_axis,
    map_button,
    axis_index,
    button_index,
)
from .snapshot import (
    GamepadState,
    ButtonState,
    AxisChange,
    ButtonChange,
    ButtonValueChange,
    Change,
    BASELINE_TIMESTAMP,
    diff,
)
from .event import (
    Event,
    EventData,
    Connected,
    Disconnected,
    MappedEvent,
    MappedEventType,
)
from .sources import RawGamepad, SnapshotSource, NotificationSource
from .hotplug import HotplugEventType, HotplugNotice, NotificationBuffer
from .monitor import Monitor, get_monitor, reset_monitor

__all__ = [
    # Monitor
    "Monitor",
    "get_monitor",
    "reset_monitor",

    # Identity and state
    "GamepadDescription",
    "MappingType",
    "GamepadState",
    "ButtonState",
    "BASELINE_TIMESTAMP",

    # Changes and events
    "AxisChange",
    "ButtonChange",
    "ButtonValueChange",
    "Change",
    "diff",
    "Event",
    "EventData",
    "Connected",
    "Disconnected",
    "MappedEvent",
    "MappedEventType",

    # Standard layout
    "Axis",
    "Button",
    "map_axis",
    "map_button",
    "axis_index",
    "button_index",

    # Sources
    "RawGamepad",
    "SnapshotSource",
    "NotificationSource",
    "HotplugEventType",
    "HotplugNotice",
    "NotificationBuffer",
]
