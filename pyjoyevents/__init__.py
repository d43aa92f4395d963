"""
PyJoyEvents - edge-triggered gamepad events from poll-only controller APIs

Quick start::

    from pyjoyevents import Monitor, MappedEventType, Button

    monitor = Monitor()

    def update():
        while (event := monitor.poll_mapped()) is not None:
            if event.event_type is MappedEventType.BUTTON_PRESS and event.button is Button.SOUTH:
                player.jump()
"""

__version__ = "0.1.0"
__author__ = "AI Research Team"

from .input import (
    Monitor,
    Event,
    MappedEvent,
    MappedEventType,
    GamepadDescription,
    GamepadState,
    MappingType,
    Axis,
    Button,
)
from .config import Config

__all__ = [
    "Monitor",
    "Event",
    "MappedEvent",
    "MappedEventType",
    "GamepadDescription",
    "GamepadState",
    "MappingType",
    "Axis",
    "Button",
    "Config",
]
