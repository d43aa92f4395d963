"""
pygame host adapters.

PygameSnapshotSource reports pygame joystick slots as RawGamepad records.
Devices SDL knows as game controllers are read through the SDL
GameController API and reported in the standard layout; everything else
is reported raw with the UNKNOWN layout.

PygameNotificationSource turns JOYDEVICEADDED/JOYDEVICEREMOVED events into
hotplug notices. Its ``dispatch`` must be called from the thread that runs
the pygame event loop.
"""

import time
from typing import Callable, Dict, List, Optional, Tuple

import pygame
from pygame._sdl2 import controller as sdl_controller

from ..core.exceptions import SourceError
from ..core.logging import get_logger
from .gamepad import MappingType
from .hotplug import HotplugEventType, HotplugNotice
from .sources import NotificationSource, RawGamepad, SnapshotSource


AXIS_SCALE = 32767.0
TRIGGER_THRESHOLD = 0.1

# SDL controller axes in standard axis order.
STANDARD_AXIS_SOURCES = (
    pygame.CONTROLLER_AXIS_LEFTX,
    pygame.CONTROLLER_AXIS_LEFTY,
    pygame.CONTROLLER_AXIS_RIGHTX,
    pygame.CONTROLLER_AXIS_RIGHTY,
)

# SDL controller inputs in standard button order. Triggers are axes.
STANDARD_BUTTON_SOURCES = (
    ("button", pygame.CONTROLLER_BUTTON_A),
    ("button", pygame.CONTROLLER_BUTTON_B),
    ("button", pygame.CONTROLLER_BUTTON_X),
    ("button", pygame.CONTROLLER_BUTTON_Y),
    ("button", pygame.CONTROLLER_BUTTON_LEFTSHOULDER),
    ("button", pygame.CONTROLLER_BUTTON_RIGHTSHOULDER),
    ("trigger", pygame.CONTROLLER_AXIS_TRIGGERLEFT),
    ("trigger", pygame.CONTROLLER_AXIS_TRIGGERRIGHT),
    ("button", pygame.CONTROLLER_BUTTON_BACK),
    ("button", pygame.CONTROLLER_BUTTON_START),
    ("button", pygame.CONTROLLER_BUTTON_LEFTSTICK),
    ("button", pygame.CONTROLLER_BUTTON_RIGHTSTICK),
    ("button", pygame.CONTROLLER_BUTTON_DPAD_UP),
    ("button", pygame.CONTROLLER_BUTTON_DPAD_DOWN),
    ("button", pygame.CONTROLLER_BUTTON_DPAD_LEFT),
    ("button", pygame.CONTROLLER_BUTTON_DPAD_RIGHT),
    ("button", pygame.CONTROLLER_BUTTON_GUIDE),
)


def _scale_axis(raw_value: int) -> float:
    return max(-1.0, min(1.0, raw_value / AXIS_SCALE))


def _hat_buttons(hat: Tuple[int, int]) -> List[Tuple[bool, float]]:
    """Expand a hat into up, down, left, right buttons."""
    x, y = hat
    directions = (y > 0, y < 0, x < 0, x > 0)
    return [(pressed, 1.0 if pressed else 0.0) for pressed in directions]


class PygameSnapshotSource(SnapshotSource):
    """Snapshot source backed by pygame's joystick and controller modules."""

    def __init__(self, max_gamepads: int = 4):
        """
        Initialize pygame subsystems as needed.

        Args:
            max_gamepads: Maximum number of slots to report
        """
        self.logger = get_logger("pygame_source")
        self._max_gamepads = max_gamepads
        self._pygame_initialized = False
        self._devices: Dict[int, Tuple[object, Optional[object]]] = {}
        self._last_count = -1

        try:
            if not pygame.get_init():
                pygame.init()
                self._pygame_initialized = True
            if not pygame.joystick.get_init():
                pygame.joystick.init()
            if not sdl_controller.get_init():
                sdl_controller.init()
        except pygame.error as e:
            raise SourceError("Failed to initialize pygame input", cause=e) from e

        self.logger.debug("pygame snapshot source initialized", extra={
            "max_gamepads": max_gamepads,
            "pygame_init": self._pygame_initialized
        })

    def get_gamepads(self) -> List[Optional[RawGamepad]]:
        pygame.event.pump()
        count = min(pygame.joystick.get_count(), self._max_gamepads)

        if count != self._last_count:
            # Device indices shift when anything is plugged or unplugged.
            self._devices.clear()
            self._last_count = count

        timestamp = time.monotonic() * 1000.0
        pads: List[Optional[RawGamepad]] = []
        for index in range(count):
            try:
                pads.append(self._read_device(index, timestamp))
            except pygame.error as e:
                self.logger.warning("Failed to read device", extra={
                    "index": index,
                    "error": str(e)
                })
                self._devices.pop(index, None)
                pads.append(None)
        return pads

    def _open_device(self, index: int):
        if index not in self._devices:
            joystick = pygame.joystick.Joystick(index)
            pad = sdl_controller.Controller(index) if sdl_controller.is_controller(index) else None
            self._devices[index] = (joystick, pad)
        return self._devices[index]

    def _read_device(self, index: int, timestamp: float) -> RawGamepad:
        joystick, pad = self._open_device(index)
        name = joystick.get_name()

        if pad is not None:
            axes = tuple(_scale_axis(pad.get_axis(axis)) for axis in STANDARD_AXIS_SOURCES)
            buttons = []
            for kind, code in STANDARD_BUTTON_SOURCES:
                if kind == "trigger":
                    value = max(0.0, _scale_axis(pad.get_axis(code)))
                    buttons.append((value > TRIGGER_THRESHOLD, value))
                else:
                    pressed = bool(pad.get_button(code))
                    buttons.append((pressed, 1.0 if pressed else 0.0))
            return RawGamepad(name, MappingType.STANDARD, timestamp, axes, tuple(buttons))

        axes = tuple(float(joystick.get_axis(i)) for i in range(joystick.get_numaxes()))
        buttons = [
            (bool(joystick.get_button(i)), 1.0 if joystick.get_button(i) else 0.0)
            for i in range(joystick.get_numbuttons())
        ]
        for i in range(joystick.get_numhats()):
            buttons.extend(_hat_buttons(joystick.get_hat(i)))
        return RawGamepad(name, MappingType.UNKNOWN, timestamp, axes, tuple(buttons))

    def close(self) -> None:
        """Release opened devices and shut down pygame if this source started it."""
        self._devices.clear()
        self._last_count = -1
        if self._pygame_initialized and pygame.get_init():
            pygame.quit()
            self._pygame_initialized = False
            self.logger.debug("Pygame shutdown")


class PygameNotificationSource(NotificationSource):
    """Hotplug notices from pygame's JOYDEVICEADDED/JOYDEVICEREMOVED events."""

    def __init__(self):
        self.logger = get_logger("pygame_notifications")
        self._listeners: List[Callable[[HotplugNotice], None]] = []
        # JOYDEVICEREMOVED carries an instance id rather than a device index.
        self._instance_slots: Dict[int, int] = {}

    def add_listener(self, callback: Callable[[HotplugNotice], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[HotplugNotice], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def dispatch(self) -> int:
        """
        Deliver pending pygame hotplug events to listeners.

        Returns:
            Number of notices delivered
        """
        delivered = 0
        for event in pygame.event.get([pygame.JOYDEVICEADDED, pygame.JOYDEVICEREMOVED]):
            notice = self._to_notice(event)
            if notice is not None:
                self._notify(notice)
                delivered += 1
        return delivered

    def _to_notice(self, event) -> Optional[HotplugNotice]:
        if event.type == pygame.JOYDEVICEADDED:
            slot = event.device_index
            try:
                self._instance_slots[pygame.joystick.Joystick(slot).get_instance_id()] = slot
            except pygame.error as e:
                self.logger.debug("Could not resolve instance id", extra={
                    "slot": slot,
                    "error": str(e)
                })
            return HotplugNotice(HotplugEventType.DEVICE_ADDED, slot)

        if event.type == pygame.JOYDEVICEREMOVED:
            slot = self._instance_slots.pop(event.instance_id, event.instance_id)
            return HotplugNotice(HotplugEventType.DEVICE_REMOVED, slot)

        return None

    def _notify(self, notice: HotplugNotice) -> None:
        for callback in list(self._listeners):
            try:
                callback(notice)
            except Exception as e:
                self.logger.error("Error in hotplug listener", extra={
                    "error": str(e),
                    "event_type": notice.event_type.value,
                    "slot": notice.slot
                })
