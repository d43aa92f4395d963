"""
Scriptable sources for exercising a Monitor without hardware.

SimulatedSource stands in for the host's snapshot source and
SimulatedNotifications for its hotplug events. Both are driven directly by
the caller, which makes them suitable for tests and for the CLI demo.
"""

from typing import Callable, List, Optional, Sequence

from ..core.logging import get_logger
from .gamepad import MappingType
from .hotplug import HotplugEventType, HotplugNotice
from .sources import NotificationSource, RawGamepad, SnapshotSource


class SimulatedGamepad:
    """
    A controller whose levels are set by hand.

    Every mutation advances the timestamp, like a device that reports a
    new reading whenever its state changes.
    """

    def __init__(self,
                 name: str = "Simulated Gamepad",
                 mapping: MappingType = MappingType.STANDARD,
                 axis_count: int = 4,
                 button_count: int = 17):
        self.name = name
        self.mapping = mapping
        self.timestamp = 0.0
        self.axes: List[float] = [0.0] * axis_count
        self.buttons: List[List] = [[False, 0.0] for _ in range(button_count)]

    def tick(self) -> None:
        """Advance the timestamp without changing any level."""
        self.timestamp += 1.0

    def set_axis(self, index: int, value: float) -> None:
        self.axes[index] = value
        self.tick()

    def set_axes(self, values: Sequence[float]) -> None:
        """Set every axis at once, as one reading."""
        if len(values) != len(self.axes):
            raise ValueError(f"expected {len(self.axes)} axis values, got {len(values)}")
        self.axes = list(values)
        self.tick()

    def press(self, index: int, value: float = 1.0) -> None:
        self.buttons[index] = [True, value]
        self.tick()

    def release(self, index: int) -> None:
        self.buttons[index] = [False, 0.0]
        self.tick()

    def set_button_value(self, index: int, value: float, pressed: Optional[bool] = None) -> None:
        """Change a button's analog level, optionally its pressed flag too."""
        current_pressed = self.buttons[index][0]
        self.buttons[index] = [current_pressed if pressed is None else pressed, value]
        self.tick()

    def to_raw(self) -> RawGamepad:
        return RawGamepad(
            name=self.name,
            mapping=self.mapping,
            timestamp=self.timestamp,
            axes=tuple(self.axes),
            buttons=tuple((pressed, value) for pressed, value in self.buttons),
        )


class SimulatedSource(SnapshotSource):
    """Snapshot source over a list of simulated slots."""

    def __init__(self, slot_count: int = 0):
        self.slots: List[Optional[SimulatedGamepad]] = [None] * slot_count
        self.fetch_count = 0

    def connect(self, gamepad: SimulatedGamepad, slot: Optional[int] = None) -> int:
        """
        Plug ``gamepad`` into ``slot``, or into the first free slot.

        Returns:
            The slot used
        """
        if slot is None:
            slot = next((i for i, pad in enumerate(self.slots) if pad is None), len(self.slots))
        if slot >= len(self.slots):
            self.slots.extend([None] * (slot + 1 - len(self.slots)))
        self.slots[slot] = gamepad
        return slot

    def disconnect(self, slot: int) -> Optional[SimulatedGamepad]:
        """Empty ``slot``, keeping the slot count."""
        gamepad = self.slots[slot]
        self.slots[slot] = None
        return gamepad

    def resize(self, slot_count: int) -> None:
        """Grow with empty slots or drop slots from the tail."""
        if slot_count < len(self.slots):
            del self.slots[slot_count:]
        else:
            self.slots.extend([None] * (slot_count - len(self.slots)))

    def get_gamepads(self) -> List[Optional[RawGamepad]]:
        self.fetch_count += 1
        return [pad.to_raw() if pad is not None else None for pad in self.slots]


class SimulatedNotifications(NotificationSource):
    """Notification source that delivers notices synchronously on request."""

    def __init__(self):
        self.logger = get_logger("simulated_notifications")
        self._listeners: List[Callable[[HotplugNotice], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, callback: Callable[[HotplugNotice], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[HotplugNotice], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def notify_connected(self, slot: int) -> None:
        self._notify(HotplugNotice(HotplugEventType.DEVICE_ADDED, slot))

    def notify_disconnected(self, slot: int) -> None:
        self._notify(HotplugNotice(HotplugEventType.DEVICE_REMOVED, slot))

    def _notify(self, notice: HotplugNotice) -> None:
        for callback in list(self._listeners):
            try:
                callback(notice)
            except Exception as e:
                self.logger.error("Error in hotplug listener", extra={
                    "error": str(e),
                    "slot": notice.slot
                })
