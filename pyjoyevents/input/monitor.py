"""
Gamepad monitor for PyJoyEvents.

Turns a poll-only snapshot source into a stream of edge-triggered events.
Each fetch reads every host slot, diffs it against the last capture and
queues the resulting events; ``poll`` hands them out one at a time.
"""

from collections import deque
from typing import Deque, Dict, List, Optional, Set, Tuple

from ..config import get_settings, Settings
from ..core.logging import get_logger
from .event import Connected, Disconnected, Event, MappedEvent
from .gamepad import GamepadDescription
from .hotplug import HotplugEventType, NotificationBuffer
from .snapshot import GamepadState
from .sources import NotificationSource, RawGamepad, SnapshotSource


Slot = Optional[Tuple[GamepadDescription, GamepadState]]


class Monitor:
    """
    Event-producing view over a set of controller slots.

    The monitor is driven entirely by the caller: nothing happens between
    calls to ``poll``/``poll_mapped``, and no call blocks.

    Features:
    - Connected always precedes input events of a connection
    - Disconnected follows every input event observed for it
    - Slot reuse yields a new GamepadDescription per connection
    - A different device showing up in a tracked slot is reconnected
    - Optional hotplug notices to catch unplug/replug between polls
    """

    def __init__(self,
                 source: Optional[SnapshotSource] = None,
                 notifications: Optional[NotificationSource] = None,
                 settings: Optional[Settings] = None):
        """
        Initialize the monitor.

        Args:
            source: Snapshot source; defaults to the pygame source
            notifications: Optional push source of hotplug notices
            settings: Settings instance, uses global if not provided
        """
        self.logger = get_logger("monitor")
        self.settings = settings or get_settings()

        if source is None:
            # pygame is only imported when the default source is used
            from .pygame_source import PygameSnapshotSource
            source = PygameSnapshotSource(max_gamepads=self.settings.max_gamepads)

        self._source = source
        self._slots: List[Slot] = []
        self._queue: Deque[Event] = deque()
        self._notices: Optional[NotificationBuffer] = None
        # Removals seen by polling whose host notice has not been drained yet.
        self._unnoticed_removals: Dict[int, int] = {}
        if notifications is not None:
            self._notices = NotificationBuffer(
                notifications, capacity=self.settings.notification_queue_size)

        self.logger.debug("Monitor initialized", extra={
            "source": type(source).__name__,
            "notifications": type(notifications).__name__ if notifications else None
        })

    # Event stream

    def poll(self) -> Optional[Event]:
        """
        Get the next event.

        Fetches from the source only when the queue is empty.

        Returns:
            The next Event, or None if nothing changed
        """
        if not self._queue:
            self._fetch_update()

        if self._queue:
            return self._queue.popleft()
        return None

    def poll_mapped(self) -> Optional[MappedEvent]:
        """
        Get the next event that resolves to a standard-layout name.

        Events without a mapped form (Connected, Disconnected, input from
        unknown layouts) are discarded. The source is fetched at most once
        per call.

        Returns:
            The next MappedEvent, or None once nothing mappable is left
        """
        fetched = False
        while True:
            if not self._queue:
                if fetched:
                    return None
                self._fetch_update()
                fetched = True
                if not self._queue:
                    return None

            mapped = self._queue.popleft().to_mapped()
            if mapped is not None:
                return mapped

    # Queries

    def description(self, slot: int) -> Optional[GamepadDescription]:
        """Description of the gamepad in ``slot`` as of the last fetch."""
        entry = self._entry(slot)
        return entry[0] if entry else None

    def state(self, slot: int) -> Optional[GamepadState]:
        """Last captured state of the gamepad in ``slot``."""
        entry = self._entry(slot)
        return entry[1] if entry else None

    def descriptions(self) -> List[GamepadDescription]:
        """Descriptions of all connected gamepads in slot order."""
        return [entry[0] for entry in self._slots if entry is not None]

    @property
    def slot_count(self) -> int:
        """Number of host slots seen at the last fetch."""
        return len(self._slots)

    @property
    def pending_events(self) -> int:
        """Number of queued events not yet returned by poll."""
        return len(self._queue)

    def _entry(self, slot: int) -> Slot:
        if 0 <= slot < len(self._slots):
            return self._slots[slot]
        return None

    # Fetch and diff

    def _fetch_update(self) -> None:
        """Read every slot from the source and queue the resulting events."""
        removed = self._drain_notices()
        pads = self._source.get_gamepads()
        queued_before = len(self._queue)

        if len(pads) < len(self._slots):
            for slot in range(len(pads), len(self._slots)):
                self._observe_removal(slot, removed)
            del self._slots[len(pads):]
        elif len(pads) > len(self._slots):
            self._slots.extend([None] * (len(pads) - len(self._slots)))

        for slot, raw in enumerate(pads):
            if raw is None:
                self._observe_removal(slot, removed)
                continue
            entry = self._slots[slot]
            if entry is not None and slot in removed:
                self.logger.debug("Slot replugged between polls", extra={"slot": slot})
                self._disconnect(slot)
            elif entry is not None and not entry[0].describes(raw):
                self.logger.debug("Different gamepad in slot", extra={
                    "slot": slot,
                    "name": raw.name
                })
                self._observe_removal(slot, removed)
            if self._slots[slot] is None:
                self._connect(slot, raw)
            self._refresh(slot, raw)

        queued = len(self._queue) - queued_before
        if queued:
            self.logger.debug("Fetch queued events", extra={
                "slots": len(self._slots),
                "events": queued
            })

    def _drain_notices(self) -> Set[int]:
        """
        Slots that the host reported as removed since the last fetch.

        A removal notice that arrives after polling already disconnected
        the slot belongs to that old connection and is dropped.
        """
        removed: Set[int] = set()
        if self._notices is None:
            return removed

        for notice in self._notices.drain():
            self.logger.debug("Hotplug notice", extra={
                "event_type": notice.event_type.value,
                "slot": notice.slot
            })
            if notice.event_type is not HotplugEventType.DEVICE_REMOVED:
                continue

            pending = self._unnoticed_removals.get(notice.slot, 0)
            if pending:
                if pending == 1:
                    del self._unnoticed_removals[notice.slot]
                else:
                    self._unnoticed_removals[notice.slot] = pending - 1
                continue
            removed.add(notice.slot)
        return removed

    def _observe_removal(self, slot: int, removed: Set[int]) -> None:
        """Disconnect ``slot`` because the source no longer reports its device."""
        if self._slots[slot] is None:
            return
        if self._notices is not None and slot not in removed:
            self._unnoticed_removals[slot] = self._unnoticed_removals.get(slot, 0) + 1
        self._disconnect(slot)

    def _connect(self, slot: int, raw: RawGamepad) -> None:
        description = GamepadDescription.from_raw(slot, raw)
        self._slots[slot] = (description, GamepadState.baseline(description))
        self._queue.append(Event(description, Connected()))

        self.logger.info("Gamepad connected", extra={
            "slot": slot,
            "name": description.name,
            "mapping": description.mapping.name,
            "axes": description.axis_count,
            "buttons": description.button_count
        })

    def _disconnect(self, slot: int) -> None:
        entry = self._slots[slot]
        if entry is None:
            return

        description = entry[0]
        self._slots[slot] = None
        self._queue.append(Event(description, Disconnected()))

        self.logger.info("Gamepad disconnected", extra={
            "slot": slot,
            "name": description.name
        })

    def _refresh(self, slot: int, raw: RawGamepad) -> None:
        description, previous = self._slots[slot]

        # The host may be queried more often than the device reports.
        if raw.timestamp == previous.timestamp:
            return

        current = GamepadState.from_raw(raw)
        self._queue.extend(Event(description, change) for change in current.diff(previous))
        self._slots[slot] = (description, current)

    # Lifecycle

    def close(self) -> None:
        """Unregister from the notification source and release the snapshot source."""
        if self._notices is not None:
            self._notices.close()
            self._notices = None
        self._source.close()
        self.logger.debug("Monitor closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


# Global monitor instance
_monitor: Optional[Monitor] = None


def get_monitor() -> Monitor:
    """Get the global monitor instance, backed by the pygame source."""
    global _monitor
    if _monitor is None:
        _monitor = Monitor()
    return _monitor


def reset_monitor() -> None:
    """Close and discard the global monitor instance."""
    global _monitor
    if _monitor is not None:
        _monitor.close()
    _monitor = None
