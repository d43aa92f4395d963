"""
Hot-plug notice buffering.

Host connect/disconnect notifications arrive through a callback on the
host's dispatch thread. The buffer's callback only appends to a bounded
queue; the Monitor drains it on its next fetch and reconciles against the
snapshot source.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Optional

from ..core.logging import get_logger
from .sources import NotificationSource


class HotplugEventType(Enum):
    """Types of hotplug notices."""
    DEVICE_ADDED = "device_added"
    DEVICE_REMOVED = "device_removed"


@dataclass(frozen=True)
class HotplugNotice:
    """A host report that a slot gained or lost a device."""
    event_type: HotplugEventType
    slot: int
    timestamp: float = field(default_factory=time.monotonic)


class NotificationBuffer:
    """
    Bounded queue of hotplug notices fed by a NotificationSource.

    When the queue is full the oldest notice is dropped. The snapshot
    source stays authoritative; a lost notice only means a very fast
    unplug/replug may be reported as one continuous connection.
    """

    def __init__(self, source: NotificationSource, capacity: int = 64):
        """
        Register with ``source``.

        Args:
            source: Notification source to listen to
            capacity: Maximum number of buffered notices
        """
        self.logger = get_logger("hotplug")
        self._source: Optional[NotificationSource] = source
        self._notices: Deque[HotplugNotice] = deque(maxlen=capacity)
        self._dropped = 0

        source.add_listener(self._on_notice)
        self.logger.debug("Notification buffer registered", extra={"capacity": capacity})

    def _on_notice(self, notice: HotplugNotice) -> None:
        if len(self._notices) == self._notices.maxlen:
            self._dropped += 1
            self.logger.warning("Hotplug notice queue full, dropping oldest", extra={
                "capacity": self._notices.maxlen,
                "dropped_total": self._dropped
            })
        self._notices.append(notice)

    def drain(self) -> List[HotplugNotice]:
        """Remove and return every buffered notice, oldest first."""
        notices = list(self._notices)
        self._notices.clear()
        return notices

    def close(self) -> None:
        """Unregister from the source. Buffered notices are discarded."""
        if self._source is None:
            return
        self._source.remove_listener(self._on_notice)
        self._source = None
        self._notices.clear()
        self.logger.debug("Notification buffer unregistered")

    @property
    def closed(self) -> bool:
        return self._source is None

    @property
    def dropped(self) -> int:
        """Number of notices discarded because the queue was full."""
        return self._dropped

    def __len__(self) -> int:
        return len(self._notices)
