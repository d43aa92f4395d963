"""
Interfaces for the host collaborators a Monitor reads from.

A SnapshotSource is the authoritative, pull-based view of the host's
controller slots. A NotificationSource optionally pushes hotplug notices
between polls.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

from .gamepad import MappingType

if TYPE_CHECKING:
    from .hotplug import HotplugNotice


@dataclass(frozen=True)
class RawGamepad:
    """One controller as the host reports it during a single fetch."""
    name: str
    mapping: MappingType
    timestamp: float
    axes: Tuple[float, ...] = field(default_factory=tuple)
    buttons: Tuple[Tuple[bool, float], ...] = field(default_factory=tuple)


class SnapshotSource(ABC):
    """Pull-based source of controller slots."""

    @abstractmethod
    def get_gamepads(self) -> List[Optional[RawGamepad]]:
        """
        Read every host slot.

        Returns:
            One entry per slot, None where the slot is empty
        """
        pass

    def close(self) -> None:
        """Release host resources. Default does nothing."""


class NotificationSource(ABC):
    """Push-based source of hotplug notices."""

    @abstractmethod
    def add_listener(self, callback: Callable[["HotplugNotice"], None]) -> None:
        """Register a callback for hotplug notices."""
        pass

    @abstractmethod
    def remove_listener(self, callback: Callable[["HotplugNotice"], None]) -> None:
        """Unregister a callback added with add_listener."""
        pass
