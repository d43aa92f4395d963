"""
Gamepad identity for PyJoyEvents.

A GamepadDescription is captured once when a controller connects and is
shared, read-only, with every event produced for that connection.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sources import RawGamepad


class MappingType(Enum):
    """Button/axis arrangement reported by the host."""
    STANDARD = "standard"
    UNKNOWN = ""

    @classmethod
    def from_tag(cls, tag: str) -> "MappingType":
        """Resolve a host layout tag; anything unrecognised is UNKNOWN."""
        return cls.STANDARD if tag == cls.STANDARD.value else cls.UNKNOWN


@dataclass(frozen=True, eq=False)
class GamepadDescription:
    """
    Metadata for one physical connection.

    Compared by identity: a controller that disconnects and reconnects at
    the same slot gets a new description even if every field is the same.
    """
    slot: int
    name: str
    mapping: MappingType
    axis_count: int
    button_count: int

    @classmethod
    def from_raw(cls, slot: int, raw: "RawGamepad") -> "GamepadDescription":
        """Capture a description from a raw device at connect time."""
        return cls(
            slot=slot,
            name=raw.name,
            mapping=raw.mapping,
            axis_count=len(raw.axes),
            button_count=len(raw.buttons),
        )

    def describes(self, raw: "RawGamepad") -> bool:
        """True if ``raw`` has the name, layout and shape captured at connect time."""
        return (raw.name == self.name
                and raw.mapping is self.mapping
                and len(raw.axes) == self.axis_count
                and len(raw.buttons) == self.button_count)

    @property
    def is_mapped(self) -> bool:
        """True if raw indices resolve to named axes and buttons."""
        return self.mapping is MappingType.STANDARD

    def __repr__(self) -> str:
        return (f"GamepadDescription(slot={self.slot}, name={self.name!r}, "
                f"mapping={self.mapping.name}, axes={self.axis_count}, "
                f"buttons={self.button_count})")
