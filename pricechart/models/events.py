"""Input events delivered by the host UI loop."""

from dataclasses import dataclass
from enum import Enum


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    LEAVE = "leave"


@dataclass(frozen=True)
class PointerEvent:
    """Pointer event with container-relative pixel coordinates."""
    action: PointerAction
    x: float
    y: float


@dataclass(frozen=True)
class WheelEvent:
    """Wheel event; positive delta_y scrolls away from the user (zoom out)."""
    delta_y: float
    x: float


@dataclass(frozen=True)
class KeyEvent:
    key: str
