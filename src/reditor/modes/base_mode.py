"""Mode enumeration and the value types shared by every mode."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple


class Mode(str, Enum):
    """Interpretation context for input and for cursor clamping."""

    NORMAL = "normal"
    INSERT = "insert"


class Direction(str, Enum):
    """Cardinal direction used by motions, line openings and deletions."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> Tuple[int, int]:
        """Return the ``(dx, dy)`` step for this direction."""

        return _DELTAS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event passed to the resolver.

    ``key`` is either a single character or an upper-case key name such as
    ``ESC``, ``ENTER`` or ``BACKSPACE``.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, ch: str) -> "KeyInput":
        return cls(key=ch, text=ch)


@dataclass(slots=True)
class ActionResult:
    """Result returned from every action handler."""

    consumed: bool
    status: str = "ok"
    redraw: bool = False
    quit: bool = False
    message: Optional[str] = None


class EditorBus:
    """Minimal event bus letting the editor publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = [
    "Mode",
    "Direction",
    "KeyInput",
    "ActionResult",
    "EditorBus",
]
