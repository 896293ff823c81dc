"""Mode-independent descriptions of user intent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from reditor.modes import Direction, Mode


@dataclass(frozen=True, slots=True)
class Input:
    """Type ``char`` at the cursor."""

    char: str

    def __post_init__(self) -> None:
        if len(self.char) != 1:
            raise ValueError("Input expects exactly one character")


@dataclass(frozen=True, slots=True)
class Move:
    direction: Direction


@dataclass(frozen=True, slots=True)
class Line:
    """Open (Normal) or split into (Insert) a line above or below."""

    direction: Direction


@dataclass(frozen=True, slots=True)
class ChangeMode:
    """Switch mode, then optionally nudge the cursor under the new mode."""

    mode: Mode
    direction: Optional[Direction] = None


@dataclass(frozen=True, slots=True)
class Delete:
    """Backspace."""


@dataclass(frozen=True, slots=True)
class DeleteLine:
    pass


@dataclass(frozen=True, slots=True)
class Quit:
    pass


Action = Union[Input, Move, Line, ChangeMode, Delete, DeleteLine, Quit]

ACTION_TYPES: tuple[type, ...] = (
    Input,
    Move,
    Line,
    ChangeMode,
    Delete,
    DeleteLine,
    Quit,
)


__all__ = [
    "Action",
    "ACTION_TYPES",
    "ChangeMode",
    "Delete",
    "DeleteLine",
    "Direction",
    "Input",
    "Line",
    "Move",
    "Quit",
]
