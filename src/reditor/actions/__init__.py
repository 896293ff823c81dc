"""Actions: resolved user intent and the handlers that apply it."""

from .core import change_mode, move_cursor, quit_editor
from .dispatch import ACTION_HANDLERS, apply_action
from .editing import backspace, delete_line, input_char, open_line
from .models import (
    ACTION_TYPES,
    Action,
    ChangeMode,
    Delete,
    DeleteLine,
    Direction,
    Input,
    Line,
    Move,
    Quit,
)

__all__ = [
    "Action",
    "ACTION_TYPES",
    "ACTION_HANDLERS",
    "ChangeMode",
    "Delete",
    "DeleteLine",
    "Direction",
    "Input",
    "Line",
    "Move",
    "Quit",
    "apply_action",
    "backspace",
    "change_mode",
    "delete_line",
    "input_char",
    "move_cursor",
    "open_line",
    "quit_editor",
]
