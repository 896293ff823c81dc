"""Dispatch table mapping each action type to its handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict

from reditor.modes import ActionResult

from . import core, editing
from .models import ChangeMode, Delete, DeleteLine, Input, Line, Move, Quit

if TYPE_CHECKING:
    from reditor.editor import Editor

    from .models import Action

ActionHandler = Callable[["Editor", Any], ActionResult]

ACTION_HANDLERS: Dict[type, ActionHandler] = {
    Move: core.move_cursor,
    ChangeMode: core.change_mode,
    Quit: core.quit_editor,
    Input: editing.input_char,
    Delete: editing.backspace,
    Line: editing.open_line,
    DeleteLine: editing.delete_line,
}


def apply_action(editor: "Editor", action: "Action") -> ActionResult:
    handler = ACTION_HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"No handler registered for {type(action).__name__}")
    return handler(editor, action)


__all__ = ["ACTION_HANDLERS", "ActionHandler", "apply_action"]
