"""Core action implementations shared across modes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reditor.modes import ActionResult

from .models import ChangeMode, Move, Quit

if TYPE_CHECKING:
    from reditor.editor import Editor


def move_cursor(editor: "Editor", action: Move) -> ActionResult:
    editor.buffer.handle_cursor_movement(editor.mode, action.direction)
    return ActionResult(consumed=True, status="move")


def change_mode(editor: "Editor", action: ChangeMode) -> ActionResult:
    changed = editor.set_mode(action.mode)
    if changed:
        editor.buffer.clamp_cursor(editor.mode)
    if action.direction is not None:
        editor.buffer.handle_cursor_movement(editor.mode, action.direction)
    elif not changed:
        return ActionResult(consumed=True, status="noop")
    return ActionResult(
        consumed=True,
        status="change_mode",
        message=action.mode.value,
    )


def quit_editor(editor: "Editor", action: Quit) -> ActionResult:
    del editor, action
    return ActionResult(consumed=True, status="quit", quit=True)


__all__ = ["move_cursor", "change_mode", "quit_editor"]
