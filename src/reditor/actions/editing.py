"""Actions that change buffer content."""

from __future__ import annotations

from typing import TYPE_CHECKING

from reditor.modes import ActionResult, Direction, Mode

from .models import Delete, DeleteLine, Input, Line

if TYPE_CHECKING:
    from reditor.editor import Editor


def input_char(editor: "Editor", action: Input) -> ActionResult:
    if editor.mode is not Mode.INSERT:
        return editor.unreachable(action)
    buffer = editor.buffer
    if not buffer.insert_at(action.char):
        return ActionResult(consumed=True, status="ignored")
    buffer.handle_cursor_movement(editor.mode, Direction.RIGHT)
    return ActionResult(consumed=True, status="input", redraw=True)


def backspace(editor: "Editor", action: Delete) -> ActionResult:
    del action
    if editor.mode is not Mode.INSERT:
        return ActionResult(consumed=True, status="ignored")

    buffer = editor.buffer
    x, y = buffer.cursor.as_tuple()
    if x == 0 and y > 0:
        buffer.handle_cursor_movement(editor.mode, Direction.UP)
        buffer.move_cursor_end_of_the_line(editor.mode)
        row = buffer.cursor.y
        buffer.concat_lines(row + 1, row)
        return ActionResult(consumed=True, status="join_lines", redraw=True)
    if x > 0:
        buffer.delete_at(Direction.LEFT)
        buffer.handle_cursor_movement(editor.mode, Direction.LEFT)
        return ActionResult(consumed=True, status="delete", redraw=True)
    return ActionResult(consumed=True, status="ignored")


def open_line(editor: "Editor", action: Line) -> ActionResult:
    if not action.direction.is_vertical:
        return editor.unreachable(action)

    buffer = editor.buffer
    if editor.mode is Mode.NORMAL:
        if action.direction is Direction.UP:
            buffer.new_line(buffer.cursor.y)
            buffer.move_cursor_start_of_the_line()
        else:
            buffer.new_line(buffer.cursor.y + 1)
            buffer.handle_cursor_movement(editor.mode, Direction.DOWN)
        editor.set_mode(Mode.INSERT)
        return ActionResult(
            consumed=True, status="open_line", redraw=True, message=Mode.INSERT.value
        )

    buffer.break_line()
    if action.direction is Direction.DOWN:
        buffer.handle_cursor_movement(editor.mode, Direction.DOWN)
    buffer.move_cursor_start_of_the_line()
    return ActionResult(consumed=True, status="break_line", redraw=True)


def delete_line(editor: "Editor", action: DeleteLine) -> ActionResult:
    del action
    if editor.mode is not Mode.NORMAL:
        return ActionResult(consumed=True, status="ignored")
    buffer = editor.buffer
    buffer.delete_line(buffer.cursor.y)
    buffer.handle_cursor_movement(editor.mode, Direction.UP)
    return ActionResult(consumed=True, status="delete_line", redraw=True)


__all__ = ["input_char", "backspace", "open_line", "delete_line"]
