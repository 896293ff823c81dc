"""Validation helpers shared across buffer services."""

from __future__ import annotations

from reditor.modes import Mode

from .buffer import Buffer, column_bound
from .position import Position
from .sync import BufferValidationError


def ensure_cursor(buffer: Buffer, mode: Mode) -> Position:
    """Return the cursor if it satisfies the invariant for ``mode``."""

    cursor = buffer.cursor
    height = buffer.height()
    if height == 0:
        raise BufferValidationError("Buffer has no rows", cursor=cursor)
    if cursor.y >= height:
        raise BufferValidationError(
            "Row out of range", cursor=cursor, lines=buffer.snapshot()
        )
    width = buffer.line_width(cursor.y) or 0
    if cursor.x > column_bound(mode, width):
        raise BufferValidationError(
            f"Column out of range for {mode.value} mode",
            cursor=cursor,
            lines=buffer.snapshot(),
        )
    return cursor


__all__ = ["ensure_cursor"]
