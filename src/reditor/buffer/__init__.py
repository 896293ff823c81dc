"""Buffer abstractions: rows, cursor coordinates, and render frames."""

from .buffer import SEED_LINES, Buffer, BufferName, column_bound
from .position import Position
from .sync import BufferMirror, BufferRenderer, BufferValidationError
from .validation import ensure_cursor

__all__ = [
    "Buffer",
    "BufferName",
    "BufferMirror",
    "BufferRenderer",
    "BufferValidationError",
    "Position",
    "SEED_LINES",
    "column_bound",
    "ensure_cursor",
]
