"""In-memory text buffer owning its rows, its cursor, and all clamping rules."""

from __future__ import annotations

import os
from typing import Iterable, Optional, Sequence, Union

from reditor.modes import Direction, Mode
from reditor.runtime import telemetry

from .position import Position
from .sync import BufferMirror

BufferName = Union[str, "os.PathLike[str]"]

SEED_LINES: tuple[str, ...] = ("Hello", "Hi")


def column_bound(mode: Mode, width: int) -> int:
    """Largest column the cursor may rest on for a row of ``width`` characters.

    Normal mode keeps the cursor on a character; Insert mode also allows the
    slot just past the last one. An empty row clamps to 0 in both modes.
    """

    if mode is Mode.INSERT:
        return width
    return max(width - 1, 0)


class Buffer:
    """Ordered rows of text plus a cursor.

    The buffer never holds zero rows. Out-of-range requests are ignored
    rather than raised, since the cursor and the content can disagree for a
    moment in the middle of a multi-step edit.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        name: Optional[BufferName] = None,
        cursor: Optional[Position] = None,
    ) -> None:
        self.name = name
        self._lines: list[str] = list(lines) if lines is not None else [""]
        if not self._lines:
            self._lines = [""]
        self.cursor = cursor or Position()
        self.version = 0
        self.logger = telemetry.get_logger("reditor.buffer")
        # Keep the cursor on an existing row and within its text.
        self.clamp_cursor(Mode.INSERT)

    @classmethod
    def from_text(cls, text: str, *, name: Optional[BufferName] = None) -> "Buffer":
        return cls(text.split("\n"), name=name)

    @classmethod
    def seeded(cls) -> "Buffer":
        """Return the two-line bootstrap buffer."""

        return cls(SEED_LINES)

    @property
    def display_name(self) -> Optional[str]:
        if self.name is None:
            return None
        return os.fspath(self.name)

    # -- read access -------------------------------------------------------

    def snapshot(self) -> Sequence[str]:
        """Return the current rows without exposing internal mutability."""

        return tuple(self._lines)

    def line(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def line_width(self, line: int) -> Optional[int]:
        text = self.line(line)
        return None if text is None else len(text)

    def current_line_width(self) -> Optional[int]:
        return self.line_width(self.cursor.y)

    def height(self) -> int:
        return len(self._lines)

    def mirror(self, mode: Mode, *, stale_rows: int = 0) -> BufferMirror:
        return BufferMirror(
            lines=tuple(self._lines),
            cursor=self.cursor,
            mode=mode,
            name=self.display_name,
            version=self.version,
            stale_rows=stale_rows,
        )

    # -- mutation ----------------------------------------------------------

    def insert_at(self, ch: str) -> bool:
        """Insert ``ch`` at the cursor without moving it."""

        x, y = self.cursor.as_tuple()
        text = self.line(y)
        if text is None or x > len(text):
            self.logger.debug("insert_at ignored at (%d, %d)", x, y)
            return False
        self._lines[y] = text[:x] + ch + text[x:]
        self._touch()
        return True

    def new_line(self, at: int) -> bool:
        """Insert an empty row at ``at``; later rows shift down by one."""

        if not 0 <= at <= len(self._lines):
            self.logger.debug("new_line ignored at %d", at)
            return False
        self._lines.insert(at, "")
        self._touch()
        return True

    def break_line(self) -> bool:
        """Split the cursor row at the cursor column into two rows."""

        x, y = self.cursor.as_tuple()
        text = self.line(y)
        if text is None or x > len(text):
            self.logger.debug("break_line ignored at (%d, %d)", x, y)
            return False
        self._lines[y : y + 1] = [text[:x], text[x:]]
        self._touch()
        return True

    def delete_at(self, direction: Optional[Direction] = None) -> Optional[str]:
        """Remove one character next to (or under) the cursor.

        With no direction the character under the cursor goes. A direction
        shifts the target by one cell first, so ``Direction.LEFT`` removes
        the character just before the cursor on the same row (backspace).
        Returns the removed character, or ``None`` when the target cell does
        not exist.
        """

        dx, dy = direction.delta if direction is not None else (0, 0)
        x = self.cursor.x + dx
        y = self.cursor.y + dy
        text = self.line(y)
        if text is None or not 0 <= x < len(text):
            self.logger.debug("delete_at ignored at (%d, %d)", x, y)
            return None
        removed = text[x]
        self._lines[y] = text[:x] + text[x + 1 :]
        self._touch()
        return removed

    def concat_lines(self, l1: int, l2: int) -> bool:
        """Remove row ``l1`` and append its text onto row ``l2``."""

        height = len(self._lines)
        if l1 == l2 or not (0 <= l1 < height and 0 <= l2 < height):
            self.logger.debug("concat_lines ignored for %d -> %d", l1, l2)
            return False
        tail = self._lines.pop(l1)
        target = l2 - 1 if l1 < l2 else l2
        self._lines[target] += tail
        self._touch()
        return True

    def delete_line(self, line: int) -> bool:
        """Remove row ``line``; the only remaining row is cleared instead."""

        if not 0 <= line < len(self._lines):
            self.logger.debug("delete_line ignored at %d", line)
            return False
        if len(self._lines) == 1:
            self._lines[0] = ""
        else:
            del self._lines[line]
        self._touch()
        return True

    # -- cursor ------------------------------------------------------------

    def move_cursor_start_of_the_line(self) -> None:
        self.cursor = self.cursor.with_x(0)

    def move_cursor_end_of_the_line(self, mode: Mode) -> None:
        width = self.current_line_width() or 0
        self.cursor = self.cursor.with_x(column_bound(mode, width))

    def handle_cursor_movement(self, mode: Mode, direction: Direction) -> None:
        """Move the cursor one step and clamp it to the bounds of ``mode``."""

        x, y = self.cursor.as_tuple()
        if direction.is_vertical:
            if direction is Direction.UP:
                row = max(y - 1, 0)
            else:
                row = min(len(self._lines) - 1, y + 1)
            bound = column_bound(mode, self.line_width(row) or 0)
            self.cursor = Position(min(bound, x), row)
        elif direction is Direction.LEFT:
            self.cursor = Position(max(x - 1, 0), y)
        else:
            bound = column_bound(mode, self.line_width(y) or 0)
            self.cursor = Position(min(bound, x + 1), y)

    def clamp_cursor(self, mode: Mode) -> None:
        """Pull the cursor back inside the buffer for ``mode`` without moving."""

        row = min(self.cursor.y, len(self._lines) - 1)
        bound = column_bound(mode, self.line_width(row) or 0)
        self.cursor = Position(min(self.cursor.x, bound), row)

    def _touch(self) -> None:
        self.version += 1


__all__ = ["Buffer", "BufferName", "SEED_LINES", "column_bound"]
