"""Adapter boundary types for handing buffer frames to renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from reditor.errors import EditorError
from reditor.modes import Mode

from .position import Position


@dataclass(frozen=True, slots=True)
class BufferMirror:
    """Host-friendly snapshot describing what the renderer should paint.

    ``stale_rows`` counts trailing rows that held text in the previous frame
    and no longer exist; renderers that paint row by row must clear them.
    """

    lines: tuple[str, ...]
    cursor: Position
    mode: Mode
    name: Optional[str] = None
    version: int = 0
    stale_rows: int = 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def height(self) -> int:
        return len(self.lines)


class BufferRenderer(Protocol):
    """Protocol describing the paint collaborator."""

    def __call__(self, mirror: BufferMirror) -> None:
        """Repaint the visible buffer and move the terminal cursor."""
        ...


class BufferValidationError(EditorError):
    """Raised when a buffer cursor breaks the invariant for the active mode."""

    def __init__(
        self,
        message: str,
        *,
        cursor: Position | None = None,
        lines: Sequence[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.cursor = cursor
        self.lines = tuple(lines) if lines is not None else None


__all__ = ["BufferMirror", "BufferRenderer", "BufferValidationError"]
