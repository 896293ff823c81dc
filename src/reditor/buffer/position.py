"""Two-dimensional cursor coordinates."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Zero-based ``(column, row)`` coordinate.

    Subtraction refuses to produce negative components; callers that step
    left or up must check bounds first (see ``Buffer.handle_cursor_movement``).
    """

    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Position components must be >= 0, got ({self.x}, {self.y})")

    def __add__(self, other: "Position") -> "Position":
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x - other.x, self.y - other.y)

    def with_x(self, x: int) -> "Position":
        return Position(x, self.y)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


__all__ = ["Position"]
