"""Exception hierarchy shared across the editor."""

from __future__ import annotations


class EditorError(RuntimeError):
    """Base class for errors raised by the editing core."""


class UnreachableActionError(EditorError):
    """Raised when an action reaches a mode that can never produce it.

    The resolver tables and the dispatch table disagree when this fires; it
    is a programming error rather than something a user can trigger.
    """

    def __init__(self, action: object, mode: object) -> None:
        super().__init__(f"Action {action!r} is unreachable in mode {mode!r}")
        self.action = action
        self.mode = mode


__all__ = ["EditorError", "UnreachableActionError"]
