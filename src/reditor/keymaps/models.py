"""Dataclasses describing keymap bindings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from reditor.actions.models import ACTION_TYPES, Action
from reditor.modes import KeyInput, Mode, normalize_modifiers

FallbackResolver = Callable[[KeyInput], Optional[Action]]


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """Build a stroke from ``"j"``, ``"ESC"`` or ``"CTRL+["`` style text."""

        if len(text) > 1 and "+" in text[:-1]:
            head, _, key = text.rpartition("+")
            return cls(key, tuple(head.split("+")))
        return cls(text)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke in one mode with the action it resolves to."""

    id: str
    mode: Mode
    stroke: KeyStroke
    action: Action
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not isinstance(self.mode, Mode):
            object.__setattr__(self, "mode", Mode(self.mode))
        if not isinstance(self.action, ACTION_TYPES):
            raise TypeError(f"binding '{self.id}' needs an Action, got {self.action!r}")

    @property
    def key_signature(self) -> str:
        return self.stroke.token


def bind(
    binding_id: str,
    mode: Mode,
    key: str,
    action: Action,
    description: str = "",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=KeyStroke.parse(key),
        action=action,
        description=description,
    )


__all__ = [
    "Binding",
    "FallbackResolver",
    "KeyStroke",
    "bind",
]
