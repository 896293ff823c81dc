"""Helper utilities for turning key events into keymap tokens."""

from __future__ import annotations

from typing import Iterable

from .base_mode import KeyInput

NAMED_KEYS = frozenset({"ESC", "ENTER", "BACKSPACE", "TAB", "DELETE"})


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().upper() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def key_to_token(key: KeyInput) -> str:
    modifiers = normalize_modifiers(key.modifiers)
    if modifiers:
        modifier = "+".join(modifiers)
        return f"{modifier}+{key.key}"
    return key.key


def printable_text(key: KeyInput) -> str | None:
    """Return the literal character a key would type, if any."""

    if key.modifiers:
        return None
    text = key.text if key.text is not None else key.key
    if key.key in NAMED_KEYS or len(text) != 1:
        return None
    if not text.isprintable():
        return None
    return text


__all__ = [
    "NAMED_KEYS",
    "normalize_modifiers",
    "key_to_token",
    "printable_text",
]
