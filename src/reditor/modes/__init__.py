"""Mode enumeration, key inputs, and shared dispatch value types."""

from .base_mode import ActionResult, Direction, EditorBus, KeyInput, Mode
from .keymap_helpers import key_to_token, normalize_modifiers, printable_text

__all__ = [
    "ActionResult",
    "Direction",
    "EditorBus",
    "KeyInput",
    "Mode",
    "key_to_token",
    "normalize_modifiers",
    "printable_text",
]
