"""Built-in keymaps: the Normal and Insert resolution tables."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Optional, Sequence

from reditor.actions.models import (
    Action,
    ChangeMode,
    Delete,
    DeleteLine,
    Input,
    Line,
    Move,
    Quit,
)
from reditor.modes import Direction, KeyInput, Mode, printable_text

from .models import Binding, FallbackResolver, KeyStroke, bind
from .registry import KeymapRegistry

NORMAL_BINDINGS: tuple[Binding, ...] = (
    bind("normal.down", Mode.NORMAL, "j", Move(Direction.DOWN), "Cursor down"),
    bind("normal.up", Mode.NORMAL, "k", Move(Direction.UP), "Cursor up"),
    bind("normal.left", Mode.NORMAL, "h", Move(Direction.LEFT), "Cursor left"),
    bind("normal.right", Mode.NORMAL, "l", Move(Direction.RIGHT), "Cursor right"),
    bind(
        "normal.insert",
        Mode.NORMAL,
        "i",
        ChangeMode(Mode.INSERT),
        "Insert before the cursor",
    ),
    bind(
        "normal.append",
        Mode.NORMAL,
        "a",
        ChangeMode(Mode.INSERT, Direction.RIGHT),
        "Append after the cursor",
    ),
    bind("normal.open_above", Mode.NORMAL, "O", Line(Direction.UP), "Open line above"),
    bind("normal.open_below", Mode.NORMAL, "o", Line(Direction.DOWN), "Open line below"),
    bind("normal.delete_line", Mode.NORMAL, "D", DeleteLine(), "Delete the current line"),
    bind("normal.quit", Mode.NORMAL, "q", Quit(), "Quit"),
)

INSERT_BINDINGS: tuple[Binding, ...] = (
    bind(
        "insert.exit_escape",
        Mode.INSERT,
        "ESC",
        ChangeMode(Mode.NORMAL, Direction.LEFT),
        "Leave insert mode",
    ),
    bind(
        "insert.exit_ctrl_bracket",
        Mode.INSERT,
        "CTRL+[",
        ChangeMode(Mode.NORMAL, Direction.LEFT),
        "Leave insert mode",
    ),
    bind(
        "insert.newline",
        Mode.INSERT,
        "ENTER",
        Line(Direction.DOWN),
        "Break the line at the cursor",
    ),
    bind(
        "insert.backspace",
        Mode.INSERT,
        "BACKSPACE",
        Delete(),
        "Delete the character before the cursor",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = NORMAL_BINDINGS + INSERT_BINDINGS


def insert_text_fallback(key: KeyInput) -> Optional[Action]:
    """Resolve any printable character to ``Input`` in Insert mode."""

    text = printable_text(key)
    if text is None:
        return None
    return Input(text)


DEFAULT_FALLBACKS: Mapping[Mode, FallbackResolver] = {
    Mode.INSERT: insert_text_fallback,
}


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace_existing: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[Mode, Iterable[Binding]] | None = None,
    install_fallbacks: bool = True,
) -> None:
    """Register the built-in tables for every mode."""

    allowed = _build_filters(include_bindings, exclude_bindings)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed):
            continue
        registry.register_binding(binding, replace=replace_existing)

    if install_fallbacks:
        for mode, resolver in DEFAULT_FALLBACKS.items():
            registry.set_fallback(mode, resolver)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace_existing)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode is not mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode.value}'"
                    )
                registry.register_binding(binding, replace=True)


def rebind(binding: Binding, key: str) -> Binding:
    """Return ``binding`` moved onto another key."""

    return replace(binding, stroke=KeyStroke.parse(key))


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "DEFAULT_BINDINGS",
    "DEFAULT_FALLBACKS",
    "INSERT_BINDINGS",
    "NORMAL_BINDINGS",
    "insert_text_fallback",
    "load_default_keymaps",
    "rebind",
]
