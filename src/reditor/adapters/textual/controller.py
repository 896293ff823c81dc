"""Textual adapter that wires Editor frames and bus events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from reditor.buffer import BufferMirror
from reditor.editor import Editor
from reditor.modes import ActionResult, KeyInput, normalize_modifiers

BUS_EVENTS = (
    "mode.switch",
    "buffer.changed",
    "buffer.switch",
    "editor.quit",
    "action.unreachable",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional debug line sink
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Bridges the Editor render hook and bus to a Textual-friendly surface."""

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self.last_mirror: Optional[BufferMirror] = None
        editor.render = self._render
        self._subscribe_events()
        editor.redraw()
        self.hooks.update_status(editor.mode.value)

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> Optional[ActionResult]:
        """Translate a Textual key into a ``KeyInput`` and dispatch it."""

        return self.handle_key(
            KeyInput(key=key, text=text, modifiers=normalize_modifiers(modifiers))
        )

    def handle_key(self, key: KeyInput) -> Optional[ActionResult]:
        self._log_state("key ->", key=key.key, mods=key.modifiers or None)
        result = self.editor.handle_key(key)
        if result is None:
            self._log_state("result <-", status="unbound")
            return None
        self.hooks.update_status(self._status_line(result))
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def _render(self, mirror: BufferMirror) -> None:
        self.last_mirror = mirror
        self.hooks.update_buffer(mirror)

    def _status_line(self, result: ActionResult) -> str:
        mode = self.editor.mode.value
        if result.status in ("ok", "move", "input", "noop"):
            return mode
        return f"{mode} | {result.status}"

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "mode.switch":
            self.hooks.update_status(self.editor.mode.value)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.editor.buffer
        return {
            "mode": self.editor.mode.value,
            "cursor": buffer.cursor.as_tuple(),
            "buffer": buffer.display_name,
            "buffer_version": buffer.version,
        }


__all__ = ["BUS_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
