"""Executable Textual app that hosts the editor."""

from __future__ import annotations

from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use reditor.adapters.textual.app"
    ) from exc

from reditor.buffer import BufferMirror
from reditor.config import EditorConfig
from reditor.editor import Editor
from reditor.modes import KeyInput
from reditor.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

CURSOR_STYLE = "reverse"

_NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
}


def render_mirror(mirror: BufferMirror) -> Text:
    """Paint every row of ``mirror`` with the cursor cell highlighted."""

    text = Text(no_wrap=True)
    for row, line in enumerate(mirror.lines):
        if row:
            text.append("\n")
        if row != mirror.cursor.y:
            text.append(line)
            continue
        x = mirror.cursor.x
        text.append(line[:x])
        text.append(line[x : x + 1] or " ", style=CURSOR_STYLE)
        text.append(line[x + 1 :])
    return text


def status_line(mode: str, name: Optional[str]) -> str:
    return f"-- {mode.upper()} --  {name or '[No Name]'}"


class ReditorApp(App[None]):
    """Minimal Textual UI embedding the editor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		padding: 0 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, editor: Optional[Editor] = None) -> None:
        super().__init__()
        self.editor = editor or Editor()
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self.logger = telemetry.get_logger("reditor.app")

    def compose(self) -> ComposeResult:
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self.logger.debug,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self.editor.running = True

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        key = self._normalize_key(event)
        if key is None:
            return
        self.adapter.handle_key(key)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        # The whole view is repainted, so rows vacated by the previous frame
        # disappear without tracking stale_rows.
        if self._buffer_widget:
            self._buffer_widget.update(render_mirror(mirror))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(
                status_line(status, self.editor.buffer.display_name)
            )

    def _handle_event(self, name: str, payload: Any | None) -> None:
        del payload
        if name == "editor.quit":
            self.exit()

    @staticmethod
    def _normalize_key(event: events.Key) -> Optional[KeyInput]:
        key = event.key
        if key == "ctrl+q":
            return None
        if key == "ctrl+left_square_bracket":
            return KeyInput(key="[", modifiers=("CTRL",))
        if key in _NAMED_KEYS:
            return KeyInput(key=_NAMED_KEYS[key])
        if event.is_printable and event.character:
            return KeyInput.char(event.character)
        return None


def main(argv: Optional[Sequence[str]] = None) -> None:
    config = EditorConfig.from_args(argv)
    telemetry.configure(level=config.log_level, log_file=config.log_file)
    app = ReditorApp(Editor.from_config(config))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
