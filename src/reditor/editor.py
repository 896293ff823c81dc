"""Editor state machine: owns the buffers and the mode, dispatches actions."""

from __future__ import annotations

from typing import Iterable, List, Optional

from reditor.actions import Action, apply_action
from reditor.buffer import Buffer, BufferMirror, BufferRenderer, BufferValidationError
from reditor.buffer import ensure_cursor
from reditor.config import EditorConfig
from reditor.errors import UnreachableActionError
from reditor.keymaps import ActionResolver, create_default_resolver
from reditor.modes import ActionResult, EditorBus, KeyInput, Mode
from reditor.runtime import telemetry


class Editor:
    """Owns the buffer collection, the active index and the current mode.

    Every key goes through the resolver for the current mode; the resulting
    action is applied to the active buffer to completion and a frame is
    handed to ``render`` before the next key is read.
    """

    def __init__(
        self,
        buffers: Optional[Iterable[Buffer]] = None,
        *,
        resolver: Optional[ActionResolver] = None,
        render: Optional[BufferRenderer] = None,
        bus: Optional[EditorBus] = None,
        strict: bool = False,
    ) -> None:
        self.buffers: List[Buffer] = list(buffers) if buffers is not None else []
        if not self.buffers:
            self.buffers.append(Buffer.seeded())
        self.active_index = 0
        self.resolver = resolver or create_default_resolver()
        self.render = render
        self.bus = bus or EditorBus()
        self.strict = strict
        self.running = False
        self.logger = telemetry.get_logger("reditor.editor")
        self._mode = Mode.NORMAL
        self._last_height: Optional[int] = None
        for buffer in self.buffers:
            buffer.clamp_cursor(self._mode)

    @classmethod
    def from_config(
        cls, config: EditorConfig, *, render: Optional[BufferRenderer] = None
    ) -> "Editor":
        buffer = Buffer.seeded() if config.seed else Buffer()
        buffer.name = config.buffer_name
        return cls([buffer], render=render, strict=config.strict)

    @property
    def buffer(self) -> Buffer:
        return self.buffers[self.active_index]

    @property
    def mode(self) -> Mode:
        return self._mode

    def set_mode(self, mode: Mode) -> bool:
        """Switch mode; returns ``False`` when ``mode`` is already active."""

        previous = self._mode
        if previous is mode:
            return False
        self._mode = mode
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous.value, "to": mode.value},
            logger_name="reditor.editor",
        )
        self.bus.emit("mode.switch", {"from": previous, "to": mode})
        return True

    def add_buffer(self, buffer: Buffer, *, activate: bool = False) -> int:
        buffer.clamp_cursor(self._mode)
        self.buffers.append(buffer)
        index = len(self.buffers) - 1
        if activate:
            self.switch_buffer(index)
        return index

    def switch_buffer(self, index: int) -> None:
        if not 0 <= index < len(self.buffers):
            raise IndexError(f"No buffer at index {index}")
        if index == self.active_index:
            return
        self.active_index = index
        self.buffer.clamp_cursor(self._mode)
        self.bus.emit("buffer.switch", {"index": index, "name": self.buffer.display_name})
        self.redraw()

    def handle_key(self, key: KeyInput) -> Optional[ActionResult]:
        """Resolve ``key`` against the current mode and apply the result."""

        action = self.resolver.resolve(self._mode, key)
        if action is None:
            self.logger.debug("ignored key %r in %s mode", key.key, self._mode.value)
            return None
        return self.apply(action)

    def apply(self, action: Action) -> ActionResult:
        with telemetry.span(
            f"editor::{type(action).__name__}",
            logger_name="reditor.editor",
            component="editor",
            metadata={"mode": self._mode.value, "action": action},
        ) as handle:
            result = apply_action(self, action)
            handle.add_metadata("status", result.status)
            self._check_cursor()

        if result.quit:
            self.running = False
            self.bus.emit("editor.quit", None)
            return result
        if result.redraw:
            self.bus.emit(
                "buffer.changed",
                {"status": result.status, "version": self.buffer.version},
            )
        if result.consumed:
            self.redraw()
        return result

    def unreachable(self, action: Action) -> ActionResult:
        """Report an action the current mode can never produce."""

        if self.strict:
            raise UnreachableActionError(action, self._mode)
        self.logger.warning(
            "unreachable action %r in %s mode ignored", action, self._mode.value
        )
        self.bus.emit("action.unreachable", {"action": action, "mode": self._mode})
        return ActionResult(consumed=False, status="unreachable")

    def redraw(self) -> BufferMirror:
        """Hand the active buffer to the renderer and return the frame."""

        height = self.buffer.height()
        stale = 0
        if self._last_height is not None:
            stale = max(self._last_height - height, 0)
        self._last_height = height
        mirror = self.buffer.mirror(self._mode, stale_rows=stale)
        if self.render is not None:
            self.render(mirror)
        return mirror

    def run(self, keys: Iterable[KeyInput]) -> None:
        """Draw once, then apply keys one at a time until ``Quit``.

        ``keys`` is typically a blocking generator over terminal events; the
        loop also ends when it is exhausted.
        """

        self.running = True
        try:
            self.redraw()
            for key in keys:
                self.handle_key(key)
                if not self.running:
                    break
        finally:
            self.running = False

    def _check_cursor(self) -> None:
        try:
            ensure_cursor(self.buffer, self._mode)
        except BufferValidationError as exc:
            if self.strict:
                raise
            self.logger.warning("%s at %s; clamping", exc, exc.cursor)
            self.buffer.clamp_cursor(self._mode)


__all__ = ["Editor"]
