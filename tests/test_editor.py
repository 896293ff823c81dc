from __future__ import annotations

import logging
import random
from typing import Iterable, List

import pytest

from reditor.actions import ChangeMode, Delete, DeleteLine, Input, Line, Move
from reditor.buffer import (
    Buffer,
    BufferMirror,
    BufferValidationError,
    Position,
    ensure_cursor,
)
from reditor.editor import Editor
from reditor.errors import UnreachableActionError
from reditor.modes import Direction, KeyInput, Mode

NAMED = {"ESC", "ENTER", "BACKSPACE"}


def key(token: str) -> KeyInput:
    if token in NAMED:
        return KeyInput(key=token)
    return KeyInput.char(token)


def keys(*tokens: str) -> List[KeyInput]:
    return [key(token) for token in tokens]


def make_editor(*lines: str, strict: bool = True, frames=None) -> Editor:
    buffers = [Buffer(lines)] if lines else None
    render = frames.append if frames is not None else None
    return Editor(buffers, render=render, strict=strict)


def press(editor: Editor, tokens: Iterable[str]) -> None:
    for token in tokens:
        editor.handle_key(key(token))


def test_default_editor_starts_on_seed_in_normal_mode() -> None:
    editor = Editor()

    assert editor.buffer.snapshot() == ("Hello", "Hi")
    assert editor.mode is Mode.NORMAL
    assert editor.buffer.cursor == Position(0, 0)


def test_scenario_insert_in_the_middle_of_a_word() -> None:
    editor = make_editor()

    press(editor, ["l", "l", "l", "i", "X", "ESC"])

    assert editor.buffer.snapshot() == ("HelXlo", "Hi")
    assert editor.buffer.cursor == Position(3, 0)
    assert editor.mode is Mode.NORMAL


def test_scenario_open_line_below() -> None:
    editor = make_editor()

    press(editor, ["o"])

    assert editor.buffer.snapshot() == ("Hello", "", "Hi")
    assert editor.buffer.height() == 3
    assert editor.buffer.cursor == Position(0, 1)
    assert editor.mode is Mode.INSERT


def test_scenario_enter_at_end_of_row() -> None:
    editor = make_editor()

    press(editor, ["l", "l", "l", "l", "a", "ENTER"])

    assert editor.buffer.snapshot() == ("Hello", "", "Hi")
    assert editor.buffer.cursor == Position(0, 1)


def test_scenario_backspace_joins_rows() -> None:
    editor = make_editor()

    press(editor, ["j", "i", "BACKSPACE"])

    assert editor.buffer.snapshot() == ("HelloHi",)
    assert editor.buffer.cursor == Position(5, 0)


def test_backspace_mid_line_and_at_origin() -> None:
    editor = make_editor()

    press(editor, ["l", "l", "i", "BACKSPACE"])
    assert editor.buffer.snapshot() == ("Hllo", "Hi")
    assert editor.buffer.cursor == Position(1, 0)

    press(editor, ["BACKSPACE", "BACKSPACE"])
    assert editor.buffer.snapshot() == ("llo", "Hi")
    assert editor.buffer.cursor == Position(0, 0)


def test_delete_in_normal_mode_is_ignored() -> None:
    editor = make_editor()

    result = editor.apply(Delete())

    assert result.status == "ignored"
    assert editor.buffer.snapshot() == ("Hello", "Hi")


def test_append_moves_past_last_character() -> None:
    editor = make_editor()

    press(editor, ["j", "l", "a", "!"])

    assert editor.buffer.snapshot() == ("Hello", "Hi!")
    assert editor.buffer.cursor == Position(3, 1)


def test_open_line_above_in_normal_mode() -> None:
    editor = make_editor()

    press(editor, ["j", "l", "O"])

    assert editor.buffer.snapshot() == ("Hello", "", "Hi")
    assert editor.buffer.cursor == Position(0, 1)
    assert editor.mode is Mode.INSERT


def test_line_up_in_insert_mode_splits_and_returns_to_row_start() -> None:
    editor = make_editor()

    press(editor, ["l", "l", "i"])
    result = editor.apply(Line(Direction.UP))

    assert result.status == "break_line"
    assert editor.buffer.snapshot() == ("He", "llo", "Hi")
    assert editor.buffer.cursor == Position(0, 0)


def test_delete_line_moves_up() -> None:
    editor = make_editor("one", "two", "three")

    press(editor, ["j", "j", "D"])

    assert editor.buffer.snapshot() == ("one", "two")
    assert editor.buffer.cursor == Position(0, 1)


def test_delete_line_on_single_row_clears_it() -> None:
    editor = make_editor("only")

    press(editor, ["l", "D"])

    assert editor.buffer.snapshot() == ("",)
    assert editor.buffer.cursor == Position(0, 0)


def test_delete_line_in_insert_mode_is_a_noop() -> None:
    editor = make_editor()
    press(editor, ["i"])

    result = editor.apply(DeleteLine())

    assert result.status == "ignored"
    assert editor.buffer.snapshot() == ("Hello", "Hi")
    assert editor.mode is Mode.INSERT


def test_change_mode_to_insert_is_idempotent() -> None:
    editor = make_editor()
    press(editor, ["l", "i"])
    before = (editor.buffer.snapshot(), editor.buffer.cursor)

    result = editor.apply(ChangeMode(Mode.INSERT))

    assert result.status == "noop"
    assert (editor.buffer.snapshot(), editor.buffer.cursor) == before
    assert editor.mode is Mode.INSERT


def test_leaving_insert_at_line_end_clamps_cursor() -> None:
    editor = make_editor()
    press(editor, ["l", "l", "l", "l", "a"])
    assert editor.buffer.cursor == Position(5, 0)

    editor.apply(ChangeMode(Mode.NORMAL))

    assert editor.buffer.cursor == Position(4, 0)


def test_unreachable_action_raises_when_strict() -> None:
    editor = make_editor(strict=True)

    with pytest.raises(UnreachableActionError) as info:
        editor.apply(Input("x"))

    assert info.value.mode is Mode.NORMAL
    assert editor.buffer.snapshot() == ("Hello", "Hi")


def test_unreachable_action_is_logged_and_skipped_otherwise(caplog) -> None:
    editor = make_editor(strict=False)
    seen: List[object] = []
    editor.bus.subscribe("action.unreachable", seen.append)

    with caplog.at_level(logging.WARNING, logger="reditor"):
        result = editor.apply(Line(Direction.LEFT))

    assert result.status == "unreachable"
    assert not result.consumed
    assert editor.buffer.snapshot() == ("Hello", "Hi")
    assert seen and seen[0]["action"] == Line(Direction.LEFT)
    assert any("unreachable" in record.getMessage() for record in caplog.records)


def test_broken_cursor_raises_when_strict() -> None:
    editor = make_editor(strict=True)
    editor.buffer.cursor = Position(10, 0)

    with pytest.raises(BufferValidationError):
        editor.apply(Move(Direction.LEFT))


def test_broken_cursor_is_clamped_otherwise() -> None:
    editor = make_editor(strict=False)
    editor.buffer.cursor = Position(10, 0)

    editor.apply(Move(Direction.LEFT))

    assert editor.buffer.cursor == Position(4, 0)


def test_unbound_key_is_ignored_without_redraw() -> None:
    frames: List[BufferMirror] = []
    editor = make_editor(frames=frames)

    assert editor.handle_key(key("z")) is None
    assert frames == []


def test_run_draws_first_and_after_each_action() -> None:
    frames: List[BufferMirror] = []
    editor = make_editor(frames=frames)

    editor.run(keys("l", "z", "i"))

    assert len(frames) == 3
    assert frames[0].cursor == Position(0, 0)
    assert frames[1].cursor == Position(1, 0)
    assert frames[2].mode is Mode.INSERT
    assert not editor.running


def test_run_stops_on_quit() -> None:
    frames: List[BufferMirror] = []
    editor = make_editor(frames=frames)
    quits: List[object] = []
    editor.bus.subscribe("editor.quit", quits.append)

    editor.run(keys("j", "q", "k"))

    assert editor.buffer.cursor == Position(0, 1)
    assert quits == [None]
    assert len(frames) == 2


def test_frames_report_vacated_rows() -> None:
    frames: List[BufferMirror] = []
    editor = make_editor("a", "b", "c", frames=frames)

    editor.run(keys("D", "D", "o"))

    assert [frame.height for frame in frames] == [3, 2, 1, 2]
    assert [frame.stale_rows for frame in frames] == [0, 1, 1, 0]


def test_bus_reports_mode_switches_and_changes() -> None:
    editor = make_editor()
    switches: List[object] = []
    changes: List[object] = []
    editor.bus.subscribe("mode.switch", switches.append)
    editor.bus.subscribe("buffer.changed", changes.append)

    press(editor, ["i", "x", "ESC"])

    assert switches == [
        {"from": Mode.NORMAL, "to": Mode.INSERT},
        {"from": Mode.INSERT, "to": Mode.NORMAL},
    ]
    assert len(changes) == 1
    assert changes[0]["status"] == "input"


def test_switch_buffer_clamps_cursor() -> None:
    frames: List[BufferMirror] = []
    editor = make_editor(frames=frames)
    other = Buffer(["abc"], name="other")

    index = editor.add_buffer(other)
    other.cursor = Position(3, 0)
    editor.switch_buffer(index)

    assert editor.active_index == 1
    assert editor.buffer is other
    assert other.cursor == Position(2, 0)
    assert frames[-1].name == "other"

    with pytest.raises(IndexError):
        editor.switch_buffer(5)


def test_edits_only_touch_the_active_buffer() -> None:
    editor = make_editor()
    second = Buffer(["second"])
    editor.add_buffer(second, activate=True)

    press(editor, ["D"])

    assert second.snapshot() == ("",)
    assert editor.buffers[0].snapshot() == ("Hello", "Hi")


POOL = ("h", "j", "k", "l", "i", "a", "o", "O", "D", "x", "y", " ", "ESC", "ENTER", "BACKSPACE")


@pytest.mark.parametrize("seed", range(20))
def test_cursor_invariant_holds_for_random_sequences(seed: int) -> None:
    rng = random.Random(seed)
    editor = make_editor(strict=True)

    for _ in range(300):
        editor.handle_key(key(rng.choice(POOL)))
        assert editor.buffer.height() >= 1
        ensure_cursor(editor.buffer, editor.mode)


def test_startup_frame_has_a_valid_cursor() -> None:
    frames: List[BufferMirror] = []
    editor = Editor(
        [Buffer(["ab"], cursor=Position(9, 9))], render=frames.append, strict=False
    )

    editor.run([])

    assert frames[0].cursor == Position(1, 0)
    ensure_cursor(editor.buffer, editor.mode)


def test_added_buffer_cursor_is_clamped_for_current_mode() -> None:
    editor = make_editor()
    other = Buffer(["ab"], cursor=Position(2, 0))

    editor.add_buffer(other)

    assert other.cursor == Position(1, 0)


def test_horizontal_line_direction_is_unreachable() -> None:
    editor = make_editor(strict=True)

    with pytest.raises(UnreachableActionError):
        editor.apply(Line(Direction.RIGHT))
