from __future__ import annotations

from pathlib import Path

import pytest

from reditor.buffer import (
    Buffer,
    BufferValidationError,
    Position,
    column_bound,
    ensure_cursor,
)
from reditor.modes import Direction, Mode


def make_buffer(*lines: str, x: int = 0, y: int = 0) -> Buffer:
    return Buffer(lines or None, cursor=Position(x, y))


def test_new_buffer_has_one_empty_row() -> None:
    buffer = Buffer()

    assert buffer.snapshot() == ("",)
    assert buffer.height() == 1
    assert buffer.cursor == Position(0, 0)


def test_empty_line_list_still_yields_a_row() -> None:
    assert Buffer([]).snapshot() == ("",)


def test_seeded_buffer_and_from_text() -> None:
    assert Buffer.seeded().snapshot() == ("Hello", "Hi")
    assert Buffer.from_text("a\nbc\n").snapshot() == ("a", "bc", "")


def test_constructor_pulls_cursor_onto_the_rows() -> None:
    buffer = Buffer(["ab"], cursor=Position(9, 9))

    assert buffer.cursor == Position(2, 0)
    assert ensure_cursor(buffer, Mode.INSERT) == Position(2, 0)


def test_display_name_accepts_paths() -> None:
    buffer = Buffer(name=Path("notes") / "todo.txt")

    assert buffer.display_name == str(Path("notes") / "todo.txt")
    assert Buffer().display_name is None


def test_line_width_out_of_range_is_none() -> None:
    buffer = make_buffer("Hello", "Hi")

    assert buffer.line_width(0) == 5
    assert buffer.line_width(1) == 2
    assert buffer.line_width(2) is None
    assert buffer.line_width(-1) is None
    assert buffer.current_line_width() == 5


def test_position_arithmetic_and_underflow() -> None:
    assert Position(1, 2) + Position(3, 4) == Position(4, 6)
    assert Position(3, 4) - Position(1, 2) == Position(2, 2)
    with pytest.raises(ValueError):
        Position(0, 0) - Position(1, 0)


def test_insert_at_and_delete_at_are_inverse() -> None:
    buffer = make_buffer("Hello", x=2)

    assert buffer.insert_at("X")
    assert buffer.snapshot() == ("HeXllo",)
    assert buffer.delete_at() == "X"
    assert buffer.snapshot() == ("Hello",)


def test_insert_at_end_of_line() -> None:
    buffer = make_buffer("Hi", x=2)

    buffer.insert_at("!")

    assert buffer.snapshot() == ("Hi!",)


def test_insert_at_out_of_range_is_ignored() -> None:
    buffer = make_buffer("Hi")
    buffer.cursor = Position(7, 0)

    assert not buffer.insert_at("x")
    assert buffer.snapshot() == ("Hi",)
    assert buffer.version == 0


def test_delete_at_left_removes_previous_character() -> None:
    buffer = make_buffer("Hello", x=3)

    assert buffer.delete_at(Direction.LEFT) == "l"
    assert buffer.snapshot() == ("Helo",)


def test_delete_at_outside_row_is_ignored() -> None:
    buffer = make_buffer("Hi", x=0)

    assert buffer.delete_at(Direction.LEFT) is None
    buffer.cursor = Position(2, 0)
    assert buffer.delete_at() is None
    assert buffer.snapshot() == ("Hi",)


def test_new_line_positions() -> None:
    buffer = make_buffer("Hello", "Hi")

    assert buffer.new_line(0)
    assert buffer.new_line(3)
    assert buffer.snapshot() == ("", "Hello", "Hi", "")
    assert not buffer.new_line(9)


def test_break_line_then_concat_round_trip() -> None:
    for x in range(6):
        buffer = make_buffer("Hello", "Hi", x=x)

        buffer.break_line()
        assert buffer.snapshot() == ("Hello"[:x], "Hello"[x:], "Hi")

        buffer.concat_lines(1, 0)
        assert buffer.snapshot() == ("Hello", "Hi")


def test_concat_lines_downwards_adjusts_target() -> None:
    buffer = make_buffer("a", "b", "c")

    assert buffer.concat_lines(0, 2)
    assert buffer.snapshot() == ("b", "ca")


def test_concat_lines_rejects_bad_indices() -> None:
    buffer = make_buffer("a", "b")

    assert not buffer.concat_lines(0, 0)
    assert not buffer.concat_lines(0, 5)
    assert buffer.snapshot() == ("a", "b")


def test_delete_line_keeps_one_row() -> None:
    buffer = make_buffer("Hello", "Hi")

    assert buffer.delete_line(0)
    assert buffer.snapshot() == ("Hi",)
    assert buffer.delete_line(0)
    assert buffer.snapshot() == ("",)
    assert not buffer.delete_line(3)


def test_version_bumps_on_mutation() -> None:
    buffer = make_buffer("Hi")

    buffer.insert_at("x")
    buffer.new_line(1)

    assert buffer.version == 2


def test_direction_is_vertical() -> None:
    assert Direction.UP.is_vertical and Direction.DOWN.is_vertical
    assert not Direction.LEFT.is_vertical
    assert not Direction.RIGHT.is_vertical


@pytest.mark.parametrize(
    ("mode", "width", "expected"),
    [
        (Mode.NORMAL, 0, 0),
        (Mode.NORMAL, 1, 0),
        (Mode.NORMAL, 5, 4),
        (Mode.INSERT, 0, 0),
        (Mode.INSERT, 5, 5),
    ],
)
def test_column_bound(mode: Mode, width: int, expected: int) -> None:
    assert column_bound(mode, width) == expected


def test_normal_right_stops_on_last_character() -> None:
    buffer = make_buffer("Hi")

    for _ in range(5):
        buffer.handle_cursor_movement(Mode.NORMAL, Direction.RIGHT)

    assert buffer.cursor == Position(1, 0)


def test_normal_right_on_empty_line_stays_put() -> None:
    buffer = make_buffer("")

    buffer.handle_cursor_movement(Mode.NORMAL, Direction.RIGHT)

    assert buffer.cursor == Position(0, 0)


def test_insert_right_reaches_past_last_character() -> None:
    buffer = make_buffer("Hi")

    for _ in range(5):
        buffer.handle_cursor_movement(Mode.INSERT, Direction.RIGHT)

    assert buffer.cursor == Position(2, 0)


def test_left_and_up_stop_at_origin() -> None:
    buffer = make_buffer("Hello")

    buffer.handle_cursor_movement(Mode.NORMAL, Direction.LEFT)
    buffer.handle_cursor_movement(Mode.NORMAL, Direction.UP)

    assert buffer.cursor == Position(0, 0)


def test_vertical_moves_clamp_column_to_target_row() -> None:
    buffer = make_buffer("Hello", "Hi", x=4)

    buffer.handle_cursor_movement(Mode.NORMAL, Direction.DOWN)
    assert buffer.cursor == Position(1, 1)

    buffer.handle_cursor_movement(Mode.NORMAL, Direction.DOWN)
    assert buffer.cursor == Position(1, 1)

    buffer = make_buffer("Hello", "Hi", x=5)
    buffer.handle_cursor_movement(Mode.INSERT, Direction.DOWN)
    assert buffer.cursor == Position(2, 1)


def test_end_of_line_uses_the_cursor_row() -> None:
    buffer = make_buffer("Hi", "Hello", y=1)

    buffer.move_cursor_end_of_the_line(Mode.NORMAL)
    assert buffer.cursor == Position(4, 1)

    buffer.move_cursor_end_of_the_line(Mode.INSERT)
    assert buffer.cursor == Position(5, 1)

    buffer.move_cursor_start_of_the_line()
    assert buffer.cursor == Position(0, 1)


def test_clamp_cursor_pulls_back_inside() -> None:
    buffer = make_buffer("Hello", "Hi")
    buffer.cursor = Position(9, 7)

    buffer.clamp_cursor(Mode.NORMAL)

    assert buffer.cursor == Position(1, 1)


def test_ensure_cursor_flags_violations() -> None:
    buffer = make_buffer("Hi", x=2)

    assert ensure_cursor(buffer, Mode.INSERT) == Position(2, 0)
    with pytest.raises(BufferValidationError):
        ensure_cursor(buffer, Mode.NORMAL)

    buffer.cursor = Position(0, 3)
    with pytest.raises(BufferValidationError):
        ensure_cursor(buffer, Mode.INSERT)


def test_mirror_carries_frame_details() -> None:
    buffer = Buffer(["Hello", "Hi"], name="scratch")

    mirror = buffer.mirror(Mode.INSERT, stale_rows=2)

    assert mirror.lines == ("Hello", "Hi")
    assert mirror.text == "Hello\nHi"
    assert mirror.height == 2
    assert mirror.mode is Mode.INSERT
    assert mirror.name == "scratch"
    assert mirror.stale_rows == 2
