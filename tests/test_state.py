import pytest

from vim_motion.errors import ErrorCode, VimError
from vim_motion.state import CharFind, CursorPosition, TextBuffer, VimMode, VimState
from vim_motion.state.vim_state import HISTORY_LIMIT


def make_state(*lines: str, cursor: tuple[int, int] = (0, 0)) -> VimState:
    state = VimState(buffer=TextBuffer.from_lines(lines))
    state.cursor = CursorPosition(*cursor)
    return state


def test_text_buffer_splits_and_drops_one_trailing_newline() -> None:
    buffer = TextBuffer("one\ntwo\n")

    assert buffer.get_line_count() == 2
    assert buffer.get_line(1) == "two"
    assert buffer.get_content() == "one\ntwo"


def test_text_buffer_keeps_blank_line_before_final_newline() -> None:
    buffer = TextBuffer("one\n\n")

    assert buffer.get_lines() == ["one", ""]


def test_empty_content_has_zero_lines() -> None:
    buffer = TextBuffer("line")
    buffer.set_content("")

    assert buffer.is_empty()
    assert buffer.get_line_count() == 0
    assert buffer.get_line(0) is None


def test_out_of_range_lookups_return_none() -> None:
    buffer = TextBuffer("abc")

    assert buffer.get_line(-1) is None
    assert buffer.get_line(3) is None
    assert buffer.get_char_at(0, 3) is None
    assert buffer.get_char_at(0, 1) == "b"


def test_line_mutators_reject_bad_input() -> None:
    buffer = TextBuffer("abc")

    with pytest.raises(VimError) as excinfo:
        buffer.set_line(0, "a\nb")
    assert excinfo.value.code is ErrorCode.BUFFER_ERROR

    with pytest.raises(VimError):
        buffer.delete_line(5)

    buffer.insert_line(1, "def")
    assert buffer.get_lines() == ["abc", "def"]
    assert buffer.delete_line(0) == "abc"


def test_cursor_clamps_negative_inputs() -> None:
    cursor = CursorPosition(-3, -1)

    assert (cursor.line, cursor.column, cursor.desired_column) == (0, 0, 0)


def test_cursor_vertical_moves_keep_desired_column() -> None:
    cursor = CursorPosition(3, 2, desired_column=8)

    moved = cursor.move_up(2).move_down()

    assert (moved.line, moved.column, moved.desired_column) == (2, 2, 8)


def test_cursor_horizontal_moves_reset_desired_column() -> None:
    cursor = CursorPosition(0, 4, desired_column=10)

    assert cursor.move_left().desired_column == 3
    assert cursor.move_left(9).column == 0
    assert cursor.move_right(5, max_column=6).column == 6


def test_cursor_clamp_to_buffer() -> None:
    cursor = CursorPosition(9, 9)

    clamped = cursor.clamp_to_buffer(2, 4)

    assert (clamped.line, clamped.column, clamped.desired_column) == (2, 4, 9)


def test_cursor_ordering_and_round_trip() -> None:
    first = CursorPosition(1, 2)
    second = CursorPosition(1, 5)

    assert first.is_before(second)
    assert second.is_after(first)
    assert CursorPosition.from_dict(second.to_dict()) == second


def test_state_clone_is_isolated() -> None:
    state = make_state("alpha", "beta")
    state.registers["a"] = "yanked"
    state.last_char_find = CharFind("f", "x")

    clone = state.clone()
    clone.buffer.set_line(0, "changed")
    clone.registers["a"] = "other"
    clone.cursor = CursorPosition(1, 1)

    assert state.buffer.get_line(0) == "alpha"
    assert state.registers["a"] == "yanked"
    assert (state.cursor.line, state.cursor.column) == (0, 0)
    assert clone.last_char_find == CharFind("f", "x")


def test_state_reset_keeps_buffer() -> None:
    state = make_state("alpha", cursor=(0, 3))
    state.mode = VimMode.VISUAL
    state.registers["a"] = "x"
    state.set_last_search("al", "forward")
    state.last_char_find = CharFind("t", "p")

    state.reset()

    assert state.buffer.get_content() == "alpha"
    assert (state.cursor.line, state.cursor.column) == (0, 0)
    assert state.mode is VimMode.NORMAL
    assert state.registers == {}
    assert state.last_search_pattern is None
    assert state.last_char_find is None


def test_state_snapshot_reports_render_fields() -> None:
    state = make_state("alpha", "beta", cursor=(1, 2))
    state.search_pattern = "et"

    snapshot = state.snapshot()

    assert snapshot.mode is VimMode.NORMAL
    assert (snapshot.cursor.line, snapshot.cursor.column) == (1, 2)
    assert snapshot.content == "alpha\nbeta"
    assert snapshot.search_pattern == "et"


def test_jump_list_skips_duplicates() -> None:
    state = make_state("alpha")

    state.add_jump(CursorPosition(0, 1))
    state.add_jump(CursorPosition(0, 1))

    assert len(state.jump_list) == 1


def test_mode_coerce_accepts_names() -> None:
    assert VimMode.coerce("VISUAL") is VimMode.VISUAL
    assert VimMode.coerce(VimMode.SEARCH) is VimMode.SEARCH
    with pytest.raises(ValueError):
        VimMode.coerce("bogus")


def test_histories_are_bounded() -> None:
    state = make_state("alpha")

    for index in range(HISTORY_LIMIT + 5):
        state.add_command_history(f"cmd{index}")
        state.set_last_search(f"p{index}", "forward")

    assert len(state.command_history) == HISTORY_LIMIT
    assert state.command_history[0] == "cmd5"
    assert state.search_history[-1] == f"p{HISTORY_LIMIT + 4}"
    assert len(state.search_history) == HISTORY_LIMIT


def test_char_find_direction_and_reverse() -> None:
    find = CharFind("t", "x")

    assert find.forward and find.till
    assert find.reversed() == CharFind("T", "x")
    assert not find.reversed().forward
    assert not CharFind("F", "x").till
