from vim_motion.core import VimExecutor
from vim_motion.plugins.movement import SearchConfig, find_match
from vim_motion.state import CursorPosition, TextBuffer, VimMode


def make_executor(*lines: str, cursor: tuple[int, int] = (0, 0), **kwargs) -> VimExecutor:
    executor = VimExecutor("\n".join(lines), **kwargs)
    executor.get_context().set_cursor(CursorPosition(*cursor))
    return executor


def press(executor: VimExecutor, *keys: str) -> tuple[int, int]:
    for key in keys:
        executor.handle_keystroke(key)
    cursor = executor.get_context().get_cursor()
    return cursor.line, cursor.column


def search(executor: VimExecutor, prompt: str, text: str) -> tuple[int, int]:
    return press(executor, prompt, *text, "<Enter>")


def test_slash_enters_search_mode_and_confirm_moves() -> None:
    executor = make_executor("foo bar", "baz foo")

    executor.handle_keystroke("/")
    assert executor.get_current_mode() is VimMode.SEARCH

    assert press(executor, "f", "o", "o", "<Enter>") == (1, 4)
    state = executor.get_state()
    assert executor.get_current_mode() is VimMode.NORMAL
    assert state.last_search_pattern == "foo"
    assert state.last_search_direction == "forward"
    assert [(jump.line, jump.column) for jump in state.jump_list] == [(0, 0)]


def test_typed_keys_are_search_input_not_motions() -> None:
    executor = make_executor("hjkl here")

    executor.handle_keystroke("/")
    result = executor.handle_keystroke("h")

    assert result.status == "input"
    assert executor.get_state().search_pattern == "h"


def test_incremental_preview_follows_the_input() -> None:
    executor = make_executor("foo bar", "baz foo")

    assert press(executor, "/", "b") == (0, 4)
    assert press(executor, "a", "z") == (1, 0)
    assert press(executor, "<BS>") == (0, 4)


def test_preview_disabled_keeps_cursor_until_confirm() -> None:
    executor = make_executor("foo bar", search_config=SearchConfig(incremental=False))

    assert press(executor, "/", "b") == (0, 0)
    assert press(executor, "<Enter>") == (0, 4)


def test_escape_cancels_and_restores_cursor() -> None:
    executor = make_executor("foo bar")

    press(executor, "/", "b", "a")
    assert press(executor, "<Esc>") == (0, 0)
    assert executor.get_current_mode() is VimMode.NORMAL
    assert executor.get_state().last_search_pattern is None


def test_escape_leaves_search_mode_set_without_a_prompt() -> None:
    executor = make_executor("hello world")
    executor.set_current_mode(VimMode.SEARCH)

    result = executor.handle_keystroke("<Esc>")

    assert result.status == "cancelled"
    assert executor.get_current_mode() is VimMode.NORMAL
    assert press(executor, "l") == (0, 1)


def test_backspace_on_empty_input_cancels() -> None:
    executor = make_executor("foo")

    press(executor, "/", "<BS>")

    assert executor.get_current_mode() is VimMode.NORMAL


def test_not_found_restores_origin() -> None:
    executor = make_executor("foo bar", cursor=(0, 2))

    assert search(executor, "/", "zz") == (0, 2)
    assert executor.get_current_mode() is VimMode.NORMAL
    assert executor.get_state().last_search_pattern == "zz"


def test_question_mark_searches_backward() -> None:
    executor = make_executor("foo bar", "baz foo", cursor=(1, 0))

    assert search(executor, "?", "foo") == (0, 0)
    assert executor.get_state().last_search_direction == "backward"


def test_space_is_part_of_the_pattern() -> None:
    executor = make_executor("foobar foo bar")

    assert press(executor, "/", "o", "<Space>", "b", "<Enter>") == (0, 9)


def test_n_and_N_repeat_with_wrap() -> None:
    executor = make_executor("foo bar", "baz foo")
    search(executor, "/", "foo")

    assert press(executor, "n") == (0, 0)
    assert press(executor, "N") == (1, 4)
    assert press(executor, "2", "n") == (1, 4)


def test_empty_confirm_reuses_last_pattern() -> None:
    executor = make_executor("ab ab ab")
    search(executor, "/", "ab")

    assert press(executor, "/", "<Enter>") == (0, 6)


def test_no_wrap_stops_at_buffer_end() -> None:
    executor = make_executor(
        "foo bar", "baz foo", search_config=SearchConfig(wrap_scan=False)
    )
    search(executor, "/", "foo")

    assert press(executor, "n") == (1, 4)


def test_n_without_previous_search_does_nothing() -> None:
    executor = make_executor("foo")

    result = executor.handle_keystroke("n")

    assert result.status == "executed"
    assert press(executor) == (0, 0)


def test_star_and_hash_match_whole_words() -> None:
    executor = make_executor("foo foobar foo")

    assert press(executor, "*") == (0, 11)
    assert executor.get_state().last_search_whole_word
    assert press(executor, "#") == (0, 0)
    assert press(executor, "n") == (0, 11)


def test_star_on_whitespace_uses_next_word() -> None:
    executor = make_executor("  key other key")

    assert press(executor, "*") == (0, 12)


def test_find_match_wraps_to_origin_line() -> None:
    buffer = TextBuffer("x one one")

    forward = find_match(buffer, CursorPosition(0, 6), "one")
    backward = find_match(buffer, CursorPosition(0, 2), "one", "backward")

    assert forward == CursorPosition(0, 2)
    assert backward == CursorPosition(0, 6)
    assert find_match(buffer, CursorPosition(0, 0), "") is None
    assert find_match(TextBuffer(), CursorPosition(0, 0), "x") is None
