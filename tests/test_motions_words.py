import pytest

from vim_motion.core import VimExecutor
from vim_motion.plugins.movement import word_boundary as wb
from vim_motion.state import CursorPosition, TextBuffer


def make_executor(*lines: str, cursor: tuple[int, int] = (0, 0)) -> VimExecutor:
    executor = VimExecutor("\n".join(lines))
    executor.get_context().set_cursor(CursorPosition(*cursor))
    return executor


def press(executor: VimExecutor, *keys: str) -> tuple[int, int]:
    for key in keys:
        executor.handle_keystroke(key)
    cursor = executor.get_context().get_cursor()
    return cursor.line, cursor.column


def test_ge_and_gE_from_the_last_word() -> None:
    assert press(make_executor("hello.world test", cursor=(0, 12)), "g", "e") == (0, 10)
    assert press(make_executor("hello.world test", cursor=(0, 12)), "g", "E") == (0, 0)


def test_ge_steps_back_word_by_word() -> None:
    executor = make_executor("one two three four", cursor=(0, 17))

    assert press(executor, "g", "e") == (0, 12)
    assert press(executor, "g", "e") == (0, 6)
    assert press(executor, "g", "e") == (0, 2)


def test_ge_with_count() -> None:
    executor = make_executor("one two three four", cursor=(0, 17))

    assert press(executor, "3", "g", "e") == (0, 2)


def test_ge_stops_at_buffer_start() -> None:
    executor = make_executor("one two", cursor=(0, 1))

    assert press(executor, "g", "e") == (0, 1)


def test_ge_skips_blank_lines() -> None:
    executor = make_executor("abc", "", "   ", "def", cursor=(3, 1))

    assert press(executor, "g", "e") == (0, 2)


def test_gE_crosses_lines_to_the_previous_WORD_start() -> None:
    executor = make_executor("x foo.bar", "", "baz", cursor=(2, 0))

    assert press(executor, "g", "E") == (0, 2)


@pytest.mark.parametrize(
    ("line", "column", "keys", "expected"),
    [
        ("hello world", 0, ("w",), (0, 6)),
        ("foo.bar baz", 0, ("w",), (0, 3)),
        ("foo.bar baz", 0, ("w", "w"), (0, 4)),
        ("foo.bar baz", 0, ("W",), (0, 8)),
        ("hello world", 0, ("e",), (0, 4)),
        ("hello world", 4, ("e",), (0, 10)),
        ("foo.bar baz", 0, ("E",), (0, 6)),
        ("hello world", 8, ("b",), (0, 6)),
        ("hello world", 6, ("b",), (0, 0)),
        ("foo.bar baz", 8, ("B",), (0, 0)),
        ("foo.bar baz", 8, ("b",), (0, 4)),
    ],
)
def test_word_motions_on_one_line(line, column, keys, expected) -> None:
    assert press(make_executor(line, cursor=(0, column)), *keys) == expected


def test_w_crosses_to_next_non_blank_line() -> None:
    executor = make_executor("abc", "", "  def")

    assert press(executor, "w") == (2, 2)


def test_w_at_end_of_buffer_stays_put() -> None:
    executor = make_executor("abc", cursor=(0, 1))

    assert press(executor, "w") == (0, 1)


def test_b_crosses_to_previous_line() -> None:
    executor = make_executor("one two", "three", cursor=(1, 0))

    assert press(executor, "b") == (0, 4)


def test_e_crosses_to_next_line() -> None:
    executor = make_executor("ab", "  cd ef", cursor=(0, 1))

    assert press(executor, "e") == (1, 3)


def test_count_w() -> None:
    executor = make_executor("a b c d")

    assert press(executor, "3", "w") == (0, 6)


def test_word_motion_resets_desired_column() -> None:
    executor = make_executor("abcdef", "ab", "abcdef", cursor=(0, 5))
    press(executor, "j")

    press(executor, "b", "j")

    assert executor.get_context().get_cursor().column == 0


def test_char_class_distinguishes_word_and_WORD() -> None:
    assert wb.char_class("a") == "word"
    assert wb.char_class("_") == "word"
    assert wb.char_class(".") == "punctuation"
    assert wb.char_class(".", big=True) == "word"
    assert wb.char_class(" ") == "whitespace"


def test_scanners_return_none_without_a_boundary() -> None:
    buffer = TextBuffer("   ")

    assert wb.next_token_start(buffer, CursorPosition(0, 0)) is None
    assert wb.previous_token_start(buffer, CursorPosition(0, 2)) is None
    assert wb.previous_word_end(buffer, CursorPosition(0, 2)) is None
