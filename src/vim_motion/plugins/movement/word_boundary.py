"""word/WORD boundary scanning across buffer lines.

*word* splits on transitions between three classes: word characters
(alphanumerics and ``_``), punctuation, and whitespace. *WORD* only
distinguishes whitespace from everything else, so ``hello.world`` is one
WORD but three words.

Every scanner returns the new position, or ``None`` when there is no
boundary left in that direction (the caller leaves the cursor alone).
"""

from __future__ import annotations

from typing import Literal, Optional

from vim_motion.state import CursorPosition, TextBuffer

CharClass = Literal["whitespace", "word", "punctuation"]


def char_class(char: str, big: bool = False) -> CharClass:
    if char.isspace():
        return "whitespace"
    if big or char.isalnum() or char == "_":
        return "word"
    return "punctuation"


def first_non_blank(text: str) -> Optional[int]:
    for index, char in enumerate(text):
        if not char.isspace():
            return index
    return None


def last_non_blank(text: str) -> Optional[int]:
    for index in range(len(text) - 1, -1, -1):
        if not text[index].isspace():
            return index
    return None


def token_start(text: str, index: int, big: bool = False) -> int:
    kind = char_class(text[index], big)
    while index > 0 and char_class(text[index - 1], big) == kind:
        index -= 1
    return index


def token_end(text: str, index: int, big: bool = False) -> int:
    kind = char_class(text[index], big)
    while index + 1 < len(text) and char_class(text[index + 1], big) == kind:
        index += 1
    return index


def _skip_blanks_back(text: str, index: int) -> int:
    while index >= 0 and text[index].isspace():
        index -= 1
    return index


def _leave_token_back(text: str, column: int, big: bool) -> int:
    """Index just before the token under ``column`` (or ``column - 1``)."""

    index = min(column, len(text)) - 1
    if column < len(text) and not text[column].isspace():
        kind = char_class(text[column], big)
        index = column - 1
        while index >= 0 and char_class(text[index], big) == kind:
            index -= 1
    return index


def _lines_after(buffer: TextBuffer, line: int):
    for number in range(line + 1, buffer.get_line_count()):
        yield number, buffer.get_line(number) or ""


def _lines_before(buffer: TextBuffer, line: int):
    for number in range(min(line, buffer.get_line_count()) - 1, -1, -1):
        yield number, buffer.get_line(number) or ""


def next_token_start(
    buffer: TextBuffer, cursor: CursorPosition, big: bool = False
) -> Optional[CursorPosition]:
    """``w`` / ``W``: start of the next token, crossing onto non-blank lines."""

    text = buffer.get_line(cursor.line) or ""
    index = cursor.column
    if index < len(text):
        if not text[index].isspace():
            index = token_end(text, index, big) + 1
        while index < len(text) and text[index].isspace():
            index += 1
        if index < len(text):
            return CursorPosition(cursor.line, index)

    for number, line in _lines_after(buffer, cursor.line):
        start = first_non_blank(line)
        if start is not None:
            return CursorPosition(number, start)
    return None


def next_token_end(
    buffer: TextBuffer, cursor: CursorPosition, big: bool = False
) -> Optional[CursorPosition]:
    """``e`` / ``E``: end of the current token, or of the next one when
    already sitting on an end."""

    text = buffer.get_line(cursor.line) or ""
    index = cursor.column + 1
    while index < len(text) and text[index].isspace():
        index += 1
    if index < len(text):
        return CursorPosition(cursor.line, token_end(text, index, big))

    for number, line in _lines_after(buffer, cursor.line):
        start = first_non_blank(line)
        if start is not None:
            return CursorPosition(number, token_end(line, start, big))
    return None


def previous_token_start(
    buffer: TextBuffer, cursor: CursorPosition, big: bool = False
) -> Optional[CursorPosition]:
    """``b`` / ``B``: start of the current token, or of the previous one when
    already sitting on a start."""

    text = buffer.get_line(cursor.line) or ""
    index = _skip_blanks_back(text, min(cursor.column, len(text)) - 1)
    if index >= 0:
        return CursorPosition(cursor.line, token_start(text, index, big))

    for number, line in _lines_before(buffer, cursor.line):
        end = last_non_blank(line)
        if end is not None:
            return CursorPosition(number, token_start(line, end, big))
    return None


def previous_word_end(
    buffer: TextBuffer, cursor: CursorPosition
) -> Optional[CursorPosition]:
    """``ge``: last character of the word before the one under the cursor.

    Empty and whitespace-only lines are skipped; at the start of the buffer
    there is nothing to move to.
    """

    text = buffer.get_line(cursor.line) or ""
    index = _skip_blanks_back(text, _leave_token_back(text, cursor.column, False))
    if index >= 0:
        return CursorPosition(cursor.line, index)

    for number, line in _lines_before(buffer, cursor.line):
        end = last_non_blank(line)
        if end is not None:
            return CursorPosition(number, end)
    return None


def previous_word_boundary_big(
    buffer: TextBuffer, cursor: CursorPosition
) -> Optional[CursorPosition]:
    """``gE``: first column of the WORD before the one under the cursor.

    On ``hello.world test`` with the cursor on ``test`` this lands on column
    0. Lines are crossed the same way as ``ge``.
    """

    text = buffer.get_line(cursor.line) or ""
    index = _skip_blanks_back(text, _leave_token_back(text, cursor.column, True))
    if index >= 0:
        return CursorPosition(cursor.line, token_start(text, index, True))

    for number, line in _lines_before(buffer, cursor.line):
        end = last_non_blank(line)
        if end is not None:
            return CursorPosition(number, token_start(line, end, True))
    return None


__all__ = [
    "CharClass",
    "char_class",
    "first_non_blank",
    "last_non_blank",
    "next_token_end",
    "next_token_start",
    "previous_token_start",
    "previous_word_boundary_big",
    "previous_word_end",
    "token_end",
    "token_start",
]
