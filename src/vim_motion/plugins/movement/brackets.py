"""Matching-bracket search for ``%``."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from vim_motion.state import CursorPosition, TextBuffer

BRACKET_PAIRS: tuple[tuple[str, str], ...] = (
    ("(", ")"),
    ("[", "]"),
    ("{", "}"),
    ("<", ">"),
)

OPEN_TO_CLOSE: Mapping[str, str] = MappingProxyType(dict(BRACKET_PAIRS))
CLOSE_TO_OPEN: Mapping[str, str] = MappingProxyType(
    {close: open_ for open_, close in BRACKET_PAIRS}
)


def is_bracket(char: str) -> bool:
    return char in OPEN_TO_CLOSE or char in CLOSE_TO_OPEN


def _scan_forward(
    buffer: TextBuffer, line: int, column: int, open_: str, close: str
) -> Optional[CursorPosition]:
    depth = 1
    for number in range(line, buffer.get_line_count()):
        text = buffer.get_line(number) or ""
        start = column + 1 if number == line else 0
        for index in range(start, len(text)):
            char = text[index]
            if char == open_:
                depth += 1
            elif char == close:
                depth -= 1
                if depth == 0:
                    return CursorPosition(number, index)
    return None


def _scan_backward(
    buffer: TextBuffer, line: int, column: int, open_: str, close: str
) -> Optional[CursorPosition]:
    depth = 1
    for number in range(line, -1, -1):
        text = buffer.get_line(number) or ""
        start = column - 1 if number == line else len(text) - 1
        for index in range(start, -1, -1):
            char = text[index]
            if char == close:
                depth += 1
            elif char == open_:
                depth -= 1
                if depth == 0:
                    return CursorPosition(number, index)
    return None


def match_bracket_at(
    buffer: TextBuffer, line: int, column: int
) -> Optional[CursorPosition]:
    char = buffer.get_char_at(line, column)
    if char is None:
        return None
    if char in OPEN_TO_CLOSE:
        return _scan_forward(buffer, line, column, char, OPEN_TO_CLOSE[char])
    if char in CLOSE_TO_OPEN:
        return _scan_backward(buffer, line, column, CLOSE_TO_OPEN[char], char)
    return None


def find_matching_bracket(
    buffer: TextBuffer, cursor: CursorPosition
) -> Optional[CursorPosition]:
    """Partner of the bracket under the cursor, or of the next bracket to the
    right on the cursor line. Nesting is respected and the partner may be on
    another line."""

    text = buffer.get_line(cursor.line)
    if text is None:
        return None
    for index in range(cursor.column, len(text)):
        if is_bracket(text[index]):
            return match_bracket_at(buffer, cursor.line, index)
    return None


__all__ = [
    "BRACKET_PAIRS",
    "find_matching_bracket",
    "is_bracket",
    "match_bracket_at",
]
