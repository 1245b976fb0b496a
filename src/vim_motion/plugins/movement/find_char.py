"""In-line character find: f F t T and the ; , repeats."""

from __future__ import annotations

from typing import List, Optional

from vim_motion.input import SPACE, is_printable
from vim_motion.plugin import ExecutionContext
from vim_motion.runtime import telemetry
from vim_motion.state import CharFind, CursorPosition, TextBuffer

from .base import MotionPlugin

FIND_COMMANDS = {
    "f": "Find character forward",
    "F": "Find character backward",
    "t": "Move till before character forward",
    "T": "Move till after character backward",
}


def argument_char(token: Optional[str]) -> Optional[str]:
    """Character a find argument token stands for, or ``None``."""

    if token is None:
        return None
    if token == SPACE:
        return " "
    if token == "<Tab>":
        return "\t"
    if is_printable(token):
        return token
    return None


def find_char_column(
    text: str,
    column: int,
    char: str,
    *,
    forward: bool,
    till: bool,
    count: int = 1,
    repeat: bool = False,
) -> Optional[int]:
    """Column of the ``count``-th ``char`` after (or before) ``column``.

    ``till`` stops one short of the match. A repeated till starts one column
    further so a cursor already parked next to ``char`` moves on.
    """

    step = 1 if forward else -1
    index = column + step
    if till and repeat:
        index += step
    seen = 0
    while 0 <= index < len(text):
        if text[index] == char:
            seen += 1
            if seen == count:
                return index - step if till else index
        index += step
    return None


def _find_target(
    buffer: TextBuffer,
    cursor: CursorPosition,
    find: CharFind,
    count: int,
    repeat: bool = False,
) -> Optional[CursorPosition]:
    text = buffer.get_line(cursor.line) or ""
    column = find_char_column(
        text,
        cursor.column,
        find.char,
        forward=find.forward,
        till=find.till,
        count=count,
        repeat=repeat,
    )
    if column is None:
        return None
    return CursorPosition(cursor.line, column)


class FindCharMotion(MotionPlugin):
    """``f`` / ``F`` / ``t`` / ``T``; the next keystroke names the character.

    The find is remembered even when the character is not on the line.
    """

    takes_argument = True

    def __init__(self, command: str) -> None:
        if command not in FIND_COMMANDS:
            raise ValueError(f"unknown find command {command!r}")
        super().__init__(f"movement-{command}", FIND_COMMANDS[command], (command,))
        self.command = command

    def resolve(self, buffer, cursor, context):
        char = argument_char(context.get_argument())
        if char is None:
            return None
        find = CharFind(self.command, char)
        context.get_state().last_char_find = find
        return _find_target(buffer, cursor, find, context.get_count())


class RepeatFindMotion(MotionPlugin):
    """``;`` repeats the last find, ``,`` repeats it in the other direction."""

    def __init__(self, *, reverse: bool = False) -> None:
        if reverse:
            super().__init__(
                "movement-comma", "Repeat last character find backward", (",",)
            )
        else:
            super().__init__(
                "movement-semicolon", "Repeat last character find", (";",)
            )
        self.reverse = reverse

    def resolve(self, buffer, cursor, context):
        find = context.get_state().last_char_find
        if find is None:
            telemetry.record_event("find.no_previous", level="debug")
            return None
        if self.reverse:
            find = find.reversed()
        return _find_target(buffer, cursor, find, context.get_count(), repeat=True)


def find_char_plugins() -> List[MotionPlugin]:
    return [
        *(FindCharMotion(command) for command in FIND_COMMANDS),
        RepeatFindMotion(),
        RepeatFindMotion(reverse=True),
    ]


__all__ = [
    "FIND_COMMANDS",
    "FindCharMotion",
    "RepeatFindMotion",
    "argument_char",
    "find_char_column",
    "find_char_plugins",
]
