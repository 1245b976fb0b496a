"""Line and document anchors: 0 ^ $ g_ gg G %."""

from __future__ import annotations

from typing import Optional

from vim_motion.plugin import ExecutionContext
from vim_motion.state import CursorPosition, TextBuffer

from .base import MotionPlugin
from .brackets import find_matching_bracket
from .word_boundary import first_non_blank, last_non_blank


def first_non_blank_column(text: str) -> int:
    column = first_non_blank(text)
    return 0 if column is None else column


def last_column(text: str) -> int:
    return max(0, len(text) - 1)


def _count_line(buffer: TextBuffer, context: ExecutionContext, default: int) -> int:
    if not context.has_count():
        return default
    return min(context.get_count(), buffer.get_line_count()) - 1


class AnchorMotion(MotionPlugin):
    """A motion whose target is computed once rather than stepped per count."""

    def resolve(
        self, buffer: TextBuffer, cursor: CursorPosition, context: ExecutionContext
    ) -> Optional[CursorPosition]:
        return self.target(buffer, cursor, context)

    def target(
        self, buffer: TextBuffer, cursor: CursorPosition, context: ExecutionContext
    ) -> Optional[CursorPosition]:  # pragma: no cover - abstract override
        raise NotImplementedError


class LineStartMotion(AnchorMotion):
    def __init__(self) -> None:
        super().__init__("movement-0", "Move to column 0", ("0", "<Home>"))

    def target(self, buffer, cursor, context):
        return CursorPosition(cursor.line, 0)


class FirstNonBlankMotion(AnchorMotion):
    def __init__(self) -> None:
        super().__init__(
            "movement-caret", "Move to the first non-blank character", ("^",)
        )

    def target(self, buffer, cursor, context):
        text = buffer.get_line(cursor.line) or ""
        return CursorPosition(cursor.line, first_non_blank_column(text))


class LineEndMotion(AnchorMotion):
    """``$``; with a count, the end of the line ``count - 1`` lines down."""

    def __init__(self) -> None:
        super().__init__("movement-dollar", "Move to the end of the line", ("$", "<End>"))

    def target(self, buffer, cursor, context):
        line = min(cursor.line + context.get_count() - 1, buffer.get_line_count() - 1)
        return CursorPosition(line, last_column(buffer.get_line(line) or ""))


class LastNonBlankMotion(AnchorMotion):
    def __init__(self) -> None:
        super().__init__(
            "movement-g-underscore", "Move to the last non-blank character", ("g_",)
        )

    def target(self, buffer, cursor, context):
        line = min(cursor.line + context.get_count() - 1, buffer.get_line_count() - 1)
        column = last_non_blank(buffer.get_line(line) or "")
        return CursorPosition(line, 0 if column is None else column)


class FirstLineMotion(AnchorMotion):
    """``gg``: first line, or line ``count``; lands on the first non-blank."""

    records_jump = True

    def __init__(self) -> None:
        super().__init__("movement-gg", "Move to the first line", ("gg",))

    def target(self, buffer, cursor, context):
        line = _count_line(buffer, context, 0)
        text = buffer.get_line(line) or ""
        return CursorPosition(line, first_non_blank_column(text))


class LastLineMotion(AnchorMotion):
    """``G``: last line, or line ``count``; keeps the desired column."""

    records_jump = True

    def __init__(self) -> None:
        super().__init__("movement-G", "Move to the last line", ("G",))

    def target(self, buffer, cursor, context):
        line = _count_line(buffer, context, buffer.get_line_count() - 1)
        column = min(cursor.desired, buffer.line_length(line))
        return CursorPosition(line, column, cursor.desired)


class MatchingBracketMotion(AnchorMotion):
    records_jump = True

    def __init__(self) -> None:
        super().__init__("movement-percent", "Jump to the matching bracket", ("%",))

    def target(self, buffer, cursor, context):
        return find_matching_bracket(buffer, cursor)


def anchor_plugins() -> list[AnchorMotion]:
    return [
        LineStartMotion(),
        FirstNonBlankMotion(),
        LineEndMotion(),
        LastNonBlankMotion(),
        FirstLineMotion(),
        LastLineMotion(),
        MatchingBracketMotion(),
    ]


__all__ = [
    "AnchorMotion",
    "FirstLineMotion",
    "FirstNonBlankMotion",
    "LastLineMotion",
    "LastNonBlankMotion",
    "LineEndMotion",
    "LineStartMotion",
    "MatchingBracketMotion",
    "anchor_plugins",
    "first_non_blank_column",
    "last_column",
]
