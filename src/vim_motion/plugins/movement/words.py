"""w/b/e/ge and their WORD counterparts W/B/E/gE."""

from __future__ import annotations

from typing import Callable, Optional

from vim_motion.state import CursorPosition, TextBuffer

from . import word_boundary as wb
from .base import MotionPlugin

Scanner = Callable[[TextBuffer, CursorPosition], Optional[CursorPosition]]


class WordMotion(MotionPlugin):
    """Motion driven by one of the ``word_boundary`` scanners.

    Each count repetition starts from where the previous one landed, so
    ``3ge`` walks three boundaries back.
    """

    def __init__(self, name: str, description: str, pattern: str, scanner: Scanner):
        super().__init__(name, description, (pattern,))
        self._scanner = scanner

    def step(
        self, buffer: TextBuffer, cursor: CursorPosition
    ) -> Optional[CursorPosition]:
        found = self._scanner(buffer, cursor)
        if found is None:
            return None
        # a word jump is a horizontal intent: reset the sticky column
        return CursorPosition(found.line, found.column)


def word_plugins() -> list[WordMotion]:
    return [
        WordMotion(
            "movement-w",
            "Move to the start of the next word",
            "w",
            lambda buffer, cursor: wb.next_token_start(buffer, cursor),
        ),
        WordMotion(
            "movement-W",
            "Move to the start of the next WORD",
            "W",
            lambda buffer, cursor: wb.next_token_start(buffer, cursor, big=True),
        ),
        WordMotion(
            "movement-b",
            "Move to the start of the previous word",
            "b",
            lambda buffer, cursor: wb.previous_token_start(buffer, cursor),
        ),
        WordMotion(
            "movement-B",
            "Move to the start of the previous WORD",
            "B",
            lambda buffer, cursor: wb.previous_token_start(buffer, cursor, big=True),
        ),
        WordMotion(
            "movement-e",
            "Move to the end of the word",
            "e",
            lambda buffer, cursor: wb.next_token_end(buffer, cursor),
        ),
        WordMotion(
            "movement-E",
            "Move to the end of the WORD",
            "E",
            lambda buffer, cursor: wb.next_token_end(buffer, cursor, big=True),
        ),
        WordMotion(
            "movement-ge",
            "Move to the end of the previous word",
            "ge",
            wb.previous_word_end,
        ),
        WordMotion(
            "movement-gE",
            "Move back to the previous WORD boundary",
            "gE",
            wb.previous_word_boundary_big,
        ),
    ]


__all__ = ["WordMotion", "word_plugins"]
