"""Session state shared by every plugin invocation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from .cursor import CursorPosition
from .modes import VimMode
from .text_buffer import TextBuffer

SearchDirection = Literal["forward", "backward"]

HISTORY_LIMIT = 100


def _push_bounded(items: List, value: object, limit: int = HISTORY_LIMIT) -> None:
    items.append(value)
    overflow = len(items) - limit
    if overflow > 0:
        del items[:overflow]


@dataclass(frozen=True, slots=True)
class CharFind:
    """Last ``f`` / ``F`` / ``t`` / ``T`` target, replayed by ``;`` and ``,``."""

    command: str
    char: str

    @property
    def forward(self) -> bool:
        return self.command in ("f", "t")

    @property
    def till(self) -> bool:
        return self.command in ("t", "T")

    def reversed(self) -> "CharFind":
        return CharFind(self.command.swapcase(), self.char)


@dataclass(frozen=True, slots=True)
class CursorSnapshot:
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Read-only view handed to renderers after each keystroke."""

    mode: VimMode
    cursor: CursorSnapshot
    content: str
    search_pattern: str


@dataclass(slots=True)
class VimState:
    """Buffer, cursor, mode and the auxiliary Vim registers/histories."""

    buffer: TextBuffer = field(default_factory=TextBuffer)
    cursor: CursorPosition = field(default_factory=CursorPosition)
    mode: VimMode = VimMode.NORMAL
    count: int = 0
    registers: Dict[str, str] = field(default_factory=dict)
    search_pattern: str = ""
    last_search_pattern: Optional[str] = None
    last_search_direction: SearchDirection = "forward"
    last_search_whole_word: bool = False
    last_char_find: Optional[CharFind] = None
    jump_list: List[CursorPosition] = field(default_factory=list)
    search_history: List[str] = field(default_factory=list)
    command_history: List[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, content: str) -> "VimState":
        return cls(buffer=TextBuffer(content))

    def reset(self) -> None:
        """Back to a fresh session on the same buffer content."""

        self.cursor = CursorPosition()
        self.mode = VimMode.NORMAL
        self.count = 0
        self.registers.clear()
        self.search_pattern = ""
        self.last_search_pattern = None
        self.last_search_direction = "forward"
        self.last_search_whole_word = False
        self.last_char_find = None
        self.jump_list.clear()
        self.search_history.clear()
        self.command_history.clear()

    def set_last_search(
        self, pattern: str, direction: SearchDirection, *, whole_word: bool = False
    ) -> None:
        self.last_search_pattern = pattern
        self.last_search_direction = direction
        self.last_search_whole_word = whole_word
        self.search_pattern = pattern
        if not self.search_history or self.search_history[-1] != pattern:
            _push_bounded(self.search_history, pattern)

    def add_jump(self, position: CursorPosition) -> None:
        if self.jump_list and self.jump_list[-1].same_position(position):
            return
        _push_bounded(self.jump_list, position.clone())

    def add_command_history(self, command: str) -> None:
        _push_bounded(self.command_history, command)

    def clone(self) -> "VimState":
        return VimState(
            buffer=self.buffer.clone(),
            cursor=self.cursor.clone(),
            mode=self.mode,
            count=self.count,
            registers=dict(self.registers),
            search_pattern=self.search_pattern,
            last_search_pattern=self.last_search_pattern,
            last_search_direction=self.last_search_direction,
            last_search_whole_word=self.last_search_whole_word,
            last_char_find=self.last_char_find,
            jump_list=[position.clone() for position in self.jump_list],
            search_history=list(self.search_history),
            command_history=list(self.command_history),
        )

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            mode=self.mode,
            cursor=CursorSnapshot(self.cursor.line, self.cursor.column),
            content=self.buffer.get_content(),
            search_pattern=self.search_pattern,
        )


__all__ = [
    "CharFind",
    "CursorSnapshot",
    "HISTORY_LIMIT",
    "SearchDirection",
    "StateSnapshot",
    "VimState",
]
