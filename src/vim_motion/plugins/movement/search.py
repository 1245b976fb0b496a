"""Incremental literal search: / ? n N * #."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional

from vim_motion.input import BACKSPACE, ENTER, ESCAPE, SPACE, is_printable
from vim_motion.plugin import AbstractVimPlugin, ExecutionContext
from vim_motion.runtime import telemetry
from vim_motion.state import (
    MOTION_MODES,
    CursorPosition,
    SearchDirection,
    TextBuffer,
    VimMode,
)

from .word_boundary import char_class, token_end, token_start


@dataclass(frozen=True, slots=True)
class SearchConfig:
    wrap_scan: bool = True
    incremental: bool = True


def _is_word_char(char: str) -> bool:
    return char_class(char) == "word"


def _occurrences(text: str, pattern: str, whole_word: bool) -> Iterator[int]:
    start = text.find(pattern)
    while start != -1:
        end = start + len(pattern)
        if not whole_word or (
            (start == 0 or not _is_word_char(text[start - 1]))
            and (end >= len(text) or not _is_word_char(text[end]))
        ):
            yield start
        start = text.find(pattern, start + 1)


def find_match(
    buffer: TextBuffer,
    origin: CursorPosition,
    pattern: str,
    direction: SearchDirection = "forward",
    *,
    wrap: bool = True,
    whole_word: bool = False,
) -> Optional[CursorPosition]:
    """Next occurrence of ``pattern`` strictly after (or before) ``origin``.

    With ``wrap`` the scan continues from the other end of the buffer and
    finally revisits the origin line up to and including the origin column.
    """

    line_count = buffer.get_line_count()
    if not pattern or line_count == 0:
        return None

    forward = direction == "forward"
    for offset in range(line_count + 1):
        raw = origin.line + offset if forward else origin.line - offset
        if not wrap and not 0 <= raw < line_count:
            return None
        number = raw % line_count
        text = buffer.get_line(number) or ""
        starts = list(_occurrences(text, pattern, whole_word))
        if offset == 0:
            if forward:
                starts = [s for s in starts if s > origin.column]
            else:
                starts = [s for s in starts if s < origin.column]
        elif offset == line_count:
            if forward:
                starts = [s for s in starts if s <= origin.column]
            else:
                starts = [s for s in starts if s >= origin.column]
        if starts:
            column = starts[0] if forward else starts[-1]
            if offset and (raw < 0 or raw >= line_count):
                telemetry.record_event(
                    "search.wrapped",
                    level="debug",
                    data={"pattern": pattern, "direction": direction},
                )
            return CursorPosition(number, column)
    return None


def word_under_cursor(buffer: TextBuffer, cursor: CursorPosition) -> Optional[tuple[str, int]]:
    """Keyword at or after the cursor on its line, with its start column."""

    text = buffer.get_line(cursor.line) or ""
    for index in range(cursor.column, len(text)):
        if _is_word_char(text[index]):
            start = token_start(text, index)
            end = token_end(text, index)
            return text[start : end + 1], start
    return None


class SearchController:
    """Owns the in-progress search input shared by the search plugins.

    ``start`` remembers the cursor and mode so ``cancel`` (or a failed
    ``confirm``) can put both back.
    """

    def __init__(self, config: Optional[SearchConfig] = None) -> None:
        self.config = config or SearchConfig()
        self.logger = telemetry.get_logger("vim_motion.search")
        self._origin: Optional[CursorPosition] = None
        self._origin_mode: VimMode = VimMode.NORMAL
        self._direction: SearchDirection = "forward"
        self._input: List[str] = []
        self._input_cursor = 0

    @property
    def active(self) -> bool:
        return self._origin is not None

    @property
    def direction(self) -> SearchDirection:
        return self._direction

    @property
    def pattern(self) -> str:
        return "".join(self._input)

    @property
    def input_cursor(self) -> int:
        return self._input_cursor

    def start(self, context: ExecutionContext, direction: SearchDirection) -> None:
        self._origin = context.get_cursor().clone()
        self._origin_mode = context.get_mode()
        self._direction = direction
        self._input.clear()
        self._input_cursor = 0
        context.get_state().search_pattern = ""
        context.set_mode(VimMode.SEARCH)
        telemetry.record_event("search.start", data={"direction": direction})

    def add_search_character(self, context: ExecutionContext, char: str) -> None:
        if not self.active:
            return
        self._input.insert(self._input_cursor, char)
        self._input_cursor += 1
        self._sync(context)

    def remove_search_character(self, context: ExecutionContext) -> None:
        if not self.active:
            return
        if not self._input:
            self.cancel(context)
            return
        if self._input_cursor == 0:
            return
        self._input_cursor -= 1
        del self._input[self._input_cursor]
        self._sync(context)

    def move_input_cursor(self, delta: int) -> None:
        self._input_cursor = min(max(0, self._input_cursor + delta), len(self._input))

    def confirm(self, context: ExecutionContext) -> bool:
        if self._origin is None:
            return False
        state = context.get_state()
        pattern = self.pattern or state.last_search_pattern or ""
        origin, direction = self._origin, self._direction
        self._finish(context)

        if not pattern:
            context.set_cursor(origin)
            state.search_pattern = ""
            return False

        found = find_match(
            context.get_buffer(),
            origin,
            pattern,
            direction,
            wrap=self.config.wrap_scan,
        )
        state.set_last_search(pattern, direction)
        if found is None:
            context.set_cursor(origin)
            telemetry.record_event(
                "search.not_found",
                level="warning",
                data={"pattern": pattern, "direction": direction},
            )
            return False

        context.add_jump(origin)
        context.set_cursor(found)
        telemetry.record_event(
            "search.confirm",
            data={"pattern": pattern, "line": found.line, "column": found.column},
        )
        return True

    def cancel(self, context: ExecutionContext) -> None:
        if self._origin is None:
            return
        origin = self._origin
        self._finish(context)
        context.set_cursor(origin)
        state = context.get_state()
        state.search_pattern = state.last_search_pattern or ""
        telemetry.record_event("search.cancel", level="debug")

    def handle_input(self, context: ExecutionContext, token: str) -> bool:
        """Feed one keystroke typed while in SEARCH mode."""

        if not self.active:
            return False
        if token == ENTER:
            self.confirm(context)
        elif token == ESCAPE:
            self.cancel(context)
        elif token == BACKSPACE:
            self.remove_search_character(context)
        elif token == "<Left>":
            self.move_input_cursor(-1)
        elif token == "<Right>":
            self.move_input_cursor(1)
        elif token == SPACE:
            self.add_search_character(context, " ")
        elif is_printable(token):
            self.add_search_character(context, token)
        else:
            return False
        return True

    def _finish(self, context: ExecutionContext) -> None:
        mode = self._origin_mode
        self._origin = None
        self._input.clear()
        self._input_cursor = 0
        context.set_mode(mode)

    def _sync(self, context: ExecutionContext) -> None:
        context.get_state().search_pattern = self.pattern
        if not self.config.incremental or self._origin is None:
            return
        preview = find_match(
            context.get_buffer(),
            self._origin,
            self.pattern,
            self._direction,
            wrap=self.config.wrap_scan,
        )
        context.set_cursor(preview or self._origin)


class SearchStartPlugin(AbstractVimPlugin):
    def __init__(self, controller: SearchController, direction: SearchDirection):
        pattern = "/" if direction == "forward" else "?"
        super().__init__(
            f"movement-search-{direction}",
            f"Start a {direction} search ({pattern} key)",
            (pattern,),
            MOTION_MODES,
        )
        self.controller = controller
        self.direction = direction

    def perform_action(self, context: ExecutionContext) -> None:
        self.controller.start(context, self.direction)


class SearchRepeatPlugin(AbstractVimPlugin):
    """``n`` repeats the last search; ``N`` repeats it the other way."""

    def __init__(self, controller: SearchController, *, reverse: bool = False):
        super().__init__(
            "movement-search-prev" if reverse else "movement-search-next",
            "Repeat the last search in the opposite direction"
            if reverse
            else "Repeat the last search",
            ("N",) if reverse else ("n",),
            MOTION_MODES,
        )
        self.controller = controller
        self.reverse = reverse

    def is_valid_context(self, context: ExecutionContext) -> bool:
        return not context.get_buffer().is_empty()

    def perform_action(self, context: ExecutionContext) -> None:
        state = context.get_state()
        pattern = state.last_search_pattern
        if not pattern:
            telemetry.record_event("search.no_previous", level="warning")
            return
        direction: SearchDirection = state.last_search_direction
        if self.reverse:
            direction = "backward" if direction == "forward" else "forward"

        start = context.get_cursor()
        current = start
        for _ in range(context.get_count()):
            found = find_match(
                context.get_buffer(),
                current,
                pattern,
                direction,
                wrap=self.controller.config.wrap_scan,
                whole_word=state.last_search_whole_word,
            )
            if found is None:
                break
            current = found
        if current.same_position(start):
            return
        context.add_jump(start)
        context.set_cursor(current)
        state.search_pattern = pattern


class SearchWordPlugin(AbstractVimPlugin):
    """``*`` / ``#``: whole-word search for the keyword under the cursor."""

    def __init__(self, controller: SearchController, direction: SearchDirection):
        pattern = "*" if direction == "forward" else "#"
        super().__init__(
            f"movement-search-word-{direction}",
            f"Search {direction} for the word under the cursor ({pattern} key)",
            (pattern,),
            MOTION_MODES,
        )
        self.controller = controller
        self.direction = direction

    def is_valid_context(self, context: ExecutionContext) -> bool:
        return not context.get_buffer().is_empty()

    def perform_action(self, context: ExecutionContext) -> None:
        buffer = context.get_buffer()
        cursor = context.get_cursor()
        keyword = word_under_cursor(buffer, cursor)
        if keyword is None:
            return
        word, start = keyword
        state = context.get_state()
        state.set_last_search(word, self.direction, whole_word=True)

        current = CursorPosition(cursor.line, start)
        for _ in range(context.get_count()):
            found = find_match(
                buffer,
                current,
                word,
                self.direction,
                wrap=self.controller.config.wrap_scan,
                whole_word=True,
            )
            if found is None:
                break
            current = found
        if current.same_position(cursor):
            return
        context.add_jump(cursor)
        context.set_cursor(current)


def search_plugins(controller: SearchController) -> list[AbstractVimPlugin]:
    return [
        SearchStartPlugin(controller, "forward"),
        SearchStartPlugin(controller, "backward"),
        SearchRepeatPlugin(controller),
        SearchRepeatPlugin(controller, reverse=True),
        SearchWordPlugin(controller, "forward"),
        SearchWordPlugin(controller, "backward"),
    ]


__all__ = [
    "SearchConfig",
    "SearchController",
    "SearchRepeatPlugin",
    "SearchStartPlugin",
    "SearchWordPlugin",
    "find_match",
    "search_plugins",
    "word_under_cursor",
]
