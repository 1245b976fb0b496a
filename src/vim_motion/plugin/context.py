"""Mutation surface plugins use to act on the live ``VimState``."""

from __future__ import annotations

from typing import Optional

from vim_motion.errors import ErrorCode, VimError
from vim_motion.state import CursorPosition, TextBuffer, VimMode, VimState

UNNAMED_REGISTER = '"'
CLIPBOARD_REGISTER = "*"


def clamp_cursor(buffer: TextBuffer, cursor: CursorPosition) -> CursorPosition:
    """Fit ``cursor`` inside ``buffer``; an empty buffer pins it to (0, 0)."""

    if buffer.is_empty():
        return cursor.clamp_to_buffer(0, 0)
    max_line = buffer.get_line_count() - 1
    line = min(cursor.line, max_line)
    return cursor.clamp_to_buffer(max_line, buffer.line_length(line))


class ExecutionContext:
    """Wraps exactly one live ``VimState``.

    Plugins never hold their own state copy; every cursor, mode or register
    change goes through this object so the cursor invariants are enforced in
    one place.
    """

    def __init__(self, state: Optional[VimState] = None) -> None:
        self._state = state if state is not None else VimState()
        self._argument: Optional[str] = None

    # ------------------------------------------------------------------ state
    def get_state(self) -> VimState:
        return self._state

    def set_state(self, state: VimState) -> None:
        if not isinstance(state, VimState):
            raise TypeError("state must be a VimState")
        self._state = state

    # ----------------------------------------------------------------- buffer
    def get_buffer(self) -> TextBuffer:
        return self._state.buffer

    def set_buffer(self, buffer: TextBuffer) -> None:
        if not isinstance(buffer, TextBuffer):
            raise VimError(ErrorCode.BUFFER_ERROR, "buffer must be a TextBuffer")
        self._state.buffer = buffer
        self._state.cursor = clamp_cursor(buffer, self._state.cursor)

    def get_current_line(self) -> str:
        return self._state.buffer.get_line(self._state.cursor.line) or ""

    def get_line_number(self) -> int:
        return self._state.cursor.line

    # ----------------------------------------------------------------- cursor
    def get_cursor(self) -> CursorPosition:
        return self._state.cursor

    def set_cursor(self, cursor: CursorPosition) -> None:
        if not isinstance(cursor, CursorPosition):
            raise VimError(ErrorCode.CURSOR_ERROR, "cursor must be a CursorPosition")
        self._state.cursor = clamp_cursor(self._state.buffer, cursor)

    def move_cursor(self, delta_line: int, delta_column: int = 0) -> CursorPosition:
        """Relative move, bounded to the buffer.

        A vertical delta lands on ``min(desired_column, len(target))``; a
        horizontal delta resets the desired column to the new column.
        """

        buffer = self._state.buffer
        cursor = self._state.cursor
        if buffer.is_empty():
            return cursor

        max_line = buffer.get_line_count() - 1
        line = min(max(0, cursor.line + delta_line), max_line)
        length = buffer.line_length(line)
        if delta_column:
            column = min(max(0, cursor.column + delta_column), length)
            moved = CursorPosition(line, column)
        else:
            moved = CursorPosition(line, min(cursor.desired, length), cursor.desired)
        self._state.cursor = moved
        return moved

    # ------------------------------------------------------------------- mode
    def get_mode(self) -> VimMode:
        return self._state.mode

    def set_mode(self, mode: VimMode | str) -> None:
        try:
            self._state.mode = VimMode.coerce(mode)
        except ValueError as exc:
            raise VimError(
                ErrorCode.MODE_ERROR, f"unknown mode {mode!r}", original_error=exc
            ) from exc

    def is_mode(self, mode: VimMode | str) -> bool:
        try:
            return self._state.mode is VimMode.coerce(mode)
        except ValueError:
            return False

    # -------------------------------------------------------------- registers
    def get_register(self, name: str) -> Optional[str]:
        return self._state.registers.get(name)

    def set_register(self, name: str, text: str) -> None:
        if not name:
            raise ValueError("register name cannot be empty")
        self._state.registers[name] = text

    def yank_to_register(self, name: str, text: str) -> None:
        self.set_register(name, text)
        if name != UNNAMED_REGISTER:
            self._state.registers[UNNAMED_REGISTER] = text

    def get_clipboard(self) -> Optional[str]:
        return self.get_register(CLIPBOARD_REGISTER)

    def set_clipboard(self, text: str) -> None:
        self.set_register(CLIPBOARD_REGISTER, text)

    # ------------------------------------------------------------ count/jumps
    def get_count(self) -> int:
        return self._state.count or 1

    def has_count(self) -> bool:
        return self._state.count > 0

    def set_count(self, count: int) -> None:
        self._state.count = max(0, int(count))

    def get_argument(self) -> Optional[str]:
        """Token typed after a command that waits for one (the ``x`` of ``fx``)."""

        return self._argument

    def set_argument(self, token: Optional[str]) -> None:
        self._argument = token

    def add_jump(self, position: Optional[CursorPosition] = None) -> None:
        self._state.add_jump(position or self._state.cursor)

    def clone(self) -> "ExecutionContext":
        return ExecutionContext(self._state.clone())


__all__ = [
    "CLIPBOARD_REGISTER",
    "ExecutionContext",
    "UNNAMED_REGISTER",
    "clamp_cursor",
]
