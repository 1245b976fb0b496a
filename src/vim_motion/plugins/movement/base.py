"""Shared template for cursor-only commands."""

from __future__ import annotations

from typing import Iterable, Optional

from vim_motion.plugin import AbstractVimPlugin, ExecutionContext
from vim_motion.state import MOTION_MODES, CursorPosition, TextBuffer, VimMode


class MotionPlugin(AbstractVimPlugin):
    """Moves the cursor by applying ``step`` once per count.

    Subclasses implement ``step``; returning ``None`` (or the same position)
    ends the repetition early. Motions never touch the buffer and are no-ops
    on an empty one. With ``records_jump`` set, a move that changes line adds
    the starting position to the jump list.
    """

    records_jump = False

    def __init__(
        self,
        name: str,
        description: str,
        patterns: Iterable[str],
        modes: Iterable[VimMode] = MOTION_MODES,
    ) -> None:
        super().__init__(name, description, patterns, modes)

    def is_valid_context(self, context: ExecutionContext) -> bool:
        return not context.get_buffer().is_empty()

    def perform_action(self, context: ExecutionContext) -> None:
        buffer = context.get_buffer()
        start = context.get_cursor()
        target = self.resolve(buffer, start, context)
        if target is None or target == start:
            return
        if self.records_jump and target.line != start.line:
            context.add_jump(start)
        context.set_cursor(target)

    def resolve(
        self, buffer: TextBuffer, cursor: CursorPosition, context: ExecutionContext
    ) -> Optional[CursorPosition]:
        current = cursor
        for _ in range(context.get_count()):
            moved = self.step(buffer, current)
            if moved is None or moved == current:
                break
            current = moved
        return current

    def step(
        self, buffer: TextBuffer, cursor: CursorPosition
    ) -> Optional[CursorPosition]:  # pragma: no cover - abstract override
        raise NotImplementedError


__all__ = ["MotionPlugin"]
