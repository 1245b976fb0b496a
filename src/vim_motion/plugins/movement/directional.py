"""h/j/k/l stepping with the sticky-column rule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from vim_motion.state import CursorPosition, TextBuffer

from .base import MotionPlugin

Direction = Literal["left", "right", "up", "down"]


@dataclass(frozen=True, slots=True)
class MovementConfig:
    step: int = 1

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError("step must be positive")


def step_horizontal(
    buffer: TextBuffer, cursor: CursorPosition, delta: int
) -> CursorPosition:
    length = buffer.line_length(cursor.line)
    column = min(max(0, cursor.column + delta), length)
    if column == cursor.column:
        return cursor
    return CursorPosition(cursor.line, column)


def step_vertical(
    buffer: TextBuffer, cursor: CursorPosition, delta: int
) -> CursorPosition:
    # column comes from the target line; desired_column is carried unchanged
    line = min(max(0, cursor.line + delta), buffer.get_line_count() - 1)
    if line == cursor.line:
        return cursor
    column = min(cursor.desired, buffer.line_length(line))
    return CursorPosition(line, column, cursor.desired)


class DirectionalMotion(MotionPlugin):
    def __init__(
        self,
        direction: Direction,
        patterns: Iterable[str],
        *,
        config: Optional[MovementConfig] = None,
    ) -> None:
        super().__init__(
            f"movement-{direction}",
            f"Move the cursor {direction}",
            patterns,
        )
        self.direction = direction
        self.config = config or MovementConfig()

    def step(self, buffer: TextBuffer, cursor: CursorPosition) -> CursorPosition:
        size = self.config.step
        if self.direction == "left":
            return step_horizontal(buffer, cursor, -size)
        if self.direction == "right":
            return step_horizontal(buffer, cursor, size)
        if self.direction == "up":
            return step_vertical(buffer, cursor, -size)
        return step_vertical(buffer, cursor, size)


def directional_plugins(config: Optional[MovementConfig] = None) -> list[DirectionalMotion]:
    return [
        DirectionalMotion("left", ("h", "<Left>", "<BS>"), config=config),
        DirectionalMotion("down", ("j", "<Down>"), config=config),
        DirectionalMotion("up", ("k", "<Up>"), config=config),
        DirectionalMotion("right", ("l", "<Right>", "<Space>"), config=config),
    ]


__all__ = [
    "DirectionalMotion",
    "MovementConfig",
    "directional_plugins",
    "step_horizontal",
    "step_vertical",
]
