"""Immutable cursor position with sticky-column tracking."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional


@dataclass(frozen=True, slots=True)
class CursorPosition:
    """``(line, column)`` plus the column the user last chose horizontally.

    Negative coordinates are clamped to zero. ``desired_column`` defaults to
    ``column`` and survives vertical moves, so returning to a long line
    restores the original column.
    """

    line: int = 0
    column: int = 0
    desired_column: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", max(0, int(self.line)))
        object.__setattr__(self, "column", max(0, int(self.column)))
        desired = self.column if self.desired_column is None else self.desired_column
        object.__setattr__(self, "desired_column", max(0, int(desired)))

    @property
    def desired(self) -> int:
        # __post_init__ always fills desired_column
        return self.desired_column if self.desired_column is not None else self.column

    def with_line(self, line: int) -> "CursorPosition":
        return replace(self, line=line)

    def with_column(self, column: int) -> "CursorPosition":
        return CursorPosition(self.line, column)

    def with_columns(self, column: int, desired_column: int) -> "CursorPosition":
        return CursorPosition(self.line, column, desired_column)

    def move_left(self, count: int = 1) -> "CursorPosition":
        return self.with_column(max(0, self.column - count))

    def move_right(
        self, count: int = 1, *, max_column: Optional[int] = None
    ) -> "CursorPosition":
        column = self.column + count
        if max_column is not None:
            column = min(column, max_column)
        return self.with_column(column)

    def move_up(self, count: int = 1) -> "CursorPosition":
        return replace(self, line=max(0, self.line - count))

    def move_down(
        self, count: int = 1, *, max_line: Optional[int] = None
    ) -> "CursorPosition":
        line = self.line + count
        if max_line is not None:
            line = min(line, max_line)
        return replace(self, line=line)

    def clamp_to_buffer(self, max_line: int, max_column: int) -> "CursorPosition":
        line = min(self.line, max(0, max_line))
        column = min(self.column, max(0, max_column))
        if line == self.line and column == self.column:
            return self
        return CursorPosition(line, column, self.desired)

    def is_at_start_of_line(self) -> bool:
        return self.column == 0

    def is_at_end_of_line(self, line_length: int) -> bool:
        return self.column >= max(0, line_length - 1)

    def is_at_start(self) -> bool:
        return self.line == 0 and self.column == 0

    def is_before(self, other: "CursorPosition") -> bool:
        return (self.line, self.column) < (other.line, other.column)

    def is_after(self, other: "CursorPosition") -> bool:
        return (self.line, self.column) > (other.line, other.column)

    def same_position(self, other: "CursorPosition") -> bool:
        """Compare coordinates only, ignoring ``desired_column``."""

        return self.line == other.line and self.column == other.column

    def clone(self) -> "CursorPosition":
        return CursorPosition(self.line, self.column, self.desired)

    def to_dict(self) -> dict[str, int]:
        return {
            "line": self.line,
            "column": self.column,
            "desired_column": self.desired,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> "CursorPosition":
        return cls(
            line=int(data.get("line", 0)),
            column=int(data.get("column", 0)),
            desired_column=data.get("desired_column"),
        )

    def __str__(self) -> str:
        return f"({self.line}, {self.column})"


__all__ = ["CursorPosition"]
