"""Editor mode tags."""

from __future__ import annotations

from enum import Enum


class VimMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    COMMAND = "command"
    REPLACE = "replace"
    SELECT = "select"
    SEARCH = "search"

    @classmethod
    def coerce(cls, value: "VimMode | str") -> "VimMode":
        """Accept either a member or its (case-insensitive) value/name."""

        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        return cls(text)


MOTION_MODES: tuple[VimMode, ...] = (VimMode.NORMAL, VimMode.VISUAL)

__all__ = ["MOTION_MODES", "VimMode"]
