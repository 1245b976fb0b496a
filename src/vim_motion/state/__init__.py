"""Text, cursor, mode and session state."""

from .cursor import CursorPosition
from .modes import MOTION_MODES, VimMode
from .text_buffer import TextBuffer, split_lines
from .vim_state import (
    CharFind,
    CursorSnapshot,
    SearchDirection,
    StateSnapshot,
    VimState,
)

__all__ = [
    "CharFind",
    "CursorPosition",
    "CursorSnapshot",
    "MOTION_MODES",
    "SearchDirection",
    "StateSnapshot",
    "TextBuffer",
    "VimMode",
    "VimState",
    "split_lines",
]
