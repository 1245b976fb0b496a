"""Modal Vim-style motion, dispatch and mode engine."""

from vim_motion.core import CommandRouter, KeystrokeResult, VimExecutor
from vim_motion.errors import ErrorCode, ErrorHandler, VimError
from vim_motion.input import KeyboardEventNormalizer, KeyEvent
from vim_motion.plugin import (
    AbstractVimPlugin,
    ExecutionContext,
    PluginRegistry,
    VimPlugin,
)
from vim_motion.state import CursorPosition, StateSnapshot, TextBuffer, VimMode, VimState

__all__ = [
    "AbstractVimPlugin",
    "CommandRouter",
    "CursorPosition",
    "ErrorCode",
    "ErrorHandler",
    "ExecutionContext",
    "KeyEvent",
    "KeyboardEventNormalizer",
    "KeystrokeResult",
    "PluginRegistry",
    "StateSnapshot",
    "TextBuffer",
    "VimError",
    "VimExecutor",
    "VimMode",
    "VimPlugin",
    "VimState",
]

__version__ = "0.1.0"
