"""Textual integration; ``app`` additionally requires the textual extra."""

from .controller import TEXTUAL_KEY_NAMES, TextualUIHooks, TextualVimAdapter, textual_key_event

__all__ = [
    "TEXTUAL_KEY_NAMES",
    "TextualUIHooks",
    "TextualVimAdapter",
    "textual_key_event",
]
