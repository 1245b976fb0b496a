"""Keystroke notation and keyboard-event normalization."""

from .normalizer import MODIFIER_KEYS, SPECIAL_KEYS, KeyboardEventNormalizer, KeyEvent
from .notation import (
    BACKSPACE,
    ENTER,
    ESCAPE,
    SPACE,
    NotationError,
    is_digit_token,
    is_printable,
    is_valid_pattern,
    split_keys,
)

__all__ = [
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "KeyEvent",
    "KeyboardEventNormalizer",
    "MODIFIER_KEYS",
    "NotationError",
    "SPACE",
    "SPECIAL_KEYS",
    "is_digit_token",
    "is_printable",
    "is_valid_pattern",
    "split_keys",
]
