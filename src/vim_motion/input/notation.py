"""Keystroke notation: tokenizing pattern strings such as ``g<C-a>``."""

from __future__ import annotations

from typing import Tuple

MODIFIER_ORDER: Tuple[str, ...] = ("C", "A", "S", "M")

ESCAPE = "<Esc>"
ENTER = "<Enter>"
BACKSPACE = "<BS>"
SPACE = "<Space>"


class NotationError(ValueError):
    """Raised when a ``<...>`` group contains whitespace."""


def split_keys(keys: str) -> Tuple[str, ...]:
    """Split a notation string into keystroke tokens.

    A plain character is one token and a ``<...>`` group is one token. A
    ``<`` with no closing ``>`` (or an empty ``<>``) is a literal character.
    """

    tokens: list[str] = []
    index = 0
    while index < len(keys):
        char = keys[index]
        if char == "<":
            end = keys.find(">", index + 1)
            nested = keys.find("<", index + 1)
            if end > index + 1 and (nested == -1 or nested > end):
                body = keys[index + 1 : end]
                if any(part.isspace() for part in body):
                    raise NotationError(f"whitespace in key notation {keys!r}")
                tokens.append(f"<{body}>")
                index = end + 1
                continue
        tokens.append(char)
        index += 1
    return tuple(tokens)


def is_valid_pattern(pattern: str) -> bool:
    if not pattern or pattern.isspace():
        return False
    try:
        return bool(split_keys(pattern))
    except NotationError:
        return False


def is_printable(token: str) -> bool:
    return len(token) == 1 and token.isprintable()


def is_digit_token(token: str) -> bool:
    return len(token) == 1 and token in "0123456789"


__all__ = [
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "MODIFIER_ORDER",
    "NotationError",
    "SPACE",
    "is_digit_token",
    "is_printable",
    "is_valid_pattern",
    "split_keys",
]
