"""Translate host keyboard events into keystroke notation tokens."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from .notation import SPACE

SPECIAL_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "Enter": "<Enter>",
        "Escape": "<Esc>",
        "Tab": "<Tab>",
        "Backspace": "<BS>",
        "Delete": "<Del>",
        "Insert": "<Insert>",
        "Home": "<Home>",
        "End": "<End>",
        "PageUp": "<PageUp>",
        "PageDown": "<PageDown>",
        "ArrowUp": "<Up>",
        "ArrowDown": "<Down>",
        "ArrowLeft": "<Left>",
        "ArrowRight": "<Right>",
        "PrintScreen": "<PrintScreen>",
        **{f"F{index}": f"<F{index}>" for index in range(1, 13)},
    }
)

MODIFIER_KEYS = frozenset(
    {"Control", "Alt", "Shift", "Meta", "CapsLock", "AltGraph", "OS"}
)


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """Raw key press as delivered by a host toolkit."""

    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")

    @classmethod
    def from_modifiers(cls, key: str, modifiers: Iterable[str] = ()) -> "KeyEvent":
        names = {str(mod).strip().lower() for mod in modifiers}
        return cls(
            key=key,
            ctrl=bool(names & {"ctrl", "control"}),
            alt=bool(names & {"alt", "option"}),
            shift="shift" in names,
            meta=bool(names & {"meta", "cmd", "super"}),
        )

    @property
    def has_command_modifier(self) -> bool:
        return self.ctrl or self.alt or self.meta


class KeyboardEventNormalizer:
    """Produces ``h``, ``<Esc>``, ``<C-a>``, ``<S-Up>`` style tokens.

    Modifiers are always written in Ctrl, Alt, Shift, Meta order. Shift alone
    on a printable character is already reflected in the character itself, so
    it is dropped.
    """

    def __init__(self) -> None:
        self._mappings: Dict[str, str] = {}

    def normalize(self, event: KeyEvent) -> Optional[str]:
        key = event.key
        if key in MODIFIER_KEYS:
            return None
        if key in self._mappings:
            return self._mappings[key]

        if len(key) == 1 and key != " ":
            if event.has_command_modifier:
                return f"<{self._prefix(event)}{key}>"
            return key

        name = self.normalize_key(key)
        if event.has_command_modifier or event.shift:
            return f"<{self._prefix(event)}{name.strip('<>')}>"
        return name

    def normalize_key(self, key: str) -> str:
        if key in self._mappings:
            return self._mappings[key]
        if key == " ":
            return SPACE
        if len(key) == 1:
            return key
        return SPECIAL_KEYS.get(key, f"<{key}>")

    @staticmethod
    def _prefix(event: KeyEvent) -> str:
        parts = []
        if event.ctrl:
            parts.append("C")
        if event.alt:
            parts.append("A")
        if event.shift:
            parts.append("S")
        if event.meta:
            parts.append("M")
        return "".join(f"{part}-" for part in parts)

    def map_key(self, source: str, target: str) -> None:
        self._mappings[source] = target

    def remove_key_mapping(self, source: str) -> None:
        self._mappings.pop(source, None)

    def reset_key_mappings(self) -> None:
        self._mappings.clear()


__all__ = [
    "KeyEvent",
    "KeyboardEventNormalizer",
    "MODIFIER_KEYS",
    "SPECIAL_KEYS",
]
