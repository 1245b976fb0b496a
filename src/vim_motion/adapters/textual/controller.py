"""Bridge between Textual key events and ``VimExecutor``.

Importing this module does not require Textual; only ``app`` does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from vim_motion.core import KeystrokeResult, VimExecutor
from vim_motion.input import KeyEvent
from vim_motion.state import StateSnapshot, VimMode

# Textual key names -> the DOM-style names the normalizer understands
TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "escape": "Escape",
    "enter": "Enter",
    "return": "Enter",
    "tab": "Tab",
    "backspace": "Backspace",
    "delete": "Delete",
    "insert": "Insert",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "space": " ",
    **{f"f{index}": f"F{index}" for index in range(1, 13)},
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def textual_key_event(
    key: str, *, character: Optional[str] = None, modifiers: Iterable[str] = ()
) -> KeyEvent:
    """Turn Textual's ``ctrl+shift+up`` style key into a ``KeyEvent``."""

    parts = key.split("+")
    base = parts[-1]
    names = [*parts[:-1], *modifiers]
    if character and len(character) == 1 and character.isprintable():
        name = character
    else:
        name = TEXTUAL_KEY_NAMES.get(base.lower(), base)
    return KeyEvent.from_modifiers(name, names)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[StateSnapshot], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Forwards keys to the executor and pushes snapshots back to the UI."""

    def __init__(self, executor: VimExecutor, hooks: TextualUIHooks) -> None:
        self.executor = executor
        self.hooks = hooks
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> KeystrokeResult:
        event = textual_key_event(key, character=character, modifiers=modifiers)
        self._log("key ->", key=key, event=event)
        result = self.executor.handle_keyboard_event(event)
        self._log(
            "result <-",
            status=result.status,
            plugin=result.plugin,
            message=result.message,
        )
        self.hooks.update_status(self._status_line(result))
        self._refresh()
        return result

    def process_timeouts(self) -> bool:
        expired = self.executor.process_timeouts()
        if expired:
            self.hooks.update_status("timeout")
            self._log("timeout ->", mode=self.executor.get_current_mode().value)
            self._refresh()
        return expired

    def _status_line(self, result: KeystrokeResult) -> str:
        mode = self.executor.get_current_mode().value.upper()
        pending = "".join(self.executor.pending_keys())
        label = result.plugin or result.status
        if pending:
            return f"-- {mode} -- {pending}"
        return f"-- {mode} -- {label}"

    def _refresh(self) -> None:
        snapshot = self.executor.snapshot()
        self.hooks.update_buffer(snapshot)
        self.hooks.show_command(self._command_line(snapshot))

    def _command_line(self, snapshot: StateSnapshot) -> str:
        if snapshot.mode is not VimMode.SEARCH:
            return ""
        defaults = self.executor.defaults
        prefix = "/"
        if defaults is not None and defaults.search.direction == "backward":
            prefix = "?"
        return f"{prefix}{snapshot.search_pattern}"

    def _log(self, prefix: str, **fields: object) -> None:
        snapshot = self.executor.snapshot()
        parts = [
            prefix,
            f"mode={snapshot.mode.value!r}",
            f"cursor=({snapshot.cursor.line}, {snapshot.cursor.column})",
        ]
        parts.extend(f"{key}={value!r}" for key, value in fields.items() if value is not None)
        self.hooks.log(" ".join(parts))


__all__ = [
    "TEXTUAL_KEY_NAMES",
    "TextualUIHooks",
    "TextualVimAdapter",
    "textual_key_event",
]
