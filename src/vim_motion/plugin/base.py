"""Plugin capability contract and the common enable/mode-gating template."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, Tuple, runtime_checkable

from vim_motion.input import is_valid_pattern
from vim_motion.state import VimMode

from .context import ExecutionContext


@runtime_checkable
class VimPlugin(Protocol):
    """Capability set every command exposes to the registry and router."""

    name: str
    version: str
    description: str
    patterns: Tuple[str, ...]
    modes: Tuple[VimMode, ...]

    def initialize(self, context: ExecutionContext) -> None: ...

    def destroy(self) -> None: ...

    def execute(self, context: ExecutionContext) -> None: ...

    def can_execute(self, context: ExecutionContext) -> bool: ...

    def validate_pattern(self, pattern: str) -> bool: ...

    def on_register(self) -> None: ...

    def on_unregister(self) -> None: ...

    def enable(self) -> None: ...

    def disable(self) -> None: ...

    def is_enabled(self) -> bool: ...


class AbstractVimPlugin:
    """Template for concrete commands.

    ``execute`` runs ``perform_action`` only when the plugin is enabled, the
    context is in one of ``modes`` and ``is_valid_context`` agrees; otherwise
    it is a silent no-op.

    With ``takes_argument`` set, the executor waits for one more keystroke
    after a pattern match and exposes it through ``context.get_argument()``.
    """

    takes_argument = False

    def __init__(
        self,
        name: str,
        description: str,
        patterns: Iterable[str],
        modes: Iterable[VimMode | str],
        *,
        version: str = "1.0.0",
    ) -> None:
        self.name = name
        self.version = version
        self.description = description
        self.patterns: Tuple[str, ...] = tuple(patterns)
        self.modes: Tuple[VimMode, ...] = tuple(VimMode.coerce(m) for m in modes)
        self._enabled = True
        self._context: Optional[ExecutionContext] = None

    # -------------------------------------------------------------- lifecycle
    def initialize(self, context: ExecutionContext) -> None:
        self._context = context
        self.on_initialize(context)

    def destroy(self) -> None:
        self.on_destroy()
        self._enabled = False
        self._context = None

    def enable(self) -> None:
        if not self._enabled:
            self._enabled = True
            self.on_enable()

    def disable(self) -> None:
        if self._enabled:
            self._enabled = False
            self.on_disable()

    def is_enabled(self) -> bool:
        return self._enabled

    # -------------------------------------------------------------- execution
    def execute(self, context: ExecutionContext) -> None:
        if not self.can_execute(context):
            return
        if not self.is_valid_context(context):
            return
        self.perform_action(context)

    def can_execute(self, context: ExecutionContext) -> bool:
        return self.is_enabled() and self.is_in_supported_mode(context)

    def is_in_supported_mode(self, context: ExecutionContext) -> bool:
        return context.get_mode() in self.modes

    def supports_mode(self, mode: VimMode) -> bool:
        return mode in self.modes

    def is_valid_context(self, context: ExecutionContext) -> bool:
        return True

    def perform_action(
        self, context: ExecutionContext
    ) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def validate_pattern(self, pattern: str) -> bool:
        return is_valid_pattern(pattern) and pattern in self.patterns

    # ------------------------------------------------------------------ hooks
    def on_register(self) -> None:
        pass

    def on_unregister(self) -> None:
        pass

    def on_enable(self) -> None:
        pass

    def on_disable(self) -> None:
        pass

    def on_initialize(self, context: ExecutionContext) -> None:
        del context

    def on_destroy(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, patterns={self.patterns!r})"


def plugin_modes(plugin: VimPlugin) -> Sequence[VimMode]:
    return tuple(VimMode.coerce(mode) for mode in plugin.modes)


__all__ = ["AbstractVimPlugin", "VimPlugin", "plugin_modes"]
