"""Keystroke orchestrator owning the registry, router and live state."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from vim_motion.errors import ErrorCode, ErrorHandler, VimError
from vim_motion.input import ESCAPE, KeyboardEventNormalizer, KeyEvent, is_digit_token
from vim_motion.plugin import ExecutionContext, PluginRegistry, VimPlugin
from vim_motion.plugins import DefaultPluginSet, install_default_plugins
from vim_motion.runtime import telemetry
from vim_motion.state import MOTION_MODES, StateSnapshot, VimMode, VimState

from .router import CommandRouter, RouteResult

if TYPE_CHECKING:  # pragma: no cover
    from vim_motion.plugins.movement import MovementConfig, SearchConfig

InputHandler = Callable[[ExecutionContext, str], bool]

MAX_COUNT = 99_999


@dataclass(slots=True)
class KeystrokeResult:
    """Result returned from ``VimExecutor.handle_keystroke``."""

    consumed: bool
    status: str = "ok"
    plugin: Optional[str] = None
    pattern: Optional[str] = None
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


@dataclass
class PendingSequence:
    tokens: List[str]
    deadline: float
    timeout_ms: int
    generation: int
    route: Optional[RouteResult] = None


@dataclass(slots=True)
class ExecutorStats:
    plugin_count: int
    error_count: int
    keystroke_count: int
    pending: Tuple[str, ...] = ()


class VimExecutor:
    """Feeds keystrokes through the router into plugins.

    The executor is either idle or collecting a multi-key sequence. A
    collecting sequence carries a deadline; it is abandoned on Escape, on a
    definite miss, or once the deadline passes (checked on the next keystroke
    or by ``process_timeouts``).

    A matched plugin with ``takes_argument`` also arms a sequence; it has no
    deadline and runs the plugin with the next keystroke as its argument.
    """

    def __init__(
        self,
        content: str = "",
        *,
        sequence_timeout_ms: Optional[int] = None,
        load_defaults: bool = True,
        movement_config: Optional["MovementConfig"] = None,
        search_config: Optional["SearchConfig"] = None,
        clock: Callable[[], float] = time.monotonic,
        logger_name: str | None = None,
    ) -> None:
        if sequence_timeout_ms is None:
            sequence_timeout_ms = telemetry.env_int("SEQUENCE_TIMEOUT_MS", 1000)
        if sequence_timeout_ms <= 0:
            raise ValueError("sequence_timeout_ms must be positive")

        self.logger = telemetry.get_logger(logger_name or "vim_motion.executor")
        self._logger_name = logger_name
        self._clock = clock
        self._sequence_timeout_ms = sequence_timeout_ms
        self._context = ExecutionContext(VimState.from_text(content))
        self._registry = PluginRegistry(logger_name=logger_name)
        self._router = CommandRouter(self._registry, logger_name=logger_name)
        self._error_handler = ErrorHandler(logger_name=logger_name)
        self._normalizer = KeyboardEventNormalizer()
        self._input_handlers: Dict[VimMode, InputHandler] = {}
        self._pending: Optional[PendingSequence] = None
        self._generation = 0
        self._keystroke_count = 0
        self._running = True
        self._destroyed = False
        self._dispatching = False
        self.defaults: Optional[DefaultPluginSet] = None

        if load_defaults:
            self.defaults = install_default_plugins(
                self,
                movement_config=movement_config,
                search_config=search_config,
            )

    # ------------------------------------------------------------- plugins
    def register_plugin(self, plugin: VimPlugin) -> VimPlugin:
        name = getattr(plugin, "name", "") or "?"
        try:
            self._registry.register(plugin)
        except VimError as exc:
            error = VimError(
                ErrorCode.PLUGIN_REGISTRATION_FAILED,
                f"failed to register plugin '{name}': {exc.message}",
                plugin_name=name,
                original_error=exc,
            )
            self._error_handler.handle(error)
            raise error from exc
        plugin.initialize(self._context)
        return plugin

    def unregister_plugin(self, name: str) -> bool:
        plugin = self._registry.unregister(name)
        self._router.forget_plugin(name)
        if plugin is None:
            return False
        plugin.destroy()
        self._abandon()
        return True

    def get_registered_plugins(self) -> List[VimPlugin]:
        return self._registry.get_all_plugins()

    def register_input_handler(self, mode: VimMode, handler: InputHandler) -> None:
        """Send every keystroke typed in ``mode`` to ``handler`` instead of the
        router (SEARCH mode uses this for the search prompt)."""

        self._input_handlers[VimMode.coerce(mode)] = handler

    # ----------------------------------------------------------- lifecycle
    def start(self) -> None:
        if self._destroyed:
            raise RuntimeError("executor has been destroyed")
        self._running = True

    def stop(self) -> None:
        self._abandon()
        self._running = False

    def is_running(self) -> bool:
        return self._running and not self._destroyed

    def destroy(self) -> None:
        if self._destroyed:
            return
        for plugin in self._registry.get_all_plugins():
            plugin.destroy()
        self._registry.clear()
        self._router.clear()
        self._error_handler.destroy()
        self._input_handlers.clear()
        self._pending = None
        self._running = False
        self._destroyed = True
        telemetry.record_event("executor.destroy", logger_name=self._logger_name)

    # ----------------------------------------------------------- keystrokes
    def handle_keyboard_event(self, event: KeyEvent) -> KeystrokeResult:
        token = self._normalizer.normalize(event)
        if token is None:
            return KeystrokeResult(consumed=False, status="ignored")
        return self.handle_keystroke(token)

    def handle_keystroke(self, token: str) -> KeystrokeResult:
        if self._destroyed:
            return KeystrokeResult(consumed=False, status="destroyed")
        if not self._running:
            return KeystrokeResult(consumed=False, status="stopped")
        if not token:
            return KeystrokeResult(consumed=False, status="ignored")
        if self._dispatching:
            return KeystrokeResult(consumed=False, status="reentrant")

        self._dispatching = True
        try:
            self._keystroke_count += 1
            self.process_timeouts()
            return self._dispatch(token)
        finally:
            self._dispatching = False

    def _dispatch(self, token: str) -> KeystrokeResult:
        context = self._context
        mode = context.get_mode()

        handler = self._input_handlers.get(mode)
        if handler is not None:
            self._abandon()
            try:
                consumed = handler(context, token)
            except Exception as exc:
                return self._failure(exc, None, None)
            if consumed:
                self._note_mode_change(mode)
                return KeystrokeResult(consumed=True, status="input")

        if token == ESCAPE:
            self._abandon()
            if mode is not VimMode.NORMAL:
                context.set_mode(VimMode.NORMAL)
                self._note_mode_change(mode)
            return KeystrokeResult(consumed=True, status="cancelled")

        pending = self._pending
        if pending is not None and pending.route is not None:
            self._pending = None
            return self._run(pending.route, mode, argument=token)

        if self._is_count_digit(token, mode):
            state = context.get_state()
            state.count = min(state.count * 10 + int(token), MAX_COUNT)
            return KeystrokeResult(consumed=True, status="count")

        tokens = (self._pending.tokens if self._pending else []) + [token]
        result = self._router.resolve(tokens, mode)
        if result.status == "miss" and len(tokens) > 1:
            # the stale prefix is dropped but the new key still gets its chance
            tokens = [token]
            result = self._router.resolve(tokens, mode)

        if result.status == "match":
            if getattr(result.plugin, "takes_argument", False):
                self._arm(tokens, route=result)
                return KeystrokeResult(
                    consumed=True,
                    status="pending",
                    plugin=result.plugin.name,
                    pattern=result.pattern,
                    message="".join(tokens),
                )
            self._pending = None
            return self._run(result, mode)

        if result.status == "pending":
            self._arm(tokens)
            return KeystrokeResult(
                consumed=True,
                status="pending",
                message="".join(tokens),
                timeout_ms=self._sequence_timeout_ms,
            )

        self._abandon()
        return KeystrokeResult(consumed=False, status="miss", message="".join(tokens))

    def _is_count_digit(self, token: str, mode: VimMode) -> bool:
        if self._pending is not None or mode not in MOTION_MODES:
            return False
        if not is_digit_token(token):
            return False
        return token != "0" or self._context.has_count()

    def _run(
        self, result: RouteResult, mode: VimMode, argument: Optional[str] = None
    ) -> KeystrokeResult:
        plugin = result.plugin
        if plugin is None:
            self._abandon()
            return KeystrokeResult(consumed=False, status="miss")
        with telemetry.span(
            "executor::execute",
            logger_name=self._logger_name,
            component="executor",
            metadata={
                "plugin": plugin.name,
                "pattern": result.pattern,
                "mode": mode.value,
            },
        ) as handle:
            self._context.set_argument(argument)
            try:
                plugin.execute(self._context)
            except Exception as exc:
                handle.fail(f"{type(exc).__name__}: {exc}")
                return self._failure(exc, plugin.name, result.pattern)
            finally:
                self._context.set_argument(None)
                self._context.set_count(0)
        self._note_mode_change(mode)
        return KeystrokeResult(
            consumed=True, status="executed", plugin=plugin.name, pattern=result.pattern
        )

    def _failure(
        self, exc: Exception, plugin_name: Optional[str], pattern: Optional[str]
    ) -> KeystrokeResult:
        error = self._error_handler.handle(exc, plugin_name)
        self._abandon()
        # re-clamp in case the plugin left the cursor outside the buffer
        self._context.set_cursor(self._context.get_cursor())
        return KeystrokeResult(
            consumed=True,
            status="error",
            plugin=plugin_name,
            pattern=pattern,
            message=str(error) if error is not None else str(exc),
        )

    def _note_mode_change(self, previous: VimMode) -> None:
        current = self._context.get_mode()
        if current is not previous:
            telemetry.record_event(
                "mode.switch",
                data={"from": previous.value, "mode": current.value},
                logger_name=self._logger_name,
            )

    # ------------------------------------------------------------ timeouts
    def _arm(self, tokens: List[str], route: Optional[RouteResult] = None) -> None:
        self._generation += 1
        if route is None:
            deadline = self._clock() + self._sequence_timeout_ms / 1000.0
        else:
            deadline = math.inf
        self._pending = PendingSequence(
            tokens=list(tokens),
            deadline=deadline,
            timeout_ms=self._sequence_timeout_ms,
            generation=self._generation,
            route=route,
        )

    def _abandon(self) -> None:
        self._pending = None
        self._context.set_count(0)

    def process_timeouts(self) -> bool:
        """Drop the pending sequence if its deadline has passed."""

        pending = self._pending
        if pending is None or pending.deadline > self._clock():
            return False
        return self._expire(pending)

    def force_timeout(self) -> bool:
        if self._pending is None:
            return False
        return self._expire(self._pending)

    def _expire(self, pending: PendingSequence) -> bool:
        if self._pending is None or self._pending.generation != pending.generation:
            return False
        self._abandon()
        telemetry.record_event(
            "sequence.timeout",
            data={"keys": "".join(pending.tokens), "timeout_ms": pending.timeout_ms},
            logger_name=self._logger_name,
        )
        return True

    def pending_keys(self) -> Tuple[str, ...]:
        return tuple(self._pending.tokens) if self._pending else ()

    # --------------------------------------------------------------- state
    def get_state(self) -> VimState:
        """Deep copy of the live state, safe to keep across keystrokes."""

        return self._context.get_state().clone()

    def snapshot(self) -> StateSnapshot:
        return self._context.get_state().snapshot()

    def get_context(self) -> ExecutionContext:
        return self._context

    def get_current_mode(self) -> VimMode:
        return self._context.get_mode()

    def set_current_mode(self, mode: VimMode | str) -> None:
        previous = self._context.get_mode()
        self._context.set_mode(mode)
        self._abandon()
        self._note_mode_change(previous)

    def set_content(self, text: str) -> None:
        self._context.get_buffer().set_content(text)
        self._context.set_cursor(self._context.get_cursor())
        self._abandon()

    def get_error_handler(self) -> ErrorHandler:
        return self._error_handler

    def get_router(self) -> CommandRouter:
        return self._router

    def get_normalizer(self) -> KeyboardEventNormalizer:
        return self._normalizer

    def get_stats(self) -> ExecutorStats:
        return ExecutorStats(
            plugin_count=self._registry.get_plugin_count(),
            error_count=self._error_handler.get_error_count(),
            keystroke_count=self._keystroke_count,
            pending=self.pending_keys(),
        )


__all__ = [
    "ExecutorStats",
    "InputHandler",
    "KeystrokeResult",
    "PendingSequence",
    "VimExecutor",
]
