"""Error taxonomy and the listener-based error handler."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Optional

from vim_motion.runtime import telemetry


class ErrorCode(str, Enum):
    PLUGIN_NOT_FOUND = "PLUGIN_NOT_FOUND"
    PLUGIN_REGISTRATION_FAILED = "PLUGIN_REGISTRATION_FAILED"
    PATTERN_CONFLICT = "PATTERN_CONFLICT"
    INVALID_PATTERN = "INVALID_PATTERN"
    EXECUTION_FAILED = "EXECUTION_FAILED"
    BUFFER_ERROR = "BUFFER_ERROR"
    CURSOR_ERROR = "CURSOR_ERROR"
    MODE_ERROR = "MODE_ERROR"


class VimError(RuntimeError):
    """Engine failure tagged with an ``ErrorCode`` and the offending plugin."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        plugin_name: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.code = ErrorCode(code)
        self.message = message
        self.plugin_name = plugin_name
        self.original_error = original_error

    def __str__(self) -> str:
        prefix = f"[{self.code.value}]"
        if self.plugin_name:
            prefix = f"{prefix} {self.plugin_name}:"
        return f"{prefix} {self.message}"


ErrorListener = Callable[[VimError], None]


class ErrorHandler:
    """Converts failures into ``VimError`` and fans them out to listeners.

    Per-code listeners run before global listeners. A listener that raises is
    logged and skipped so the remaining listeners still see the error.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._listeners: Dict[ErrorCode, List[ErrorListener]] = {}
        self._global_listeners: List[ErrorListener] = []
        self._error_count = 0
        self._destroyed = False
        self._logger_name = logger_name or "vim_motion.errors"

    @staticmethod
    def create_error(
        code: ErrorCode,
        message: str,
        plugin_name: Optional[str] = None,
        original_error: Optional[BaseException] = None,
    ) -> VimError:
        return VimError(
            code, message, plugin_name=plugin_name, original_error=original_error
        )

    @staticmethod
    def is_vim_error(error: object) -> bool:
        return isinstance(error, VimError)

    def handle(
        self, error: BaseException, plugin_name: Optional[str] = None
    ) -> Optional[VimError]:
        if self._destroyed:
            return None

        if isinstance(error, VimError):
            vim_error = error
            if vim_error.plugin_name is None and plugin_name is not None:
                vim_error.plugin_name = plugin_name
        else:
            vim_error = self.create_error(
                ErrorCode.EXECUTION_FAILED,
                str(error) or type(error).__name__,
                plugin_name=plugin_name,
                original_error=error,
            )

        self._error_count += 1
        telemetry.record_event(
            "error.handled",
            level="error",
            data={
                "code": vim_error.code.value,
                "plugin": vim_error.plugin_name or "",
                "message": vim_error.message,
                "count": self._error_count,
            },
            logger_name=self._logger_name,
        )

        for listener in list(self._listeners.get(vim_error.code, ())):
            self._notify(listener, vim_error)
        for listener in list(self._global_listeners):
            self._notify(listener, vim_error)
        return vim_error

    def _notify(self, listener: ErrorListener, error: VimError) -> None:
        try:
            listener(error)
        except Exception as exc:  # listeners must not break the key loop
            telemetry.record_event(
                "error.listener_failed",
                level="warning",
                data={"code": error.code.value, "reason": str(exc)},
                logger_name=self._logger_name,
            )

    def add_error_listener(self, code: ErrorCode, listener: ErrorListener) -> None:
        self._listeners.setdefault(ErrorCode(code), []).append(listener)

    def remove_error_listener(self, code: ErrorCode, listener: ErrorListener) -> None:
        bucket = self._listeners.get(ErrorCode(code))
        if not bucket or listener not in bucket:
            return
        bucket.remove(listener)
        if not bucket:
            self._listeners.pop(ErrorCode(code), None)

    def add_global_listener(self, listener: ErrorListener) -> None:
        self._global_listeners.append(listener)

    def remove_global_listener(self, listener: ErrorListener) -> None:
        if listener in self._global_listeners:
            self._global_listeners.remove(listener)

    def get_error_count(self) -> int:
        return self._error_count

    def clear_error_count(self) -> None:
        self._error_count = 0

    def is_destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        self._listeners.clear()
        self._global_listeners.clear()
        self._destroyed = True


__all__ = [
    "ErrorCode",
    "ErrorHandler",
    "ErrorListener",
    "VimError",
]
