from vim_motion.errors import ErrorCode, ErrorHandler, VimError


def test_plain_exception_is_wrapped_as_execution_failure() -> None:
    handler = ErrorHandler()
    cause = ValueError("boom")

    error = handler.handle(cause, "movement-w")

    assert error is not None
    assert error.code is ErrorCode.EXECUTION_FAILED
    assert error.plugin_name == "movement-w"
    assert error.original_error is cause
    assert str(error) == "[EXECUTION_FAILED] movement-w: boom"
    assert handler.get_error_count() == 1


def test_vim_error_passes_through_and_gains_plugin_name() -> None:
    handler = ErrorHandler()
    original = VimError(ErrorCode.CURSOR_ERROR, "bad cursor")

    error = handler.handle(original, "movement-j")

    assert error is original
    assert error.plugin_name == "movement-j"


def test_code_listeners_run_before_global_listeners() -> None:
    handler = ErrorHandler()
    seen: list[str] = []
    handler.add_global_listener(lambda error: seen.append("global"))
    handler.add_error_listener(ErrorCode.BUFFER_ERROR, lambda error: seen.append("code"))
    handler.add_error_listener(ErrorCode.MODE_ERROR, lambda error: seen.append("other"))

    handler.handle(VimError(ErrorCode.BUFFER_ERROR, "no such line"))

    assert seen == ["code", "global"]


def test_failing_listener_does_not_stop_others() -> None:
    handler = ErrorHandler()
    seen: list[ErrorCode] = []

    def explode(error: VimError) -> None:
        raise RuntimeError("listener broke")

    handler.add_global_listener(explode)
    handler.add_global_listener(lambda error: seen.append(error.code))

    handler.handle(RuntimeError("first"))

    assert seen == [ErrorCode.EXECUTION_FAILED]


def test_removed_listeners_are_not_called() -> None:
    handler = ErrorHandler()
    seen: list[str] = []

    def listener(error: VimError) -> None:
        seen.append(error.message)

    handler.add_error_listener(ErrorCode.MODE_ERROR, listener)
    handler.add_global_listener(listener)
    handler.remove_error_listener(ErrorCode.MODE_ERROR, listener)
    handler.remove_global_listener(listener)
    handler.remove_global_listener(listener)

    handler.handle(VimError(ErrorCode.MODE_ERROR, "nope"))

    assert seen == []


def test_count_reset_and_destroy() -> None:
    handler = ErrorHandler()
    handler.handle(RuntimeError("a"))
    handler.handle(RuntimeError("b"))
    assert handler.get_error_count() == 2

    handler.clear_error_count()
    assert handler.get_error_count() == 0

    handler.destroy()
    assert handler.is_destroyed()
    assert handler.handle(RuntimeError("late")) is None
    assert handler.get_error_count() == 0


def test_factory_helpers() -> None:
    error = ErrorHandler.create_error(ErrorCode.PLUGIN_NOT_FOUND, "missing")

    assert ErrorHandler.is_vim_error(error)
    assert not ErrorHandler.is_vim_error(ValueError())
    assert str(error) == "[PLUGIN_NOT_FOUND] missing"
