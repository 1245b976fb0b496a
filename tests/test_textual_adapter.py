from vim_motion.adapters.textual import TextualUIHooks, TextualVimAdapter, textual_key_event
from vim_motion.core import VimExecutor
from vim_motion.state import StateSnapshot


class RecordingHooks:
    def __init__(self) -> None:
        self.snapshots: list[StateSnapshot] = []
        self.statuses: list[str] = []
        self.commands: list[str] = []
        self.logs: list[str] = []

    def as_hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_buffer=self.snapshots.append,
            update_status=self.statuses.append,
            show_command=self.commands.append,
            log=self.logs.append,
        )


def make_adapter(content: str, **kwargs) -> tuple[TextualVimAdapter, RecordingHooks]:
    recorder = RecordingHooks()
    adapter = TextualVimAdapter(VimExecutor(content, **kwargs), recorder.as_hooks())
    return adapter, recorder


def test_initial_refresh_pushes_a_snapshot() -> None:
    _, recorder = make_adapter("hello")

    assert recorder.snapshots[-1].content == "hello"
    assert recorder.commands[-1] == ""


def test_key_moves_cursor_and_updates_status() -> None:
    adapter, recorder = make_adapter("hello\nworld")

    result = adapter.handle_textual_key("j", character="j")

    assert result.status == "executed"
    assert recorder.snapshots[-1].cursor.line == 1
    assert recorder.statuses[-1] == "-- NORMAL -- movement-down"
    assert any(line.startswith("key ->") for line in recorder.logs)


def test_pending_sequence_is_shown_in_status() -> None:
    adapter, recorder = make_adapter("hello")

    adapter.handle_textual_key("g", character="g")

    assert recorder.statuses[-1] == "-- NORMAL -- g"


def test_search_prompt_is_rendered_on_command_line() -> None:
    adapter, recorder = make_adapter("foo bar")

    adapter.handle_textual_key("question_mark", character="?")
    adapter.handle_textual_key("b", character="b")

    assert recorder.commands[-1] == "?b"
    adapter.handle_textual_key("escape")
    assert recorder.commands[-1] == ""


def test_process_timeouts_reports_expiry() -> None:
    now = [0.0]
    adapter, recorder = make_adapter("hello", clock=lambda: now[0], sequence_timeout_ms=10)

    adapter.handle_textual_key("g", character="g")
    assert not adapter.process_timeouts()

    now[0] = 1.0
    assert adapter.process_timeouts()
    assert recorder.statuses[-1] == "timeout"


def test_textual_key_names_are_translated() -> None:
    assert textual_key_event("up").key == "ArrowUp"
    assert textual_key_event("escape").key == "Escape"

    event = textual_key_event("ctrl+shift+left")
    assert event.key == "ArrowLeft"
    assert event.ctrl and event.shift

    assert textual_key_event("space", character=" ").key == " "
