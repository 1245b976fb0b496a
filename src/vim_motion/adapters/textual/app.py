"""Executable Textual app that hosts the motion engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to use vim_motion.adapters.textual.app"
    ) from exc

from vim_motion.core import VimExecutor
from vim_motion.runtime import telemetry
from vim_motion.state import StateSnapshot

from .controller import TextualUIHooks, TextualVimAdapter

SAMPLE_TEXT = """def greet(name):
    message = "hello, " + name
    return [message, len(message)]

# try w b e ge gE, 0 ^ $ % gg G, /search n N * #
"""


def render_snapshot(snapshot: StateSnapshot) -> str:
    """Buffer text with the cursor cell shown in reverse video."""

    lines = snapshot.content.split("\n") if snapshot.content else [""]
    rendered = []
    for number, text in enumerate(lines):
        escaped = text.replace("[", r"\[")
        if number == snapshot.cursor.line:
            column = snapshot.cursor.column
            cell = text[column] if column < len(text) else " "
            cell = r"\[" if cell == "[" else cell
            before = text[:column].replace("[", r"\[")
            after = text[column + 1 :].replace("[", r"\[")
            escaped = f"{before}[reverse]{cell}[/reverse]{after}"
        rendered.append(escaped)
    return "\n".join(rendered)


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    command_text: str = ""


class VimMotionApp(App[None]):
    """Minimal Textual UI embedding the motion engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, content: str = SAMPLE_TEXT) -> None:
        super().__init__()
        self._state = UIState()
        self._content = content
        self.executor: VimExecutor | None = None
        self.adapter: TextualVimAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    def on_mount(self) -> None:
        self.executor = VimExecutor(self._content)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            log=self._log_line,
        )
        self.adapter = TextualVimAdapter(self.executor, hooks)
        self.set_interval(0.1, self._process_timeouts)

    def on_unmount(self) -> None:
        if self.executor:
            self.executor.destroy()

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in {"ctrl+c", "ctrl+q"}:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _update_buffer(self, snapshot: StateSnapshot) -> None:
        self._state.buffer_text = render_snapshot(snapshot)
        if self._buffer_widget:
            self._buffer_widget.update(self._state.buffer_text)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        self._state.command_text = command
        if self._command_widget:
            self._command_widget.update(command)

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "textual.key", level="debug", data={"line": line}, logger_name="vim_motion.textual"
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the vim-motion Textual demo.")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="File to load into the buffer (defaults to a built-in sample)",
    )
    parser.add_argument(
        "--preset",
        choices=("development", "production", "performance"),
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)
    content = args.path.read_text(encoding="utf-8") if args.path else SAMPLE_TEXT
    VimMotionApp(content=content).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
