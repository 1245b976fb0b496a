"""Line-oriented text storage."""

from __future__ import annotations

from typing import Iterable, List, Optional

from vim_motion.errors import ErrorCode, VimError


def split_lines(text: str) -> List[str]:
    """Split ``text`` on newlines, dropping one trailing empty segment."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _check_line_text(text: str) -> str:
    if "\n" in text:
        raise VimError(ErrorCode.BUFFER_ERROR, "line text cannot contain a newline")
    return text


class TextBuffer:
    """Ordered list of lines; an empty buffer has zero lines."""

    def __init__(self, content: str = "") -> None:
        self._lines: List[str] = split_lines(content)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "TextBuffer":
        buffer = cls()
        buffer.set_lines(lines)
        return buffer

    def get_line(self, line: int) -> Optional[str]:
        if not self.is_valid_line(line):
            return None
        return self._lines[line]

    def get_line_count(self) -> int:
        return len(self._lines)

    def get_content(self) -> str:
        return "\n".join(self._lines)

    def set_content(self, text: str) -> None:
        self._lines = split_lines(text)

    def is_empty(self) -> bool:
        return not self._lines

    def is_valid_line(self, line: int) -> bool:
        return 0 <= line < len(self._lines)

    def line_length(self, line: int) -> int:
        text = self.get_line(line)
        return len(text) if text is not None else 0

    def get_lines(self) -> List[str]:
        return list(self._lines)

    def set_lines(self, lines: Iterable[str]) -> None:
        self._lines = [_check_line_text(str(text)) for text in lines]

    def set_line(self, line: int, text: str) -> None:
        self._require_line(line)
        self._lines[line] = _check_line_text(text)

    def insert_line(self, line: int, text: str) -> None:
        if not 0 <= line <= len(self._lines):
            raise VimError(
                ErrorCode.BUFFER_ERROR, f"cannot insert line at index {line}"
            )
        self._lines.insert(line, _check_line_text(text))

    def delete_line(self, line: int) -> str:
        self._require_line(line)
        return self._lines.pop(line)

    def get_char_at(self, line: int, column: int) -> Optional[str]:
        text = self.get_line(line)
        if text is None or not 0 <= column < len(text):
            return None
        return text[column]

    def clone(self) -> "TextBuffer":
        copy = TextBuffer()
        copy._lines = list(self._lines)
        return copy

    def _require_line(self, line: int) -> None:
        if not self.is_valid_line(line):
            raise VimError(
                ErrorCode.BUFFER_ERROR,
                f"line {line} out of range (0..{len(self._lines) - 1})",
            )

    def __len__(self) -> int:
        return len(self._lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextBuffer):
            return NotImplemented
        return self._lines == other._lines

    def __repr__(self) -> str:
        return f"TextBuffer(lines={len(self._lines)})"


__all__ = ["TextBuffer", "split_lines"]
