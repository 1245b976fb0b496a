import pytest

from vim_motion.input import (
    KeyboardEventNormalizer,
    KeyEvent,
    NotationError,
    is_digit_token,
    is_valid_pattern,
    split_keys,
)


def make_normalizer() -> KeyboardEventNormalizer:
    return KeyboardEventNormalizer()


def test_split_keys_groups_angle_notation() -> None:
    assert split_keys("gg") == ("g", "g")
    assert split_keys("g<C-a>x") == ("g", "<C-a>", "x")
    assert split_keys("<Esc><Enter>") == ("<Esc>", "<Enter>")


def test_split_keys_keeps_unterminated_brackets_literal() -> None:
    assert split_keys("<") == ("<",)
    assert split_keys("<>") == ("<", ">")
    assert split_keys("a<b") == ("a", "<", "b")
    assert split_keys("<<C-a>") == ("<", "<C-a>")


def test_split_keys_rejects_whitespace_in_groups() -> None:
    with pytest.raises(NotationError):
        split_keys("<C- a>")


def test_pattern_validation() -> None:
    assert is_valid_pattern("ge")
    assert is_valid_pattern("<Space>")
    assert not is_valid_pattern("")
    assert not is_valid_pattern("   ")
    assert not is_valid_pattern("<C- x>")


def test_digit_tokens() -> None:
    assert is_digit_token("0")
    assert not is_digit_token("12")
    assert not is_digit_token("")
    assert not is_digit_token("a")


@pytest.mark.parametrize(
    ("event", "expected"),
    [
        (KeyEvent("h"), "h"),
        (KeyEvent("H", shift=True), "H"),
        (KeyEvent("a", ctrl=True), "<C-a>"),
        (KeyEvent("x", ctrl=True, alt=True, meta=True), "<C-A-M-x>"),
        (KeyEvent(" "), "<Space>"),
        (KeyEvent("Escape"), "<Esc>"),
        (KeyEvent("Enter"), "<Enter>"),
        (KeyEvent("Backspace"), "<BS>"),
        (KeyEvent("ArrowUp"), "<Up>"),
        (KeyEvent("ArrowUp", shift=True), "<S-Up>"),
        (KeyEvent("F5", ctrl=True), "<C-F5>"),
        (KeyEvent("Unidentified"), "<Unidentified>"),
    ],
)
def test_normalize_events(event: KeyEvent, expected: str) -> None:
    assert make_normalizer().normalize(event) == expected


def test_modifier_only_events_are_ignored() -> None:
    normalizer = make_normalizer()

    assert normalizer.normalize(KeyEvent("Shift", shift=True)) is None
    assert normalizer.normalize(KeyEvent("Control", ctrl=True)) is None


def test_custom_key_mappings() -> None:
    normalizer = make_normalizer()
    normalizer.map_key("CapsLockEscape", "<Esc>")
    normalizer.map_key("ArrowUp", "k")

    assert normalizer.normalize(KeyEvent("CapsLockEscape")) == "<Esc>"
    assert normalizer.normalize_key("ArrowUp") == "k"

    normalizer.remove_key_mapping("ArrowUp")
    assert normalizer.normalize(KeyEvent("ArrowUp")) == "<Up>"

    normalizer.reset_key_mappings()
    assert normalizer.normalize(KeyEvent("CapsLockEscape")) == "<CapsLockEscape>"


def test_key_event_from_modifier_names() -> None:
    event = KeyEvent.from_modifiers("a", ["Ctrl", "shift", "cmd"])

    assert event.ctrl and event.shift and event.meta
    assert not event.alt
    assert event.has_command_modifier


def test_key_event_requires_a_key() -> None:
    with pytest.raises(ValueError):
        KeyEvent("")
