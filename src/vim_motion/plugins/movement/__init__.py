"""Cursor motions: directional, word/WORD, anchors, brackets, character find
and search."""

from .anchors import anchor_plugins
from .base import MotionPlugin
from .directional import DirectionalMotion, MovementConfig, directional_plugins
from .find_char import FindCharMotion, RepeatFindMotion, find_char_plugins
from .search import (
    SearchConfig,
    SearchController,
    SearchRepeatPlugin,
    SearchStartPlugin,
    SearchWordPlugin,
    find_match,
    search_plugins,
)
from .words import WordMotion, word_plugins

__all__ = [
    "DirectionalMotion",
    "FindCharMotion",
    "MotionPlugin",
    "MovementConfig",
    "RepeatFindMotion",
    "SearchConfig",
    "SearchController",
    "SearchRepeatPlugin",
    "SearchStartPlugin",
    "SearchWordPlugin",
    "WordMotion",
    "anchor_plugins",
    "directional_plugins",
    "find_char_plugins",
    "find_match",
    "search_plugins",
    "word_plugins",
]
