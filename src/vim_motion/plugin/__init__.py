"""Plugin contract, execution context and registry."""

from .base import AbstractVimPlugin, VimPlugin, plugin_modes
from .context import CLIPBOARD_REGISTER, UNNAMED_REGISTER, ExecutionContext, clamp_cursor
from .registry import PluginRegistry, RegistryStats, ValidationResult

__all__ = [
    "AbstractVimPlugin",
    "CLIPBOARD_REGISTER",
    "ExecutionContext",
    "PluginRegistry",
    "RegistryStats",
    "UNNAMED_REGISTER",
    "ValidationResult",
    "VimPlugin",
    "clamp_cursor",
    "plugin_modes",
]
