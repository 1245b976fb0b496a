"""Plugin registry owning plugin instances and the pattern index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from vim_motion.errors import ErrorCode, VimError
from vim_motion.input import is_valid_pattern
from vim_motion.runtime.telemetry import span

from .base import VimPlugin


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of ``PluginRegistry.validate_plugin``."""

    valid: bool
    errors: Tuple[str, ...] = ()
    codes: Tuple[ErrorCode, ...] = ()

    @property
    def primary_code(self) -> Optional[ErrorCode]:
        for code in (
            ErrorCode.PATTERN_CONFLICT,
            ErrorCode.INVALID_PATTERN,
            ErrorCode.PLUGIN_REGISTRATION_FAILED,
        ):
            if code in self.codes:
                return code
        return None


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    plugin_count: int
    pattern_count: int
    revision: int


class PluginRegistry:
    """Maps plugin names to plugins and patterns to plugin names.

    A pattern belongs to at most one plugin. ``register`` is all-or-nothing:
    a rejected plugin leaves both maps exactly as they were.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._plugins: Dict[str, VimPlugin] = {}
        self._pattern_index: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def validate_plugin(self, plugin: VimPlugin) -> ValidationResult:
        errors: List[str] = []
        codes: List[ErrorCode] = []

        def reject(code: ErrorCode, message: str) -> None:
            errors.append(message)
            if code not in codes:
                codes.append(code)

        name = getattr(plugin, "name", "")
        if not name:
            reject(ErrorCode.PLUGIN_REGISTRATION_FAILED, "plugin name is required")
        elif name in self._plugins:
            reject(
                ErrorCode.PLUGIN_REGISTRATION_FAILED,
                f"plugin '{name}' is already registered",
            )
        if not getattr(plugin, "version", ""):
            reject(ErrorCode.PLUGIN_REGISTRATION_FAILED, "plugin version is required")
        if not getattr(plugin, "description", ""):
            reject(
                ErrorCode.PLUGIN_REGISTRATION_FAILED, "plugin description is required"
            )
        if not getattr(plugin, "modes", ()):
            reject(
                ErrorCode.PLUGIN_REGISTRATION_FAILED,
                "plugin must support at least one mode",
            )

        patterns = tuple(getattr(plugin, "patterns", ()))
        if not patterns:
            reject(
                ErrorCode.PLUGIN_REGISTRATION_FAILED,
                "plugin must declare at least one pattern",
            )
        seen: set[str] = set()
        for pattern in patterns:
            if not isinstance(pattern, str) or not is_valid_pattern(pattern):
                reject(ErrorCode.INVALID_PATTERN, f"invalid pattern {pattern!r}")
                continue
            if pattern in seen:
                reject(
                    ErrorCode.PATTERN_CONFLICT,
                    f"pattern '{pattern}' is declared twice",
                )
            seen.add(pattern)
            owner = self._pattern_index.get(pattern)
            if owner is not None:
                reject(
                    ErrorCode.PATTERN_CONFLICT,
                    f"pattern '{pattern}' is already registered by '{owner}'",
                )

        return ValidationResult(
            valid=not errors, errors=tuple(errors), codes=tuple(codes)
        )

    def register(self, plugin: VimPlugin) -> VimPlugin:
        with span(
            "plugins::register",
            logger_name=self._logger_name,
            component="plugins",
            metadata={"plugin": getattr(plugin, "name", "?")},
        ) as handle:
            result = self.validate_plugin(plugin)
            if not result.valid:
                code = result.primary_code or ErrorCode.PLUGIN_REGISTRATION_FAILED
                handle.add_metadata("code", code.value)
                raise VimError(
                    code,
                    "; ".join(result.errors),
                    plugin_name=getattr(plugin, "name", None) or None,
                )

            self._plugins[plugin.name] = plugin
            self._pattern_index.update(
                {pattern: plugin.name for pattern in plugin.patterns}
            )
            self._touch()
            handle.add_metadata("patterns", ",".join(plugin.patterns))
        plugin.on_register()
        return plugin

    def unregister(self, name: str) -> Optional[VimPlugin]:
        with span(
            "plugins::unregister",
            logger_name=self._logger_name,
            component="plugins",
            metadata={"plugin": name},
        ):
            plugin = self._plugins.pop(name, None)
            if plugin is None:
                return None
            for pattern in plugin.patterns:
                if self._pattern_index.get(pattern) == name:
                    del self._pattern_index[pattern]
            self._touch()
        plugin.on_unregister()
        return plugin

    def unregister_by_pattern(self, pattern: str) -> Optional[VimPlugin]:
        name = self._pattern_index.get(pattern)
        if name is None:
            return None
        return self.unregister(name)

    def has_plugin(self, name: str) -> bool:
        return name in self._plugins

    def has_pattern(self, pattern: str) -> bool:
        return pattern in self._pattern_index

    def is_pattern_available(self, pattern: str) -> bool:
        return is_valid_pattern(pattern) and pattern not in self._pattern_index

    def get_plugin(self, name: str) -> Optional[VimPlugin]:
        return self._plugins.get(name)

    def get_plugin_by_pattern(self, pattern: str) -> Optional[VimPlugin]:
        name = self._pattern_index.get(pattern)
        return self._plugins.get(name) if name is not None else None

    def get_all_plugins(self) -> List[VimPlugin]:
        return list(self._plugins.values())

    def get_all_patterns(self) -> List[str]:
        return list(self._pattern_index)

    def get_plugin_count(self) -> int:
        return len(self._plugins)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            plugin_count=len(self._plugins),
            pattern_count=len(self._pattern_index),
            revision=self._revision,
        )

    def clear(self) -> None:
        plugins = list(self._plugins.values())
        self._plugins.clear()
        self._pattern_index.clear()
        self._touch()
        for plugin in plugins:
            plugin.on_unregister()

    def _touch(self) -> None:
        self._revision += 1


__all__ = ["PluginRegistry", "RegistryStats", "ValidationResult"]
