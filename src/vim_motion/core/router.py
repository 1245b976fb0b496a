"""Trie-based keystroke routing on top of the plugin registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Literal, Optional, Sequence, Tuple, Union

from vim_motion.errors import ErrorCode, VimError
from vim_motion.input import is_valid_pattern, split_keys
from vim_motion.plugin import ExecutionContext, PluginRegistry, VimPlugin, plugin_modes
from vim_motion.runtime.telemetry import span
from vim_motion.state import VimMode

Keys = Union[str, Sequence[str]]


def _tokens(keys: Keys) -> Tuple[str, ...]:
    if isinstance(keys, str):
        return split_keys(keys)
    return tuple(keys)


@dataclass(slots=True)
class RouteNode:
    """Single trie node; ``pattern`` is set when a pattern ends here."""

    pattern: Optional[str] = None
    plugin_name: Optional[str] = None
    children: Dict[str, "RouteNode"] = field(default_factory=dict)

    def child(self, token: str) -> "RouteNode":
        return self.children.setdefault(token, RouteNode())

    def next_tokens(self) -> Tuple[str, ...]:
        return tuple(sorted(self.children))


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Outcome of resolving an accumulated keystroke sequence."""

    status: Literal["match", "pending", "miss"]
    plugin: Optional[VimPlugin] = None
    pattern: Optional[str] = None
    consumed: int = 0
    next_expected: Tuple[str, ...] = ()


class CommandRouter:
    """Resolves keystroke sequences to plugins.

    Precedence is fixed: a sequence that equals a pattern available in the
    current mode matches immediately, even when longer patterns extend it.
    Only a sequence that is a strict prefix of longer patterns, and is not a
    pattern itself, is pending.
    """

    def __init__(
        self, registry: PluginRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._aliases: Dict[str, str] = {}
        self._alias_revision = 0
        self._cache: Dict[Optional[VimMode], Tuple[Tuple[int, int], RouteNode]] = {}

    @property
    def registry(self) -> PluginRegistry:
        return self._registry

    # --------------------------------------------------------------- patterns
    def register_pattern(self, pattern: str, plugin_name: str) -> None:
        """Route an extra ``pattern`` to an already registered plugin."""

        if not is_valid_pattern(pattern):
            raise VimError(ErrorCode.INVALID_PATTERN, f"invalid pattern {pattern!r}")
        if not self._registry.has_plugin(plugin_name):
            raise VimError(
                ErrorCode.PLUGIN_NOT_FOUND,
                f"plugin '{plugin_name}' is not registered",
                plugin_name=plugin_name,
            )
        if self.has_pattern(pattern):
            raise VimError(
                ErrorCode.PATTERN_CONFLICT,
                f"pattern '{pattern}' is already routed",
                plugin_name=plugin_name,
            )
        self._aliases[pattern] = plugin_name
        self._alias_revision += 1

    def unregister_pattern(self, pattern: str) -> bool:
        """Drop a route; a plugin-declared pattern takes its plugin with it."""

        if self._aliases.pop(pattern, None) is not None:
            self._alias_revision += 1
            return True
        return self._registry.unregister_by_pattern(pattern) is not None

    def has_pattern(self, pattern: str) -> bool:
        return pattern in self._aliases or self._registry.has_pattern(pattern)

    def get_all_patterns(self) -> List[str]:
        return self._registry.get_all_patterns() + list(self._aliases)

    def get_plugin_for_pattern(self, pattern: str) -> Optional[VimPlugin]:
        name = self._aliases.get(pattern)
        if name is not None:
            return self._registry.get_plugin(name)
        return self._registry.get_plugin_by_pattern(pattern)

    def forget_plugin(self, plugin_name: str) -> None:
        stale = [p for p, name in self._aliases.items() if name == plugin_name]
        for pattern in stale:
            del self._aliases[pattern]
        if stale:
            self._alias_revision += 1

    def clear(self) -> None:
        self._aliases.clear()
        self._alias_revision += 1
        self._cache.clear()

    # -------------------------------------------------------------- resolving
    def resolve(self, keys: Keys, mode: Optional[VimMode] = None) -> RouteResult:
        tokens = _tokens(keys)
        with span(
            "router::resolve",
            logger_name=self._logger_name,
            component="router",
            metadata={"keys": "".join(tokens), "mode": mode.value if mode else "*"},
        ) as handle:
            node = self._ensure_trie(mode)
            consumed = 0
            for token in tokens:
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return RouteResult(status="miss", consumed=consumed)
                node = child
                consumed += 1

            if node.pattern is not None and consumed:
                handle.add_metadata("status", "match")
                handle.add_metadata("pattern", node.pattern)
                return RouteResult(
                    status="match",
                    plugin=self._plugin(node),
                    pattern=node.pattern,
                    consumed=consumed,
                )

            if node.children and consumed:
                handle.add_metadata("status", "pending")
                return RouteResult(
                    status="pending",
                    consumed=consumed,
                    next_expected=node.next_tokens(),
                )

            handle.add_metadata("status", "miss")
            return RouteResult(status="miss", consumed=consumed)

    def match_pattern(self, keys: Keys, mode: Optional[VimMode] = None) -> Optional[str]:
        """Exact pattern for ``keys``, else the longest pattern prefixing them."""

        node = self._ensure_trie(mode)
        best: Optional[str] = None
        for token in _tokens(keys):
            child = node.children.get(token)
            if child is None:
                break
            node = child
            if node.pattern is not None:
                best = node.pattern
        return best

    def find_matching_plugin(
        self, keys: Keys, mode: Optional[VimMode] = None
    ) -> Optional[VimPlugin]:
        pattern = self.match_pattern(keys, mode)
        if pattern is None:
            return None
        return self.get_plugin_for_pattern(pattern)

    def execute_sync(self, keys: Keys, context: ExecutionContext) -> bool:
        return self.execute(keys, context) is not None

    def execute(self, keys: Keys, context: ExecutionContext) -> Optional[VimPlugin]:
        """Run the plugin matched for ``keys``; ``None`` when nothing matches."""

        plugin = self.find_matching_plugin(keys, context.get_mode())
        if plugin is None:
            return None
        with span(
            "router::execute",
            logger_name=self._logger_name,
            component="router",
            metadata={"plugin": plugin.name, "mode": context.get_mode().value},
        ):
            plugin.execute(context)
        return plugin

    def shadowed_patterns(self, mode: Optional[VimMode] = None) -> List[str]:
        """Patterns unreachable because a shorter pattern prefixes them."""

        shadowed: List[str] = []
        for node, covered in self._walk(self._ensure_trie(mode), False):
            if covered and node.pattern is not None:
                shadowed.append(node.pattern)
        return sorted(shadowed)

    # -------------------------------------------------------------- internals
    def _walk(self, node: RouteNode, covered: bool) -> Iterator[Tuple[RouteNode, bool]]:
        for child in node.children.values():
            yield child, covered
            yield from self._walk(child, covered or child.pattern is not None)

    def _routes(self) -> Iterator[Tuple[str, str]]:
        for pattern in self._registry.get_all_patterns():
            plugin = self._registry.get_plugin_by_pattern(pattern)
            if plugin is not None:
                yield pattern, plugin.name
        yield from self._aliases.items()

    def _ensure_trie(self, mode: Optional[VimMode]) -> RouteNode:
        revision = (self._registry.revision(), self._alias_revision)
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        root = RouteNode()
        for pattern, plugin_name in self._routes():
            plugin = self._registry.get_plugin(plugin_name)
            if plugin is None:
                continue
            if mode is not None and mode not in plugin_modes(plugin):
                continue
            node = root
            for token in split_keys(pattern):
                node = node.child(token)
            if node.pattern is not None:
                # plugin-declared patterns are yielded first and win over aliases
                continue
            node.pattern = pattern
            node.plugin_name = plugin_name
        self._cache[mode] = (revision, root)
        return root

    def _plugin(self, node: RouteNode) -> Optional[VimPlugin]:
        if node.plugin_name is None:
            return None
        return self._registry.get_plugin(node.plugin_name)


__all__ = ["CommandRouter", "RouteNode", "RouteResult"]
