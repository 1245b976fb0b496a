"""Built-in command plugins and the default plugin set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional

from vim_motion.plugin import VimPlugin
from vim_motion.state import VimMode

from .movement import (
    MovementConfig,
    SearchConfig,
    SearchController,
    anchor_plugins,
    directional_plugins,
    find_char_plugins,
    search_plugins,
    word_plugins,
)

if TYPE_CHECKING:  # pragma: no cover
    from vim_motion.core.executor import VimExecutor


@dataclass(slots=True)
class DefaultPluginSet:
    """Plugins installed by ``install_default_plugins`` plus their shared
    search controller."""

    plugins: List[VimPlugin] = field(default_factory=list)
    search: SearchController = field(default_factory=SearchController)


def default_plugins(
    *,
    movement_config: Optional[MovementConfig] = None,
    search_config: Optional[SearchConfig] = None,
    include: Optional[Iterable[str]] = None,
) -> DefaultPluginSet:
    """Build the motion family; ``include`` filters by plugin name."""

    search = SearchController(search_config)
    plugins: List[VimPlugin] = [
        *directional_plugins(movement_config),
        *word_plugins(),
        *anchor_plugins(),
        *find_char_plugins(),
        *search_plugins(search),
    ]
    if include is not None:
        wanted = set(include)
        plugins = [plugin for plugin in plugins if plugin.name in wanted]
    return DefaultPluginSet(plugins=plugins, search=search)


def install_default_plugins(
    executor: "VimExecutor",
    *,
    movement_config: Optional[MovementConfig] = None,
    search_config: Optional[SearchConfig] = None,
    include: Optional[Iterable[str]] = None,
) -> DefaultPluginSet:
    bundle = default_plugins(
        movement_config=movement_config, search_config=search_config, include=include
    )
    for plugin in bundle.plugins:
        executor.register_plugin(plugin)
    executor.register_input_handler(VimMode.SEARCH, bundle.search.handle_input)
    return bundle


__all__ = ["DefaultPluginSet", "default_plugins", "install_default_plugins"]
