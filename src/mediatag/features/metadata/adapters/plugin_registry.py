"""
Summary: Registry of external metadata plugins keyed by source name.
Why: Let the metadata order name plugin sources without the use case knowing how they load.
"""

from __future__ import annotations

from collections.abc import Iterable
from importlib.metadata import entry_points
from typing import Final, final

from mediatag.platform.logging import logger

from ..usecases.ports import MetadataPlugin

ENTRY_POINT_GROUP: Final[str] = "mediatag.metadata_plugins"
BUILTIN_SOURCES: Final[frozenset[str]] = frozenset({"tags", "filename"})


@final
class PluginRegistry:
    """Lookup table of metadata plugins by lowercased name."""

    def __init__(self, plugins: Iterable[MetadataPlugin] = ()) -> None:
        self._plugins: dict[str, MetadataPlugin] = {}
        for plugin in plugins:
            self.register(plugin)

    def register(self, plugin: MetadataPlugin) -> None:
        """Add ``plugin``, replacing any plugin with the same name."""
        self._plugins[plugin.name.lower()] = plugin

    def get(self, name: str) -> MetadataPlugin | None:
        return self._plugins.get(name.lower())

    def names(self) -> list[str]:
        return sorted(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def plugins_for(self, order: Iterable[str]) -> list[MetadataPlugin]:
        """Return the registered plugins named in ``order``, in that order.

        The built-in ``tags`` and ``filename`` sources are skipped; other
        unknown names are logged.
        """
        selected: list[MetadataPlugin] = []
        for source in order:
            name = source.lower()
            if name in BUILTIN_SOURCES:
                continue
            plugin = self._plugins.get(name)
            if plugin is None:
                logger.debug("%s is not a valid metadata_order plugin", name)
                continue
            selected.append(plugin)
        return selected

    @classmethod
    def discover(cls, group: str = ENTRY_POINT_GROUP) -> PluginRegistry:
        """Build a registry from the installed entry points of ``group``.

        An entry point may name a plugin instance or a class taking no arguments.
        Entry points that fail to load are logged and skipped.
        """
        registry = cls()
        for entry_point in entry_points(group=group):
            try:
                loaded = entry_point.load()
                plugin = loaded() if isinstance(loaded, type) else loaded
            except Exception as exc:  # third-party code
                logger.error("Failed to load metadata plugin %s: %s", entry_point.name, exc)
                continue
            if not isinstance(plugin, MetadataPlugin):
                logger.warning(
                    "Entry point %s does not provide a metadata plugin", entry_point.name
                )
                continue
            registry.register(plugin)
            logger.debug("Loaded metadata plugin %s", plugin.name)
        return registry


__all__ = ["BUILTIN_SOURCES", "ENTRY_POINT_GROUP", "PluginRegistry"]
