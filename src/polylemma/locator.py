"""
Plugin locator: finds lemmatizer plugins by identifier.

The resolver only depends on the ``StrategyLocator`` protocol, so any
object with a ``lookup()`` method can stand in. ``PluginLocator`` is the
bundled implementation, a static registration table that can also build
plugins lazily from factories on first lookup.
"""

import logging
import threading
from typing import Callable, Optional, Protocol

from .plugins.base import LemmatizerPlugin

logger = logging.getLogger("polylemma.locator")

PluginFactory = Callable[[], LemmatizerPlugin]


class StrategyLocator(Protocol):
    """Anything able to find a plugin by identifier.

    ``lookup()`` must return None, not raise, for unknown identifiers.
    """

    def lookup(self, identifier: str) -> Optional[LemmatizerPlugin]:
        ...


class PluginLocator:
    """Thread-safe static registry of lemmatizer plugins.

    Usage:
        locator = PluginLocator()
        locator.register(DictionaryLemmatizer("lemmatizer-it", it_lemmas))
        locator.register_factory("lemmatizer-fr", build_french_lemmatizer)

        locator.lookup("lemmatizer-it")   # -> the registered instance
        locator.lookup("lemmatizer-de")   # -> None
    """

    def __init__(self, plugins: Optional[list[LemmatizerPlugin]] = None) -> None:
        self._plugins: dict[str, LemmatizerPlugin] = {}
        self._factories: dict[str, PluginFactory] = {}
        self._lock = threading.RLock()
        for plugin in plugins or []:
            self.register(plugin)

    @property
    def names(self) -> list[str]:
        """Identifiers of every registered plugin or factory, sorted."""
        with self._lock:
            return sorted(set(self._plugins) | set(self._factories))

    def __contains__(self, identifier: object) -> bool:
        with self._lock:
            return identifier in self._plugins or identifier in self._factories

    def register(self, plugin: LemmatizerPlugin) -> None:
        """Register a plugin instance under its own name, replacing any previous one."""
        with self._lock:
            self._factories.pop(plugin.name, None)
            self._plugins[plugin.name] = plugin
        logger.debug("Registered plugin '%s'", plugin.name)

    def register_factory(self, identifier: str, factory: PluginFactory) -> None:
        """Register a factory building the plugin on first lookup.

        The built instance is kept, so the factory runs at most once per
        successful lookup.
        """
        with self._lock:
            self._plugins.pop(identifier, None)
            self._factories[identifier] = factory
        logger.debug("Registered plugin factory '%s'", identifier)

    def unregister(self, identifier: str) -> bool:
        """Remove a plugin or factory.

        Returns:
            True if something was registered under ``identifier``.
        """
        with self._lock:
            found = self._plugins.pop(identifier, None) is not None
            found = self._factories.pop(identifier, None) is not None or found
        return found

    def lookup(self, identifier: str) -> Optional[LemmatizerPlugin]:
        """Find the plugin registered as ``identifier``.

        Returns:
            The plugin, or None if nothing is registered under that name
            or its factory failed.
        """
        with self._lock:
            plugin = self._plugins.get(identifier)
            if plugin is not None:
                return plugin
            factory = self._factories.get(identifier)
            if factory is None:
                logger.debug("No plugin registered as '%s'", identifier)
                return None

            try:
                plugin = factory()
            except Exception as exc:
                logger.warning("Factory for plugin '%s' failed: %s", identifier, exc)
                return None

            del self._factories[identifier]
            self._plugins[identifier] = plugin
            logger.info("Loaded plugin '%s'", identifier)
            return plugin
