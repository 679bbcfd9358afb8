"""
Multi-language lemmatizer with per-language plugin resolution.

When a message goes through lemmatization, the plugin for its language is
searched for in the following (ordered) locations:

  1. The override mapping of the ResolverConfig, by language
  2. The locator, under the conventional name ``"<prefix>-<language>"``
     (only when the language has no override)
  3. The wildcard entry of the override mapping (``"lemmatizer-stanford"``
     unless configured otherwise), used for every language without a
     plugin of its own

The outcome is cached per language for the lifetime of the lemmatizer,
including the outcome "no plugin found". A plugin registered after its
language was first resolved is not picked up; build a new
MultiLanguageLemmatizer to see it.
"""

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from .config import WILDCARD, ResolverConfig
from .locator import StrategyLocator
from .models import Message, Token
from .operator import LemmatizerOperator
from .plugins.base import Capability, LemmatizerPlugin, SingleItemLemmatizer

logger = logging.getLogger("polylemma.resolver")


@dataclass
class ResolverStats:
    """Statistics for plugin resolution.

    Attributes:
        cache_hits: Resolutions answered from the cache.
        cache_misses: Resolutions that went through the fallback chain.
        locator_queries: Total calls made to the locator.
        unresolved: Languages cached as having no plugin.
    """
    cache_hits: int = 0
    cache_misses: int = 0
    locator_queries: int = 0
    unresolved: int = 0


class _MultiLanguageOperator(LemmatizerOperator):
    """Operator delegating each message to the lemmatizer of its language."""

    def __init__(self, lemmatizer: "MultiLanguageLemmatizer") -> None:
        super().__init__(lemmatizer.name)
        self._lemmatizer = lemmatizer

    def lemmatize_message_tokens(self, message: Message) -> Optional[list[Token]]:
        return self._lemmatizer.lemmatize_message_tokens(message)


class MultiLanguageLemmatizer(SingleItemLemmatizer):
    """Dispatches each message to the best available lemmatizer for its language.

    Holds no lemmatization logic of its own: it picks a plugin through the
    locator, caches the choice per language, and invokes it.

    Usage:
        locator = PluginLocator([it_lemmatizer, default_lemmatizer])
        multi = MultiLanguageLemmatizer(locator, ResolverConfig(
            overrides={"*": "lemmatizer-default"},
        ))
        for message in multi.process(messages):
            ...
    """

    PLUGIN_NAME = "lemmatizer-multi"

    def __init__(
        self,
        locator: StrategyLocator,
        config: Optional[ResolverConfig] = None,
    ) -> None:
        """Initialize the lemmatizer.

        Args:
            locator: Where plugins are looked up by identifier.
            config: Prefix and language overrides. Defaults to the
                ``"lemmatizer-<language>"`` convention with
                ``"lemmatizer-stanford"`` as wildcard.
        """
        self._locator = locator
        self._config = config or ResolverConfig()
        self._overrides: Mapping[str, str] = MappingProxyType(dict(self._config.overrides))
        self._lemmatizers: dict[str, Optional[LemmatizerPlugin]] = {}
        self._lock = threading.Lock()
        self._stats = ResolverStats()
        self._operator = _MultiLanguageOperator(self)

    @property
    def name(self) -> str:
        return self.PLUGIN_NAME

    @property
    def overrides(self) -> Mapping[str, str]:
        """Read-only language -> identifier overrides, wildcard included."""
        return self._overrides

    @property
    def cached_languages(self) -> list[str]:
        """Languages resolved so far, whether a plugin was found or not."""
        with self._lock:
            return sorted(self._lemmatizers)

    @property
    def stats(self) -> ResolverStats:
        with self._lock:
            unresolved = sum(1 for p in self._lemmatizers.values() if p is None)
            return ResolverStats(
                cache_hits=self._stats.cache_hits,
                cache_misses=self._stats.cache_misses,
                locator_queries=self._stats.locator_queries,
                unresolved=unresolved,
            )

    def identifier_for(self, language: str) -> str:
        """Return the plugin identifier to try first for a language."""
        identifier = self._overrides.get(language)
        if identifier is None:
            identifier = f"{self._config.prefix}-{language}"
        return identifier

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, language: str) -> Optional[LemmatizerPlugin]:
        """Find (or recall) the best lemmatizer for a language.

        Args:
            language: Language key of the message, used as-is.

        Returns:
            The plugin, or None if neither the language-specific plugin
            nor the wildcard one is available.
        """
        with self._lock:
            if language in self._lemmatizers:
                self._stats.cache_hits += 1
                return self._lemmatizers[language]
            self._stats.cache_misses += 1

        # The locator may be slow, so it is queried outside the lock.
        # Two threads racing on a new language may both get here; the
        # last one to store its result wins.
        lemmatizer = self._lookup_chain(language)

        with self._lock:
            self._lemmatizers[language] = lemmatizer
        return lemmatizer

    def _lookup_chain(self, language: str) -> Optional[LemmatizerPlugin]:
        identifier = self.identifier_for(language)
        lemmatizer = self._lookup(identifier)
        if lemmatizer is not None:
            logger.info("Language '%s' resolved to '%s'", language, identifier)
            return lemmatizer

        wildcard = self._overrides[WILDCARD]
        if wildcard != identifier:
            lemmatizer = self._lookup(wildcard)
        if lemmatizer is not None:
            logger.info(
                "No lemmatizer '%s' for language '%s', falling back to '%s'",
                identifier,
                language,
                wildcard,
            )
            return lemmatizer

        logger.warning(
            "No lemmatizer available for language '%s' (tried '%s', '%s')",
            language,
            identifier,
            wildcard,
        )
        return None

    def _lookup(self, identifier: str) -> Optional[LemmatizerPlugin]:
        with self._lock:
            self._stats.locator_queries += 1
        try:
            lemmatizer = self._locator.lookup(identifier)
        except Exception as exc:
            logger.warning("Locator failed to look up '%s': %s", identifier, exc)
            return None
        if lemmatizer is self:
            logger.warning("'%s' resolves to this lemmatizer itself, ignoring it", identifier)
            return None
        return lemmatizer

    # ------------------------------------------------------------------
    # Invocation
    # ------------------------------------------------------------------

    def lemmatize_message_tokens(self, message: Message) -> Optional[list[Token]]:
        """Lemmatize a message with the plugin resolved for its language.

        Returns:
            The lemmatized tokens, or None if the message has no language,
            no plugin could be resolved, or the plugin can't process
            single messages.
        """
        if message.language is None:
            return None

        lemmatizer = self.resolve(message.language)
        if lemmatizer is None:
            return None

        if not lemmatizer.supports(Capability.SINGLE_ITEM):
            logger.warning(
                "Lemmatizer '%s' can't process single messages, skipping message %s",
                lemmatizer.name,
                message.id,
            )
            return None

        return lemmatizer.single_item_process(message).tokens

    def get_operator(self) -> LemmatizerOperator:
        return self._operator

    def single_item_process(self, message: Message) -> Message:
        return self._operator.apply(message)

    def process(self, messages: Iterable[Message]) -> Iterator[Message]:
        return self._operator(messages)

    def get_status(self) -> dict[str, object]:
        """Get a status summary of the resolver.

        Returns:
            Dictionary with overrides, resolved languages and counters.
        """
        with self._lock:
            resolved = {
                language: lemmatizer.name if lemmatizer is not None else None
                for language, lemmatizer in self._lemmatizers.items()
            }
            stats = dict(vars(self._stats))
            stats["unresolved"] = sum(1 for p in self._lemmatizers.values() if p is None)
        return {
            "name": self.name,
            "prefix": self._config.prefix,
            "overrides": dict(self._overrides),
            "resolved": resolved,
            "stats": stats,
            "operator": dict(vars(self._operator.stats)),
        }
