"""
Multi-language lemmatization for polylemma.

Picks the best available lemmatizer plugin for each message language:
a language-specific plugin (``"lemmatizer-<language>"`` or a configured
override) when one exists, otherwise the wildcard plugin configured as
``"*"``. Resolutions are cached per language, and messages whose language
can't be served pass through unannotated.
"""

from .config import ConfigError, ResolverConfig, WILDCARD, load_config
from .locator import PluginLocator, StrategyLocator
from .models import Message, Token
from .operator import LemmatizerOperator, OperatorStats
from .plugins import Capability, DictionaryLemmatizer, LemmatizerPlugin, SingleItemLemmatizer
from .resolver import MultiLanguageLemmatizer, ResolverStats

__all__ = [
    # Resolver
    "MultiLanguageLemmatizer",
    "ResolverStats",
    # Configuration
    "ResolverConfig",
    "ConfigError",
    "WILDCARD",
    "load_config",
    # Locator
    "PluginLocator",
    "StrategyLocator",
    # Plugin interface
    "LemmatizerPlugin",
    "SingleItemLemmatizer",
    "Capability",
    "DictionaryLemmatizer",
    # Operator
    "LemmatizerOperator",
    "OperatorStats",
    # Data model
    "Message",
    "Token",
]
