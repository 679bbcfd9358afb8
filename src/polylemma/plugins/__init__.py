"""
Lemmatizer plugin interface and the bundled dictionary lemmatizer.
"""

from .base import Capability, LemmatizerPlugin, SingleItemLemmatizer
from .dictionary import DictionaryLemmatizer

__all__ = [
    "Capability",
    "LemmatizerPlugin",
    "SingleItemLemmatizer",
    "DictionaryLemmatizer",
]
