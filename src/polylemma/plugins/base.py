"""
Abstract base classes for lemmatizer plugins.

Every lemmatizer (language specific, universal, or the multi-language
dispatcher itself) implements ``LemmatizerPlugin`` so the locator and the
resolver can treat them uniformly. Optional features are declared through
``capabilities`` rather than discovered by type checks.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, Iterator

from ..models import Message


class Capability(Enum):
    """Optional features a plugin may declare.

    SINGLE_ITEM
        The plugin can process one message at a time through
        ``single_item_process()``.
    """

    SINGLE_ITEM = "single_item"


class LemmatizerPlugin(ABC):
    """Abstract base class for lemmatizer plugins.

    Subclasses must implement:
    - name: The identifier the plugin is registered under.
    - process(): Lemmatize a stream of messages.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Identifier used to look the plugin up (e.g. ``"lemmatizer-it"``)."""
        ...

    @property
    def capabilities(self) -> frozenset[Capability]:
        """Capabilities supported by this plugin. None by default."""
        return frozenset()

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @abstractmethod
    def process(self, messages: Iterable[Message]) -> Iterator[Message]:
        """Lemmatize a stream of messages lazily.

        Args:
            messages: Messages to lemmatize.

        Yields:
            The lemmatized messages, in input order.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class SingleItemLemmatizer(LemmatizerPlugin):
    """A plugin that can lemmatize one message at a time.

    Declares ``Capability.SINGLE_ITEM``; ``process()`` is derived from
    ``single_item_process()``.
    """

    @property
    def capabilities(self) -> frozenset[Capability]:
        return super().capabilities | {Capability.SINGLE_ITEM}

    @abstractmethod
    def single_item_process(self, message: Message) -> Message:
        """Lemmatize a single message.

        Args:
            message: The message to lemmatize.

        Returns:
            The lemmatized message (the same object or a copy) exposing
            the derived tokens.
        """
        ...

    def process(self, messages: Iterable[Message]) -> Iterator[Message]:
        for message in messages:
            yield self.single_item_process(message)
