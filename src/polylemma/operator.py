"""
Per-message lemmatization operator.

An operator applies a lemmatization function to every message of a
stream. Messages for which no tokens could be produced pass through
unchanged, so a single unsupported language never aborts the stream.
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .models import Message, Token

logger = logging.getLogger("polylemma.operator")


@dataclass
class OperatorStats:
    """Counters for messages seen by an operator.

    Attributes:
        processed: Messages that went through the operator.
        lemmatized: Messages that received new tokens.
        passed_through: Messages left unannotated.
    """
    processed: int = 0
    lemmatized: int = 0
    passed_through: int = 0


class LemmatizerOperator(ABC):
    """Abstract operator lemmatizing the tokens of each message.

    Subclasses implement ``lemmatize_message_tokens()``; the operator takes
    care of writing the tokens back and of pass-through.

    Usage:
        operator = plugin.get_operator()
        for message in operator(messages):
            ...
    """

    def __init__(self, plugin_name: str) -> None:
        self.plugin_name = plugin_name
        self.stats = OperatorStats()
        self._stats_lock = threading.Lock()

    @abstractmethod
    def lemmatize_message_tokens(self, message: Message) -> Optional[list[Token]]:
        """Compute the lemmatized tokens of a message.

        Returns:
            The tokens, or None if the message can't be lemmatized.
        """
        ...

    def apply(self, message: Message) -> Message:
        """Lemmatize one message in place and return it.

        When no tokens are produced, existing tokens are kept and
        ``lemmatized`` stays unset.
        """
        tokens = self.lemmatize_message_tokens(message)
        if tokens is None:
            self._count(passed_through=True)
            logger.debug(
                "%s: message %s (language=%s) passed through unannotated",
                self.plugin_name,
                message.id,
                message.language,
            )
            return message

        message.tokens = tokens
        message.lemmatized = True
        self._count(passed_through=False)
        return message

    def _count(self, passed_through: bool) -> None:
        with self._stats_lock:
            self.stats.processed += 1
            if passed_through:
                self.stats.passed_through += 1
            else:
                self.stats.lemmatized += 1

    def __call__(self, messages: Iterable[Message]) -> Iterator[Message]:
        for message in messages:
            yield self.apply(message)
