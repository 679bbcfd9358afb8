"""
Data models for messages flowing through the lemmatization pipeline.
"""

from shortuuid import random
from pydantic import BaseModel, Field


class Token(BaseModel):
    """A single token of a message.

    Attributes:
        text: Surface form as it appears in the message.
        pos: Part-of-speech tag, if a tagger already ran.
        lemma: Base form, filled in by a lemmatizer.
        stop_word: Whether the token was flagged as a stop word.
    """
    text: str
    pos: str | None = None
    lemma: str | None = None
    stop_word: bool = False


class Message(BaseModel):
    """A unit of work: some text in a given language plus its tokens."""
    id: str = Field(default_factory=lambda: random(length=8))
    text: str = ""
    language: str | None = Field(
        default=None,
        description="Language code (e.g. 'it', 'en'); normalization is up to the producer",
    )
    tokens: list[Token] = Field(default_factory=list)
    lemmatized: bool = False
