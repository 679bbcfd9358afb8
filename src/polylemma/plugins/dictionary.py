"""
Dictionary lemmatizer with O(1) lookup and accent normalization.
"""

import logging
import re
import unicodedata
from pathlib import Path
from typing import Mapping

import yaml

from ..models import Message, Token
from .base import SingleItemLemmatizer

logger = logging.getLogger("polylemma.plugins.dictionary")

_WORD_RE = re.compile(r"\w+")


def normalize_form(text: str) -> str:
    """Normalize a word form for accent-insensitive, case-insensitive lookup.

    Uses Unicode NFD normalization to decompose accented characters,
    then strips combining marks.

    Example:
        >>> normalize_form("  Città ")
        'citta'
    """
    nfd = unicodedata.normalize("NFD", text.lower().strip())
    return "".join(c for c in nfd if not unicodedata.combining(c))


class DictionaryLemmatizer(SingleItemLemmatizer):
    """Lemmatizes tokens from a static form -> lemma table.

    Forms are matched after normalization, so ``"Città"``, ``"citta"`` and
    ``"CITTÀ"`` all hit the same entry. Unknown forms lemmatize to their
    lowercased surface form.

    Example:
        >>> lemmatizer = DictionaryLemmatizer("lemmatizer-it", {"andato": "andare"})
        >>> msg = lemmatizer.single_item_process(Message(text="Sono andato", language="it"))
        >>> [t.lemma for t in msg.tokens]
        ['sono', 'andare']
    """

    def __init__(self, name: str, lemmas: Mapping[str, str] | None = None) -> None:
        self._name = name
        self._lookup: dict[str, str] = {}
        if lemmas:
            self.update(lemmas)

    @property
    def name(self) -> str:
        return self._name

    def __len__(self) -> int:
        return len(self._lookup)

    def update(self, lemmas: Mapping[str, str]) -> None:
        """Add form -> lemma entries, replacing existing forms."""
        for form, lemma in lemmas.items():
            normalized = normalize_form(form)
            if normalized:  # Skip empty strings
                self._lookup[normalized] = lemma

    def load_yaml(self, path: Path) -> None:
        """Load a lemma table from a YAML file.

        Expected YAML format:
            lemmas:
              andato: andare
              città: città

        Existing entries are discarded.

        Raises:
            FileNotFoundError: If the YAML file doesn't exist
            yaml.YAMLError: If the YAML is malformed
            ValueError: If the ``lemmas`` mapping is missing
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict) or not isinstance(data.get("lemmas"), dict):
            raise ValueError("YAML file must contain a 'lemmas' mapping")

        self._lookup.clear()
        self.update({str(k): str(v) for k, v in data["lemmas"].items()})
        logger.info("Loaded %d lemmas for '%s' from %s", len(self._lookup), self._name, path)

    @classmethod
    def from_yaml(cls, name: str, path: Path) -> "DictionaryLemmatizer":
        lemmatizer = cls(name)
        lemmatizer.load_yaml(path)
        return lemmatizer

    def lemma_for(self, form: str) -> str:
        """Return the lemma of a single form, or the lowercased form if unknown."""
        return self._lookup.get(normalize_form(form), form.lower())

    def single_item_process(self, message: Message) -> Message:
        tokens = message.tokens or [Token(text=w) for w in _WORD_RE.findall(message.text)]
        lemmatized = [
            t.model_copy(update={"lemma": self.lemma_for(t.text)}) for t in tokens
        ]
        return message.model_copy(update={"tokens": lemmatized})
