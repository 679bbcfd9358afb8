"""
Unit tests for the dictionary lemmatizer.
"""

import pytest
import yaml

from polylemma.models import Message, Token
from polylemma.plugins.base import Capability
from polylemma.plugins.dictionary import DictionaryLemmatizer, normalize_form


TEST_LEMMAS = {
    "lemmas": {
        "andato": "andare",
        "andata": "andare",
        "città": "città",
        "furono": "essere",
    }
}


@pytest.fixture
def lemma_file(tmp_path):
    path = tmp_path / "it.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(TEST_LEMMAS, f, allow_unicode=True)
    return path


@pytest.fixture
def lemmatizer(lemma_file):
    return DictionaryLemmatizer.from_yaml("lemmatizer-it", lemma_file)


class TestNormalizeForm:
    def test_strips_accents_and_case(self):
        assert normalize_form("  Città ") == "citta"

    def test_plain_text_unchanged(self):
        assert normalize_form("andato") == "andato"


class TestLoading:
    def test_from_yaml(self, lemmatizer):
        assert lemmatizer.name == "lemmatizer-it"
        assert len(lemmatizer) == 4

    def test_reload_replaces_entries(self, lemmatizer, tmp_path):
        path = tmp_path / "other.yaml"
        path.write_text(yaml.safe_dump({"lemmas": {"fui": "essere"}}))
        lemmatizer.load_yaml(path)
        assert len(lemmatizer) == 1
        assert lemmatizer.lemma_for("andato") == "andato"

    def test_missing_lemmas_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"terms": []}))
        with pytest.raises(ValueError, match="lemmas"):
            DictionaryLemmatizer.from_yaml("lemmatizer-it", path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DictionaryLemmatizer.from_yaml("lemmatizer-it", tmp_path / "nope.yaml")

    def test_from_mapping(self):
        lemmatizer = DictionaryLemmatizer("lemmatizer-en", {"went": "go", "": "skipped"})
        assert len(lemmatizer) == 1
        assert lemmatizer.lemma_for("Went") == "go"


class TestLemmatization:
    def test_is_single_item_capable(self, lemmatizer):
        assert lemmatizer.supports(Capability.SINGLE_ITEM)

    def test_accent_insensitive(self, lemmatizer):
        assert lemmatizer.lemma_for("CITTA") == "città"
        assert lemmatizer.lemma_for("Andata") == "andare"

    def test_unknown_form_lowercased(self, lemmatizer):
        assert lemmatizer.lemma_for("Roma") == "roma"

    def test_tokenizes_untokenized_message(self, lemmatizer):
        message = Message(text="Furono andati, in città!", language="it")
        out = lemmatizer.single_item_process(message)
        assert [t.text for t in out.tokens] == ["Furono", "andati", "in", "città"]
        assert [t.lemma for t in out.tokens] == ["essere", "andati", "in", "città"]

    def test_keeps_existing_tokens(self, lemmatizer):
        tokens = [Token(text="andato", pos="VERB"), Token(text="e", stop_word=True)]
        out = lemmatizer.single_item_process(Message(text="ignored", language="it", tokens=tokens))
        assert out.tokens[0] == Token(text="andato", pos="VERB", lemma="andare")
        assert out.tokens[1].stop_word
        assert tokens[0].lemma is None  # input left untouched

    def test_returns_copy(self, lemmatizer):
        message = Message(text="andato", language="it")
        out = lemmatizer.single_item_process(message)
        assert out is not message
        assert out.id == message.id
        assert message.tokens == []

    def test_process_stream(self, lemmatizer):
        messages = [Message(text="andato", language="it"), Message(text="furono", language="it")]
        lemmas = [m.tokens[0].lemma for m in lemmatizer.process(messages)]
        assert lemmas == ["andare", "essere"]
