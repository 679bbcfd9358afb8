"""Tests for ResolverConfig — validation, wildcard default, YAML loading."""

from types import MappingProxyType

import pytest
import yaml
from pydantic import ValidationError

from polylemma.config import (
    DEFAULT_WILDCARD_IDENTIFIER,
    WILDCARD,
    ConfigError,
    ResolverConfig,
    load_config,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _write_config(tmp_path, data):
    path = tmp_path / "resolver.yaml"
    with open(path, "w") as fh:
        yaml.safe_dump(data, fh, default_flow_style=False)
    return path


# ── ResolverConfig ──────────────────────────────────────────────────

class TestResolverConfig:
    def test_defaults(self):
        cfg = ResolverConfig()
        assert cfg.prefix == "lemmatizer"
        assert cfg.overrides == {WILDCARD: DEFAULT_WILDCARD_IDENTIFIER}
        assert cfg.wildcard_identifier == "lemmatizer-stanford"

    def test_wildcard_filled_in(self):
        cfg = ResolverConfig(overrides={"de": "my-custom-german-lemmatizer"})
        assert cfg.overrides == {
            "de": "my-custom-german-lemmatizer",
            "*": "lemmatizer-stanford",
        }

    def test_explicit_wildcard_kept(self):
        cfg = ResolverConfig(overrides={"*": "lemmatizer-default"})
        assert cfg.wildcard_identifier == "lemmatizer-default"

    def test_caller_mapping_not_mutated(self):
        overrides = {"it": "lemmatizer-it"}
        ResolverConfig(overrides=overrides)
        assert overrides == {"it": "lemmatizer-it"}

    def test_wildcard_filled_in_for_any_mapping(self):
        cfg = ResolverConfig(overrides=MappingProxyType({"it": "lemmatizer-it"}))
        assert cfg.overrides == {"it": "lemmatizer-it", "*": "lemmatizer-stanford"}

    def test_frozen(self):
        cfg = ResolverConfig()
        with pytest.raises(ValidationError):
            cfg.prefix = "other"

    def test_empty_identifier_rejected(self):
        with pytest.raises(ValidationError):
            ResolverConfig(overrides={"it": "  "})

    def test_empty_prefix_rejected(self):
        with pytest.raises(ValidationError):
            ResolverConfig(prefix="")


# ── load_config ─────────────────────────────────────────────────────

class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nope.yaml")
        assert cfg == ResolverConfig()

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "resolver.yaml"
        path.write_text("")
        assert load_config(path) == ResolverConfig()

    def test_loads_overrides(self, tmp_path):
        path = _write_config(tmp_path, {
            "version": 1,
            "prefix": "lemma",
            "overrides": {"de": "german-lemmatizer", "*": "lemma-default"},
        })
        cfg = load_config(path)
        assert cfg.prefix == "lemma"
        assert cfg.overrides == {"de": "german-lemmatizer", "*": "lemma-default"}

    def test_loaded_config_gets_wildcard(self, tmp_path):
        path = _write_config(tmp_path, {"overrides": {"de": "german-lemmatizer"}})
        assert load_config(path).wildcard_identifier == DEFAULT_WILDCARD_IDENTIFIER

    def test_non_mapping_rejected(self, tmp_path):
        path = _write_config(tmp_path, ["a", "b"])
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_values_rejected(self, tmp_path):
        path = _write_config(tmp_path, {"overrides": {"it": ""}})
        with pytest.raises(ConfigError, match="Invalid resolver config"):
            load_config(path)

    def test_config_error_is_value_error(self, tmp_path):
        path = _write_config(tmp_path, "just a string")
        with pytest.raises(ValueError):
            load_config(path)
