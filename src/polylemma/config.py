"""
Resolver configuration: identifier prefix and static language overrides.

Plugins follow the ``"<prefix>-<language>"`` naming convention, e.g. the
Italian lemmatizer is ``"lemmatizer-it"``. The override mapping lists the
languages whose plugin doesn't follow that convention, plus the mandatory
wildcard entry naming the plugin used for every other language.

A configuration can be loaded from YAML:

    version: 1
    prefix: lemmatizer
    overrides:
      de: my-custom-german-lemmatizer
      "*": lemmatizer-stanford
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger("polylemma.config")

WILDCARD = "*"
DEFAULT_PREFIX = "lemmatizer"
DEFAULT_WILDCARD_IDENTIFIER = "lemmatizer-stanford"

_SCHEMA_VERSION = 1


class ConfigError(ValueError):
    """Raised when a resolver configuration is invalid."""


class ResolverConfig(BaseModel):
    """Immutable resolver configuration.

    Attributes:
        prefix: Prefix of conventionally named plugins.
        overrides: Language key (or ``"*"``) -> plugin identifier. The
            wildcard entry is always present after validation.
    """
    model_config = ConfigDict(frozen=True)

    prefix: str = Field(default=DEFAULT_PREFIX, min_length=1)
    overrides: dict[str, str] = Field(
        default_factory=lambda: {WILDCARD: DEFAULT_WILDCARD_IDENTIFIER},
    )

    @field_validator("overrides", mode="after")
    @classmethod
    def _ensure_wildcard(cls, overrides: dict[str, str]) -> dict[str, str]:
        """Fill in the wildcard entry when a configuration omits it."""
        if WILDCARD not in overrides:
            overrides = {**overrides, WILDCARD: DEFAULT_WILDCARD_IDENTIFIER}
        return overrides

    @model_validator(mode="after")
    def _check_identifiers(self) -> "ResolverConfig":
        for language, identifier in self.overrides.items():
            if not identifier.strip():
                raise ValueError(f"Empty plugin identifier for language '{language}'")
        return self

    @property
    def wildcard_identifier(self) -> str:
        return self.overrides[WILDCARD]


def load_config(path: Path) -> ResolverConfig:
    """Load a ResolverConfig from a YAML file.

    A missing file yields the default configuration.

    Args:
        path: Path to the YAML configuration.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file content is not a valid configuration.
    """
    if not path.exists():
        logger.info("No resolver config at %s, using defaults", path)
        return ResolverConfig()

    with open(path, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if data is None:
        return ResolverConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Resolver config {path} must be a mapping")

    version = data.pop("version", _SCHEMA_VERSION)
    if version != _SCHEMA_VERSION:
        logger.warning("Unknown resolver config version %s in %s", version, path)

    try:
        config = ResolverConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid resolver config {path}: {exc}") from exc

    logger.debug("Loaded resolver config from %s: %s", path, config.overrides)
    return config
