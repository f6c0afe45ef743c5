"""Configuration management for item identity resolution."""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .fuzzy_match import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_SIMILARITY,
    DUPLICATE_SIMILARITY_THRESHOLD,
)
from .vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)


@dataclass
class MatchingConfig:
    """Fuzzy matching thresholds."""

    min_similarity: float = DEFAULT_MIN_SIMILARITY
    max_results: int = DEFAULT_MAX_RESULTS
    duplicate_similarity: float = DUPLICATE_SIMILARITY_THRESHOLD


@dataclass
class VocabularyConfig:
    """Words added to the built-in tables."""

    extra_abbreviations: list[str] = field(default_factory=list)
    extra_lowercase_words: list[str] = field(default_factory=list)
    extra_denylist: list[str] = field(default_factory=list)


@dataclass
class DisplayConfig:
    """Display configuration."""

    currency: str = "£"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"


@dataclass
class Config:
    """Complete application configuration."""

    matching: MatchingConfig = field(default_factory=MatchingConfig)
    vocabulary: VocabularyConfig = field(default_factory=VocabularyConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages application configuration from TOML files."""

    def __init__(self, config_path: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional explicit path to config file.
                        If not provided, searches standard locations.
        """
        self.config_path = config_path or self._find_config()
        self._config = self._load_config()

    @property
    def matching(self) -> MatchingConfig:
        """Get matching configuration."""
        return self._config.matching

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        return self._config.display

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._config.logging

    @property
    def vocabulary(self) -> Vocabulary:
        """Built-in vocabulary merged with the configured extra words."""
        extra = self._config.vocabulary
        return DEFAULT_VOCABULARY.extended(
            lowercase_words=extra.extra_lowercase_words,
            abbreviations=extra.extra_abbreviations,
            denylist=extra.extra_denylist,
        )

    def _find_config(self) -> Path:
        """Find config file in standard locations."""
        locations = [
            Path.cwd() / "grocery-identity.toml",
            Path.home() / ".config" / "grocery-identity" / "config.toml",
            Path.home() / ".grocery-identity" / "config.toml",
        ]

        for loc in locations:
            if loc.exists():
                return loc

        # Return default location if none found
        return Path.home() / ".config" / "grocery-identity" / "config.toml"

    def _load_config(self) -> Config:
        """Load configuration from TOML file."""
        if not self.config_path.exists():
            logger.debug("No config at %s, using defaults", self.config_path)
            return Config()

        with open(self.config_path, "rb") as f:
            data = tomllib.load(f)
        logger.debug("Loaded config from %s", self.config_path)

        matching = data.get("matching", {})
        vocabulary = data.get("vocabulary", {})
        return Config(
            matching=MatchingConfig(
                min_similarity=matching.get("min_similarity", DEFAULT_MIN_SIMILARITY),
                max_results=matching.get("max_results", DEFAULT_MAX_RESULTS),
                duplicate_similarity=matching.get(
                    "duplicate_similarity", DUPLICATE_SIMILARITY_THRESHOLD
                ),
            ),
            vocabulary=VocabularyConfig(
                extra_abbreviations=list(vocabulary.get("extra_abbreviations", [])),
                extra_lowercase_words=list(vocabulary.get("extra_lowercase_words", [])),
                extra_denylist=list(vocabulary.get("extra_denylist", [])),
            ),
            display=DisplayConfig(currency=data.get("display", {}).get("currency", "£")),
            logging=LoggingConfig(
                level=str(data.get("logging", {}).get("level", "WARNING")).upper()
            ),
        )

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get config value by dot-notation path.

        Args:
            key_path: Dot-separated path like 'matching.min_similarity'
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split(".")
        value: Any = self._config

        for key in keys:
            if hasattr(value, key):
                value = getattr(value, key)
            elif isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default

        return value if value is not None else default
