"""
Runtime Configuration

Central configuration for tree construction, output formatting and logging.
"""

from __future__ import annotations

import codecs
import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from commitree.crypto.hashing import DEFAULT_TEXT_ENCODING
from commitree.schemas.errors import ConfigurationException

load_dotenv()


ENV_PREFIX = "COMMITREE_"

OUTPUT_FORMATS = ("human", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class TreeConfig:
    """Configuration for tree construction."""
    text_encoding: str = DEFAULT_TEXT_ENCODING

    def __post_init__(self):
        try:
            codecs.lookup(self.text_encoding)
        except LookupError as e:
            raise ConfigurationException(
                f"Unknown text encoding: {self.text_encoding}",
                field_path="tree.text_encoding",
            ) from e


@dataclass
class OutputConfig:
    """Configuration for CLI output."""
    format: str = "human"
    hex_prefix: bool = True

    def __post_init__(self):
        if self.format not in OUTPUT_FORMATS:
            raise ConfigurationException(
                f"Output format must be one of {OUTPUT_FORMATS}, got {self.format!r}",
                field_path="output.format",
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise ConfigurationException(
                f"Log level must be one of {LOG_LEVELS}, got {self.level!r}",
                field_path="logging.level",
            )


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - COMMITREE_TEXT_ENCODING: Encoding for str items (default utf-8)
        - COMMITREE_OUTPUT_FORMAT: human or json
        - COMMITREE_HEX_PREFIX: Print hashes with 0x prefix (true/false)
        - COMMITREE_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
        - COMMITREE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}TEXT_ENCODING"):
            overrides.setdefault("tree", {})["text_encoding"] = os.getenv(f"{ENV_PREFIX}TEXT_ENCODING")

        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides.setdefault("output", {})["format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")
        if os.getenv(f"{ENV_PREFIX}HEX_PREFIX"):
            overrides.setdefault("output", {})["hex_prefix"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}HEX_PREFIX", "true")
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Config file must contain a mapping, got {type(data).__name__}",
                details={"path": str(path)},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        sections = {
            "tree": TreeConfig,
            "output": OutputConfig,
            "logging": LoggingConfig,
        }
        kwargs: dict[str, Any] = {}
        for name, section_cls in sections.items():
            section_data = data.get(name) or {}
            if not isinstance(section_data, dict):
                raise ConfigurationException(
                    f"Config section '{name}' must be a mapping",
                    field_path=name,
                )
            try:
                kwargs[name] = section_cls(**section_data)
            except TypeError as e:
                raise ConfigurationException(
                    f"Invalid keys in config section '{name}': {e}",
                    field_path=name,
                ) from e
        return cls(**kwargs)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        merged = self.to_dict()
        for section, values in overrides.items():
            merged.setdefault(section, {}).update(values)
        return self.from_dict(merged)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "text_encoding": self.tree.text_encoding,
            },
            "output": {
                "format": self.output.format,
                "hex_prefix": self.output.hex_prefix,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return """# commitree configuration
tree:
  text_encoding: utf-8
output:
  format: human      # human or json
  hex_prefix: true
logging:
  level: INFO
  file: null
"""


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = copy.deepcopy(config)
