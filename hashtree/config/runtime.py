"""
Runtime Configuration

Central configuration for digest selection and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.crypto.hashing import DigestFunction, get_digest_function
from hashtree.schemas.errors import ConfigurationException

load_dotenv()


@dataclass
class DigestConfig:
    """Configuration for the tree's digest function."""
    algorithm: str = "sha256"

    def __post_init__(self):
        # Fail at load time rather than on first build
        get_digest_function(self.algorithm)
        self.algorithm = self.algorithm.lower()

    def function(self) -> DigestFunction:
        """Resolve the configured algorithm to its digest function."""
        return get_digest_function(self.algorithm)


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "WARNING"
    log_file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for hashtree.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    digest: DigestConfig = field(default_factory=DigestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_DIGEST_ALGORITHM: Digest algorithm name
        - HASHTREE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
        - HASHTREE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv("HASHTREE_DIGEST_ALGORITHM"):
            overrides.setdefault("digest", {})["algorithm"] = os.getenv("HASHTREE_DIGEST_ALGORITHM")

        if os.getenv("HASHTREE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("HASHTREE_LOG_LEVEL", "").upper()
        if os.getenv("HASHTREE_LOG_FILE"):
            overrides.setdefault("logging", {})["log_file"] = os.getenv("HASHTREE_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(
                f"Invalid YAML in config file: {e}", source=str(path)
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                "Config file must contain a mapping at the top level",
                source=str(path),
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        digest_data = data.get("digest") or {}
        logging_data = data.get("logging") or {}

        try:
            digest = DigestConfig(**digest_data)
            log_conf = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigurationException(f"Unknown configuration key: {e}") from e

        return cls(
            digest=digest,
            logging=log_conf,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "digest" in overrides:
            new_config.digest = DigestConfig(**overrides["digest"])

        if "logging" in overrides:
            for key, value in overrides["logging"].items():
                setattr(new_config.logging, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "digest": {
                "algorithm": self.digest.algorithm,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None re-reads the environment)."""
    global _default_config
    _default_config = config


def resolve_digest_function(hash_fn: Optional[DigestFunction] = None) -> DigestFunction:
    """Return ``hash_fn`` if given, else the default config's digest function."""
    if hash_fn is not None:
        return hash_fn
    return get_default_config().digest.function()
