"""
Runtime Configuration Module

Provides configuration loading and logging setup for hashtree.
"""

from .log_setup import setup_logging
from .runtime import (
    DigestConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config,
    resolve_digest_function,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "DigestConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
    "resolve_digest_function",
    "setup_logging",
]
