"""
Logging setup for applications embedding hashtree.

The library only emits records through module loggers; handlers are
installed by the application, typically once at startup.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from hashtree.config.runtime import RuntimeConfig, get_default_config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    config: Optional[RuntimeConfig] = None,
) -> None:
    """
    Configure root logging.

    Explicit arguments win over the config; the config defaults to
    get_default_config().
    """
    config = config or get_default_config()
    level = level or config.logging.level
    log_file = log_file or config.logging.log_file

    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=handlers,
        force=True,
    )
