"""Logging setup for envolvechat."""

from __future__ import annotations

import logging
import sys

from envolvechat.config.settings import LoggingConfig


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the ``envolvechat`` logger.

    Args:
        config: Logging configuration. If None, uses defaults
                (INFO level, stderr output).
    """
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger("envolvechat")
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    # Already configured by an earlier call.
    if root_logger.handlers:
        return

    formatter = logging.Formatter(config.format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging initialized at %s level", config.level)
