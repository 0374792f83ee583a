"""
Logging utilities for the OceanEye identification service.

Provides consistent logging setup across all modules.
"""
import logging
import sys
from typing import Optional

from oceaneye import config


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a configured logger for a module.

    Args:
        name: Logger name (typically __name__).
        level: Log level override (uses config default if None).

    Returns:
        Configured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Lookup started")
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        level = level or config.LOG_LEVEL
        logger.setLevel(getattr(logging, level.upper()))

        # Console handler
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(getattr(logging, level.upper()))

        formatter = logging.Formatter(config.LOG_FORMAT)
        handler.setFormatter(formatter)

        logger.addHandler(handler)

    return logger


def short_digest(digest: Optional[str]) -> str:
    """Shorten a digest for log lines ("abcdef0123456789...")."""
    if not digest:
        return "<none>"
    return f"{digest[:16]}..."
