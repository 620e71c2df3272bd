"""
Logging utilities for the normalizer service.

Provides hierarchical loggers under one package root and token masking so
API keys never reach log output in full.
"""

import logging
import sys
from typing import Optional


ROOT_LOGGER_NAME = 'html_normalizer'


def setup_logging(level: str = 'INFO', log_format: Optional[str] = None) -> None:
    """
    Setup logging for the service.

    Sets the package logger level and adds a stdout handler unless one is
    already attached.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom format string. If None, uses default format.
    """
    if log_format is None:
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(getattr(logging, level.upper()))
        handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        name: Component name (e.g., 'normalize', 'enhance')

    Returns:
        Configured logger instance
    """
    full_name = f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME
    logger = logging.getLogger(full_name)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def sanitize_token(token: Optional[str], show_chars: int = 4) -> str:
    """
    Sanitize a token for logging by showing only first and last few characters.

    Returns:
        Sanitized token string (e.g., "abcd...xyz9")
    """
    if not token:
        return "<empty>"

    if len(token) <= show_chars * 2:
        return "***"

    return f"{token[:show_chars]}...{token[-show_chars:]}"


_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())
