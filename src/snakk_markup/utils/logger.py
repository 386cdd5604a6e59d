"""Minimal logging utilities for snakk-markup.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; the host application configures them.

Example:
    >>> from snakk_markup.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rejected link destination")
"""

from __future__ import annotations

import logging

_ROOT = "snakk_markup"


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "snakk_markup." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("urls")
        >>> logger.name
        'snakk_markup.urls'
    """
    if not (name == _ROOT or name.startswith(f"{_ROOT}.")):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
