"""Minimal logging utilities for orgscan.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from orgscan.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Scanning document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "orgscan." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'orgscan.mymodule'
    """
    if not (name == "orgscan" or name.startswith("orgscan.")):
        name = f"orgscan.{name}"
    return logging.getLogger(name)
