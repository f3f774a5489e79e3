"""Minimal logging utilities for Caracol.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from caracol.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Rewriting script")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "caracol." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("engine")
        >>> logger.name
        'caracol.engine'
    """
    if not (name == "caracol" or name.startswith("caracol.")):
        name = f"caracol.{name}"
    return logging.getLogger(name)
