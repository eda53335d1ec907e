"""Minimal logging utilities for goteo.

Example:
    >>> from goteo.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("stream started")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``goteo`` namespace.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("streaming").name
        'goteo.streaming'
    """
    if not (name == "goteo" or name.startswith("goteo.")):
        name = f"goteo.{name}"
    return logging.getLogger(name)
