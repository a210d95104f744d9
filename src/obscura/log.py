"""Logging setup for the obscura command line and scripts.

Library modules create their own loggers with ``logging.getLogger(__name__)``
and never configure handlers. Entry points call :func:`setup_logging` once.

Example:
    >>> from obscura.log import setup_logging
    >>> logger = setup_logging("DEBUG")
    >>> logger.info("capture started")
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a single stream handler to the ``obscura`` logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level as an int or a name such as ``"INFO"``.

    Returns:
        The package root logger.
    """
    logger = logging.getLogger("obscura")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    return logger


__all__ = ["LOG_FORMAT", "setup_logging"]
