"""Logging configuration (loguru).

stdout belongs to the interactive session, so every log record goes to
stderr through a single sink.
"""

from __future__ import annotations

import sys

from loguru import logger

_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}"


def configure_logging(level: str | int = "WARNING") -> None:
    """Replace loguru's default handler with a stderr sink at `level`.

    Raises `ValueError` for an unknown level name or a negative number.
    """

    if isinstance(level, str) and level.isdigit():
        level = int(level)
    # Without this, a logger will be duplicated
    logger.remove()
    logger.configure(handlers=[{"sink": sys.stderr, "level": level, "format": _FORMAT}])
