"""Shared logger initialization for the gtask CLI.

Usage:
    from gtask.utils.logger import get_logger
    log = get_logger(__name__)
    log.info("message")
"""
from __future__ import annotations

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

_FORMAT = "%(message)s"  # rich handler already adds time & level


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: Union[int, str] = logging.WARNING, force: bool = False) -> None:
    """Idempotently configure the ``gtask`` logger with a rich handler.

    ``force`` only changes the level of an already configured logger.
    """
    logger = logging.getLogger("gtask")
    level = _coerce_level(level)
    handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
    if handlers:
        if force:
            logger.setLevel(level)
            for handler in handlers:
                handler.setLevel(level)
        return
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=False, show_path=False)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str = __name__, level: Optional[int] = None) -> logging.Logger:
    """Return a module-level logger."""
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
