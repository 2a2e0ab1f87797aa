"""Logging setup for the colorsudoku package.

The stream handler hangs off the ``colorsudoku`` logger instead of the root
logger, so a host application embedding the engine keeps its own root
configuration. Module loggers (``colorsudoku.engine.solver`` and so on)
propagate into it.
"""

from __future__ import annotations

import logging
from typing import Optional, TextIO, Union

PACKAGE_LOGGER = "colorsudoku"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"

_HANDLER_NAME = "colorsudoku-stream"


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def _package_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return handler
    return None


def configure_logging(level: Union[int, str] = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    """Install or retune the package stream handler.

    Repeated calls adjust the level (and the stream, when given) of the one
    handler already installed rather than stacking new ones. ``level`` takes
    either a ``logging`` constant or a name such as ``"debug"``.

    Carving runs the logic solver once per candidate removal, so per-step
    traces stay at DEBUG while generation summaries are logged at INFO.
    """

    resolved = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = _package_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
        logger.addHandler(handler)
    elif stream is not None and isinstance(handler, logging.StreamHandler):
        handler.setStream(stream)
    logger.setLevel(resolved)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace, installing the handler on first use."""

    if _package_handler(logging.getLogger(PACKAGE_LOGGER)) is None:
        configure_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)
