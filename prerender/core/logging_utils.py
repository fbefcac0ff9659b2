# prerender/core/logging_utils.py
"""
Logging setup for the CLI and long-running prerender jobs.

Library modules only do ``logging.getLogger(__name__)``; handlers are attached
here, once, by the entry point.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "prerender"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "(%Y-%m-%d %H:%M:%S)"

_HANDLER_TAG = "_prerender_handler"


def debug_enabled() -> bool:
    return os.getenv("PRERENDER_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def _tagged(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG, True)
    return handler


def configure_logging(level: int | str = logging.INFO, log_file: Path | str | None = None) -> logging.Logger:
    """
    Attach console (+ optional rotating file) handlers to the package logger.

    Calling it again replaces the handlers it added before instead of stacking
    duplicates. ``PRERENDER_DEBUG=1`` forces DEBUG.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_enabled() else level)

    for h in list(logger.handlers):
        if getattr(h, _HANDLER_TAG, False):
            logger.removeHandler(h)
            h.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = _tagged(logging.StreamHandler())
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        path = Path(log_file)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = _tagged(RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8"))
        except OSError as e:
            logger.warning("file logging disabled, cannot open %s: %s", path, e)
        else:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    return logger
