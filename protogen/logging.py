"""Loggers for the generator stages.

Every module logs under ``protogen.<stage>``; only the entry point attaches a
handler, so embedding protogen in a larger build leaves its logging alone.
"""

from __future__ import annotations

import logging

ROOT_LOGGER = "protogen"
LOG_FORMAT = "protogen: %(levelname)s: %(message)s"


def get_logger(stage: str | None = None) -> logging.Logger:
    """Return the logger for ``stage``, or the protogen root logger."""
    if stage:
        return logging.getLogger(f"{ROOT_LOGGER}.{stage}")
    return logging.getLogger(ROOT_LOGGER)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Send protogen records to stderr, at DEBUG when ``verbose``."""
    logger = get_logger()
    logger.handlers.clear()
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
