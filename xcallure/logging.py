"""Logging configuration for xcallure."""

import logging
import sys
from typing import TextIO

from xcallure.config import load_settings

LOGGER_NAME = "xcallure"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
HANDLER_MARKER = "_xcallure_handler"


def setup_logging(
    level: int | str | None = None,
    stream: TextIO | None = None,
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    - Level accepts an int or a level name ("DEBUG", "warning", ...);
      when omitted, XCALLURE_LOG_LEVEL (default WARNING) is used
    - Calling it again replaces the handler added by the previous call
    - Propagation is disabled so records are not emitted twice
      when the host application also configures the root logger
    """

    if level is None:
        level = load_settings().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        if getattr(existing, HANDLER_MARKER, False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, HANDLER_MARKER, True)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
