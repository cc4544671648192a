"""Logging setup for the command-line interface and embedding applications.

Library modules only create module-level loggers; handlers are installed
here, once, by whoever owns the process.
"""

import logging
import sys
from typing import Optional

from weekplan.config import get_settings

_HANDLER_NAME = "weekplan"


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        timestamp = self.formatTime(record, self.datefmt)
        level = f"{color}{record.levelname:8}{self.RESET}"
        message = f"{timestamp} | {level} | {record.name:28} | {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(
    level: Optional[str] = None,
    colored: Optional[bool] = None,
) -> logging.Logger:
    """Configure the ``weekplan`` logger.

    Calling it again only updates the level.

    Args:
        level: Level name; defaults to the configured ``log_level``.
        colored: Force colour on or off; defaults to whether stderr is a TTY.

    Returns:
        The package logger.
    """
    if level is None:
        level = get_settings().log_level

    logger = logging.getLogger("weekplan")
    logger.setLevel(level.upper())

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        if colored is None:
            colored = sys.stderr.isatty()
        if colored:
            handler.setFormatter(ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        else:
            handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        logger.addHandler(handler)
        logger.propagate = False

    return logger
