"""Logging for the lrckaraoke package and the libraries it drives."""

import logging
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "lrckaraoke"

# Chatty at INFO; only their warnings are worth showing next to stage logs
QUIET_LOGGERS = ("urllib3", "requests", "yt_dlp", "audio_separator")

_PLAIN_FORMAT = "%(levelname)s: %(message)s"
_VERBOSE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO", log_file: Optional[Path] = None, verbose: bool = False
) -> logging.Logger:
    """Configure the package logger.

    Console output always goes to stdout. ``log_file`` adds a UTF-8 file
    handler (stage messages carry emoji). Calling again replaces the
    handlers from the previous call.
    """
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_VERBOSE_FORMAT if verbose else _PLAIN_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    return logging.getLogger(name)
