"""Logging setup for the command-line entry point.

Library modules only create module loggers; handlers are installed here.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir("astlens", appauthor=False)) / "astlens.log"


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Configure the ``astlens`` logger hierarchy.

    Console output goes to stderr at WARNING (DEBUG when ``verbose``). When
    ``log_file`` is given, a rotating file handler records everything.
    """
    logger = logging.getLogger("astlens")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file, maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
