"""Logger setup for command-line use.

Library modules only create loggers via ``logging.getLogger(__name__)``;
handlers are attached here, by the CLI.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "primekit"


def setup_logger(level: int = logging.WARNING, log_path: Path | None = None) -> logging.Logger:
    """Set up the package logger with a console and optional file handler.

    Args:
        level: Console log level.
        log_path: If given, everything at DEBUG and above is also appended
            to this file.

    Returns:
        The configured ``primekit`` logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_path is not None:
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    return logger
