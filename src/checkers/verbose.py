"""Logging configuration for suite runs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path | None = None,
    verbose: bool = False,
    logger_name: str = "checkers",
    level: str = "WARNING",
) -> logging.Logger:
    """
    Configure and return a logger for suite run output.

    Args:
        debug_file: If given, every record at DEBUG and above is appended here.
        verbose: If True, stderr shows DEBUG records; otherwise only *level* and above.
        logger_name: Name of the logger instance. The default is the package
            logger, so every ``checkers.*`` module logger propagates to it.
        level: Threshold for the stderr handler when not verbose.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    # Clear any existing handlers for this specific logger
    logger.handlers.clear()

    logger.disabled = False
    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S"
    )

    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(debug_file, mode='a')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG if verbose else getattr(logging, level))
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    return logger
