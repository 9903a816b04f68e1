"""Debug logging configuration."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path | None = None,
    verbose: bool = False,
    logger_name: str = "unitrun",
) -> logging.Logger:
    """
    Configure and return the harness logger.

    Harness output meant for the user (test announcements, failure
    diagnostics, the summary) goes to stdout through ``print``; this
    logger only carries debug detail about the run.

    Args:
        debug_file: Path to a debug log file. Created (with parents) if given.
        verbose: If True, also log to stderr.
        logger_name: Name of the logger instance (allows multiple independent loggers)

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(logger_name)

    # Clear any existing handlers for this specific logger
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    logger.disabled = False
    logger.propagate = False
    logger.setLevel(logging.DEBUG)

    formatter = _formatter()

    if debug_file is not None:
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(debug_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if verbose:
        logger.addHandler(_stderr_handler(formatter))

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


class _StderrHandler(logging.StreamHandler):
    """Terminal handler installed by ``verbose=True`` or :func:`set_verbose`."""


def _formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="[%(asctime)s] %(levelname)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
    )


def _stderr_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = _StderrHandler(sys.stderr)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def set_verbose(enabled: bool = True, logger_name: str = "unitrun") -> logging.Logger:
    """Turn terminal debug output on or off without touching other handlers.

    Callable from a test script while a run is in progress; a debug log
    file configured by :func:`setup_logger` keeps receiving output.
    """
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        if isinstance(handler, (_StderrHandler, logging.NullHandler)):
            logger.removeHandler(handler)
            handler.close()

    if enabled:
        logger.disabled = False
        logger.propagate = False
        logger.setLevel(logging.DEBUG)
        logger.addHandler(_stderr_handler(_formatter()))
    elif not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
