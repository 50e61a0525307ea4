"""Logging setup for the arclsp server and the pygls protocol layer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "arclsp"

# pygls logs every JSON-RPC message at DEBUG; keep that out unless asked for.
_PROTOCOL_LOGGER = "pygls"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _make_handler(log_file: Path | None) -> logging.Handler:
    if log_file is not None:
        return logging.FileHandler(log_file)
    # stdout carries the LSP stream in stdio mode
    return logging.StreamHandler(sys.stderr)


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Route arclsp and pygls records to a single stderr or file handler.

    The pygls logger is held at WARNING unless ``level`` is DEBUG, in which
    case protocol traffic is logged alongside lint runs.

    Args:
        level: Log level name, case insensitive. Unknown names fall back to INFO.
        log_file: Optional path to log file. If None, logs to stderr.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = _make_handler(log_file)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))

    if log_level <= logging.DEBUG:
        protocol_level = log_level
    else:
        protocol_level = max(log_level, logging.WARNING)

    levels = {ROOT_LOGGER: log_level, _PROTOCOL_LOGGER: protocol_level}
    for name, name_level in levels.items():
        logger = logging.getLogger(name)
        logger.setLevel(name_level)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return the ``arclsp.<name>`` logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
