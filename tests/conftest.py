"""Shared fixtures for arclsp tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_arclsp_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees arclsp records in every test."""
    yield
    for name in ("arclsp", "pygls"):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
