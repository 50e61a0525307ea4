"""Keeps failures in notification handlers away from the protocol layer."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


def _document_uri(args: tuple[Any, ...]) -> str | None:
    """Return the text document URI carried by handler params, if any."""
    for arg in args:
        text_document = getattr(arg, "text_document", None)
        uri = getattr(text_document, "uri", None)
        if isinstance(uri, str):
            return uri
    return None


def wrap_async_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], R],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator for async LSP notification handlers.

    An exception other than CancelledError is logged with its traceback,
    naming the feature and the document URI when the params carry one, and
    ``default_factory()`` is returned instead. The editor keeps its previous
    diagnostics for that document.

    Args:
        logger: Logger the failure is reported to.
        feature_name: LSP method name, e.g. ``textDocument/didSave``.
        default_factory: Callable that returns a default value on error.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception:
                uri = _document_uri(args)
                if uri is None:
                    logger.exception("Error in %s handler", feature_name)
                else:
                    logger.exception("Error in %s handler for %s", feature_name, uri)
                return default_factory()

        return wrapper

    return decorator
