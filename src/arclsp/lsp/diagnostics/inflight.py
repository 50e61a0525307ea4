"""In-flight manager for validation runs.

Keeps at most one running validation task per document URI.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from arclsp.logging import get_logger


class InFlightManager:
    """Manages validation tasks per document URI; a new run supersedes the old one."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._lock = asyncio.Lock()
        self._logger = logger if logger is not None else get_logger("inflight")

    def __contains__(self, uri: str) -> bool:
        task = self._tasks.get(uri)
        return task is not None and not task.done()

    async def schedule(self, uri: str, func: Callable[[], Awaitable[None]]) -> None:
        """
        Start a validation run for the URI.

        Cancels any in-flight run for the same URI first, so only the latest
        run can publish.

        Args:
            uri: The document URI.
            func: The async function performing the run.
        """
        async with self._lock:
            await self._cancel_locked(uri)
            task = asyncio.create_task(self._run(uri, func))
            self._tasks[uri] = task
            task.add_done_callback(lambda done: self._forget(uri, done))

    async def cancel(self, uri: str) -> None:
        """
        Cancel any in-flight run for the URI.

        Args:
            uri: The document URI.
        """
        async with self._lock:
            await self._cancel_locked(uri)

    async def cancel_all(self) -> None:
        """Cancel every in-flight run."""
        async with self._lock:
            for uri in list(self._tasks):
                await self._cancel_locked(uri)

    async def join(self) -> None:
        """Wait until every run scheduled so far has finished."""
        tasks = list(self._tasks.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _cancel_locked(self, uri: str) -> None:
        task = self._tasks.pop(uri, None)
        if task is None or task.done():
            return
        self._logger.debug("Superseding in-flight run for %s", uri)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    def _forget(self, uri: str, task: asyncio.Task[None]) -> None:
        if self._tasks.get(uri) is task:
            del self._tasks[uri]

    async def _run(self, uri: str, func: Callable[[], Awaitable[None]]) -> None:
        try:
            await func()
        except asyncio.CancelledError:
            raise
        except Exception:
            self._logger.exception("Validation run for %s failed", uri)
