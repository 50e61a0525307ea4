"""Boundary for running external commands.

Commands are awaited to completion with their output fully captured; nothing
is streamed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from arclsp.lint.errors import ProcessLaunchError, ProcessTimeoutError
from arclsp.lint.types import ProcessResult
from arclsp.logging import get_logger

__all__ = ["run_process"]


async def run_process(
    argv: Sequence[str],
    *,
    cwd: str,
    timeout: float | None,
    logger: logging.Logger | None = None,
) -> ProcessResult:
    """
    Run a command and capture its exit code, stdout and stderr.

    Args:
        argv: Program and arguments. Never passed through a shell.
        cwd: Working directory for the command.
        timeout: Seconds to wait before killing the command. None waits forever.
        logger: Optional logger. Defaults to the arclsp.process logger.

    Returns:
        The captured process result.

    Raises:
        ProcessLaunchError: The executable could not be started.
        ProcessTimeoutError: The command did not finish within ``timeout``.
    """
    if logger is None:
        logger = get_logger("process")

    args = list(argv)
    logger.debug("Running %s in %s", args, cwd)

    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        raise ProcessLaunchError(f"could not start {args[0]}: {exc}") from exc

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        _kill(process)
        await process.wait()
        raise ProcessTimeoutError(args, timeout or 0.0) from None
    except asyncio.CancelledError:
        _kill(process)
        await asyncio.shield(process.wait())
        raise

    exit_code = process.returncode if process.returncode is not None else -1
    logger.debug("%s exited with %d", args[0], exit_code)
    return ProcessResult(
        exit_code=exit_code,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )


def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
