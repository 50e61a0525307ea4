"""Project root discovery and the boundary check against it."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import PurePath

from arclsp.config import LintConfig
from arclsp.lint.errors import LintToolError, OutsideRootError, RootResolutionError
from arclsp.lint.process import run_process
from arclsp.logging import get_logger

__all__ = ["relative_to_root", "resolve_root"]


async def resolve_root(
    document_path: str,
    workspace_folders: Sequence[str],
    config: LintConfig,
    logger: logging.Logger | None = None,
) -> str:
    """
    Determine the project root to run the lint tool from.

    The first workspace folder wins. Without one, the version-control
    top-level directory of the document's directory is used.

    Args:
        document_path: Filesystem path of the document.
        workspace_folders: Workspace folder paths in the order the editor reported them.
        config: Lint configuration (version-control executable and timeout).
        logger: Optional logger.

    Returns:
        Absolute path of the project root.

    Raises:
        RootResolutionError: No workspace folder and the version-control query failed.
    """
    if logger is None:
        logger = get_logger("roots")

    if workspace_folders:
        root = workspace_folders[0]
        logger.debug("Using workspace folder %s as root", root)
        return os.path.abspath(root)

    directory = os.path.dirname(os.path.abspath(document_path))
    argv = [config.vcs_executable, "rev-parse", "--show-toplevel"]
    try:
        result = await run_process(
            argv, cwd=directory, timeout=config.vcs_timeout, logger=logger
        )
    except LintToolError as exc:
        raise RootResolutionError(str(exc)) from exc

    root = result.stdout.strip()
    if result.exit_code != 0 or not root:
        raise RootResolutionError(
            f"{directory} is not inside a repository: {result.stderr.strip()}"
        )

    logger.debug("Using repository top level %s as root", root)
    return os.path.abspath(root)


def relative_to_root(document_path: str, root: str) -> str:
    """
    Return the document path relative to root, in POSIX form.

    Args:
        document_path: Filesystem path of the document.
        root: Project root directory.

    Returns:
        The root-relative path, as the lint tool reports it.

    Raises:
        OutsideRootError: The document is not strictly inside root.
    """
    path = os.path.abspath(document_path)
    base = os.path.abspath(root)
    try:
        relative = os.path.relpath(path, base)
    except ValueError:
        # Different drives on Windows
        raise OutsideRootError(path, base) from None

    parts = PurePath(relative).parts
    if not parts or parts[0] == os.pardir or relative == os.curdir:
        raise OutsideRootError(path, base)

    return PurePath(relative).as_posix()
