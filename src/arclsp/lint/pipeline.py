"""Validation pipeline for a single document."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from arclsp.config import LintConfig
from arclsp.lint.errors import (
    LintToolError,
    OutsideRootError,
    RootResolutionError,
)
from arclsp.lint.invoker import run_lint
from arclsp.lint.roots import relative_to_root, resolve_root
from arclsp.lint.translator import translate_output
from arclsp.lint.types import LintOutcome, ValidationResult
from arclsp.logging import get_logger

__all__ = ["validate_document"]


async def validate_document(
    document_path: str,
    workspace_folders: Sequence[str],
    config: LintConfig,
    logger: logging.Logger | None = None,
) -> ValidationResult | None:
    """
    Run the lint tool for one document and translate its findings.

    Args:
        document_path: Filesystem path of the document.
        workspace_folders: Workspace folder paths, first one preferred as root.
        config: Lint configuration.
        logger: Optional logger.

    Returns:
        None if no root was found or the document is outside it; nothing
        should be published then. Otherwise the diagnostics to publish, with
        ``crash_message`` set when the tool failed instead of linting.
    """
    if logger is None:
        logger = get_logger("pipeline")

    try:
        root = await resolve_root(document_path, workspace_folders, config, logger)
    except RootResolutionError as exc:
        logger.info("No project root for %s: %s", document_path, exc)
        return None

    try:
        relative_path = relative_to_root(document_path, root)
    except OutsideRootError:
        logger.info(
            "Trying to lint %s outside of the workspace %s, aborting",
            document_path,
            root,
        )
        return None

    try:
        lint_run = await run_lint(config, root, document_path, logger)
        if lint_run.outcome is LintOutcome.CLEAN:
            return ValidationResult(diagnostics=[])
        if lint_run.outcome is LintOutcome.CRASH:
            logger.error(
                "%s failed to run: %s",
                config.executable,
                lint_run.result.stderr.strip(),
            )
            return ValidationResult(
                diagnostics=[],
                crash_message=_crash_summary(config.executable, lint_run.result.stderr),
            )

        translation = translate_output(
            lint_run.result.stdout,
            relative_path,
            source=config.source,
            policy=config.malformed_lines,
            logger=logger,
        )
    except LintToolError as exc:
        logger.error("Linting %s failed: %s", document_path, exc)
        return ValidationResult(
            diagnostics=[], crash_message=f"{config.executable} lint failed: {exc}"
        )

    return ValidationResult(diagnostics=translation.diagnostics)


def _crash_summary(executable: str, stderr: str) -> str:
    # arc prints the marker on its own line followed by the message
    lines = [line.strip() for line in stderr.strip().splitlines() if line.strip()]
    if not lines:
        return f"{executable} lint failed to run"
    detail = lines[1] if len(lines) > 1 else lines[0]
    return f"{executable} lint failed to run: {detail}"
