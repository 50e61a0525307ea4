"""Running ``arc lint`` and classifying its result."""

from __future__ import annotations

import logging
import os

from arclsp.config import LintConfig
from arclsp.lint.process import run_process
from arclsp.lint.types import LintOutcome, LintRun, ProcessResult
from arclsp.logging import get_logger

__all__ = ["build_lint_command", "classify_result", "run_lint"]

# (exited cleanly, stderr carries the crash marker) -> outcome
_OUTCOME_TABLE: dict[tuple[bool, bool], LintOutcome] = {
    (True, False): LintOutcome.CLEAN,
    (True, True): LintOutcome.CLEAN,
    (False, False): LintOutcome.FINDINGS,
    (False, True): LintOutcome.CRASH,
}


def build_lint_command(config: LintConfig, file_path: str) -> list[str]:
    """Build the argument vector for linting a single file."""
    return [config.executable, "lint", "--output=json", os.path.abspath(file_path)]


def classify_result(result: ProcessResult, crash_marker: str) -> LintOutcome:
    """
    Classify a finished lint command.

    Exit code 0 is clean regardless of output. A non-zero exit is a crash when
    stderr starts with the crash marker, otherwise it reports findings.
    """
    exited_cleanly = result.exit_code == 0
    crashed = bool(crash_marker) and result.stderr.strip().startswith(crash_marker)
    return _OUTCOME_TABLE[(exited_cleanly, crashed)]


async def run_lint(
    config: LintConfig,
    root: str,
    file_path: str,
    logger: logging.Logger | None = None,
) -> LintRun:
    """
    Lint one file from the project root.

    Raises:
        ProcessLaunchError: The lint executable could not be started.
        ProcessTimeoutError: The lint command exceeded the configured timeout.
    """
    if logger is None:
        logger = get_logger("invoker")

    argv = build_lint_command(config, file_path)
    logger.info("Linting %s", argv[-1])
    result = await run_process(
        argv, cwd=root, timeout=config.lint_timeout, logger=logger
    )

    outcome = classify_result(result, config.crash_marker)
    logger.debug("Lint outcome for %s: %s", argv[-1], outcome)
    if outcome is LintOutcome.CLEAN and result.stdout.strip():
        logger.debug("Lint output: %s", result.stdout.strip())
    return LintRun(outcome=outcome, result=result)
