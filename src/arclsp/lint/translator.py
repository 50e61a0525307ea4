"""Translation of ``arc lint --output=json`` output into diagnostics.

The tool writes one JSON object per line. Each object maps root-relative file
paths to lists of ``{"line": int, "code": str, "description": str}`` records,
and a file may appear on several lines.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from arclsp.config import DEFAULT_SOURCE, MalformedLinePolicy
from arclsp.lint.errors import MalformedOutputError
from arclsp.lint.types import (
    MAX_LINE,
    LineParseError,
    LintDiagnostic,
    ParsedLine,
    ParsedOutputLine,
    Severity,
    Translation,
)
from arclsp.logging import get_logger

__all__ = ["parse_output", "record_to_diagnostic", "translate_output"]


def parse_output(stdout: str) -> list[ParsedOutputLine]:
    """
    Parse each non-empty output line independently.

    Args:
        stdout: Captured standard output of the lint tool.

    Returns:
        One ParsedLine or LineParseError per non-empty line, in output order.
    """
    parsed: list[ParsedOutputLine] = []
    for line_number, text in enumerate(stdout.splitlines(), start=1):
        if not text.strip():
            continue
        try:
            value = json.loads(text)
        except json.JSONDecodeError as exc:
            parsed.append(LineParseError(line_number, text, f"invalid JSON: {exc.msg}"))
            continue

        if not isinstance(value, dict):
            parsed.append(
                LineParseError(line_number, text, "expected an object of file records")
            )
            continue

        parsed.append(ParsedLine(line_number, value))
    return parsed


def record_to_diagnostic(record: Any, *, source: str = DEFAULT_SOURCE) -> LintDiagnostic:
    """
    Convert one raw error record into a diagnostic.

    Line numbers are clamped into the range an LSP position can hold.

    Raises:
        ValueError: The record is not an object or has no integer line.
    """
    if not isinstance(record, dict):
        raise ValueError("record is not an object")

    line = record.get("line")
    # bool is an int subclass but never a line number
    if isinstance(line, bool) or not isinstance(line, int):
        raise ValueError(f"record has no integer line: {line!r}")

    code = record.get("code")
    description = record.get("description")
    return LintDiagnostic(
        line=min(max(line - 1, 0), MAX_LINE),
        message="" if description is None else str(description),
        code=None if code is None else str(code),
        source=source,
        severity=Severity.ERROR,
    )


def translate_output(
    stdout: str,
    relative_path: str,
    *,
    source: str = DEFAULT_SOURCE,
    policy: MalformedLinePolicy = MalformedLinePolicy.SKIP,
    logger: logging.Logger | None = None,
) -> Translation:
    """
    Build the diagnostics for one document from lint output.

    Diagnostics keep output order: line order first, then record order.

    Args:
        stdout: Captured standard output of the lint tool.
        relative_path: Root-relative POSIX path of the document.
        source: Source tag put on every diagnostic.
        policy: SKIP logs and collects bad lines; ABORT raises on the first one.
        logger: Optional logger.

    Returns:
        The diagnostics and any parse errors.

    Raises:
        MalformedOutputError: A line or record is unusable and policy is ABORT.
    """
    if logger is None:
        logger = get_logger("translator")

    diagnostics: list[LintDiagnostic] = []
    errors: list[LineParseError] = []

    def _reject(error: LineParseError) -> None:
        if policy is MalformedLinePolicy.ABORT:
            raise MalformedOutputError(error.line_number, error.reason)
        logger.warning(
            "Skipping lint output line %d: %s", error.line_number, error.reason
        )
        errors.append(error)

    for parsed in parse_output(stdout):
        if isinstance(parsed, LineParseError):
            _reject(parsed)
            continue

        if relative_path not in parsed.records:
            continue

        # entries for other files are never inspected
        records = parsed.records[relative_path]
        if not isinstance(records, list):
            _reject(
                LineParseError(
                    parsed.line_number,
                    json.dumps(parsed.records),
                    f"records for {relative_path!r} are not a list",
                )
            )
            continue

        for record in records:
            try:
                diagnostics.append(record_to_diagnostic(record, source=source))
            except ValueError as exc:
                _reject(LineParseError(parsed.line_number, json.dumps(record), str(exc)))

    logger.debug(
        "Translated %d diagnostics for %s (%d bad lines)",
        len(diagnostics),
        relative_path,
        len(errors),
    )
    return Translation(diagnostics=diagnostics, errors=errors)
