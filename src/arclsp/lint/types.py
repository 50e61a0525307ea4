"""Type definitions for the lint pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Any, NamedTuple, Union

# LSP positions are uintegers; MAX_CHARACTER covers the rest of any line.
MAX_CHARACTER = 2**31 - 1
MAX_LINE = 2**31 - 1


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class Severity(_StrEnum):
    """Severity of a lint diagnostic. arc lint findings are always errors."""

    ERROR = "error"


class LintOutcome(_StrEnum):
    """How a finished lint command is interpreted."""

    CLEAN = "clean"
    FINDINGS = "findings"
    CRASH = "crash"


class ProcessResult(NamedTuple):
    """Captured result of an external command."""

    exit_code: int
    stdout: str
    stderr: str


class LintRun(NamedTuple):
    """A classified lint command result."""

    outcome: LintOutcome
    result: ProcessResult


class LintDiagnostic(NamedTuple):
    """An editor-agnostic diagnostic covering a single line."""

    line: int  # 0-based line
    message: str
    code: str | None
    source: str
    severity: Severity = Severity.ERROR
    start_character: int = 0
    end_character: int = MAX_CHARACTER


class ParsedLine(NamedTuple):
    """One output line parsed into a mapping of relative path to records."""

    line_number: int  # 1-based line in the tool output
    records: dict[str, Any]  # only the target document's entry is validated


class LineParseError(NamedTuple):
    """One output line (or record) that could not be used."""

    line_number: int  # 1-based line in the tool output
    text: str
    reason: str


ParsedOutputLine = Union[ParsedLine, LineParseError]


class Translation(NamedTuple):
    """Diagnostics for one document plus everything that failed to parse."""

    diagnostics: list[LintDiagnostic]
    errors: list[LineParseError]


class ValidationResult(NamedTuple):
    """Outcome of a validation run that got as far as invoking the tool."""

    diagnostics: list[LintDiagnostic]
    crash_message: str | None = None
