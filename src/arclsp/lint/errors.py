"""Exceptions raised by the lint pipeline."""

from __future__ import annotations


class ArcLspError(Exception):
    """Base class for all arclsp pipeline errors."""


class RootResolutionError(ArcLspError):
    """No project root could be determined for a document."""


class OutsideRootError(ArcLspError):
    """The document does not live under the resolved project root."""

    def __init__(self, path: str, root: str) -> None:
        super().__init__(f"{path} is outside of {root}")
        self.path = path
        self.root = root


class LintToolError(ArcLspError):
    """The lint tool could not produce usable findings."""


class ProcessLaunchError(LintToolError):
    """An external executable could not be started."""


class ProcessTimeoutError(LintToolError):
    """An external executable did not finish in time and was killed."""

    def __init__(self, argv: list[str], timeout: float) -> None:
        super().__init__(f"{argv[0]} timed out after {timeout:g}s")
        self.argv = argv
        self.timeout = timeout


class MalformedOutputError(LintToolError):
    """A line of lint output could not be parsed."""

    def __init__(self, line_number: int, reason: str) -> None:
        super().__init__(f"malformed lint output on line {line_number}: {reason}")
        self.line_number = line_number
        self.reason = reason
