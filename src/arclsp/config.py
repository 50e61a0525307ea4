"""Runtime configuration for the lint pipeline."""

from __future__ import annotations

import dataclasses
from enum import Enum


class MalformedLinePolicy(str, Enum):
    """What to do with an output line that is not a valid lint record."""

    SKIP = "skip"
    ABORT = "abort"

    def __str__(self) -> str:
        return str(self.value)


DEFAULT_SOURCE = "arc lint"
DEFAULT_CRASH_MARKER = "Exception"


@dataclasses.dataclass(frozen=True)
class LintConfig:
    """Settings shared by every validation run."""

    executable: str = "arc"
    lint_timeout: float = 60.0
    vcs_executable: str = "git"
    vcs_timeout: float = 10.0
    source: str = DEFAULT_SOURCE
    malformed_lines: MalformedLinePolicy = MalformedLinePolicy.SKIP
    crash_marker: str = DEFAULT_CRASH_MARKER
