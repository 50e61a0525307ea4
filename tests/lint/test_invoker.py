"""Tests for arc lint invocation and result classification."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from arclsp.config import LintConfig
from arclsp.lint.invoker import build_lint_command, classify_result, run_lint
from arclsp.lint.types import LintOutcome, ProcessResult


class TestBuildLintCommand:
    """Tests for build_lint_command function."""

    def test_uses_json_output_and_absolute_path(self, tmp_path: Path) -> None:
        """Command is `<arc> lint --output=json <abs path>`."""
        target = tmp_path / "a.py"
        argv = build_lint_command(LintConfig(executable="arc"), str(target))
        assert argv == ["arc", "lint", "--output=json", str(target)]

    def test_relative_path_made_absolute(self) -> None:
        """Relative document paths are resolved against the cwd."""
        argv = build_lint_command(LintConfig(), "a.py")
        assert os.path.isabs(argv[-1])


class TestClassifyResult:
    """Tests for classify_result decision table."""

    @pytest.mark.parametrize(
        ("result", "expected"),
        [
            (ProcessResult(0, "", ""), LintOutcome.CLEAN),
            (ProcessResult(0, "some text", ""), LintOutcome.CLEAN),
            (ProcessResult(0, "", "Exception\nboom"), LintOutcome.CLEAN),
            (ProcessResult(1, '{"a.py": []}', ""), LintOutcome.FINDINGS),
            (ProcessResult(2, "", ""), LintOutcome.FINDINGS),
            (ProcessResult(2, "", "warning: slow"), LintOutcome.FINDINGS),
            (ProcessResult(1, "", "Exception\nUsage Exception"), LintOutcome.CRASH),
            (ProcessResult(1, "", "  \nException: boom"), LintOutcome.CRASH),
        ],
    )
    def test_outcomes(self, result: ProcessResult, expected: LintOutcome) -> None:
        """Each (exit code, stderr) combination maps to one outcome."""
        assert classify_result(result, "Exception") is expected

    def test_marker_must_start_stderr(self) -> None:
        """A marker in the middle of stderr is not a crash."""
        result = ProcessResult(1, "", "lint warning: Exception in text")
        assert classify_result(result, "Exception") is LintOutcome.FINDINGS

    def test_empty_marker_never_crashes(self) -> None:
        """An empty marker disables crash detection."""
        result = ProcessResult(1, "", "Exception")
        assert classify_result(result, "") is LintOutcome.FINDINGS


@pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script")
class TestRunLint:
    """Tests for run_lint against a fake arc executable."""

    @staticmethod
    def _fake_arc(tmp_path: Path, body: str) -> str:
        script = tmp_path / "fake-arc"
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(0o755)
        return str(script)

    @pytest.mark.asyncio
    async def test_runs_from_root_with_arguments(self, tmp_path: Path) -> None:
        """arc runs with cwd=root and receives the lint arguments."""
        root = tmp_path / "repo"
        root.mkdir()
        arc = self._fake_arc(tmp_path, 'echo "$(pwd)|$1|$2|$3"\nexit 1')
        target = root / "a.py"

        lint_run = await run_lint(LintConfig(executable=arc), str(root), str(target))

        assert lint_run.outcome is LintOutcome.FINDINGS
        cwd, command, flag, path = lint_run.result.stdout.strip().split("|")
        assert os.path.samefile(cwd, root)
        assert command == "lint"
        assert flag == "--output=json"
        assert path == str(target)

    @pytest.mark.asyncio
    async def test_crash(self, tmp_path: Path) -> None:
        """Exception marker on stderr with non-zero exit is a crash."""
        arc = self._fake_arc(tmp_path, 'echo "Exception" >&2\necho "boom" >&2\nexit 1')
        lint_run = await run_lint(LintConfig(executable=arc), str(tmp_path), "a.py")
        assert lint_run.outcome is LintOutcome.CRASH
        assert "boom" in lint_run.result.stderr
