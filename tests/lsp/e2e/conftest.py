"""Fixtures for E2E tests."""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from tests.lsp.e2e.lsp_client import LspTestClient

REPO_ROOT = Path(__file__).resolve().parents[3]

FAKE_ARC = """#!/bin/sh
# Reports one finding for a.py and one for another file, like arc lint --output=json
echo '{"a.py": [{"line": 2, "code": "TXT3", "description": "Line contains a tab."}]}'
echo '{"b.py": [{"line": 1, "code": "TXT3", "description": "Not this file."}]}'
exit 1
"""


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A project directory containing a.py."""
    root = tmp_path / "repo"
    root.mkdir()
    (root / "a.py").write_text("x = 1\n\ty = 2\n", encoding="utf-8")
    return root


@pytest.fixture
def fake_arc(tmp_path: Path) -> Path:
    """An executable standing in for arc."""
    if sys.platform == "win32":
        pytest.skip("fake arc is a POSIX shell script")
    script = tmp_path / "arc"
    script.write_text(FAKE_ARC, encoding="utf-8")
    script.chmod(0o755)
    return script


@pytest.fixture
async def lsp_server_process(
    fake_arc: Path,
) -> AsyncGenerator[asyncio.subprocess.Process, None]:
    """Start the test LSP server as a subprocess."""
    env = dict(os.environ)
    env["ARCLSP_TEST_ARC"] = str(fake_arc)
    env["PYTHONPATH"] = os.pathsep.join(
        filter(None, [str(REPO_ROOT / "src"), str(REPO_ROOT), env.get("PYTHONPATH")])
    )
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "tests.lsp.e2e.server_entry",
        cwd=str(REPO_ROOT),
        env=env,
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.DEVNULL,
    )

    yield process

    # Cleanup
    if process.returncode is None:
        process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=5.0)
        except asyncio.TimeoutError:
            process.kill()


@pytest.fixture
async def lsp_client(
    lsp_server_process: asyncio.subprocess.Process,
) -> AsyncGenerator[LspTestClient, None]:
    """Create an LSP client connected to the test server."""
    assert lsp_server_process.stdin is not None
    assert lsp_server_process.stdout is not None

    reader = lsp_server_process.stdout
    writer = lsp_server_process.stdin

    # Wrap stdin in a StreamWriter-like interface
    class StdinWriter:
        def __init__(self, stdin: asyncio.StreamWriter) -> None:
            self._stdin = stdin

        def write(self, data: bytes) -> None:
            self._stdin.write(data)

        async def drain(self) -> None:
            await self._stdin.drain()

    client = LspTestClient(reader=reader, writer=StdinWriter(writer))  # type: ignore[arg-type]
    yield client
