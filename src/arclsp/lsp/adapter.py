"""Adapter module for converting between internal types and LSP protocol types."""

from __future__ import annotations

from collections.abc import Iterable

from lsprotocol import types
from pygls.uris import to_fs_path, uri_scheme

from arclsp.lint.types import LintDiagnostic, Severity

__all__ = [
    "severity_to_lsp",
    "to_lsp_diagnostic",
    "uri_to_path",
    "uris_to_paths",
]

_SEVERITY_TO_LSP: dict[Severity, types.DiagnosticSeverity] = {
    Severity.ERROR: types.DiagnosticSeverity.Error,
}


def severity_to_lsp(severity: Severity) -> types.DiagnosticSeverity:
    """Map internal Severity to LSP DiagnosticSeverity."""
    return _SEVERITY_TO_LSP.get(severity, types.DiagnosticSeverity.Error)


def to_lsp_diagnostic(diagnostic: LintDiagnostic) -> types.Diagnostic:
    """
    Convert an internal diagnostic to an LSP Diagnostic.

    The range stays on one line and runs from start_character to end_character.
    """
    return types.Diagnostic(
        range=types.Range(
            start=types.Position(
                line=diagnostic.line, character=diagnostic.start_character
            ),
            end=types.Position(line=diagnostic.line, character=diagnostic.end_character),
        ),
        message=diagnostic.message,
        severity=severity_to_lsp(diagnostic.severity),
        code=diagnostic.code,
        source=diagnostic.source,
    )


def uri_to_path(uri: str) -> str | None:
    """Return the filesystem path of a file URI, or None for other schemes."""
    if uri_scheme(uri) != "file":
        return None
    return to_fs_path(uri)


def uris_to_paths(uris: Iterable[str]) -> list[str]:
    """Convert URIs to filesystem paths, dropping the ones without a path."""
    paths = []
    for uri in uris:
        path = uri_to_path(uri)
        if path:
            paths.append(path)
    return paths
