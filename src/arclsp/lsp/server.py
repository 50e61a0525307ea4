"""arc lint LSP Server using pygls 2.0.

Runs ``arc lint`` when a document is opened or saved and publishes the
findings as diagnostics.
"""

from __future__ import annotations

import logging
from typing import Callable

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from arclsp.config import LintConfig
from arclsp.lint.pipeline import validate_document
from arclsp.logging import get_logger
from arclsp.lsp.adapter import (
    to_lsp_diagnostic as _to_lsp_diagnostic,
    uri_to_path as _uri_to_path,
    uris_to_paths as _uris_to_paths,
)
from arclsp.lsp.diagnostics.inflight import InFlightManager
from arclsp.lsp.error_handling import wrap_async_handler

WorkspaceFoldersProvider = Callable[[], list[str]]


class _CrashNotifier:
    """Shows lint tool failures to the user without repeating the same message."""

    def __init__(self, server: LanguageServer) -> None:
        self._server = server
        self._last_message: str | None = None

    def notify(self, message: str) -> None:
        if message == self._last_message:
            return
        self._last_message = message
        self._server.window_show_message(
            types.ShowMessageParams(type=types.MessageType.Error, message=message)
        )

    def reset(self) -> None:
        self._last_message = None


def create_server(
    *,
    config: LintConfig | None = None,
    get_workspace_folders: WorkspaceFoldersProvider | None = None,
    in_flight: InFlightManager | None = None,
    logger: logging.Logger | None = None,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        config: Lint configuration. Defaults to LintConfig().
        get_workspace_folders: Provider of workspace folder paths, first one
            preferred as project root. Defaults to the folders the client
            reported to the server.
        in_flight: Manager for running validations. A new one is created if None.
        logger: Optional logger instance. If None, uses default arclsp.lsp logger.

    Returns:
        Configured LanguageServer instance with diagnostics support.
    """
    if config is None:
        config = LintConfig()
    if logger is None:
        logger = get_logger("lsp")

    server = LanguageServer("arclsp", "v0.1.0")
    if in_flight is None:
        in_flight = InFlightManager(logger=logger)
    notifier = _CrashNotifier(server)

    def _client_workspace_folders() -> list[str]:
        workspace = server.workspace
        uris = [folder.uri for folder in workspace.folders.values()]
        if not uris and workspace.root_uri:
            uris = [workspace.root_uri]
        return _uris_to_paths(uris)

    folders_provider = get_workspace_folders or _client_workspace_folders

    def publish(uri: str, diagnostics: list[types.Diagnostic]) -> None:
        server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )
        logger.debug("Published %d diagnostics for %s", len(diagnostics), uri)

    async def validate_and_publish(uri: str) -> None:
        """Run the lint pipeline for a document and publish its diagnostics."""
        document_path = _uri_to_path(uri)
        if document_path is None:
            logger.debug("Skipping %s: not a file URI", uri)
            return

        logger.debug("Validating %s", document_path)
        result = await validate_document(
            document_path, folders_provider(), config, logger
        )
        if result is None:
            return

        if result.crash_message is not None:
            notifier.notify(result.crash_message)
        else:
            notifier.reset()

        publish(uri, [_to_lsp_diagnostic(d) for d in result.diagnostics])

    async def schedule_validation(uri: str) -> None:
        await in_flight.schedule(uri, lambda: validate_and_publish(uri))

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didOpen",
        default_factory=lambda: None,
    )
    async def did_open(params: types.DidOpenTextDocumentParams) -> None:
        """Handle textDocument/didOpen by linting the document."""
        uri = params.text_document.uri
        logger.debug("Document opened: %s", uri)
        await schedule_validation(uri)

    @server.feature(
        types.TEXT_DOCUMENT_DID_SAVE,
        types.SaveOptions(include_text=False),
    )
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didSave",
        default_factory=lambda: None,
    )
    async def did_save(params: types.DidSaveTextDocumentParams) -> None:
        """Handle textDocument/didSave by linting the document."""
        uri = params.text_document.uri
        logger.debug("Document saved: %s", uri)
        await schedule_validation(uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didClose",
        default_factory=lambda: None,
    )
    async def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Handle textDocument/didClose by clearing diagnostics."""
        uri = params.text_document.uri
        logger.debug("Document closed: %s", uri)

        await in_flight.cancel(uri)
        publish(uri, [])

    @server.feature(types.SHUTDOWN)
    @wrap_async_handler(
        logger=logger,
        feature_name="shutdown",
        default_factory=lambda: None,
    )
    async def shutdown(params: None) -> None:
        """Handle shutdown by stopping every running lint."""
        logger.debug("Shutting down, cancelling running lints")
        await in_flight.cancel_all()

    return server
