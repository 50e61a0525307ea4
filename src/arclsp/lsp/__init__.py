"""LSP layer for the arc lint language server."""

from arclsp.lsp.adapter import to_lsp_diagnostic
from arclsp.lsp.diagnostics import InFlightManager
from arclsp.lsp.server import create_server

__all__ = [
    "InFlightManager",
    "create_server",
    "to_lsp_diagnostic",
]
