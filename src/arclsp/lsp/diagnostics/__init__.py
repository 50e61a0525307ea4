"""Diagnostics scheduling for arc lint validation runs."""

from arclsp.lsp.diagnostics.inflight import InFlightManager

__all__ = [
    "InFlightManager",
]
