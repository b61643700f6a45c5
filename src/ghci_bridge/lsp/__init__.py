"""Language Server Protocol surface (pygls)."""

from ghci_bridge.lsp.client import LspEditorClient
from ghci_bridge.lsp.server import GhciLanguageServer, create_server

__all__ = ["GhciLanguageServer", "LspEditorClient", "create_server"]
