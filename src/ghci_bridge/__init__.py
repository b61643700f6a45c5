"""GHCi bridge — republishes GHCi compiler diagnostics to an LSP editor."""

__version__ = "0.1.0"
NAME = "ghci-bridge"
