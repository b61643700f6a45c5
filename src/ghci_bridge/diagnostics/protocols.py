"""Protocol-based interfaces for the aggregator's collaborators.

The LSP adapter satisfies ``EditorClient`` structurally (no inheritance);
tests use ``fakes.RecordingClient``.
"""

from typing import Protocol

from lsprotocol import types


class EditorClient(Protocol):
    def publish(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        """Send *diagnostics* as the complete current set for *uri*."""
        ...

    def set_status(self, text: str) -> None: ...

    def log(self, text: str) -> None: ...

    def show_error(self, text: str) -> None:
        """Surface *text* to the operator as an error, not just a log line."""
        ...
