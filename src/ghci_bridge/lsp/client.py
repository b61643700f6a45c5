"""EditorClient implementation on top of a pygls LanguageServer."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from lsprotocol import types

from ghci_bridge.constants import ELAPSED_PRECISION

if TYPE_CHECKING:
    from pygls.lsp.server import LanguageServer

logger = logging.getLogger(__name__)


class LspEditorClient:
    """Publishes diagnostics, status and log lines to the connected editor.

    Log lines are prefixed with the seconds elapsed since *epoch*
    (``time.monotonic()`` at construction by default).
    """

    def __init__(
        self,
        server: LanguageServer,
        *,
        status_method: str,
        status_prefix: str,
        epoch: float | None = None,
    ) -> None:
        self._server = server
        self._status_method = status_method
        self._status_prefix = status_prefix
        self._epoch = time.monotonic() if epoch is None else epoch

    def publish(
        self, uri: str, diagnostics: list[types.Diagnostic]
    ) -> None:
        logger.debug(
            "event=publish_diagnostics uri=%s count=%d", uri, len(diagnostics)
        )
        self._server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    def set_status(self, text: str) -> None:
        self._server.protocol.notify(
            self._status_method, f"{self._status_prefix}: {text}"
        )

    def log(self, text: str) -> None:
        elapsed = time.monotonic() - self._epoch
        self._server.window_log_message(
            types.LogMessageParams(
                type=types.MessageType.Info,
                message=f"{elapsed:.{ELAPSED_PRECISION}f} {text}",
            )
        )

    def show_error(self, text: str) -> None:
        self._server.window_show_message(
            types.ShowMessageParams(type=types.MessageType.Error, message=text)
        )
