"""Aggregation & republish controller.

Consumes classified GHCi output strictly in arrival order, keeps the
per-file diagnostic index current, and pushes full per-file snapshots
to the editor. Owns the only mutable diagnostic state in the process.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lsprotocol import types

from ghci_bridge import NAME
from ghci_bridge.constants import STATUS_IDLE, Channel, SessionState
from ghci_bridge.diagnostics.classifier import LineClassifier
from ghci_bridge.diagnostics.keys import derive_key
from ghci_bridge.diagnostics.protocols import EditorClient
from ghci_bridge.diagnostics.records import (
    ClassifiedRecord,
    CompilationStarting,
    InteractiveOutput,
    PlainText,
    PromptSentinel,
    SpanDiagnostic,
)
from ghci_bridge.diagnostics.severity import map_severity
from ghci_bridge.diagnostics.store import DiagnosticStore
from ghci_bridge.uris import path_to_uri

logger = logging.getLogger(__name__)


def to_range(record: SpanDiagnostic) -> types.Range:
    """One-based inclusive GHC span → zero-based LSP range."""
    return types.Range(
        start=types.Position(
            line=record.start_line - 1,
            character=record.start_col - 1,
        ),
        end=types.Position(
            line=record.end_line - 1,
            character=record.end_col - 1,
        ),
    )


class DiagnosticAggregator:
    """Single-threaded controller; call it from one event loop only.

    Usage::

        aggregator = DiagnosticAggregator(client, root=workspace)
        aggregator.begin_session(prompt)
        aggregator.command_sent(":reload")
        aggregator.on_stdout(line)
    """

    def __init__(
        self,
        client: EditorClient,
        *,
        root: Path | None = None,
        source: str = NAME,
    ) -> None:
        self._client = client
        self._root = root
        self._source = source
        self._store = DiagnosticStore()
        self._classifier: LineClassifier | None = None
        self._state = SessionState.IDLE

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def root(self) -> Path | None:
        return self._root

    @root.setter
    def root(self, value: Path | None) -> None:
        self._root = value

    def begin_session(self, prompt: str) -> None:
        """Start classifying against a fresh session's prompt sentinel."""
        self._classifier = LineClassifier(prompt)
        self._state = SessionState.IDLE

    # ── Commands ─────────────────────────────────────────

    def command_sent(self, command: str) -> None:
        self._state = SessionState.BUSY
        self._client.log(f"[{Channel.STDIN}] {command}")
        self._client.set_status(f"Running {command}")

    # ── Subprocess output ────────────────────────────────

    def on_stdout(self, line: str) -> None:
        if self._classifier is None:
            msg = "No GHCi session. Call begin_session(prompt) first."
            raise RuntimeError(msg)
        self.handle(self._classifier.classify(line))

    def on_stderr(self, line: str) -> None:
        text = line.rstrip("\r\n")
        self._client.log(f"[{Channel.STDERR}] {text}")

    def handle(self, record: ClassifiedRecord) -> None:
        match record:
            case SpanDiagnostic():
                self._record_diagnostic(record)
            case CompilationStarting(source_path=source_path):
                uri = path_to_uri(source_path, self._root)
                logger.debug(
                    "event=compiling module=%s uri=%s", record.module, uri
                )
                self._store.clear(uri)
                self.republish()
            case PromptSentinel():
                self._state = SessionState.IDLE
                self._client.set_status(STATUS_IDLE)
            case InteractiveOutput(line=line) | PlainText(line=line):
                self._client.log(f"[{Channel.STDOUT}] {line}")

    def _record_diagnostic(self, record: SpanDiagnostic) -> None:
        uri = path_to_uri(record.file, self._root)
        diagnostic = types.Diagnostic(
            range=to_range(record),
            message=record.doc_text,
            severity=map_severity(record.severity_tag),
            code=record.reason_code,
            source=self._source,
        )
        self._store.upsert(uri, derive_key(record), diagnostic)
        self.republish()

    # ── Republish ────────────────────────────────────────

    def republish(self) -> None:
        """Push every tracked file's snapshot; forget files sent empty."""
        for uri in self._store.files():
            diagnostics = self._store.snapshot(uri)
            self._client.publish(uri, diagnostics)
            if not diagnostics:
                self._store.evict(uri)

    def retract_all(self) -> None:
        """Tell the editor every tracked file is clean, then forget them."""
        files = self._store.files()
        for uri in files:
            self._store.clear(uri)
        self.republish()
        logger.debug("event=diagnostics_retracted files=%d", len(files))

    # ── Queries ──────────────────────────────────────────

    def snapshot(self, uri: str) -> list[types.Diagnostic]:
        return self._store.snapshot(uri)

    def tracked_files(self) -> list[str]:
        return self._store.files()
