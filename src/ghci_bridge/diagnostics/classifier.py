"""Line classifier: one line of GHCi stdout → one typed record."""

from __future__ import annotations

from pydantic import ValidationError

from ghci_bridge.constants import (
    COMPILING_PATTERN,
    INTERACTIVE_FILE,
    SeverityTag,
)
from ghci_bridge.diagnostics.records import (
    ClassifiedRecord,
    CompilationStarting,
    InteractiveOutput,
    PlainText,
    PromptSentinel,
    SpanDiagnostic,
)
from ghci_bridge.diagnostics.schemas import GhcMessage


def match_compiling(text: str) -> CompilationStarting | None:
    """Parse a ``[n of m] Compiling Module ( path, ... )`` banner."""
    match = COMPILING_PATTERN.match(text)
    if match is None:
        return None
    index, total, module, source_path = match.groups()
    return CompilationStarting(
        source_path=source_path,
        module=module,
        index=int(index),
        total=int(total),
    )


def _parse(line: str) -> GhcMessage | None:
    """Lines that are not a JSON object of the expected shape → None."""
    if not line.lstrip().startswith("{"):
        return None
    try:
        return GhcMessage.model_validate_json(line)
    except ValidationError:
        return None


class LineClassifier:
    """Classifies GHCi stdout lines for one interpreter session.

    *prompt* is the sentinel configured as GHCi's prompt; any
    non-structured line containing it marks the interpreter as idle.
    """

    def __init__(self, prompt: str) -> None:
        if not prompt:
            raise ValueError("prompt sentinel must not be empty")
        self._prompt = prompt

    @property
    def prompt(self) -> str:
        return self._prompt

    def classify(self, raw_line: str) -> ClassifiedRecord:
        line = raw_line.rstrip("\r\n")
        message = _parse(line)
        if message is None:
            return self._classify_text(line)

        if message.span is not None:
            span = message.span
            if span.file == INTERACTIVE_FILE:
                return InteractiveOutput(line=line)
            return SpanDiagnostic(
                file=span.file,
                start_line=span.start_line,
                start_col=span.start_col,
                end_line=span.end_line,
                end_col=span.end_col,
                reason_code=message.reason,
                severity_tag=message.severity,
                doc_text=message.doc,
            )

        if message.reason is None and message.severity == SeverityTag.OUTPUT:
            starting = match_compiling(message.doc)
            if starting is not None:
                return starting

        return PlainText(line=line)

    def _classify_text(self, line: str) -> ClassifiedRecord:
        if self._prompt in line:
            return PromptSentinel(line=line)
        # Sessions started without -ddump-json print the banner as-is
        starting = match_compiling(line)
        if starting is not None:
            return starting
        return PlainText(line=line)
