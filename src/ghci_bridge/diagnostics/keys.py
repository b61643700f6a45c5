"""Stable per-file identity for a diagnostic."""

from __future__ import annotations

from typing import NamedTuple

from ghci_bridge.diagnostics.records import SpanDiagnostic


class DiagnosticKey(NamedTuple):
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    reason_code: str | None


def derive_key(record: SpanDiagnostic) -> DiagnosticKey:
    """Same location and reason → same key, so a re-report replaces it."""
    return DiagnosticKey(
        record.start_line,
        record.start_col,
        record.end_line,
        record.end_col,
        record.reason_code,
    )
