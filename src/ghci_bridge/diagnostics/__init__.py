"""Incremental diagnostics aggregation for GHCi output."""

from ghci_bridge.diagnostics.aggregator import DiagnosticAggregator
from ghci_bridge.diagnostics.classifier import LineClassifier
from ghci_bridge.diagnostics.keys import DiagnosticKey, derive_key
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

__all__ = [
    "ClassifiedRecord",
    "CompilationStarting",
    "DiagnosticAggregator",
    "DiagnosticKey",
    "DiagnosticStore",
    "InteractiveOutput",
    "LineClassifier",
    "PlainText",
    "PromptSentinel",
    "SpanDiagnostic",
    "derive_key",
    "map_severity",
]
