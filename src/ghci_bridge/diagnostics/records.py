"""Typed records produced by the line classifier.

``ClassifiedRecord`` is a closed union; the aggregator matches on it
exhaustively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class SpanDiagnostic:
    """A compiler message located in a real source file.

    Coordinates are exactly as GHC reports them: one-based, inclusive.
    """

    file: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    reason_code: str | None
    severity_tag: str
    doc_text: str


@dataclass(frozen=True)
class InteractiveOutput:
    """A structured record whose span points at the ``<interactive>`` prompt."""

    line: str


@dataclass(frozen=True)
class CompilationStarting:
    """GHCi announced ``[n of m] Compiling <module> ( <source_path>, ...``."""

    source_path: str
    module: str
    index: int
    total: int


@dataclass(frozen=True)
class PlainText:
    line: str


@dataclass(frozen=True)
class PromptSentinel:
    """The session prompt was printed: GHCi finished its last command."""

    line: str


ClassifiedRecord: TypeAlias = (
    SpanDiagnostic
    | InteractiveOutput
    | CompilationStarting
    | PlainText
    | PromptSentinel
)
