"""Shared test fixtures — recording editor client, aggregator, JSON lines."""

import json
from pathlib import Path
from typing import Any

import pytest

from ghci_bridge.diagnostics.aggregator import DiagnosticAggregator
from ghci_bridge.diagnostics.fakes import RecordingClient

PROMPT = "{- ghci-bridge 0.1.0 1700000000000 -}"


def ghc_json(
    file: str | None = "src/Main.hs",
    *,
    start: tuple[int, int] = (5, 3),
    end: tuple[int, int] = (5, 10),
    reason: str | None = "Opt_WarnUnusedImports",
    severity: str = "SevWarning",
    doc: str = "The import of Data.List is redundant",
    **extra: Any,
) -> str:
    """Render one ``-ddump-json`` line the way GHCi prints it."""
    span = (
        None
        if file is None
        else {
            "file": file,
            "startLine": start[0],
            "startCol": start[1],
            "endLine": end[0],
            "endCol": end[1],
        }
    )
    record: dict[str, Any] = {
        "span": span,
        "doc": doc,
        "severity": severity,
        "reason": reason,
        **extra,
    }
    return json.dumps(record)


def compiling_json(path: str = "src/Main.hs", module: str = "Main") -> str:
    return ghc_json(
        None,
        reason=None,
        severity="SevOutput",
        doc=f"[1 of 2] Compiling {module}          ( {path}, interpreted )",
    )


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def aggregator(client: RecordingClient, root: Path) -> DiagnosticAggregator:
    agg = DiagnosticAggregator(client, root=root, source="ghci-bridge")
    agg.begin_session(PROMPT)
    return agg
