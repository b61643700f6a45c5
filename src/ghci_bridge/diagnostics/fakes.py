"""In-memory fake editor client for testing.

Records every call in order. No pygls, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lsprotocol import types


@dataclass(frozen=True)
class Published:
    uri: str
    diagnostics: list[types.Diagnostic]


@dataclass
class RecordingClient:
    """List-backed EditorClient for testing."""

    published: list[Published] = field(
        default_factory=lambda: list[Published]()
    )
    statuses: list[str] = field(default_factory=lambda: list[str]())
    logs: list[str] = field(default_factory=lambda: list[str]())
    errors: list[str] = field(default_factory=lambda: list[str]())

    def publish(
        self, uri: str, diagnostics: list[types.Diagnostic]
    ) -> None:
        self.published.append(Published(uri, list(diagnostics)))

    def set_status(self, text: str) -> None:
        self.statuses.append(text)

    def log(self, text: str) -> None:
        self.logs.append(text)

    def show_error(self, text: str) -> None:
        self.errors.append(text)

    def last_published(self, uri: str) -> list[types.Diagnostic] | None:
        """Most recent snapshot sent for *uri*, or None if never sent."""
        for event in reversed(self.published):
            if event.uri == uri:
                return event.diagnostics
        return None

    def reset(self) -> None:
        self.published.clear()
        self.statuses.clear()
        self.logs.clear()
        self.errors.clear()
