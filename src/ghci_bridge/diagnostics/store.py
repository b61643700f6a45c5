"""In-memory index of the live diagnostics for every tracked file."""

from __future__ import annotations

from lsprotocol import types

from ghci_bridge.diagnostics.keys import DiagnosticKey


class DiagnosticStore:
    """Maps file URI → {DiagnosticKey → Diagnostic}.

    Diagnostics are only ever retracted a whole file at a time: GHC never
    says which earlier messages stopped applying, only that it is
    compiling the file again.
    """

    def __init__(self) -> None:
        self._files: dict[str, dict[DiagnosticKey, types.Diagnostic]] = {}

    def upsert(
        self,
        uri: str,
        key: DiagnosticKey,
        diagnostic: types.Diagnostic,
    ) -> None:
        """Insert or replace *diagnostic* under *key*; tracks *uri* if new."""
        self._files.setdefault(uri, {})[key] = diagnostic

    def clear(self, uri: str) -> None:
        """Empty *uri*'s set, tracking it if it was not tracked yet."""
        self._files[uri] = {}

    def is_empty(self, uri: str) -> bool:
        return not self._files.get(uri)

    def snapshot(self, uri: str) -> list[types.Diagnostic]:
        """Current diagnostics for *uri*; untracked files yield ``[]``."""
        return list(self._files.get(uri, {}).values())

    def evict(self, uri: str) -> None:
        self._files.pop(uri, None)

    def files(self) -> list[str]:
        """Tracked URIs in first-seen order (a copy, safe to mutate under)."""
        return list(self._files)

    def __contains__(self, uri: object) -> bool:
        return uri in self._files

    def __len__(self) -> int:
        return len(self._files)
