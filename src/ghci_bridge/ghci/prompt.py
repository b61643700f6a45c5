"""Prompt sentinel used to detect when GHCi goes idle."""

from __future__ import annotations

import time

from ghci_bridge import NAME, __version__


def make_prompt_sentinel(
    name: str = NAME,
    version: str = __version__,
    epoch_ms: int | None = None,
) -> str:
    """Build a prompt no ordinary program output would print.

    It is a Haskell block comment, so echoing it back into GHCi is
    harmless. *epoch_ms* defaults to the current time, giving each
    session its own value.
    """
    if epoch_ms is None:
        epoch_ms = time.time_ns() // 1_000_000
    return f"{{- {name} {version} {epoch_ms} -}}"


def prompt_command(sentinel: str) -> str:
    """The ``:set prompt`` command that makes GHCi print *sentinel* + newline."""
    escaped = sentinel.replace("\\", "\\\\").replace('"', '\\"')
    return f':set prompt "{escaped}\\n"'
