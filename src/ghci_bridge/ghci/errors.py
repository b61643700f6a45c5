"""Classification of GHCi process exits."""

from __future__ import annotations

import signal
from enum import Enum


class ExitKind(Enum):
    CLEAN = "clean"  # exit status 0
    FAILED = "failed"  # non-zero exit status
    SIGNALED = "signaled"  # killed by a signal


class GhciNotRunningError(RuntimeError):
    """A command was written while no interpreter process is alive."""


class GhciExitError(RuntimeError):
    """GHCi exited on its own with a failure status or signal."""

    def __init__(self, code: int | None, signal_name: str | None) -> None:
        super().__init__(f"GHCi exited with {code} ({signal_name})!")
        self.code = code
        self.signal_name = signal_name


def classify_exit(returncode: int) -> ExitKind:
    """asyncio reports death-by-signal N as return code -N."""
    if returncode == 0:
        return ExitKind.CLEAN
    if returncode < 0:
        return ExitKind.SIGNALED
    return ExitKind.FAILED


def split_returncode(returncode: int) -> tuple[int | None, str | None]:
    """Return ``(exit_code, signal_name)``; exactly one is set."""
    if returncode >= 0:
        return returncode, None
    try:
        return None, signal.Signals(-returncode).name
    except ValueError:
        return None, f"SIG{-returncode}"
