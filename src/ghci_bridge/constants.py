"""Shared constants — single source of truth for cross-module values.

Wire-level strings the compiler emits and status texts shown to the
user. StrEnum members are str-compatible, so they compare equal to the
raw tags parsed off the wire.
"""

from __future__ import annotations

import re
from enum import StrEnum

# ── Compiler Wire Vocabulary ─────────────────────────────


class SeverityTag(StrEnum):
    """Severity tags GHC attaches to ``-ddump-json`` records."""

    OUTPUT = "SevOutput"
    WARNING = "SevWarning"
    ERROR = "SevError"


# Bare "Warning" is accepted as a tag only; the nested span shape of
# -fdiagnostics-as-json is not parsed, so those records stay plain text
WARNING_TAGS = frozenset({SeverityTag.WARNING, "Warning"})

# Span file used for expressions typed at the prompt
INTERACTIVE_FILE = "<interactive>"

COMPILING_PATTERN = re.compile(
    r"^\[ *(\d+) of (\d+)\] Compiling (\S+) *\( ([^,]+), "
)

# ── Session State ────────────────────────────────────────


class SessionState(StrEnum):
    """Whether GHCi is currently executing a command."""

    IDLE = "idle"
    BUSY = "busy"


class Channel(StrEnum):
    """Tags used when echoing subprocess traffic to the log sink."""

    STDIN = "stdin"
    STDOUT = "stdout"
    STDERR = "stderr"


# ── Status Texts (user-facing) ───────────────────────────

STATUS_IDLE = "Idle"
STATUS_STARTING = "Starting GHCi"
STATUS_STOPPING = "Stopping GHCi"
STATUS_STOPPED = "Stopped"

# ── GHCi Commands ────────────────────────────────────────

RELOAD_COMMAND = ":reload"

# ── Custom Notifications ─────────────────────────────────

STATUS_NOTIFICATION = "updateStatusBarItem"
RESTART_NOTIFICATION = "restartGhci"

# ── Misc ─────────────────────────────────────────────────

ELAPSED_PRECISION = 3
STOP_TIMEOUT_SECONDS = 5.0
