"""GHCi subprocess plumbing."""

from ghci_bridge.ghci.errors import (
    ExitKind,
    GhciExitError,
    GhciNotRunningError,
    classify_exit,
)
from ghci_bridge.ghci.prompt import make_prompt_sentinel, prompt_command
from ghci_bridge.ghci.session import GhciSession

__all__ = [
    "ExitKind",
    "GhciExitError",
    "GhciNotRunningError",
    "GhciSession",
    "classify_exit",
    "make_prompt_sentinel",
    "prompt_command",
]
