"""GHC severity tag → LSP diagnostic severity."""

from lsprotocol import types

from ghci_bridge.constants import WARNING_TAGS


def map_severity(severity_tag: str) -> types.DiagnosticSeverity:
    """Warnings stay warnings; every other tag, known or not, is an error."""
    if severity_tag in WARNING_TAGS:
        return types.DiagnosticSeverity.Warning
    return types.DiagnosticSeverity.Error
