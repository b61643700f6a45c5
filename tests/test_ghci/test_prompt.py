"""Tests for prompt sentinel construction."""

from __future__ import annotations

from ghci_bridge import NAME, __version__
from ghci_bridge.diagnostics.classifier import LineClassifier
from ghci_bridge.diagnostics.records import PromptSentinel
from ghci_bridge.ghci.prompt import make_prompt_sentinel, prompt_command


def test_sentinel_embeds_name_version_epoch() -> None:
    sentinel = make_prompt_sentinel("tool", "1.2.3", epoch_ms=1234)
    assert sentinel == "{- tool 1.2.3 1234 -}"


def test_default_sentinel_uses_package_identity() -> None:
    sentinel = make_prompt_sentinel(epoch_ms=1)
    assert sentinel == f"{{- {NAME} {__version__} 1 -}}"


def test_sessions_get_distinct_sentinels() -> None:
    assert make_prompt_sentinel(epoch_ms=1) != make_prompt_sentinel(epoch_ms=2)


def test_default_epoch_is_current_time() -> None:
    sentinel = make_prompt_sentinel()
    epoch = int(sentinel.split()[3])
    assert epoch > 1_600_000_000_000


def test_prompt_command_appends_newline_escape() -> None:
    assert prompt_command("{- x -}") == ':set prompt "{- x -}\\n"'


def test_prompt_command_escapes_quotes() -> None:
    assert prompt_command('a"b') == ':set prompt "a\\"b\\n"'


def test_printed_prompt_is_recognized() -> None:
    """What GHCi prints after the :set prompt command classifies as idle."""
    sentinel = make_prompt_sentinel()
    classifier = LineClassifier(sentinel)
    assert isinstance(classifier.classify(sentinel), PromptSentinel)
