"""Tests for the CLI entry point."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from ghci_bridge import __version__
from ghci_bridge.cli import _build_parser, main


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    main(["--version"])
    assert capsys.readouterr().out.strip() == f"ghci-bridge {__version__}"


def test_parser_defaults() -> None:
    args = _build_parser().parse_args([])
    assert args.tcp is False
    assert args.host == "127.0.0.1"
    assert args.port == 2087
    assert args.log_level is None


def test_default_transport_is_stdio() -> None:
    server = MagicMock()
    with (
        patch("ghci_bridge.cli.setup_logging"),
        patch(
            "ghci_bridge.lsp.server.create_server", return_value=server
        ) as factory,
    ):
        main([])
    factory.assert_called_once()
    server.start_io.assert_called_once_with()
    server.start_tcp.assert_not_called()


def test_tcp_transport() -> None:
    server = MagicMock()
    with (
        patch("ghci_bridge.cli.setup_logging"),
        patch("ghci_bridge.lsp.server.create_server", return_value=server),
    ):
        main(["--tcp", "--port", "9999"])
    server.start_tcp.assert_called_once_with("127.0.0.1", 9999)


def test_log_level_override_reaches_logging() -> None:
    with (
        patch("ghci_bridge.cli.setup_logging") as setup,
        patch("ghci_bridge.lsp.server.create_server"),
    ):
        main(["--log-level", "debug"])
    setup.assert_called_once_with("DEBUG")
