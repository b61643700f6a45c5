"""CLI entry point — ``ghci-bridge`` starts the language server."""

from __future__ import annotations

import argparse
import logging

from ghci_bridge import NAME, __version__
from ghci_bridge.config import Settings
from ghci_bridge.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"{NAME} {__version__}")
        return

    overrides = {"log_level": args.log_level} if args.log_level else {}
    settings = Settings(**overrides)
    setup_logging(settings.log_level)

    _run_server(args, settings)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=NAME,
        description=(
            "Language server that runs GHCi and republishes "
            "its diagnostics to the editor."
        ),
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    parser.add_argument(
        "--stdio",
        action="store_true",
        help="Serve over stdin/stdout (default)",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Serve over TCP instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Bind address for TCP transport (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2087,
        help="Port for TCP transport (default: 2087)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for stderr logging (default: from settings)",
    )
    return parser


def _run_server(args: argparse.Namespace, settings: Settings) -> None:
    from ghci_bridge.lsp.server import create_server

    server = create_server(settings)
    logger.info("event=server_starting name=%s version=%s", NAME, __version__)
    if args.tcp:
        server.start_tcp(args.host, args.port)
    else:
        server.start_io()


if __name__ == "__main__":
    main()
