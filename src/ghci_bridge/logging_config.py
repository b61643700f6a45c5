"""Singleton logging configuration.

stdout carries the LSP wire protocol, so every handler installed here
writes to stderr. Idempotent (guarded by a module-level flag).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers to suppress to WARNING
_SUPPRESSED_LOGGERS = (
    "pygls",
    "pygls.protocol",
    "pygls.server",
    "pygls.feature_manager",
    "asyncio",
)

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger to write to stderr.

    Second call is a no-op.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
