"""Environment-based settings and the client-supplied workspace config."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator
from pydantic_settings import BaseSettings

from ghci_bridge import NAME

logger = logging.getLogger(__name__)

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class Settings(BaseSettings):
    """Reads from .env file and ``GHCI_BRIDGE_*`` environment variables."""

    # Used when the editor does not configure a command
    ghci_command: str = "cabal repl --repl-options=-ddump-json"

    # Logging
    log_level: str = "INFO"

    # Namespace of the custom status/restart notifications
    notification_prefix: str = NAME
    status_prefix: str = "GHCi Bridge"

    @field_validator("log_level")
    @classmethod
    def _validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}"
            )
        return level

    @field_validator("ghci_command")
    @classmethod
    def _validate_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("ghci_command must not be blank")
        return v.strip()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "GHCI_BRIDGE_",
        "extra": "ignore",
    }


class GhciConfig(BaseModel):
    command: str | None = None

    @field_validator("command")
    @classmethod
    def _blank_is_unset(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class WorkspaceConfig(BaseModel):
    """The configuration section the editor returns for this server."""

    ghci: GhciConfig = GhciConfig()


def resolve_command(raw: Any, settings: Settings) -> str:
    """Pick the GHCi launch command from a ``workspace/configuration`` reply.

    Falls back to ``settings.ghci_command`` when the editor sends nothing
    usable.
    """
    if raw is None:
        return settings.ghci_command
    try:
        config = WorkspaceConfig.model_validate(raw)
    except ValidationError as exc:
        logger.warning(
            "event=workspace_config_invalid errors=%d", exc.error_count()
        )
        return settings.ghci_command
    return config.ghci.command or settings.ghci_command
