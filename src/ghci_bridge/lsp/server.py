"""pygls language server: wires editor events to the GHCi session."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from ghci_bridge import NAME, __version__
from ghci_bridge.config import Settings, resolve_command
from ghci_bridge.constants import (
    RELOAD_COMMAND,
    RESTART_NOTIFICATION,
    STATUS_NOTIFICATION,
    STATUS_STARTING,
    STATUS_STOPPED,
    STATUS_STOPPING,
)
from ghci_bridge.diagnostics.aggregator import DiagnosticAggregator
from ghci_bridge.diagnostics.protocols import EditorClient
from ghci_bridge.ghci.errors import GhciExitError, GhciNotRunningError
from ghci_bridge.ghci.prompt import make_prompt_sentinel, prompt_command
from ghci_bridge.ghci.session import GhciSession
from ghci_bridge.lsp.client import LspEditorClient

logger = logging.getLogger(__name__)


class GhciLanguageServer(LanguageServer):
    """Owns at most one GHCi session and the diagnostics it produced."""

    def __init__(
        self,
        settings: Settings | None = None,
        editor: EditorClient | None = None,
    ) -> None:
        super().__init__(NAME, __version__)
        self.settings = settings or Settings()
        prefix = self.settings.notification_prefix
        self.editor: EditorClient = editor or LspEditorClient(
            self,
            status_method=f"{prefix}/{STATUS_NOTIFICATION}",
            status_prefix=self.settings.status_prefix,
        )
        self.aggregator = DiagnosticAggregator(self.editor, source=NAME)
        self.ghci: GhciSession | None = None
        self.background_tasks: set[asyncio.Task[None]] = set()
        self._shutting_down = False
        # Serializes start/restart/shutdown so at most one GHCi is alive
        self._lifecycle = asyncio.Lock()

    @property
    def restart_method(self) -> str:
        return f"{self.settings.notification_prefix}/{RESTART_NOTIFICATION}"

    def workspace_root(self) -> Path | None:
        try:
            root = self.workspace.root_path
        except (RuntimeError, AttributeError):
            return None
        return Path(root) if root else None

    async def fetch_command(self) -> str:
        """Ask the editor for the GHCi command, falling back to settings."""
        section = self.settings.notification_prefix
        try:
            result: list[Any] = await self.workspace_configuration_async(
                types.ConfigurationParams(
                    items=[types.ConfigurationItem(section=section)]
                )
            )
        except Exception:
            logger.warning(
                "event=workspace_config_failed section=%s", section,
                exc_info=True,
            )
            return self.settings.ghci_command
        return resolve_command(result[0] if result else None, self.settings)

    # ── Session lifecycle ────────────────────────────────

    async def start_ghci(self, command: str | None = None) -> None:
        """Spawn GHCi and install a fresh prompt sentinel.

        A session that is already running is stopped first.
        """
        async with self._lifecycle:
            await self._stop_unlocked()
            await self._start_unlocked(command)

    async def _start_unlocked(self, command: str | None) -> None:
        if self._shutting_down:
            return
        self.editor.log("Starting GHCi ...")
        self.editor.set_status(STATUS_STARTING)
        if command is None:
            command = await self.fetch_command()
        self.editor.log(f"Spawning GHCi with: {command}")

        root = self.workspace_root()
        sentinel = make_prompt_sentinel()
        self.aggregator.root = root
        self.aggregator.begin_session(sentinel)

        session = GhciSession(
            command,
            cwd=root,
            on_stdout=self.aggregator.on_stdout,
            on_stderr=self.aggregator.on_stderr,
        )
        try:
            await session.start()
        except OSError as exc:
            logger.error(
                "event=ghci_spawn_failed command=%s error=%s", command, exc
            )
            self.editor.show_error(f"Could not start GHCi: {exc}")
            self.editor.set_status(STATUS_STOPPED)
            return
        self.ghci = session
        self._spawn(self._supervise(session))
        self.send_command(prompt_command(sentinel))

    async def stop_ghci(self) -> None:
        async with self._lifecycle:
            await self._stop_unlocked()

    async def _stop_unlocked(self) -> None:
        session, self.ghci = self.ghci, None
        if session is not None:
            await session.stop()

    async def restart_ghci(self) -> None:
        """Kill GHCi, retract its diagnostics, then start a new one."""
        async with self._lifecycle:
            self.editor.log("Stopping GHCi ...")
            self.editor.set_status(STATUS_STOPPING)
            await self._stop_unlocked()
            self.aggregator.retract_all()
            await self._start_unlocked(None)

    async def shutdown_ghci(self) -> None:
        self._shutting_down = True
        await self.stop_ghci()

    async def _supervise(self, session: GhciSession) -> None:
        """Report how *session* ended. Never respawns it."""
        try:
            await session.wait()
        except GhciExitError as exc:
            logger.error(
                "event=ghci_crashed code=%s signal=%s",
                exc.code,
                exc.signal_name,
            )
            if self.ghci is session:
                self.ghci = None
            self.editor.log(str(exc))
            self.editor.show_error(
                f"{exc} Fix the problem, then restart GHCi."
            )
            self.editor.set_status(STATUS_STOPPED)
            return
        if session.stop_requested or self._shutting_down:
            self.editor.log("GHCi stopped.")
            return
        if self.ghci is session:
            self.ghci = None
        self.editor.log("GHCi exited successfully.")
        self.editor.set_status(STATUS_STOPPED)

    def _spawn(self, coro: Any) -> None:
        task = asyncio.ensure_future(coro)
        self.background_tasks.add(task)
        task.add_done_callback(self.background_tasks.discard)

    # ── Commands ─────────────────────────────────────────

    def send_command(self, command: str) -> None:
        if self.ghci is None:
            raise GhciNotRunningError(f"GHCi is not running: {command}")
        self.ghci.send(command)
        self.aggregator.command_sent(command)

    def reload(self) -> None:
        try:
            self.send_command(RELOAD_COMMAND)
        except GhciNotRunningError as exc:
            logger.warning("event=reload_skipped reason=%s", exc)
            self.editor.log(f"{exc}. Restart GHCi to resume.")


def create_server(settings: Settings | None = None) -> GhciLanguageServer:
    """Build a server with every feature handler registered."""
    server = GhciLanguageServer(settings)

    @server.feature(types.INITIALIZED)
    async def initialized(
        ls: GhciLanguageServer, params: types.InitializedParams
    ) -> None:
        ls.editor.log("Initialized.")
        await ls.start_ghci()

    @server.feature(
        types.TEXT_DOCUMENT_DID_SAVE,
        types.SaveOptions(include_text=False),
    )
    def did_save(
        ls: GhciLanguageServer, params: types.DidSaveTextDocumentParams
    ) -> None:
        ls.editor.log(f"Saved {params.text_document.uri}.")
        ls.reload()

    @server.feature(server.restart_method)
    async def restart(ls: GhciLanguageServer, *args: Any) -> None:
        await ls.restart_ghci()

    @server.feature(types.SHUTDOWN)
    async def shutdown(ls: GhciLanguageServer, *args: Any) -> None:
        await ls.shutdown_ghci()

    return server
