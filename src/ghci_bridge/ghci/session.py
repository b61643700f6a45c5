"""One GHCi subprocess: line-oriented stdout/stderr and fire-and-forget stdin.

Each output channel is pumped by its own task, so lines from one channel
arrive in order; ordering between stdout and stderr is not preserved.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import signal
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from ghci_bridge.constants import STOP_TIMEOUT_SECONDS
from ghci_bridge.ghci.errors import (
    ExitKind,
    GhciExitError,
    GhciNotRunningError,
    classify_exit,
    split_returncode,
)

logger = logging.getLogger(__name__)

_POSIX = os.name == "posix"

# GHC's JSON records can be long (a whole type error per line)
_LINE_LIMIT = 1 << 20

LineCallback: TypeAlias = Callable[[str], None]


async def _pump(
    stream: asyncio.StreamReader,
    callback: LineCallback,
    channel: str,
) -> None:
    """Deliver each complete line of *stream* to *callback* until EOF."""
    while True:
        try:
            raw = await stream.readline()
        except ValueError:
            # Over-long line: the reader already discarded it
            logger.warning("event=line_too_long channel=%s", channel)
            continue
        if not raw:
            return
        line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
        try:
            callback(line)
        except Exception:
            logger.exception("event=line_handler_error channel=%s", channel)


class GhciSession:
    """A running (or finished) GHCi process."""

    def __init__(
        self,
        command: str,
        *,
        on_stdout: LineCallback,
        on_stderr: LineCallback,
        cwd: Path | None = None,
    ) -> None:
        self.command = command
        self.cwd = cwd
        self._on_stdout = on_stdout
        self._on_stderr = on_stderr
        self._proc: asyncio.subprocess.Process | None = None
        self._watcher: asyncio.Task[int] | None = None
        self._stop_requested = False

    @property
    def pid(self) -> int | None:
        return self._proc.pid if self._proc else None

    @property
    def running(self) -> bool:
        return self._proc is not None and self._proc.returncode is None

    async def start(self) -> None:
        """Spawn GHCi through the shell and begin pumping its output."""
        if self._proc is not None:
            raise RuntimeError("GHCi session already started")
        self._proc = await asyncio.create_subprocess_shell(
            self.command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=self.cwd,
            limit=_LINE_LIMIT,
            # Own process group, so stop() also reaches what the shell spawned
            start_new_session=_POSIX,
        )
        logger.info(
            "event=ghci_spawned pid=%d command=%s", self._proc.pid, self.command
        )
        self._watcher = asyncio.create_task(self._watch(self._proc))

    def send(self, command: str) -> None:
        """Write one command line; does not wait for GHCi to act on it."""
        proc = self._proc
        if proc is None or proc.returncode is not None or proc.stdin is None:
            raise GhciNotRunningError(f"GHCi is not running: {command}")
        proc.stdin.write(f"{command}\n".encode())

    @property
    def stop_requested(self) -> bool:
        return self._stop_requested

    async def wait(self) -> int:
        """Wait until the process exited and all its output was delivered.

        Raises GhciExitError when GHCi died with a failure status or a
        signal without stop() having been called.
        """
        if self._watcher is None:
            raise GhciNotRunningError("GHCi session was never started")
        returncode = await asyncio.shield(self._watcher)
        if (
            not self._stop_requested
            and classify_exit(returncode) is not ExitKind.CLEAN
        ):
            raise GhciExitError(*split_returncode(returncode))
        return returncode

    async def stop(self, timeout: float = STOP_TIMEOUT_SECONDS) -> int | None:
        """Kill GHCi and wait for it to exit. Returns its return code."""
        if self._proc is None:
            return None
        self._stop_requested = True
        if self._proc.returncode is None:
            self._kill(self._proc)
        try:
            return await asyncio.wait_for(self.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning("event=ghci_stop_timeout pid=%d", self._proc.pid)
            return self._proc.returncode

    @staticmethod
    def _kill(proc: asyncio.subprocess.Process) -> None:
        if _POSIX:
            with contextlib.suppress(ProcessLookupError):
                os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()

    async def _watch(self, proc: asyncio.subprocess.Process) -> int:
        assert proc.stdout is not None and proc.stderr is not None
        await asyncio.gather(
            _pump(proc.stdout, self._on_stdout, "stdout"),
            _pump(proc.stderr, self._on_stderr, "stderr"),
        )
        returncode = await proc.wait()
        logger.info(
            "event=ghci_exited pid=%d returncode=%d requested=%s",
            proc.pid,
            returncode,
            self._stop_requested,
        )
        return returncode
