"""Tests for the GHCi subprocess session, using plain shell commands."""

from __future__ import annotations

import asyncio
import signal
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from ghci_bridge.ghci.errors import GhciExitError, GhciNotRunningError
from ghci_bridge.ghci.session import GhciSession

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="uses POSIX shell commands"
)


async def _until(predicate: Callable[[], bool], timeout: float = 5.0) -> None:
    async def poll() -> None:
        while not predicate():
            await asyncio.sleep(0.01)

    await asyncio.wait_for(poll(), timeout=timeout)


def _session(
    command: str,
    cwd: Path,
) -> tuple[GhciSession, list[str], list[str]]:
    out: list[str] = []
    err: list[str] = []
    session = GhciSession(
        command, on_stdout=out.append, on_stderr=err.append, cwd=cwd
    )
    return session, out, err


async def test_lines_delivered_per_channel(tmp_path: Path) -> None:
    session, out, err = _session(
        "echo one; echo two; echo oops 1>&2", tmp_path
    )
    await session.start()
    assert await session.wait() == 0
    assert out == ["one", "two"]
    assert err == ["oops"]


async def test_send_writes_a_line(tmp_path: Path) -> None:
    session, out, _ = _session("cat", tmp_path)
    await session.start()
    session.send(":reload")
    await _until(lambda: out == [":reload"])
    await session.stop()


async def test_runs_in_cwd(tmp_path: Path) -> None:
    session, out, _ = _session("pwd", tmp_path)
    await session.start()
    await session.wait()
    assert Path(out[0]).resolve() == tmp_path.resolve()


async def test_stop_kills_and_is_not_an_error(tmp_path: Path) -> None:
    session, _, _ = _session("cat", tmp_path)
    await session.start()
    assert session.running

    returncode = await session.stop()

    assert returncode == -signal.SIGKILL
    assert not session.running
    assert session.stop_requested
    assert await session.wait() == returncode


async def test_failure_exit_raises(tmp_path: Path) -> None:
    session, _, _ = _session("exit 3", tmp_path)
    await session.start()
    with pytest.raises(GhciExitError) as info:
        await session.wait()
    assert info.value.code == 3
    assert info.value.signal_name is None


async def test_signal_exit_raises(tmp_path: Path) -> None:
    session, _, _ = _session("kill -TERM $$", tmp_path)
    await session.start()
    with pytest.raises(GhciExitError) as info:
        await session.wait()
    assert info.value.signal_name == "SIGTERM"


async def test_send_after_exit_raises(tmp_path: Path) -> None:
    session, _, _ = _session("true", tmp_path)
    await session.start()
    await session.wait()
    with pytest.raises(GhciNotRunningError):
        session.send(":reload")


async def test_send_before_start_raises(tmp_path: Path) -> None:
    session, _, _ = _session("cat", tmp_path)
    with pytest.raises(GhciNotRunningError):
        session.send(":reload")
    with pytest.raises(GhciNotRunningError):
        await session.wait()
    assert await session.stop() is None


async def test_start_twice_rejected(tmp_path: Path) -> None:
    session, _, _ = _session("cat", tmp_path)
    await session.start()
    try:
        with pytest.raises(RuntimeError, match="already started"):
            await session.start()
    finally:
        await session.stop()


async def test_handler_error_does_not_stop_pump(tmp_path: Path) -> None:
    seen: list[str] = []

    def flaky(line: str) -> None:
        if line == "bad":
            raise ValueError(line)
        seen.append(line)

    session = GhciSession(
        "echo bad; echo good",
        on_stdout=flaky,
        on_stderr=lambda _: None,
        cwd=tmp_path,
    )
    await session.start()
    await session.wait()
    assert seen == ["good"]
