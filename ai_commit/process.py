"""Subprocess execution with a bounded wait for ai-commit."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
from dataclasses import dataclass
from typing import IO, Mapping, Optional, Sequence

from .exceptions import (
    ProcessExitError,
    ProcessInterruptedError,
    ProcessLaunchError,
    ProcessTimeoutError,
)

logger = logging.getLogger(__name__)

DRAIN_JOIN_TIMEOUT = 1.0


@dataclass
class CommandResult:
    """Captured output of a finished command."""

    stdout: str
    stderr: str
    returncode: int


class _StreamDrain:
    """Reads a pipe to EOF on a daemon thread."""

    def __init__(self, stream: Optional[IO[bytes]], name: str) -> None:
        self._stream = stream
        self._chunks: list[bytes] = []
        self._thread = threading.Thread(
            target=self._run, name=f"drain-{name}", daemon=True
        )

    def start(self) -> "_StreamDrain":
        self._thread.start()
        return self

    def _run(self) -> None:
        if self._stream is None:
            return
        try:
            for chunk in iter(lambda: self._stream.read(65536), b""):
                self._chunks.append(chunk)
        except (OSError, ValueError):
            # Pipe closed underneath us after the process was killed.
            pass

    def join(self, timeout: float) -> None:
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.debug("%s still alive after %.1fs join", self._thread.name, timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def close(self) -> None:
        # A grandchild may still hold the pipe; closing would wait on the
        # reader's buffer lock. The daemon thread exits at EOF instead.
        if self._stream is None or self.is_alive():
            return
        self._stream.close()

    def text(self) -> str:
        return b"".join(self._chunks).decode("utf-8", errors="replace")


def format_command(args: Sequence[str]) -> str:
    return " ".join(str(a) for a in args)


def run_command(
    args: Sequence[str],
    cwd: Optional[str] = None,
    timeout: float = 30,
    env: Optional[Mapping[str, str]] = None,
) -> CommandResult:
    """Run ``args`` to completion and return its trimmed output.

    Both pipes are drained concurrently so a large diff cannot fill an OS
    pipe buffer while we wait. The child is killed on timeout, interruption,
    or any other exit path that leaves it running.

    Raises:
        ProcessLaunchError: the executable could not be started.
        ProcessTimeoutError: the command exceeded ``timeout`` seconds.
        ProcessExitError: the command exited non-zero.
        ProcessInterruptedError: the wait was interrupted.
    """
    command = [str(a) for a in args]
    cmdline = format_command(command)
    merged_env = dict(os.environ)
    if env:
        merged_env.update(env)

    logger.debug("Running '%s' in %s (timeout=%ss)", cmdline, cwd, timeout)
    try:
        proc = subprocess.Popen(
            command,
            cwd=cwd,
            env=merged_env,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        raise ProcessLaunchError(
            f"Failed to execute command: {cmdline}. {exc}", command
        ) from exc

    out_drain = _StreamDrain(proc.stdout, "stdout").start()
    err_drain = _StreamDrain(proc.stderr, "stderr").start()
    try:
        try:
            proc.wait(timeout=timeout)
        except subprocess.TimeoutExpired as exc:
            proc.kill()
            raise ProcessTimeoutError(
                f"Timeout while waiting for process('{cmdline}') to finish",
                command,
            ) from exc
        except KeyboardInterrupt as exc:
            proc.kill()
            raise ProcessInterruptedError(
                f"Command ('{cmdline}') interrupted", command
            ) from exc

        out_drain.join(DRAIN_JOIN_TIMEOUT)
        err_drain.join(DRAIN_JOIN_TIMEOUT)
        stdout = out_drain.text().strip()
        stderr = err_drain.text().strip()
        returncode = proc.returncode

        if returncode != 0:
            raise ProcessExitError(
                f"Command ('{cmdline}') failed with exit code: {returncode}\n {stderr}",
                command,
                returncode=returncode,
                stderr=stderr,
            )
        return CommandResult(stdout=stdout, stderr=stderr, returncode=returncode)
    finally:
        if proc.poll() is None:
            proc.kill()
            try:
                proc.wait(timeout=DRAIN_JOIN_TIMEOUT)
            except subprocess.TimeoutExpired:
                logger.debug("Process '%s' did not exit after kill", cmdline)
        out_drain.close()
        err_drain.close()
