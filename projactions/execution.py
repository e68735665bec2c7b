"""Shell execution of resolved commands."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Optional, Protocol

from .errors import CommandNotStarted
from .logging import get_logger


class Executor(Protocol):
    def run(self, command: str, directory: Path) -> object:
        """Start ``command`` with ``directory`` as its working directory."""


Spawner = Callable[..., "subprocess.Popen[bytes]"]


class ShellExecutor:
    """Runs commands through the user's shell.

    With ``wait=False`` the process is started and left running; otherwise
    ``run`` blocks and returns the exit status.
    """

    def __init__(self, *, wait: bool = True, spawner: Spawner | None = None) -> None:
        self.wait = wait
        self.returncode: Optional[int] = None
        self._spawner = spawner or self._default_spawner
        self.logger = get_logger("execution")

    def run(self, command: str, directory: Path) -> Optional[int]:
        self.logger.debug("Spawning %r in %s", command, directory)
        try:
            process = self._spawner(command, cwd=directory)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise CommandNotStarted(command, directory, reason) from exc
        if not self.wait:
            return None
        self.returncode = process.wait()
        return self.returncode

    @staticmethod
    def _default_spawner(command: str, *, cwd: Path) -> "subprocess.Popen[bytes]":
        return subprocess.Popen(command, shell=True, cwd=str(cwd))


__all__ = ["Executor", "ShellExecutor"]
