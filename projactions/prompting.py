"""Interactive selection of test targets."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Protocol

from .errors import PromptCancelled


class PathPrompter(Protocol):
    def choose_path(self, prompt: str, start: Path) -> Path:
        """Ask for a path under ``start``; raise ``PromptCancelled`` on abort."""


class TerminalPrompter:
    """Reads a file or directory name from the terminal."""

    def __init__(self, input_func: Callable[[str], str] = input) -> None:
        self._input = input_func

    def choose_path(self, prompt: str, start: Path) -> Path:
        try:
            answer = self._input(f"{prompt} [{start}]: ")
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptCancelled(prompt) from exc
        answer = answer.strip()
        if not answer:
            raise PromptCancelled(prompt)
        chosen = Path(answer).expanduser()
        if not chosen.is_absolute():
            chosen = start / chosen
        return chosen


class FixedPathPrompter:
    """Answers every prompt with the same path.

    Relative paths are taken from the prompt's start directory, as typed
    answers are by ``TerminalPrompter``.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def choose_path(self, prompt: str, start: Path) -> Path:
        if self.path.is_absolute():
            return self.path
        return start / self.path


__all__ = ["FixedPathPrompter", "PathPrompter", "TerminalPrompter"]
