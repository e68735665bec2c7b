"""Errors raised while dispatching an action."""

from __future__ import annotations

from pathlib import Path

from .models import Project


class ProjactionsError(RuntimeError):
    """Base class for failures local to a single action invocation."""


class NoProjectFound(ProjactionsError):
    """Raised when a path does not sit inside a recognised project."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"{path} is not inside a recognised project")
        self.path = path


class MalformedCommandExpression(ProjactionsError):
    """Raised when an action's command cannot be evaluated to a string."""

    def __init__(self, action: str, reason: str) -> None:
        super().__init__(f"Invalid command for '{action}': {reason}")
        self.action = action
        self.reason = reason


class NoPriorSelection(ProjactionsError):
    """Raised by quick retest when no test target was chosen yet."""

    def __init__(self, project: Project) -> None:
        super().__init__(
            f"No previous test selection for project {project.root}; run `test` first"
        )
        self.project = project


class PromptCancelled(ProjactionsError):
    """Raised by a prompter when the user aborts the selection."""


class CommandNotStarted(ProjactionsError):
    """Raised when the executor cannot start a command."""

    def __init__(self, command: str, directory: Path, reason: str) -> None:
        super().__init__(f"Could not run `{command}` in {directory}: {reason}")
        self.command = command
        self.directory = directory


__all__ = [
    "CommandNotStarted",
    "MalformedCommandExpression",
    "NoPriorSelection",
    "NoProjectFound",
    "ProjactionsError",
    "PromptCancelled",
]
