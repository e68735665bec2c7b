"""Core data models shared across projactions components."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class Project:
    """A project boundary as reported by the project resolver."""

    identity: str
    root: Path


@dataclass(frozen=True)
class ActionSpec:
    """Static description of how an action is configured."""

    name: str
    key_prefix: str
    uses_test_files: bool = False
    prompts: bool = False

    @property
    def command_key(self) -> str:
        return f"{self.key_prefix}-cmd"

    @property
    def directory_key(self) -> str:
        return f"{self.key_prefix}-cmd-directory"


class ActionKind(Enum):
    """The closed set of user-triggered actions."""

    CONFIGURE = ActionSpec("configure", "configure")
    COMPILE = ActionSpec("compile", "compile")
    INSTALL = ActionSpec("install", "install")
    TEST = ActionSpec("test", "test", uses_test_files=True, prompts=True)
    QUICK_RETEST = ActionSpec("retest", "test", uses_test_files=True)
    TEST_UPDATE = ActionSpec("update-tests", "test-update", uses_test_files=True, prompts=True)

    @property
    def spec(self) -> ActionSpec:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "ActionKind":
        for kind in cls:
            if kind.spec.name == name:
                return kind
        raise ValueError(f"Unknown action: {name}")


@dataclass
class ActionConfig:
    """Resolved command and run directory settings for one action."""

    command: Any
    directory: Optional[str] = None


@dataclass(frozen=True)
class Invocation:
    """A fully resolved command handed to the executor."""

    action: ActionKind
    command: str
    directory: Path
