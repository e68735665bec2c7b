"""Directory-scoped configuration loading (.projactions.yml)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .models import ActionConfig, ActionSpec

DEFAULT_CONFIG_FILENAME = ".projactions.yml"
CONFIG_FILENAME_ENV = "PROJACTIONS_CONFIG_FILE"

DEFAULTS: Dict[str, Any] = {
    "configure-cmd": "./configure",
    "compile-cmd": "make",
    "install-cmd": "make install",
    "test-cmd": "make test",
    "test-update-cmd": None,
    "configure-cmd-directory": None,
    "compile-cmd-directory": None,
    "install-cmd-directory": None,
    "test-cmd-directory": None,
    "test-update-cmd-directory": None,
    "test-files-directory": None,
}

CONFIG_KEYS = tuple(DEFAULTS)


class ConfigError(RuntimeError):
    """Raised when a scope file cannot be parsed."""


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def config_filename() -> str:
    """Return the scope file name, honouring the environment override."""
    override = os.environ.get(CONFIG_FILENAME_ENV, "").strip()
    return override or DEFAULT_CONFIG_FILENAME


def load_scope(directory: Path, filename: str | None = None) -> Dict[str, Any]:
    """Load the key/value bindings declared directly in ``directory``."""
    config_file = directory / (filename or config_filename())
    if not config_file.is_file():
        return {}

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a mapping at the root")
    return {str(key): value for key, value in data.items()}


class ScopedConfigStore:
    """Hierarchical key/value store keyed by directory within one project.

    Each directory between the anchor path and the project root may carry a
    scope file; the nearest scope binding a key wins.
    """

    def __init__(self, root: Path, filename: str | None = None) -> None:
        self.root = root.resolve()
        self.filename = filename or config_filename()
        self._scopes: Dict[Path, Dict[str, Any]] = {}

    def lookup(self, path: Path, key: str) -> Any:
        for directory in self.scopes(path):
            bindings = self._scope(directory)
            if key in bindings:
                return bindings[key]
        return MISSING

    def scopes(self, path: Path) -> List[Path]:
        """Return scope directories from ``path`` up to the root, leaf first."""
        current = path.expanduser().resolve()
        if not current.is_dir():
            current = current.parent
        try:
            current.relative_to(self.root)
        except ValueError:
            return [self.root]

        directories: List[Path] = []
        while True:
            directories.append(current)
            if current == self.root:
                break
            current = current.parent
        return directories

    def _scope(self, directory: Path) -> Dict[str, Any]:
        cached = self._scopes.get(directory)
        if cached is None:
            cached = load_scope(directory, self.filename)
            self._scopes[directory] = cached
        return cached


class ActionSettings:
    """Resolves action settings for an anchor path, falling back to defaults."""

    def __init__(self, store: ScopedConfigStore) -> None:
        self.store = store

    def resolve(self, anchor: Path, key: str) -> Any:
        if key not in DEFAULTS:
            raise KeyError(f"Unknown configuration key: {key}")
        value = self.store.lookup(anchor, key)
        if value is MISSING:
            return DEFAULTS[key]
        return value

    def action_config(self, anchor: Path, spec: ActionSpec) -> ActionConfig:
        return ActionConfig(
            command=self.resolve(anchor, spec.command_key),
            directory=_as_path_str(self.resolve(anchor, spec.directory_key)),
        )

    def test_files_directory(self, anchor: Path) -> Optional[str]:
        return _as_path_str(self.resolve(anchor, "test-files-directory"))


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}

    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    return loaded or {}


def _as_path_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        text = str(value).strip()
        return text or None
    if isinstance(value, Path):
        return str(value)
    raise ConfigError(f"Directory settings must be strings, got {type(value).__name__}")


__all__ = [
    "ActionSettings",
    "CONFIG_KEYS",
    "ConfigError",
    "DEFAULTS",
    "MISSING",
    "ScopedConfigStore",
    "config_filename",
    "load_scope",
]
