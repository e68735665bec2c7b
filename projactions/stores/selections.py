"""Last test selection per project."""

from __future__ import annotations

import json
import os
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Optional

from ..models import Project

_CACHE_VERSION = 1
CACHE_FILE_ENV = "PROJACTIONS_CACHE_FILE"


def default_cache_path() -> Path:
    """Return the selection cache location used by the command line."""
    override = os.environ.get(CACHE_FILE_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    cache_home = os.environ.get("XDG_CACHE_HOME", "").strip()
    base = Path(cache_home).expanduser() if cache_home else Path.home() / ".cache"
    return base / "projactions" / "selections.json"


class TestSelectionCache:
    """Remembers the last chosen test target keyed by project identity.

    ``remember`` and ``recall`` hold the instance lock, so one cache may be
    shared by threads of a host application. Without a path the cache lives
    only as long as the object; with one it is loaded on construction and
    written back by ``persist``.
    """

    __test__ = False

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._entries: Dict[str, Dict[str, str]] = {}
        self._lock = threading.Lock()
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    def remember(self, project: Project, relative_path: str) -> None:
        with self._lock:
            self._entries[project.identity] = {
                "path": relative_path,
                "root": str(project.root),
                "updated_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            }
            self._dirty = True

    def recall(self, project: Project) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(project.identity)
            if not entry:
                return None
            return entry.get("path")

    def persist(self) -> None:
        with self._lock:
            if not self._dirty or self._path is None:
                return
            payload = {
                "version": _CACHE_VERSION,
                "entries": self._entries,
            }
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8"
            )
            self._dirty = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError):
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        valid_entries: Dict[str, Dict[str, str]] = {}
        for key, raw in entries.items():
            if not isinstance(key, str) or not isinstance(raw, dict):
                continue
            if not isinstance(raw.get("path"), str):
                continue
            valid_entries[key] = {str(k): str(v) for k, v in raw.items()}
        self._entries = valid_entries
        self._dirty = False


__all__ = ["TestSelectionCache", "default_cache_path"]
