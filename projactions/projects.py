"""Project root discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence

from .config import config_filename as default_config_filename
from .errors import NoProjectFound
from .models import Project

DEFAULT_MARKERS: Sequence[str] = (".git", ".hg", ".bzr", ".svn", ".projactions")


class ProjectResolver(Protocol):
    def project_for(self, path: Path) -> Project:
        """Return the project enclosing ``path`` or raise ``NoProjectFound``."""


class MarkerProjectResolver:
    """Finds the directory bounding the project that encloses a path.

    The nearest ancestor carrying a root marker wins. Trees without any
    marker fall back to the outermost ancestor holding a scope file, since
    subdirectories carry scope files of their own.
    """

    def __init__(
        self,
        markers: Iterable[str] | None = None,
        config_filename: str | None = None,
    ) -> None:
        self.markers = tuple(markers) if markers is not None else tuple(DEFAULT_MARKERS)
        self.config_filename = config_filename

    def project_for(self, path: Path) -> Project:
        start = Path(path).expanduser().resolve()
        if not start.is_dir():
            start = start.parent
        scope_file = self.config_filename or default_config_filename()
        outermost_scope: Optional[Path] = None
        for directory in (start, *start.parents):
            if any((directory / marker).exists() for marker in self.markers):
                return Project(identity=str(directory), root=directory)
            if (directory / scope_file).is_file():
                outermost_scope = directory
        if outermost_scope is not None:
            return Project(identity=str(outermost_scope), root=outermost_scope)
        raise NoProjectFound(Path(path))


__all__ = ["DEFAULT_MARKERS", "MarkerProjectResolver", "ProjectResolver"]
