"""Run-directory composition helpers."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_directory(root: Path, override: str | None) -> Path:
    """Return the absolute run directory for ``override`` under ``root``.

    Pure composition: ``..`` segments are kept as written and the result is
    not checked for existence.
    """
    if override is None:
        return root
    relative = str(override).strip().lstrip("/\\")
    if not relative:
        return root
    return root / relative


def relative_argument(target: Path, run_directory: Path) -> str:
    """Express ``target`` relative to the directory a command runs from."""
    return os.path.relpath(target, run_directory)


__all__ = ["relative_argument", "resolve_directory"]
