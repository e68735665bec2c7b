"""Tests for run-directory composition."""

from __future__ import annotations

from pathlib import Path

from projactions.paths import relative_argument, resolve_directory


def test_missing_override_is_the_root(tmp_path: Path) -> None:
    assert resolve_directory(tmp_path, None) == tmp_path
    assert resolve_directory(tmp_path, "") == tmp_path
    assert resolve_directory(tmp_path, "  ") == tmp_path


def test_trailing_separator_is_not_duplicated(tmp_path: Path) -> None:
    resolved = resolve_directory(tmp_path, "src/")

    assert resolved == tmp_path / "src"
    assert str(resolved) == f"{tmp_path}/src"
    assert "//" not in str(resolved)


def test_leading_separator_stays_under_root(tmp_path: Path) -> None:
    assert resolve_directory(tmp_path, "/build") == tmp_path / "build"


def test_parent_traversal_is_kept_verbatim(tmp_path: Path) -> None:
    assert str(resolve_directory(tmp_path, "../sibling")) == f"{tmp_path}/../sibling"


def test_relative_argument_is_relative_to_run_directory(tmp_path: Path) -> None:
    run_directory = tmp_path / "src"
    target = tmp_path / "tests" / "foo.t"

    assert relative_argument(target, run_directory) == "../tests/foo.t"
    assert relative_argument(tmp_path / "src" / "t" / "a.t", run_directory) == "t/a.t"
