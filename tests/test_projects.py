"""Tests for project root discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from projactions.errors import NoProjectFound
from projactions.projects import MarkerProjectResolver


def test_resolver_finds_nearest_marker(project_builder) -> None:
    project_builder.write({"src/lib/module.c": ""})
    resolver = MarkerProjectResolver()

    project = resolver.project_for(project_builder.path("src/lib/module.c"))

    assert project.root == project_builder.path()
    assert project.identity == str(project_builder.path())


def test_nested_projects_resolve_to_inner_root(project_builder) -> None:
    project_builder.write({"vendor/dep/.projactions": "", "vendor/dep/dep.c": ""})
    resolver = MarkerProjectResolver()

    project = resolver.project_for(project_builder.path("vendor/dep/dep.c"))

    assert project.root == project_builder.path("vendor/dep")


def test_resolver_accepts_paths_that_do_not_exist_yet(project_builder) -> None:
    resolver = MarkerProjectResolver()

    project = resolver.project_for(project_builder.path("src/new_file.c"))

    assert project.root == project_builder.path()


def test_resolver_raises_outside_projects(tmp_path: Path) -> None:
    outside = tmp_path / "loose"
    outside.mkdir()
    resolver = MarkerProjectResolver(markers=[".no-such-marker"])

    with pytest.raises(NoProjectFound) as excinfo:
        resolver.project_for(outside)

    assert excinfo.value.path == outside


def test_scope_file_bounds_projects_without_vcs(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv("PROJACTIONS_CONFIG_FILE", raising=False)
    root = tmp_path / "proj"
    (root / "src" / "docs").mkdir(parents=True)
    (root / ".projactions.yml").write_text("compile-cmd: make\n", encoding="utf-8")
    (root / "src" / "docs" / ".projactions.yml").write_text(
        "compile-cmd: sphinx-build\n", encoding="utf-8"
    )

    resolver = MarkerProjectResolver()

    assert resolver.project_for(root / "src").root == root.resolve()
    assert resolver.project_for(root / "src" / "docs" / "index.rst").root == root.resolve()


def test_root_markers_take_precedence_over_scope_files(project_builder) -> None:
    project_builder.scope("", "compile-cmd: make\n")
    project_builder.scope("app", "compile-cmd: ninja\n")
    (project_builder.path().parent / ".projactions.yml").write_text("", encoding="utf-8")

    project = MarkerProjectResolver().project_for(project_builder.path("app"))

    assert project.root == project_builder.path()


def test_scope_file_name_follows_configuration(tmp_path: Path) -> None:
    root = tmp_path / "proj"
    (root / "lib").mkdir(parents=True)
    (root / ".build.yml").write_text("compile-cmd: make\n", encoding="utf-8")

    resolver = MarkerProjectResolver(config_filename=".build.yml")

    assert resolver.project_for(root / "lib").root == root.resolve()
    with pytest.raises(NoProjectFound):
        MarkerProjectResolver(config_filename=".other.yml").project_for(root / "lib")
