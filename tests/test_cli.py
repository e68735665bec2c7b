"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from projactions import cli
from projactions.cli import _build_parser


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "compile"])
    assert args.verbose is True
    assert args.command == "compile"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["retest", "src/main.c", "--verbose"])
    assert args.verbose is True
    assert args.command == "retest"
    assert args.path == "src/main.c"


def test_cli_accepts_target_for_prompting_actions() -> None:
    parser = _build_parser()
    args = parser.parse_args(["update-tests", "--target", "tests/foo.t", "--dry-run"])
    assert args.target == Path("tests/foo.t")
    assert args.dry_run is True


def test_cli_rejects_target_for_retest() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["retest", "--target", "tests/foo.t"])


def test_cli_dry_run_prints_command(project_builder, tmp_path: Path, monkeypatch, capsys) -> None:
    project_builder.scope("", "test-cmd: prove\ntest-cmd-directory: lib\n")
    project_builder.write({"t/basic.t": ""})
    monkeypatch.chdir(project_builder.path())
    cache_file = tmp_path / "selections.json"

    cli.main(
        [
            "test",
            str(project_builder.path()),
            "--target",
            "t/basic.t",
            "--dry-run",
            "--cache-file",
            str(cache_file),
        ]
    )

    out = capsys.readouterr().out
    assert out.strip() == "cd lib && prove ../t/basic.t"
    assert cache_file.exists()


def test_cli_retest_uses_persisted_selection(project_builder, tmp_path: Path, monkeypatch, capsys) -> None:
    project_builder.write({"t/basic.t": ""})
    monkeypatch.chdir(project_builder.path())
    cache_file = tmp_path / "selections.json"

    cli.main(["test", "--target", "t/basic.t", "--dry-run", "--cache-file", str(cache_file)])
    capsys.readouterr()
    cli.main(["retest", "--dry-run", "--cache-file", str(cache_file)])

    assert capsys.readouterr().out.strip() == "cd . && make test t/basic.t"


def test_cli_reports_missing_selection(project_builder, tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(project_builder.path())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["retest", "--cache-file", str(tmp_path / "selections.json")])

    assert excinfo.value.code == 1
    assert "No previous test selection" in capsys.readouterr().err


def test_cli_exits_with_command_status(project_builder, tmp_path: Path, monkeypatch) -> None:
    project_builder.scope("", "compile-cmd: exit 3\n")
    monkeypatch.chdir(project_builder.path())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["compile", "--cache-file", str(tmp_path / "selections.json")])

    assert excinfo.value.code == 3


def test_cli_reports_missing_run_directory(project_builder, tmp_path: Path, monkeypatch, capsys) -> None:
    project_builder.scope("", "compile-cmd: make\ncompile-cmd-directory: build/\n")
    monkeypatch.chdir(project_builder.path())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["compile", "--cache-file", str(tmp_path / "selections.json")])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "projactions compile failed: Could not run `make`" in err
    assert str(project_builder.path("build")) in err
    assert "Traceback" not in err


def test_cli_target_is_relative_to_test_files_directory(
    project_builder, tmp_path: Path, monkeypatch, capsys
) -> None:
    project_builder.scope("", "test-cmd: prove\ntest-files-directory: t\n")
    project_builder.write({"t/unit/basic.t": ""})
    monkeypatch.chdir(project_builder.path("t"))

    cli.main(
        [
            "test",
            str(project_builder.path()),
            "--target",
            "unit/basic.t",
            "--dry-run",
            "--cache-file",
            str(tmp_path / "selections.json"),
        ]
    )

    assert capsys.readouterr().out.strip().endswith("&& prove t/unit/basic.t")
