"""CLI entrypoints for projactions commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .dispatcher import ActionDispatcher
from .errors import ProjactionsError
from .execution import ShellExecutor
from .logging import configure_logging
from .models import ActionKind
from .prompting import FixedPathPrompter, PathPrompter, TerminalPrompter
from .stores import TestSelectionCache, default_cache_path

_ACTION_HELP = {
    ActionKind.CONFIGURE: "Run the project's configure command.",
    ActionKind.COMPILE: "Run the project's compile command.",
    ActionKind.INSTALL: "Run the project's install command.",
    ActionKind.TEST: "Pick a test target and run the test command on it.",
    ActionKind.QUICK_RETEST: "Re-run the test command on the last picked target.",
    ActionKind.TEST_UPDATE: "Pick a test target and run the test-update command on it.",
}


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projactions",
        description="Run configure/compile/install/test commands for the enclosing project.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for kind, help_text in _ACTION_HELP.items():
        action_parser = subparsers.add_parser(kind.spec.name, help=help_text)
        _add_verbose_option(action_parser, suppress_default=True)
        action_parser.add_argument(
            "path",
            nargs="?",
            default=".",
            help="File or directory the action is invoked from (defaults to current directory).",
        )
        action_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the resolved command and directory without running it.",
        )
        action_parser.add_argument(
            "--cache-file",
            type=Path,
            default=None,
            help="Where the last test selection per project is kept.",
        )
        if kind.spec.prompts:
            action_parser.add_argument(
                "--target",
                type=Path,
                default=None,
                help="Test file or directory to use instead of prompting, relative to test-files-directory.",
            )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for projactions commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), log_file=args.log_file, action=args.command
    )

    kind = ActionKind.from_name(args.command)
    target = getattr(args, "target", None)
    prompter: PathPrompter = FixedPathPrompter(target) if target is not None else TerminalPrompter()
    cache = TestSelectionCache(args.cache_file or default_cache_path())
    executor = ShellExecutor(wait=True)
    dispatcher = ActionDispatcher(
        executor=executor,
        prompter=prompter,
        selection_cache=cache,
    )

    dry_run = bool(getattr(args, "dry_run", False))
    try:
        invocation = dispatcher.dispatch(kind, args.path, dry_run=dry_run)
    except (ProjactionsError, ConfigError) as exc:
        parser.exit(1, f"projactions {kind.spec.name} failed: {exc}\n")
    finally:
        cache.persist()

    if invocation is None:
        return
    if dry_run:
        print(f"cd {_relativize(invocation.directory)} && {invocation.command}")
        return
    if executor.returncode:
        sys.exit(executor.returncode)


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
