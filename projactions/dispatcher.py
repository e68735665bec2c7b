"""Action dispatch: resolve settings, build the command, hand it off."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import ActionSettings, ScopedConfigStore
from .errors import NoPriorSelection, PromptCancelled
from .execution import Executor, ShellExecutor
from .expressions import evaluate_command
from .logging import get_logger
from .models import ActionKind, Invocation, Project
from .paths import relative_argument, resolve_directory
from .projects import MarkerProjectResolver, ProjectResolver
from .prompting import PathPrompter, TerminalPrompter
from .stores import TestSelectionCache


class ActionDispatcher:
    """Runs lifecycle actions for the project enclosing a given path.

    A dispatcher is one session: it owns the test selection cache used by
    ``retest``. Project, configuration and run directory are resolved afresh
    on every call.
    """

    def __init__(
        self,
        project_resolver: ProjectResolver | None = None,
        executor: Executor | None = None,
        prompter: PathPrompter | None = None,
        selection_cache: TestSelectionCache | None = None,
        config_filename: str | None = None,
    ) -> None:
        self.project_resolver = project_resolver or MarkerProjectResolver(
            config_filename=config_filename
        )
        self.executor = executor or ShellExecutor()
        self.prompter = prompter or TerminalPrompter()
        self.selections = selection_cache if selection_cache is not None else TestSelectionCache()
        self.config_filename = config_filename
        self.logger = get_logger("dispatcher")

    def configure(self, path: str | Path) -> Optional[Invocation]:
        return self.dispatch(ActionKind.CONFIGURE, path)

    def compile(self, path: str | Path) -> Optional[Invocation]:
        return self.dispatch(ActionKind.COMPILE, path)

    def install(self, path: str | Path) -> Optional[Invocation]:
        return self.dispatch(ActionKind.INSTALL, path)

    def test(self, path: str | Path) -> Optional[Invocation]:
        return self.dispatch(ActionKind.TEST, path)

    def retest(self, path: str | Path) -> Optional[Invocation]:
        return self.dispatch(ActionKind.QUICK_RETEST, path)

    def update_tests(self, path: str | Path) -> Optional[Invocation]:
        return self.dispatch(ActionKind.TEST_UPDATE, path)

    def dispatch(
        self, kind: ActionKind, path: str | Path, *, dry_run: bool = False
    ) -> Optional[Invocation]:
        """Resolve and run ``kind`` for the file at ``path``.

        Returns the invocation handed to the executor, or ``None`` when the
        user cancelled the test target prompt.
        """
        spec = kind.spec
        anchor = Path(path).expanduser().resolve()
        project = self.project_resolver.project_for(anchor)
        self.logger.debug("Resolved %s to project %s", anchor, project.root)

        settings = ActionSettings(ScopedConfigStore(project.root, self.config_filename))
        config = settings.action_config(anchor, spec)
        run_directory = resolve_directory(project.root, config.directory)
        command = evaluate_command(spec.name, config.command)
        self.logger.debug(
            "%s: command=%r directory=%s", spec.name, command, run_directory
        )

        if spec.uses_test_files:
            if spec.prompts:
                test_root = resolve_directory(
                    project.root, settings.test_files_directory(anchor)
                )
                try:
                    chosen = self.prompter.choose_path(f"{spec.name} target", test_root)
                except PromptCancelled:
                    self.logger.debug("%s cancelled at the target prompt", spec.name)
                    return None
                target = relative_argument(chosen, run_directory)
                self.selections.remember(project, target)
            else:
                target = self._recall(project)
            command = f"{command} {target}"

        invocation = Invocation(action=kind, command=command, directory=run_directory)
        if dry_run:
            self.logger.info("Would run `%s` in %s", command, run_directory)
            return invocation

        self.logger.info("Running `%s` in %s", command, run_directory)
        self.executor.run(command, run_directory)
        return invocation

    def _recall(self, project: Project) -> str:
        target = self.selections.recall(project)
        if target is None:
            raise NoPriorSelection(project)
        return target


__all__ = ["ActionDispatcher"]
