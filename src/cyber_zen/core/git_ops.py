"""Git collaborator used by the gcm command."""

from pathlib import Path
from typing import Optional, Protocol

import git
from git.exc import CommandError
from loguru import logger

from cyber_zen.core.errors import ToolEnvironmentError


class StatusReader(Protocol):
    """Anything that can report `git status --porcelain` output."""

    def porcelain_status(self) -> str: ...


class CommitPusher(Protocol):
    """Anything that can stage, commit and push."""

    def stage_all(self) -> str: ...

    def commit(self, message: str) -> str: ...

    def push(self) -> str: ...


class GitRepository:
    """Runs git in a working directory through GitPython's command wrapper."""

    def __init__(self, project_root: Optional[Path] = None):
        self.project_root = Path(project_root or Path.cwd()).resolve()
        self._git = git.Git(str(self.project_root))

    def _run(self, command: str, *args: str) -> str:
        logger.debug(f"git {command} {' '.join(args)}".rstrip())
        try:
            return getattr(self._git, command)(*args)
        except CommandError as e:
            stderr = (getattr(e, "stderr", "") or "").strip()
            raise ToolEnvironmentError(
                f"git {command.replace('_', '-')} failed: {stderr or e}"
            ) from e

    def ensure_repository(self) -> None:
        """Fail unless project_root is inside a git work tree."""
        try:
            self._git.rev_parse("--git-dir")
        except CommandError as e:
            raise ToolEnvironmentError(
                f"Not a git repository: {self.project_root}"
            ) from e

    def porcelain_status(self) -> str:
        return self._run("status", "--porcelain")

    def stage_all(self) -> str:
        return self._run("add", ".")

    def commit(self, message: str) -> str:
        return self._run("commit", "-m", message, "--no-verify")

    def push(self) -> str:
        return self._run("push")
