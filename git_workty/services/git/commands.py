"""Thin wrapper around the git executable.

Every git subprocess spawned by git-workty goes through :class:`GitCommands`.
Callers only see the narrow set of capabilities below, so the backend can be
swapped for an in-process binding without touching them.
"""

import os
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import git

from git_workty.exceptions import GitOperationError
from git_workty.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class GitCommands:
    """Run git subcommands and surface failures as GitOperationError."""

    def _execute(self, args: Sequence[str], cwd: Optional[PathLike]) -> Tuple[int, str, str]:
        """Run ``git <args>`` in ``cwd`` and return (status, stdout, stderr)."""
        command = ["git", *args]
        logger.debug(f"Running {' '.join(command)} in {cwd or os.getcwd()}")
        try:
            status, stdout, stderr = git.Git(str(cwd) if cwd is not None else None).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            raise GitOperationError(args[0] if args else "", f"could not execute git: {e}") from e
        return status, stdout, stderr

    def run(self, args: Sequence[str], cwd: Optional[PathLike] = None) -> str:
        """Run a git subcommand and return its standard output.

        Args:
            args: Subcommand and its arguments, e.g. ``["rev-parse", "HEAD"]``
            cwd: Directory to run in (defaults to the process working directory)

        Raises:
            GitOperationError: on non-zero exit, with the subcommand name and
                trimmed standard error attached
        """
        status, stdout, stderr = self._execute(args, cwd)
        if status != 0:
            raise GitOperationError(args[0] if args else "", stderr.strip(), status)
        return stdout

    def rev_parse(self, cwd: PathLike, *args: str) -> str:
        """Return trimmed ``git rev-parse`` output."""
        return self.run(["rev-parse", *args], cwd).strip()

    def remote_get_url(self, cwd: PathLike, remote: str) -> str:
        return self.run(["remote", "get-url", remote], cwd).strip()

    def verify_ref(self, cwd: PathLike, ref: str) -> bool:
        """True if a ref with exactly this full name exists.

        Revision expressions such as ``main~0`` are not refs and never match.
        """
        status, _, _ = self._execute(["show-ref", "--verify", "--quiet", ref], cwd)
        return status == 0

    def is_ancestor(self, cwd: PathLike, ancestor: str, descendant: str) -> bool:
        """Check commit-graph reachability with ``git merge-base --is-ancestor``.

        Exit status 1 means "not an ancestor"; any other failure (bad refs,
        corrupt repository) is raised rather than reported as False.
        """
        status, _, stderr = self._execute(["merge-base", "--is-ancestor", ancestor, descendant], cwd)
        if status == 0:
            return True
        if status == 1:
            return False
        raise GitOperationError("merge-base", stderr.strip(), status)


def is_git_installed() -> bool:
    """Check whether a usable git executable is on PATH."""
    try:
        GitCommands().run(["--version"])
        return True
    except GitOperationError as e:
        logger.debug(f"git is not available: {e}")
        return False
