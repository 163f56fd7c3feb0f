"""Repository discovery and metadata queries for git-workty."""

import os
from pathlib import Path
from typing import List, Optional, Union

from git_workty.constants import (
    BRANCH_REF_PREFIX,
    FALLBACK_BRANCHES,
    FALLBACK_REPO_NAME,
    HEAD_REF_PREFIX,
    ORIGIN_REMOTE,
)
from git_workty.exceptions import GitOperationError, NotARepositoryError
from git_workty.logging_config import get_logger
from git_workty.models.worktree import WorktreeInfo
from git_workty.services.git.commands import GitCommands

logger = get_logger(__name__)


def _canonicalize(path: Path) -> Path:
    """Resolve symlinks, keeping the path as-is if that fails."""
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        logger.debug(f"Could not canonicalize {path}: {e}")
        return path


class GitRepo:
    """Handle on the git repository enclosing a directory.

    ``root`` is the top level of the working tree the handle was discovered
    from; ``common_dir`` is the metadata directory shared by every worktree
    of the repository. Both are resolved once in :meth:`discover`.
    """

    def __init__(self, root: Path, common_dir: Path, commands: Optional[GitCommands] = None):
        self._root = Path(root)
        self._common_dir = Path(common_dir)
        self.commands = commands or GitCommands()

    @property
    def root(self) -> Path:
        return self._root

    @property
    def common_dir(self) -> Path:
        return self._common_dir

    @property
    def repo_name(self) -> str:
        """Final path segment of the working tree root."""
        return self._root.name or FALLBACK_REPO_NAME

    def __repr__(self) -> str:
        return f"GitRepo(root={str(self._root)!r}, common_dir={str(self._common_dir)!r})"

    @classmethod
    def discover(
        cls, start_path: Optional[Union[str, Path]] = None, commands: Optional[GitCommands] = None
    ) -> "GitRepo":
        """Find the repository enclosing ``start_path``.

        Args:
            start_path: Directory to start from (defaults to the current directory)
            commands: Git command runner to use

        Returns:
            GitRepo for the enclosing repository

        Raises:
            NotARepositoryError: if ``start_path`` is not inside a git working tree
            GitOperationError: if git itself cannot be run
        """
        commands = commands or GitCommands()
        working_directory = Path(start_path) if start_path is not None else Path(os.getcwd())
        if not working_directory.is_dir():
            raise NotARepositoryError(working_directory, f"{working_directory} is not a directory")

        try:
            root = Path(commands.rev_parse(working_directory, "--show-toplevel"))
            common_dir = Path(commands.rev_parse(working_directory, "--git-common-dir"))
        except GitOperationError as e:
            # No status means git never ran, which says nothing about the directory
            if e.status is None:
                raise
            raise NotARepositoryError(working_directory, e.message, e.status) from e

        # --git-common-dir may be relative to the directory git was run in
        if not common_dir.is_absolute():
            common_dir = working_directory / common_dir

        repo = cls(_canonicalize(root), _canonicalize(common_dir), commands)
        logger.debug(f"Discovered {repo!r} from {working_directory}")
        return repo

    def run_git(self, *args: str) -> str:
        """Run a git subcommand at the repository root."""
        return self.commands.run(args, self._root)

    def run_git_in(self, worktree_path: Union[str, Path], *args: str) -> str:
        """Run a git subcommand inside a specific worktree."""
        return self.commands.run(args, worktree_path)

    def origin_url(self) -> Optional[str]:
        """URL of the ``origin`` remote, or None if there is none."""
        try:
            return self.commands.remote_get_url(self._root, ORIGIN_REMOTE) or None
        except GitOperationError as e:
            logger.debug(f"No origin remote: {e}")
            return None

    def default_branch(self) -> Optional[str]:
        """Detect the repository's default branch.

        Strategy:
        1. Read ``HEAD`` in the common git directory (works for bare repos and
           linked worktrees alike).
        2. Fall back to the first of ``main``/``master`` that exists locally.
        3. Give up and return None.
        """
        head_path = self._common_dir / "HEAD"
        try:
            contents = head_path.read_text(encoding="utf-8", errors="replace").strip()
        except OSError as e:
            logger.debug(f"Could not read {head_path}: {e}")
            contents = ""

        if contents.startswith(HEAD_REF_PREFIX):
            name = contents[len(HEAD_REF_PREFIX):].strip()
            if name:
                logger.debug(f"Default branch from HEAD: {name}")
                return name

        for branch in FALLBACK_BRANCHES:
            if self.branch_exists(branch):
                logger.debug(f"Default branch from fallback: {branch}")
                return branch

        return None

    def branch_exists(self, name: str) -> bool:
        """True if a local branch called ``name`` exists."""
        try:
            return self.commands.verify_ref(self._root, f"{BRANCH_REF_PREFIX}{name}")
        except GitOperationError as e:
            logger.debug(f"Could not verify branch {name}: {e}")
            return False

    def is_ancestor(self, ancestor_ref: str, descendant_ref: str) -> bool:
        """True if ``ancestor_ref`` is reachable from ``descendant_ref``.

        Raises:
            GitOperationError: if git cannot answer, e.g. for an unknown ref
        """
        return self.commands.is_ancestor(self._root, ancestor_ref, descendant_ref)

    def list_worktrees(self) -> List[WorktreeInfo]:
        """List all worktrees of the repository.

        Raises:
            GitOperationError: if ``git worktree list`` fails
        """
        output = self.run_git("worktree", "list", "--porcelain")

        # Porcelain format, one block per worktree separated by blank lines:
        # worktree /path/to/worktree
        # HEAD <sha>
        # branch refs/heads/<name>   (or "detached" / "bare")
        worktrees: List[WorktreeInfo] = []
        current: Optional[WorktreeInfo] = None
        for line in output.splitlines() + [""]:
            line = line.strip()
            if not line:
                if current is not None:
                    current.is_missing = not current.path.exists()
                    worktrees.append(current)
                    current = None
                continue

            key, _, value = line.partition(" ")
            if key == "worktree":
                current = WorktreeInfo(
                    path=Path(value), branch_name=None, commit_sha=None, is_main=not worktrees
                )
            elif current is None:
                continue
            elif key == "HEAD":
                current.commit_sha = value
            elif key == "branch":
                if value.startswith(BRANCH_REF_PREFIX):
                    value = value[len(BRANCH_REF_PREFIX):]
                current.branch_name = value
            elif key == "detached":
                current.is_detached = True
            elif key == "bare":
                current.is_bare = True

        logger.debug(f"Found {len(worktrees)} worktrees")
        return worktrees
