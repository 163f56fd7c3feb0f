"""Worktree data models."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: Path
    branch_name: Optional[str]  # None when detached or bare
    commit_sha: Optional[str]
    is_main: bool = False  # First entry reported by git
    is_bare: bool = False
    is_detached: bool = False
    is_missing: bool = False  # Directory no longer on disk

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "missing" if self.is_missing else "active"
        main_marker = " (main)" if self.is_main else ""
        name = self.branch_name or ("(bare)" if self.is_bare else "(detached)")
        return f"{name} @ {self.path}{main_marker} [{status}]"
