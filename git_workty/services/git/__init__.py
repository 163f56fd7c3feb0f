"""Git-related services for git-workty."""

from .commands import GitCommands, is_git_installed
from .repository import GitRepo

__all__ = [
    "GitCommands",
    "GitRepo",
    "is_git_installed",
]
