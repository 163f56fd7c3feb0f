"""
git-workty - Per-branch worktrees laid out next to your git repository
"""

from .__version__ import __version__
from .config import Config
from .environment import Environment
from .services.git import GitRepo

__all__ = ["Config", "Environment", "GitRepo", "__version__"]
