"""Pytest fixtures for git-workty tests"""
import tempfile
from pathlib import Path

import git
import pytest

from git_workty.environment import Environment
from git_workty.services.git import GitRepo


def init_repo(path: Path, branch: str = "main") -> git.Repo:
    """Initialize a repository at ``path`` with one commit on ``branch``."""
    path.mkdir(parents=True, exist_ok=True)
    repo = git.Repo.init(path)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")

    (path / "README.md").write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Whatever init.defaultBranch says, end up on the requested branch
    repo.git.branch("-M", branch)
    return repo


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def environment(temp_dir):
    """Home and config directories isolated from the real user."""
    home = temp_dir / "home"
    config_dir = home / ".config"
    config_dir.mkdir(parents=True)
    return Environment(home=home, config_dir=config_dir)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository on ``main`` for testing."""
    repo = init_repo(temp_dir / "test_repo")
    yield repo
    repo.close()


@pytest.fixture
def git_repo_with_origin(git_repo):
    """Repository with a fake GitHub origin remote."""
    git_repo.create_remote("origin", "git@github.com:test/test-repo.git")
    yield git_repo


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Repository with a feature branch one commit ahead of main."""
    repo = git_repo
    repo_path = Path(repo.working_dir)

    repo.git.checkout("-b", "feature/test-feature")
    (repo_path / "feature.txt").write_text("Feature content\n")
    repo.index.add(["feature.txt"])
    repo.index.commit("Add feature")

    repo.git.checkout("main")
    yield repo


@pytest.fixture
def workty_repo(git_repo):
    """GitRepo handle discovered from the test repository."""
    return GitRepo.discover(git_repo.working_dir)
