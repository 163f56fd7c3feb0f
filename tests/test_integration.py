"""End-to-end tests against real repositories"""
from git_workty.config import Config, compute_repo_id, find_config_file
from git_workty.services.git import GitRepo

from conftest import init_repo


class TestFreshRepository:
    """Test a brand new repository without any config."""

    def test_fresh_repo_defaults(self, git_repo, environment):
        repo = GitRepo.discover(git_repo.working_dir)

        assert repo.default_branch() == "main"
        assert find_config_file(repo, environment) is None

        config = Config.load(repo, environment)
        assert config.base == "main"
        assert config == Config()

    def test_fresh_repo_workspace(self, git_repo, environment):
        repo = GitRepo.discover(git_repo.working_dir)
        config = Config.load(repo, environment)

        path = config.worktree_path(repo, "feat-login", environment)
        assert path == environment.home / ".workty" / f"test_repo-{compute_repo_id(repo)}" / "feat-login"


class TestLinkedWorktree:
    """Test that a linked worktree resolves the same workspace as the main one."""

    def test_same_workspace_from_linked_worktree(self, git_repo, temp_dir, environment):
        linked_path = temp_dir / "linked"
        git_repo.git.worktree("add", "-b", "feat/linked", str(linked_path))

        main_repo = GitRepo.discover(git_repo.working_dir)
        linked_repo = GitRepo.discover(linked_path)

        assert compute_repo_id(main_repo) == compute_repo_id(linked_repo)

    def test_saved_config_visible_from_linked_worktree(self, git_repo, temp_dir, environment):
        linked_path = temp_dir / "linked"
        git_repo.git.worktree("add", "-b", "feat/linked", str(linked_path))

        Config(base="develop").save(GitRepo.discover(git_repo.working_dir))

        assert Config.load(GitRepo.discover(linked_path), environment).base == "develop"


class TestClonesOfOneRemote:
    """Test differently named clones of one remote share a workspace id."""

    def test_clones_share_id(self, temp_dir, environment):
        for name in ("alpha", "beta"):
            init_repo(temp_dir / name).create_remote("origin", "git@github.com:acme/widgets.git")

        alpha = GitRepo.discover(temp_dir / "alpha")
        beta = GitRepo.discover(temp_dir / "beta")
        config = Config(root="~/wt/{id}")

        assert config.workspace_root(alpha, environment) == config.workspace_root(beta, environment)
