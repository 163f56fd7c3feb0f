"""Configuration handling for git-workty"""

import hashlib
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

import tomli_w

from git_workty.constants import (
    APP_NAME,
    CONFIG_FILENAME,
    CONFIG_VERSION,
    DEFAULT_BASE,
    DEFAULT_LAYOUT,
    DEFAULT_ROOT,
    ID_PLACEHOLDER,
    REPO_ID_BYTES,
    REPO_PLACEHOLDER,
)
from git_workty.environment import Environment, expand_tilde
from git_workty.exceptions import ConfigParseError, ConfigReadError, ConfigWriteError
from git_workty.logging_config import get_logger
from git_workty.services.git.repository import GitRepo

logger = get_logger(__name__)

CandidateResolver = Callable[[GitRepo, Environment], Optional[Path]]


def _repo_root_candidate(repo: GitRepo, environment: Environment) -> Optional[Path]:
    return repo.root / CONFIG_FILENAME


def _common_dir_candidate(repo: GitRepo, environment: Environment) -> Optional[Path]:
    return config_path(repo)


def _user_config_candidate(repo: GitRepo, environment: Environment) -> Optional[Path]:
    if environment.config_dir is None:
        return None
    return environment.config_dir / APP_NAME / CONFIG_FILENAME


def _home_dotfile_candidate(repo: GitRepo, environment: Environment) -> Optional[Path]:
    if environment.home is None:
        return None
    return environment.home / f".{CONFIG_FILENAME}"


def _home_candidate(repo: GitRepo, environment: Environment) -> Optional[Path]:
    if environment.home is None:
        return None
    return environment.home / CONFIG_FILENAME


# Config file locations, highest priority first. The first one that exists wins.
CONFIG_CANDIDATES: Tuple[Tuple[str, CandidateResolver], ...] = (
    ("repo_root", _repo_root_candidate),
    ("common_dir", _common_dir_candidate),
    ("user_config_dir", _user_config_candidate),
    ("home_dotfile", _home_dotfile_candidate),
    ("home", _home_candidate),
)


def config_path(repo: GitRepo) -> Path:
    """Path of the per-repository config file written by :meth:`Config.save`."""
    return repo.common_dir / CONFIG_FILENAME


def _is_present(path: Path) -> bool:
    """Check for a file, treating an unsearchable parent directory as absent."""
    try:
        return path.exists()
    except OSError as e:
        logger.debug(f"Cannot check {path}: {e}")
        return False


def config_exists(repo: GitRepo) -> bool:
    return _is_present(config_path(repo))


def candidate_paths(repo: GitRepo, environment: Optional[Environment] = None) -> list[Path]:
    """Resolve CONFIG_CANDIDATES to concrete paths, in priority order."""
    environment = environment or Environment.detect()
    paths = []
    for label, resolver in CONFIG_CANDIDATES:
        path = resolver(repo, environment)
        if path is None:
            logger.debug(f"Config candidate {label} unavailable")
            continue
        paths.append(path)
    return paths


def find_config_file(repo: GitRepo, environment: Optional[Environment] = None) -> Optional[Path]:
    """Return the highest-priority config file that exists, if any."""
    for path in candidate_paths(repo, environment):
        if _is_present(path):
            return path
    return None


def normalize_url(url: str) -> str:
    """Normalize a remote URL (or path) so equivalent spellings compare equal.

    Lower-cases, then strips surrounding whitespace, trailing ``/`` and a
    trailing ``.git`` until none is left, so the result is a fixed point.
    """
    normalized = url.lower()
    # Repeated until stable, so "/x/proj/.git" becomes "/x/proj" rather than "/x/proj/"
    while True:
        previous = normalized
        normalized = normalized.strip()
        if normalized.endswith("/"):
            normalized = normalized[:-1]
        if normalized.endswith(".git"):
            normalized = normalized[:-len(".git")]
        if normalized == previous:
            return normalized


def compute_repo_id(repo: GitRepo) -> str:
    """Short stable identifier for the repository.

    Derived from the origin URL when there is one, so every clone of the same
    remote maps to the same id; otherwise from the common git directory.
    """
    source = repo.origin_url()
    if source is None:
        source = str(repo.common_dir)

    digest = hashlib.sha256(normalize_url(source).encode("utf-8")).digest()
    return digest[:REPO_ID_BYTES].hex()


@dataclass
class Config:
    """Configuration for git-workty with validation."""

    version: int = CONFIG_VERSION
    base: str = DEFAULT_BASE  # Branch new worktrees start from
    root: str = DEFAULT_ROOT  # Workspace root template, may use {repo} and {id}
    layout: str = DEFAULT_LAYOUT
    open_cmd: Optional[str] = None  # Command used to open a worktree

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_version()
        self.base = self._validate_text("base", self.base)
        self.root = self._validate_text("root", self.root)
        self.layout = self._validate_text("layout", self.layout)
        self._validate_open_cmd()

    def _validate_version(self):
        """Validate version is a positive integer."""
        if isinstance(self.version, bool) or not isinstance(self.version, int) or self.version <= 0:
            raise ValueError(f"version must be a positive integer, got {self.version!r}")

    @staticmethod
    def _validate_text(name: str, value: Any) -> str:
        """Validate a required string setting is present and not blank."""
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a string, got {value!r}")
        if not value.strip():
            raise ValueError(f"{name} cannot be empty")
        return value.strip()

    def _validate_open_cmd(self):
        """Validate open_cmd is unset or a string."""
        if self.open_cmd is not None and not isinstance(self.open_cmd, str):
            raise ValueError(f"open_cmd must be a string, got {self.open_cmd!r}")

    def to_dict(self) -> dict:
        """Convert config to a dictionary, leaving out unset values."""
        data = {
            "version": self.version,
            "base": self.base,
            "root": self.root,
            "layout": self.layout,
            "open_cmd": self.open_cmd,
        }
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = {"version", "base", "root", "layout", "open_cmd"}

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Read and parse a config file.

        Raises:
            ConfigReadError: if the file cannot be read
            ConfigParseError: if it is not valid TOML or holds invalid values
        """
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigReadError(path, str(e)) from e

        try:
            return cls.from_dict(tomllib.loads(contents))
        except (tomllib.TOMLDecodeError, ValueError) as e:
            raise ConfigParseError(path, str(e)) from e

    @classmethod
    def load(cls, repo: GitRepo, environment: Optional[Environment] = None) -> "Config":
        """Load the configuration that applies to ``repo``.

        Uses the first existing file from CONFIG_CANDIDATES, or defaults when
        there is none, then fills in the repository's real default branch.
        """
        path = find_config_file(repo, environment)
        if path is None:
            logger.debug("No config file found, using defaults")
            config = cls()
        else:
            logger.info(f"Loading config from {path}")
            config = cls.from_file(path)

        config.adjust_defaults(repo)
        return config

    def adjust_defaults(self, repo: GitRepo):
        """Replace the untouched default base with the repository's real default branch.

        Only fires when ``base`` is still ``main`` and no local ``main`` exists.
        An explicitly configured base is left alone even if it is missing.
        """
        if self.base != DEFAULT_BASE or repo.branch_exists(DEFAULT_BASE):
            return

        default = repo.default_branch()
        if default:
            logger.debug(f"No local {DEFAULT_BASE} branch, using {default} as base")
            self.base = default

    def save(self, repo: GitRepo) -> Path:
        """Write this config to the repository's common git directory.

        Raises:
            ConfigWriteError: if the file cannot be written
        """
        path = config_path(repo)
        try:
            path.write_text(tomli_w.dumps(self.to_dict()), encoding="utf-8")
        except OSError as e:
            raise ConfigWriteError(path, str(e)) from e
        logger.info(f"Saved config to {path}")
        return path

    def workspace_root(self, repo: GitRepo, environment: Optional[Environment] = None) -> Path:
        """Directory holding all worktrees of ``repo``."""
        expanded = self.root.replace(REPO_PLACEHOLDER, repo.repo_name)
        if ID_PLACEHOLDER in expanded:
            expanded = expanded.replace(ID_PLACEHOLDER, compute_repo_id(repo))

        environment = environment or Environment.detect()
        return expand_tilde(expanded, environment.home)

    def worktree_path(self, repo: GitRepo, branch_slug: str, environment: Optional[Environment] = None) -> Path:
        """Directory for the worktree of an already filesystem-safe branch slug."""
        return self.workspace_root(repo, environment) / branch_slug
