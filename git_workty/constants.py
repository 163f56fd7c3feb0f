"""Shared constants for git-workty."""

from typing import Tuple

APP_NAME = "workty"

CONFIG_FILENAME = "workty.toml"
CONFIG_VERSION = 1

DEFAULT_BASE = "main"
DEFAULT_ROOT = "~/.workty/{repo}-{id}"
DEFAULT_LAYOUT = "flat"

# Placeholders substituted into the workspace root template
REPO_PLACEHOLDER = "{repo}"
ID_PLACEHOLDER = "{id}"

# Used when the repository root has no nameable final segment
FALLBACK_REPO_NAME = "repo"

# Tried in order when HEAD does not name a branch
FALLBACK_BRANCHES: Tuple[str, ...] = ("main", "master")

HEAD_REF_PREFIX = "ref: refs/heads/"
BRANCH_REF_PREFIX = "refs/heads/"

ORIGIN_REMOTE = "origin"

# Length of the repository identifier in bytes (hex-encoded to twice as many chars)
REPO_ID_BYTES = 4
