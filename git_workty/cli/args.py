"""Command-line argument parsing for git-workty."""

import argparse
from git_workty.__version__ import __version__


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-workty",
        description="Inspect where git-workty keeps the worktrees of a repository",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--version", action="version", version=f"git-workty {__version__}")
    parser.add_argument(
        "-C",
        dest="directory",
        metavar="DIR",
        help="Run as if started in DIR instead of the current directory",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("info", help="Show repository and configuration details")
    subparsers.add_parser("root", help="Print the workspace root for this repository")

    path_parser = subparsers.add_parser("path", help="Print the worktree path for a branch slug")
    path_parser.add_argument("slug", help="Filesystem-safe branch name, e.g. feat-login")

    init_parser = subparsers.add_parser(
        "config-init", help="Write a config file into the repository's git directory"
    )
    init_parser.add_argument("--base", help="Branch new worktrees start from")
    init_parser.add_argument("--root", help="Workspace root template ({repo} and {id} allowed)")
    init_parser.add_argument("--open-cmd", help="Command used to open a worktree")
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing config file"
    )

    return parser.parse_args(argv)
