"""Command-line entry point for git-workty"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_workty.cli.args import parse_args
from git_workty.config import Config, compute_repo_id, config_exists, config_path, find_config_file
from git_workty.environment import Environment
from git_workty.exceptions import WorktyError
from git_workty.logging_config import setup_logging
from git_workty.services.git import GitRepo, is_git_installed

console = Console()
err_console = Console(stderr=True)


def print_path(path):
    """Print a bare path for use in shell scripts."""
    console.print(str(path), markup=False, highlight=False, soft_wrap=True)


def show_info(repo: GitRepo, config: Config, environment: Environment):
    """Print what git-workty knows about the repository."""
    table = Table(show_header=False, box=None)
    table.add_column("key", style="cyan")
    table.add_column("value")

    config_file = find_config_file(repo, environment)

    table.add_row("Repository", escape(str(repo.root)))
    table.add_row("Git directory", escape(str(repo.common_dir)))
    table.add_row("Origin", escape(repo.origin_url() or "") or "[dim]none[/dim]")
    table.add_row("Default branch", escape(repo.default_branch() or "") or "[dim]unknown[/dim]")
    table.add_row("Config file", escape(str(config_file)) if config_file else "[dim]defaults[/dim]")
    table.add_row("Base", escape(config.base))
    table.add_row("Layout", escape(config.layout))
    table.add_row("Repository id", compute_repo_id(repo))
    table.add_row("Workspace root", escape(str(config.workspace_root(repo, environment))))
    if config.open_cmd:
        table.add_row("Open command", escape(config.open_cmd))

    for index, worktree in enumerate(repo.list_worktrees()):
        table.add_row("Worktrees" if index == 0 else "", escape(str(worktree)))

    console.print(table)


def init_config(repo: GitRepo, parsed_args) -> int:
    """Write a config file with the requested overrides."""
    if config_exists(repo) and not parsed_args.force:
        err_console.print(
            f"[yellow]{escape(str(config_path(repo)))} already exists (use --force to overwrite)[/yellow]"
        )
        return 1

    overrides = {
        key: value
        for key, value in (
            ("base", parsed_args.base),
            ("root", parsed_args.root),
            ("open_cmd", parsed_args.open_cmd),
        )
        if value is not None
    }
    try:
        config = Config(**overrides)
    except ValueError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        return 1

    path = config.save(repo)
    console.print(f"[green]Wrote {escape(str(path))}[/green]")
    return 0


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = parse_args(argv)
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    if not is_git_installed():
        err_console.print("[red]Error: git is not installed or not on PATH[/red]")
        return 1

    try:
        repo = GitRepo.discover(parsed_args.directory)

        if parsed_args.command == "config-init":
            return init_config(repo, parsed_args)

        environment = Environment.detect()
        config = Config.load(repo, environment)

        if parsed_args.command == "info":
            show_info(repo, config, environment)
        elif parsed_args.command == "root":
            print_path(config.workspace_root(repo, environment))
        elif parsed_args.command == "path":
            print_path(config.worktree_path(repo, parsed_args.slug, environment))

        return 0
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except WorktyError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", highlight=False)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
