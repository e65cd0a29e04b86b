"""Command-line entry point: ``pushwise [REMOTE] [BRANCH]``."""

from __future__ import annotations

import logging
import sys
import warnings
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from .push import git_push
from .push_modules import git_ops
from .push_modules.errors import PushwiseError, RepositoryStateError
from .push_modules.exit_codes import EXIT_INTERRUPTED, exit_code_for
from .push_modules.reporting import print_summary
from .push_modules.resolution import BranchMismatchWarning
from .push_modules.utils import PushSettings, default_log_file, load_push_env, setup_logger

console = Console()
err_console = Console(stderr=True)


def _env_root(project: Path) -> Path:
    """Directory whose dotenv files apply: the repository root when there is one."""

    try:
        with git_ops.open_repository(project) as repo:
            return Path(repo.working_tree_dir or project)
    except RepositoryStateError:
        return project


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("remote", required=False)
@click.argument("branch", required=False)
@click.option("-u", "--username", default=None, help="Username for the Git hosting service (https remotes).")
@click.option(
    "--password",
    default=None,
    help="Password or token for the Git hosting service. Prefer PUSHWISE_PASSWORD or the prompt.",
)
@click.option("-f", "--force", is_flag=True, help="Force the push (git push -f). Use with care.")
@click.option(
    "--set-upstream/--no-set-upstream",
    default=True,
    show_default=True,
    help="Make the current branch track the remote branch if it tracks none.",
)
@click.option("-n", "--dry-run", is_flag=True, help="Preview the push without running the hook or pushing.")
@click.option(
    "-C",
    "--project",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory inside the repository to push from.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug output.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also append log output to this file (default: $PUSHWISE_LOG_ROOT/pushwise.log).",
)
def main(
    remote: Optional[str],
    branch: Optional[str],
    username: Optional[str],
    password: Optional[str],
    force: bool,
    set_upstream: bool,
    dry_run: bool,
    project: Path,
    verbose: bool,
    log_file: Optional[Path],
) -> None:
    """Push local commits to REMOTE/BRANCH.

    REMOTE defaults to the upstream of the current branch, the only remote, or
    "origin". BRANCH defaults to the name of the current branch.
    """
    if project.is_dir():
        load_push_env(_env_root(project))
    logger = setup_logger(verbose=verbose, log_file=log_file or default_log_file(PushSettings.from_env()))

    try:
        with warnings.catch_warnings():
            # The mismatch is already reported through the logger.
            warnings.simplefilter("ignore", BranchMismatchWarning)
            result = git_push(
                remote=remote,
                branch=branch,
                username=username,
                password=password,
                force=force,
                set_upstream=set_upstream,
                dry_run=dry_run,
                project=str(project),
            )
    except PushwiseError as exc:
        err_console.print(f"Error: {exc}", style="bold red", markup=False, highlight=False, soft_wrap=True)
        sys.exit(exit_code_for(exc))
    except KeyboardInterrupt:
        err_console.print("Interrupted", style="yellow")
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        logger.debug("Unexpected error during push", exc_info=True)
        err_console.print(f"Unexpected error: {exc}", style="bold red", markup=False, highlight=False, soft_wrap=True)
        sys.exit(exit_code_for(exc))

    print_summary(result, console)


if __name__ == "__main__":
    main()
