"""Push local commits to a remote repository with sensible defaults.

``git_push`` is a convenience wrapper around ``git push``. When the remote
and/or branch are not given it infers them:

- If both ``remote`` and ``branch`` are None and the current branch tracks a
  remote branch, that remote branch is used.
- If ``remote`` is None and only one remote is configured, it is used; with
  several remotes, the one named "origin" is used.
- If ``branch`` is None, the name of the current local branch is used.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from git import Repo
from pydantic import ValidationError

from .push_modules import auth, git_ops, hooks, resolution
from .push_modules.data_types import ARGUMENT_RULES, PushRequest, PushResult
from .push_modules.errors import InputValidationError, PathError

logger = logging.getLogger(__name__)


def validate_request(**arguments: object) -> PushRequest:
    """Build a PushRequest, translating the first validation failure."""

    try:
        return PushRequest(**arguments)
    except ValidationError as exc:
        location = exc.errors()[0]["loc"]
        field = str(location[0]) if location else ""
        message = ARGUMENT_RULES.get(field, str(exc))
        raise InputValidationError(message) from exc


def git_push(
    remote: Optional[str] = None,
    branch: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    force: bool = False,
    set_upstream: bool = True,
    dry_run: bool = False,
    project: Union[str, Path] = ".",
) -> PushResult:
    """Push the current branch to a remote repository.

    Args:
        remote: Name of the remote repository; inferred when None
        branch: Name of the branch in the remote repository; defaults to the
            name of the current local branch
        username: Username for the Git hosting service (https remotes only);
            prompted for if necessary
        password: Password or token for the Git hosting service (https
            remotes only); prompted for if necessary
        force: Force the push, equivalent to ``git push -f``
        set_upstream: Make the current branch track the remote branch if it
            does not track one yet, equivalent to ``git push -u``
        dry_run: Preview the action without running the hook or pushing
        project: Path to a directory inside the repository

    Returns:
        PushResult describing the remote, branch, username, force and dry_run.

    Raises:
        InputValidationError, PathError, RepositoryStateError,
        AuthenticationError, HookFailureError or PushError.
    """
    request = validate_request(
        remote=remote,
        branch=branch,
        username=username,
        password=password,
        force=force,
        set_upstream=set_upstream,
        dry_run=dry_run,
        project=project,
    )

    project_dir = Path(request.project).expanduser()
    if not project_dir.is_dir():
        raise PathError(f"project directory does not exist: {project_dir}")
    project_dir = project_dir.resolve()

    with git_ops.open_repository(project_dir) as repo:
        return _push_from(repo, request)


def _push_from(repo: Repo, request: PushRequest) -> PushResult:
    # Assess status of repository
    remotes = git_ops.list_remotes(repo)
    head = git_ops.current_branch(repo)
    tracking = git_ops.get_upstream(head)

    target = resolution.resolve_target(
        remote=request.remote,
        branch=request.branch,
        local_branch=head.name,
        tracking=tracking,
        remotes=remotes,
    )
    resolution.warn_branch_mismatch(remote_branch=target.branch, local_branch=head.name)

    credentials = auth.authenticate(
        remote=target.remote,
        remotes=remotes,
        username=request.username,
        password=request.password,
        dry_run=request.dry_run,
        root=Path(repo.working_tree_dir or repo.git_dir),
    )

    if request.dry_run:
        logger.info(f"Dry run: not pushing '{head.name}' to {target.remote}/{target.branch}")
    else:
        hooks.run_pre_push_hook(repo, head, target, remotes[target.remote])

        logger.info(f"Pushing '{head.name}' to {target.remote}/{target.branch}")
        git_ops.push_ref(repo, target, head.name, credentials, force=request.force)

        if request.set_upstream and git_ops.get_upstream(head) is None:
            git_ops.set_upstream(repo, head, target)

    report_username = request.username
    if credentials.protocol == "https":
        report_username = credentials.username or request.username
    return PushResult(
        remote=target.remote,
        branch=target.branch,
        username=report_username,
        force=request.force,
        dry_run=request.dry_run,
    )


__all__ = ["git_push", "validate_request"]
