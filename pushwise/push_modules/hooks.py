"""Run the repository's pre-push hook before pushing."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from git import Head, Repo

from . import git_ops
from .data_types import HookResult, ResolvedTarget
from .errors import HookFailureError

logger = logging.getLogger(__name__)

PRE_PUSH = "pre-push"


def find_pre_push_hook(repo: Repo) -> Optional[Path]:
    """Return the executable pre-push hook, or None if git would not run one."""

    if os.name == "nt":
        return None
    hook = git_ops.hooks_dir(repo) / PRE_PUSH
    if not hook.is_file():
        return None
    if not os.access(hook, os.X_OK):
        logger.warning(
            f"The '{hook}' hook was ignored because it's not set as executable. "
            f"Run `chmod +x {hook}` to enable it."
        )
        return None
    return hook


def run_pre_push_hook(
    repo: Repo,
    head: Head,
    target: ResolvedTarget,
    url: str,
) -> Optional[HookResult]:
    """Execute the pre-push hook the way git would, if there is one.

    The hook gets the remote name and URL as arguments and one line on stdin
    describing the ref being pushed. Raises HookFailureError when the hook
    exits non-zero.
    """
    hook = find_pre_push_hook(repo)
    if hook is None:
        return None

    local_sha = head.commit.hexsha if head.is_valid() else git_ops.ZERO_SHA
    remote_sha = git_ops.remote_tracking_sha(repo, target)
    stdin = f"refs/heads/{head.name} {local_sha} refs/heads/{target.branch} {remote_sha}\n"

    display = _display_path(hook)
    logger.info(f"Executing pre-push hook in {display}")
    completed = subprocess.run(
        [str(hook), target.remote, url],
        cwd=repo.working_tree_dir or repo.git_dir,
        input=stdin,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    result = HookResult(path=display, output=completed.stdout or "", returncode=completed.returncode)
    if result.output.strip():
        logger.info(result.output.rstrip())

    if not result.ok:
        raise HookFailureError(display, result.output, result.returncode)
    return result


def _display_path(path: Path) -> Path:
    try:
        return Path(os.path.relpath(path))
    except ValueError:
        return path


__all__ = ["PRE_PUSH", "find_pre_push_hook", "run_pre_push_hook"]
