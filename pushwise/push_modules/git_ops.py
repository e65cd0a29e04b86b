"""Git helpers built on GitPython."""

from __future__ import annotations

import logging
import os
import shlex
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from git import GitCommandError, Head, InvalidGitRepositoryError, NoSuchPathError, RemoteReference, Repo

from .data_types import (
    Credentials,
    GitCommandResult,
    HttpsCredentials,
    Protocol,
    ResolvedTarget,
    SshCredentials,
    TrackingInfo,
)
from .errors import DetachedHeadError, PushError, PushErrorKind, RepositoryStateError

logger = logging.getLogger(__name__)

ZERO_SHA = "0" * 40
LOCAL_REMOTE = "."

ASKPASS_USERNAME_VAR = "PUSHWISE_ASKPASS_USERNAME"
ASKPASS_PASSWORD_VAR = "PUSHWISE_ASKPASS_PASSWORD"

# git calls the askpass program with the prompt as its only argument.
ASKPASS_SCRIPT = f"""#!/bin/sh
case "$1" in
    Username*) printf '%s\\n' "${ASKPASS_USERNAME_VAR}" ;;
    *) printf '%s\\n' "${ASKPASS_PASSWORD_VAR}" ;;
esac
"""

SSH_UNSUPPORTED_PATTERNS = (
    "unsupported url protocol",
    "cannot run ssh",
    "ssh: not found",
    "ssh: command not found",
)

SSH_AUTH_PATTERNS = (
    "failed to authenticate ssh session",
    "permission denied (publickey",
    "enter passphrase for key",
    "incorrect passphrase",
)

NON_FAST_FORWARD_PATTERNS = (
    "remote contains commits that are not present locally",
    "non-fast-forward",
    "(fetch first)",
    "updates were rejected because",
)


def open_repository(project: Path) -> Repo:
    """Return the repository containing ``project``."""

    try:
        return Repo(project, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as exc:
        raise RepositoryStateError(
            f"A Git repository is required, but {project} is not inside one. "
            "Run `git init` to create one."
        ) from exc


def list_remotes(repo: Repo) -> dict[str, str]:
    """Map each configured remote name to its URL."""

    return {remote.name: remote.url for remote in repo.remotes}


def current_branch(repo: Repo) -> Head:
    """Return the checked-out branch, failing on a detached HEAD."""

    if repo.head.is_detached:
        raise DetachedHeadError()
    return repo.active_branch


def get_upstream(head: Head) -> TrackingInfo | None:
    """Return the remote upstream configured for ``head``, if any.

    An upstream on another local branch (``branch.<name>.remote = .``) is not a
    push target and counts as no upstream.
    """

    tracking = head.tracking_branch()
    if tracking is None or tracking.remote_name == LOCAL_REMOTE:
        return None
    return TrackingInfo(remote=tracking.remote_name, branch=tracking.remote_head)


def set_upstream(repo: Repo, head: Head, target: ResolvedTarget) -> None:
    """Make ``head`` track ``<remote>/<branch>``."""

    ref = RemoteReference(repo, f"refs/remotes/{target.remote}/{target.branch}")
    head.set_tracking_branch(ref)
    logger.info(f"Branch '{head.name}' set up to track '{target.remote}/{target.branch}'")


def remote_tracking_sha(repo: Repo, target: ResolvedTarget) -> str:
    """Last known sha of the remote branch, or forty zeros when unknown."""

    ref = RemoteReference(repo, f"refs/remotes/{target.remote}/{target.branch}")
    if not ref.is_valid():
        return ZERO_SHA
    return ref.commit.hexsha


def hooks_dir(repo: Repo) -> Path:
    """Directory git looks in for hooks, honouring ``core.hooksPath``."""

    with repo.config_reader() as config:
        configured = config.get_value("core", "hooksPath", default="")
    if configured:
        path = Path(os.path.expanduser(str(configured)))
        if not path.is_absolute():
            path = Path(repo.working_tree_dir or repo.git_dir) / path
        return path
    return Path(repo.git_dir) / "hooks"


@contextmanager
def credential_environment(credentials: Credentials) -> Iterator[dict[str, str]]:
    """Yield environment variables that hand ``credentials`` to git."""

    if isinstance(credentials, SshCredentials):
        env = {}
        if credentials.key_path is not None:
            key = shlex.quote(str(credentials.key_path))
            env["GIT_SSH_COMMAND"] = f"ssh -i {key} -o IdentitiesOnly=yes"
        yield env
    elif isinstance(credentials, HttpsCredentials):
        with tempfile.TemporaryDirectory(prefix="pushwise-") as tmp:
            askpass = Path(tmp) / "askpass.sh"
            askpass.write_text(ASKPASS_SCRIPT, encoding="utf-8")
            askpass.chmod(stat.S_IRWXU)
            yield {
                "GIT_ASKPASS": str(askpass),
                "GIT_TERMINAL_PROMPT": "0",
                ASKPASS_USERNAME_VAR: credentials.username or "",
                ASKPASS_PASSWORD_VAR: credentials.password or "",
            }
    else:
        yield {}


def classify_push_error(message: str, protocol: Protocol) -> PushErrorKind:
    """Classify a push failure from the error text git produced.

    Args:
        message: Error output of the failed push
        protocol: Protocol of the remote that was pushed to

    Returns:
        The matching PushErrorKind; SSH categories only apply to ssh remotes.

    Examples:
        >>> classify_push_error("fatal: cannot run ssh: No such file or directory", "ssh")
        <PushErrorKind.SSH_UNSUPPORTED: 'ssh_unsupported'>
        >>> classify_push_error("! [rejected] main -> main (non-fast-forward)", "https")
        <PushErrorKind.NON_FAST_FORWARD: 'non_fast_forward'>
    """
    lowered = message.lower()

    if protocol == "ssh":
        if any(pattern in lowered for pattern in SSH_UNSUPPORTED_PATTERNS):
            return PushErrorKind.SSH_UNSUPPORTED
        if any(pattern in lowered for pattern in SSH_AUTH_PATTERNS):
            return PushErrorKind.SSH_AUTH_PASSPHRASE

    if any(pattern in lowered for pattern in NON_FAST_FORWARD_PATTERNS):
        return PushErrorKind.NON_FAST_FORWARD

    return PushErrorKind.UNKNOWN


def push_failure_reason(kind: PushErrorKind, message: str) -> str:
    """Actionable explanation for a classified push failure."""

    if kind is PushErrorKind.SSH_UNSUPPORTED:
        return (
            "Unable to use your SSH keys because your computer does not have the "
            "required SSH software installed. For a quick fix, run `git push` in "
            "a terminal instead. To push with pushwise, install an SSH client "
            "(e.g. OpenSSH) and make sure `ssh` is on your PATH."
        )
    if kind is PushErrorKind.SSH_AUTH_PASSPHRASE:
        return (
            "Unable to authenticate with your SSH keys. If your key has a "
            "passphrase, start ssh-agent and add your key with `ssh-add`. "
            "Alternatively, run `git push` in a terminal instead."
        )
    if kind is PushErrorKind.NON_FAST_FORWARD:
        return (
            "Unable to push because the remote repository contains changes that "
            "are not present in your local repository. Run `git pull` first to "
            "pull down these changes to your local computer."
        )
    details = "\n".join(f"    {line}" for line in message.strip().splitlines()) or "    (no output)"
    return (
        "Push failed for unknown reason.\n\n"
        "The error message from git push was:\n\n"
        f"{details}\n\n"
        "These sorts of errors are difficult to troubleshoot. If you have Git "
        "installed on your machine, the easiest solution is to instead run "
        "`git push` in a terminal."
    )


def push_ref(
    repo: Repo,
    target: ResolvedTarget,
    local_branch: str,
    credentials: Credentials,
    force: bool = False,
) -> GitCommandResult:
    """Push ``local_branch`` to ``target`` and raise PushError on failure.

    Hooks are not run by git here; the caller runs the pre-push hook itself.
    """

    args = ["--no-verify"]
    if force:
        args.append("-f")
    args.extend([target.remote, f"refs/heads/{local_branch}:refs/heads/{target.branch}"])
    logger.debug(f"Running git push {' '.join(args)}")

    with credential_environment(credentials) as env, repo.git.custom_environment(**env):
        try:
            status, stdout, stderr = repo.git.push(*args, with_extended_output=True)
        except GitCommandError as exc:
            message = _error_text(exc)
            kind = classify_push_error(message, credentials.protocol)
            logger.debug(f"git push failed ({kind.value}): {message}")
            raise PushError(kind, push_failure_reason(kind, message), message) from exc

    return GitCommandResult(args=tuple(args), stdout=stdout.strip(), stderr=stderr.strip(), returncode=status)


def _error_text(exc: GitCommandError) -> str:
    parts = [_as_text(exc.stderr), _as_text(exc.stdout)]
    text = "\n".join(part for part in parts if part)
    return text or str(exc)


def _as_text(value: object) -> str:
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="replace")
    text = str(value or "").strip()
    # GitPython prefixes captured streams with "stderr: '...'" / "stdout: '...'".
    for prefix in ("stderr: '", "stdout: '"):
        if text.startswith(prefix) and text.endswith("'"):
            text = text[len(prefix):-1]
    return text.strip()


__all__ = [
    "ZERO_SHA",
    "classify_push_error",
    "credential_environment",
    "current_branch",
    "get_upstream",
    "hooks_dir",
    "list_remotes",
    "open_repository",
    "push_failure_reason",
    "push_ref",
    "remote_tracking_sha",
    "set_upstream",
]
