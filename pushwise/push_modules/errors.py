"""Error taxonomy for push operations.

Every error is fatal to a single ``git_push`` invocation. Messages are wrapped
for terminal display when the exception is created so the CLI can print them
as-is.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .utils import wrap


class PushwiseError(Exception):
    """Base class for all user-facing push failures."""

    def __init__(self, message: str):
        self.raw_message = message
        super().__init__(wrap(message))


class InputValidationError(PushwiseError):
    """Raised when an argument has the wrong type or arity."""


class PathError(PushwiseError):
    """Raised when the project directory does not exist."""


class RepositoryStateError(PushwiseError):
    """Raised when the repository cannot be pushed from in its current state."""


class DetachedHeadError(RepositoryStateError):
    """Raised when HEAD does not point to a named branch."""

    def __init__(self) -> None:
        super().__init__(
            "You are not currently on any branch (detached HEAD). Checkout the "
            "branch you want to push before pushing, e.g. `git checkout main`."
        )


class RemoteNotFoundError(RepositoryStateError):
    """Raised when no remote, or not the requested remote, is configured."""


class AmbiguousRemoteError(RepositoryStateError):
    """Raised when the remote cannot be inferred from the configured remotes."""

    def __init__(self, remotes: list[str]):
        self.remotes = remotes
        super().__init__(
            "Unable to guess which remote repository to use. None of the "
            f"configured remotes ({', '.join(sorted(remotes))}) is named "
            '"origin". Please specify the remote explicitly.'
        )


class UnsupportedProtocolError(RepositoryStateError):
    """Raised when the remote URL uses a protocol that pushwise cannot push to."""

    def __init__(self, remote: str, url: str):
        self.remote = remote
        self.url = url
        super().__init__(
            f'The URL of the remote repository "{remote}" ({url}) uses an unknown '
            "protocol. Supported URLs start with https://, ssh:// or git://, use "
            "the scp-like form [user@]host:path, or point to a local repository."
        )


class AuthenticationError(PushwiseError):
    """Raised when credentials are required but cannot be obtained."""


class HookFailureError(PushwiseError):
    """Raised when the pre-push hook exits non-zero."""

    def __init__(self, hook_path: Path, output: str, returncode: int):
        self.hook_path = hook_path
        self.output = output
        self.returncode = returncode
        super().__init__(f"Execution stopped by {hook_path} (exit status {returncode})")

    def __str__(self) -> str:
        message = super().__str__()
        if self.output.strip():
            return f"{message}\n\n{self.output.rstrip()}"
        return message


class PushErrorKind(str, Enum):
    """Categories of push failures recognised from the git error text."""

    SSH_UNSUPPORTED = "ssh_unsupported"
    SSH_AUTH_PASSPHRASE = "ssh_auth_passphrase"
    NON_FAST_FORWARD = "non_fast_forward"
    UNKNOWN = "unknown"


class PushError(PushwiseError):
    """Raised when the delegated push fails.

    ``kind`` is the classified failure category and ``git_message`` the text
    reported by git.
    """

    def __init__(self, kind: PushErrorKind, reason: str, git_message: str):
        self.kind = kind
        self.git_message = git_message
        super().__init__(reason)


__all__ = [
    "AmbiguousRemoteError",
    "AuthenticationError",
    "DetachedHeadError",
    "HookFailureError",
    "InputValidationError",
    "PathError",
    "PushError",
    "PushErrorKind",
    "PushwiseError",
    "RemoteNotFoundError",
    "RepositoryStateError",
    "UnsupportedProtocolError",
]
