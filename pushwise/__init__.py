"""pushwise: push local commits to a remote Git repository with sensible defaults."""

from .push import git_push
from .push_modules.data_types import PushResult
from .push_modules.errors import (
    AmbiguousRemoteError,
    AuthenticationError,
    DetachedHeadError,
    HookFailureError,
    InputValidationError,
    PathError,
    PushError,
    PushErrorKind,
    PushwiseError,
    RemoteNotFoundError,
    RepositoryStateError,
    UnsupportedProtocolError,
)
from .push_modules.reporting import print_summary, render_summary
from .push_modules.resolution import BranchMismatchWarning

__version__ = "0.1.0"

__all__ = [
    "AmbiguousRemoteError",
    "AuthenticationError",
    "BranchMismatchWarning",
    "DetachedHeadError",
    "HookFailureError",
    "InputValidationError",
    "PathError",
    "PushError",
    "PushErrorKind",
    "PushResult",
    "PushwiseError",
    "RemoteNotFoundError",
    "RepositoryStateError",
    "UnsupportedProtocolError",
    "git_push",
    "print_summary",
    "render_summary",
]
