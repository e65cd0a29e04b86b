"""Data models for push requests, resolved targets, credentials and results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

Protocol = Literal["https", "ssh", "file", "git"]


class PushRequest(BaseModel):
    """Arguments of a single push invocation, checked strictly."""

    model_config = ConfigDict(strict=True, frozen=True)

    remote: Optional[str] = Field(default=None, min_length=1)
    branch: Optional[str] = Field(default=None, min_length=1)
    username: Optional[str] = None
    password: Optional[str] = None
    force: bool = False
    set_upstream: bool = True
    dry_run: bool = False
    project: Union[str, Path] = "."


# Message used when the named argument fails validation.
ARGUMENT_RULES = {
    "remote": "remote must be None or a single non-empty string",
    "branch": "branch must be None or a single non-empty string",
    "username": "username must be None or a single string",
    "password": "password must be None or a single string",
    "force": "force must be a single boolean",
    "set_upstream": "set_upstream must be a single boolean",
    "dry_run": "dry_run must be a single boolean",
    "project": "project must be a single string or path",
}


@dataclass(frozen=True)
class TrackingInfo:
    """Upstream configured for a local branch."""

    remote: str
    branch: str


@dataclass(frozen=True)
class ResolvedTarget:
    """Remote and remote branch a push is sent to."""

    remote: str
    branch: str


@dataclass(frozen=True)
class HttpsCredentials:
    username: Optional[str]
    password: Optional[str]
    protocol: Literal["https"] = "https"

    def __repr__(self) -> str:
        masked = "***" if self.password else None
        return f"HttpsCredentials(username={self.username!r}, password={masked!r})"


@dataclass(frozen=True)
class SshCredentials:
    key_path: Optional[Path] = None
    protocol: Literal["ssh"] = "ssh"


@dataclass(frozen=True)
class LocalCredentials:
    protocol: Literal["file"] = "file"


@dataclass(frozen=True)
class AnonymousCredentials:
    """git:// daemon remotes, which do not authenticate."""

    protocol: Literal["git"] = "git"


Credentials = Union[HttpsCredentials, SshCredentials, LocalCredentials, AnonymousCredentials]


@dataclass(frozen=True)
class GitCommandResult:
    """Typed container for git command output."""

    args: Sequence[str]
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class HookResult:
    """Outcome of running a pre-push hook."""

    path: Path
    output: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class PushResult:
    """What was (or would have been) pushed; used for display only."""

    remote: str
    branch: str
    username: Optional[str]
    force: bool
    dry_run: bool

    def __str__(self) -> str:
        from .reporting import render_summary

        return render_summary(self)


__all__ = [
    "ARGUMENT_RULES",
    "AnonymousCredentials",
    "Credentials",
    "GitCommandResult",
    "HookResult",
    "HttpsCredentials",
    "LocalCredentials",
    "Protocol",
    "PushRequest",
    "PushResult",
    "ResolvedTarget",
    "SshCredentials",
    "TrackingInfo",
]
