"""Infer the remote and branch to push to.

The remote is chosen by an ordered chain of lookups; the first one that
returns a match wins:

1. the upstream of the current branch, when neither remote nor branch is given
2. the remote given by the caller
3. the only configured remote
4. the remote named ``origin``

If no lookup matches, the remote is ambiguous and the push fails.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from .data_types import ResolvedTarget, TrackingInfo
from .errors import AmbiguousRemoteError, RemoteNotFoundError
from .utils import wrap

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


class BranchMismatchWarning(UserWarning):
    """The remote branch name differs from the local branch name."""


@dataclass(frozen=True)
class ResolutionContext:
    remote: Optional[str]
    branch: Optional[str]
    local_branch: str
    tracking: Optional[TrackingInfo]
    remotes: Mapping[str, str]


Lookup = Callable[[ResolutionContext], Optional[ResolvedTarget]]


def _branch_or_local(ctx: ResolutionContext) -> str:
    return ctx.local_branch if ctx.branch is None else ctx.branch


def from_tracking(ctx: ResolutionContext) -> Optional[ResolvedTarget]:
    if ctx.remote is None and ctx.branch is None and ctx.tracking is not None:
        return ResolvedTarget(remote=ctx.tracking.remote, branch=ctx.tracking.branch)
    return None


def from_explicit_remote(ctx: ResolutionContext) -> Optional[ResolvedTarget]:
    if ctx.remote is None:
        return None
    return ResolvedTarget(remote=ctx.remote, branch=_branch_or_local(ctx))


def from_sole_remote(ctx: ResolutionContext) -> Optional[ResolvedTarget]:
    if len(ctx.remotes) != 1:
        return None
    (only,) = ctx.remotes
    return ResolvedTarget(remote=only, branch=_branch_or_local(ctx))


def from_origin(ctx: ResolutionContext) -> Optional[ResolvedTarget]:
    if DEFAULT_REMOTE not in ctx.remotes:
        return None
    return ResolvedTarget(remote=DEFAULT_REMOTE, branch=_branch_or_local(ctx))


LOOKUPS: tuple[Lookup, ...] = (
    from_tracking,
    from_explicit_remote,
    from_sole_remote,
    from_origin,
)


def check_remote(remote: Optional[str], remotes: Mapping[str, str]) -> None:
    """Fail early when no remote exists or the requested one is missing."""

    if not remotes:
        raise RemoteNotFoundError(
            "No remote repositories are available. Add one with "
            "`git remote add origin <url>` before pushing."
        )
    if remote is not None and remote not in remotes:
        raise RemoteNotFoundError(
            f'The remote you specified, "{remote}", is not one of the remotes '
            f"available ({', '.join(sorted(remotes))}). Add it with "
            f"`git remote add {remote} <url>`."
        )


def resolve_target(
    remote: Optional[str],
    branch: Optional[str],
    local_branch: str,
    tracking: Optional[TrackingInfo],
    remotes: Mapping[str, str],
) -> ResolvedTarget:
    """Return the (remote, branch) pair to push to."""

    check_remote(remote, remotes)
    ctx = ResolutionContext(
        remote=remote,
        branch=branch,
        local_branch=local_branch,
        tracking=tracking,
        remotes=remotes,
    )
    for lookup in LOOKUPS:
        target = lookup(ctx)
        if target is not None:
            if target.remote not in remotes:
                raise RemoteNotFoundError(
                    f'The current branch tracks the remote "{target.remote}", which '
                    "is not configured. Specify the remote to push to explicitly."
                )
            logger.debug(f"Resolved push target {target.remote}/{target.branch} via {lookup.__name__}")
            return target
    raise AmbiguousRemoteError(list(remotes))


def warn_branch_mismatch(remote_branch: str, local_branch: str) -> None:
    """Warn when pushing a local branch to a differently named remote branch."""

    if remote_branch == local_branch:
        return
    message = wrap(
        f'The remote branch is "{remote_branch}", but the current local branch '
        f'is "{local_branch}". This is unusual, but not necessarily an error. '
        f'Your local branch "{local_branch}" will be pushed to the remote branch '
        f'"{remote_branch}".'
    )
    logger.warning(message)
    warnings.warn(message, BranchMismatchWarning, stacklevel=2)


__all__ = [
    "BranchMismatchWarning",
    "DEFAULT_REMOTE",
    "LOOKUPS",
    "ResolutionContext",
    "check_remote",
    "resolve_target",
    "warn_branch_mismatch",
]
