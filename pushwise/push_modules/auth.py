"""Credential resolution for pushing to a remote.

The protocol is derived from the remote URL and returned as an explicit tag on
the credential object, so callers never have to inspect credential types.
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Mapping, Optional

import click

from .data_types import (
    AnonymousCredentials,
    Credentials,
    HttpsCredentials,
    LocalCredentials,
    Protocol,
    SshCredentials,
)
from .errors import AuthenticationError, UnsupportedProtocolError
from .utils import PushSettings

logger = logging.getLogger(__name__)

# [user@]host:path, as used by scp-style ssh URLs (git@github.com:user/repo.git
# or a host alias from ~/.ssh/config). The host needs two characters so a
# Windows drive letter never matches.
SCP_LIKE_URL = re.compile(r"^(?:[\w.+-]+@)?[^/:]{2,}:")
WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:[\\/]")


def get_remote_protocol(url: str, root: Optional[Path] = None) -> Optional[Protocol]:
    """Return the protocol of a remote URL, or None if it is not supported.

    Relative local paths are looked up under ``root`` (the repository
    working tree), which is where git resolves them.

    Examples:
        >>> get_remote_protocol("https://github.com/user/repo.git")
        'https'
        >>> get_remote_protocol("git@github.com:user/repo.git")
        'ssh'
        >>> get_remote_protocol("myalias:user/repo.git")
        'ssh'
        >>> get_remote_protocol("git://example.com/repo.git")
        'git'
        >>> get_remote_protocol("/srv/git/repo.git")
        'file'
    """
    lowered = url.lower()
    if lowered.startswith(("https://", "http://")):
        return "https"
    if lowered.startswith(("ssh://", "git+ssh://", "ssh+git://")):
        return "ssh"
    if lowered.startswith("git://"):
        return "git"
    if lowered.startswith("file://"):
        return "file"
    if "://" in url:
        return None
    if WINDOWS_DRIVE.match(url):
        return "file"
    if SCP_LIKE_URL.match(url):
        return "ssh"
    if url.startswith((".", "/", "~")):
        return "file"

    path = Path(url).expanduser()
    if not path.is_absolute() and root is not None:
        path = Path(root) / path
    return "file" if path.exists() else None


def _is_interactive() -> bool:
    return sys.stdin is not None and sys.stdin.isatty()


def _prompt_username() -> str:
    return click.prompt("Please enter your username (e.g. GitHub account)", type=str)


def _prompt_password() -> str:
    return click.prompt("Please enter your password", hide_input=True, type=str)


def authenticate(
    remote: str,
    remotes: Mapping[str, str],
    username: Optional[str] = None,
    password: Optional[str] = None,
    dry_run: bool = False,
    root: Optional[Path] = None,
) -> Credentials:
    """Return the credentials for pushing to ``remote``.

    Args:
        remote: Name of the resolved remote
        remotes: Configured remotes mapped to their URLs
        username: Username for https remotes; falls back to PUSHWISE_USERNAME,
            then an interactive prompt
        password: Password or token for https remotes; falls back to
            PUSHWISE_PASSWORD, then a hidden prompt
        dry_run: Skip prompting, nothing will be sent over the network
        root: Working tree of the repository, for relative remote paths

    Returns:
        HttpsCredentials, SshCredentials, LocalCredentials or
        AnonymousCredentials, tagged with the protocol of the remote URL.
    """
    url = remotes[remote]
    protocol = get_remote_protocol(url, root)
    if protocol is None:
        raise UnsupportedProtocolError(remote, url)

    settings = PushSettings.from_env()
    logger.debug(f"Remote '{remote}' uses the {protocol} protocol")

    if protocol == "ssh":
        key_path = Path(settings.ssh_key).expanduser() if settings.ssh_key else None
        return SshCredentials(key_path=key_path)
    if protocol == "file":
        return LocalCredentials()
    if protocol == "git":
        return AnonymousCredentials()

    username = username or settings.username
    password = password or settings.password
    if dry_run:
        return HttpsCredentials(username=username, password=password)

    if username is None:
        if not _is_interactive():
            raise AuthenticationError(
                "No username was specified and pushwise is not running "
                "interactively. Pass a username, or set PUSHWISE_USERNAME."
            )
        username = _prompt_username()
    if password is None:
        if not _is_interactive():
            raise AuthenticationError(
                "No password was specified and pushwise is not running "
                "interactively. Pass a password (or personal access token), or "
                "set PUSHWISE_PASSWORD."
            )
        password = _prompt_password()

    return HttpsCredentials(username=username, password=password)


__all__ = ["authenticate", "get_remote_protocol"]
