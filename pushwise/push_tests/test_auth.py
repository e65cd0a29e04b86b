"""Tests for protocol detection and credential resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from pushwise.push_modules import auth
from pushwise.push_modules.data_types import AnonymousCredentials, HttpsCredentials, LocalCredentials, SshCredentials
from pushwise.push_modules.errors import AuthenticationError, UnsupportedProtocolError

HTTPS = {"origin": "https://github.com/user/repo.git"}
SSH = {"origin": "git@github.com:user/repo.git"}


@pytest.mark.parametrize(
    "url, protocol",
    [
        ("https://github.com/user/repo.git", "https"),
        ("http://git.internal/repo.git", "https"),
        ("git@github.com:user/repo.git", "ssh"),
        ("ssh://git@gitlab.com/user/repo.git", "ssh"),
        ("deploy@host.example.com:repos/app.git", "ssh"),
        ("myalias:user/repo.git", "ssh"),
        ("github.com:user/repo.git", "ssh"),
        ("git://example.com/repo.git", "git"),
        ("./odd:name.git", "file"),
        ("file:///srv/git/repo.git", "file"),
        ("/srv/git/repo.git", "file"),
        ("../sibling.git", "file"),
        ("C:\\repos\\app.git", "file"),
        ("ftp://example.com/repo.git", None),
        ("svn+weird://example.com/repo", None),
    ],
)
def test_get_remote_protocol(url: str, protocol):
    assert auth.get_remote_protocol(url) == protocol


def test_unknown_protocol_is_rejected():
    with pytest.raises(UnsupportedProtocolError, match="unknown"):
        auth.authenticate("origin", {"origin": "ftp://example.com/repo.git"})


def test_ssh_remote_returns_ssh_credentials():
    credentials = auth.authenticate("origin", SSH)
    assert credentials == SshCredentials(key_path=None)
    assert credentials.protocol == "ssh"


def test_ssh_key_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    key = tmp_path / "id_ed25519"
    monkeypatch.setenv("PUSHWISE_SSH_KEY", str(key))

    credentials = auth.authenticate("origin", SSH)

    assert credentials.key_path == key


def test_local_remote_needs_no_credentials(tmp_path: Path):
    credentials = auth.authenticate("origin", {"origin": str(tmp_path)})
    assert credentials == LocalCredentials()
    assert credentials.protocol == "file"


def test_https_dry_run_never_prompts(monkeypatch: pytest.MonkeyPatch):
    def fail_prompt():
        raise AssertionError("must not prompt during a dry run")

    monkeypatch.setattr(auth, "_prompt_username", fail_prompt)
    monkeypatch.setattr(auth, "_prompt_password", fail_prompt)

    credentials = auth.authenticate("origin", HTTPS, dry_run=True)

    assert credentials == HttpsCredentials(username=None, password=None)
    assert credentials.protocol == "https"


def test_https_uses_given_credentials(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(auth, "_is_interactive", lambda: False)

    credentials = auth.authenticate("origin", HTTPS, username="me", password="secret")

    assert credentials == HttpsCredentials(username="me", password="secret")


def test_https_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(auth, "_is_interactive", lambda: False)
    monkeypatch.setenv("PUSHWISE_USERNAME", "env-user")
    monkeypatch.setenv("PUSHWISE_PASSWORD", "env-token")

    credentials = auth.authenticate("origin", HTTPS)

    assert credentials == HttpsCredentials(username="env-user", password="env-token")


def test_https_prompts_when_interactive(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(auth, "_is_interactive", lambda: True)
    monkeypatch.setattr(auth, "_prompt_username", lambda: "typed-user")
    monkeypatch.setattr(auth, "_prompt_password", lambda: "typed-pass")

    credentials = auth.authenticate("origin", HTTPS)

    assert credentials == HttpsCredentials(username="typed-user", password="typed-pass")


def test_https_without_username_fails_when_not_interactive(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(auth, "_is_interactive", lambda: False)

    with pytest.raises(AuthenticationError, match="username"):
        auth.authenticate("origin", HTTPS, password="secret")


def test_https_without_password_fails_when_not_interactive(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(auth, "_is_interactive", lambda: False)

    with pytest.raises(AuthenticationError, match="password"):
        auth.authenticate("origin", HTTPS, username="me")


def test_password_is_masked_in_repr():
    assert "secret" not in repr(HttpsCredentials(username="me", password="secret"))


def test_relative_path_is_resolved_against_repository_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / "project" / "mirror.git").mkdir(parents=True)
    monkeypatch.chdir(tmp_path)

    assert auth.get_remote_protocol("mirror.git") is None
    assert auth.get_remote_protocol("mirror.git", tmp_path / "project") == "file"

    credentials = auth.authenticate("origin", {"origin": "mirror.git"}, root=tmp_path / "project")
    assert credentials == LocalCredentials()


def test_git_daemon_remote_needs_no_credentials(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(auth, "_is_interactive", lambda: False)

    credentials = auth.authenticate("origin", {"origin": "git://example.com/repo.git"})

    assert credentials == AnonymousCredentials()
    assert credentials.protocol == "git"
