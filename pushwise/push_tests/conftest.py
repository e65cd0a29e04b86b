"""Shared fixtures: throwaway repositories with a local bare remote."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

import pytest


def git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` and return stripped stdout."""
    result = subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True)
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    (repo / name).write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-m", message)
    return git(repo, "rev-parse", "HEAD")


def init_repo(path: Path) -> Path:
    path.mkdir()
    git(path, "init")
    git(path, "config", "user.name", "Test User")
    git(path, "config", "user.email", "test@example.com")
    git(path, "config", "commit.gpgsign", "false")
    return path


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch):
    """Keep PUSHWISE_* settings (including dotenv-loaded ones) out of other tests."""
    for name in list(os.environ):
        if name.startswith("PUSHWISE_"):
            monkeypatch.delenv(name)
    saved = dict(os.environ)
    yield
    os.environ.clear()
    os.environ.update(saved)

    # The CLI configures the package logger with streams that die with the test.
    logger = logging.getLogger("pushwise")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True


@pytest.fixture
def remote_repo(tmp_path: Path) -> Path:
    """Bare repository used as the remote."""
    remote = tmp_path / "remote.git"
    subprocess.run(["git", "init", "--bare", str(remote)], check=True, capture_output=True)
    return remote


@pytest.fixture
def local_repo(tmp_path: Path, remote_repo: Path) -> Path:
    """Repository on branch ``main`` with one commit and ``origin`` pointing at remote_repo."""
    repo = init_repo(tmp_path / "local")
    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")
    git(repo, "branch", "-M", "main")
    git(repo, "remote", "add", "origin", str(remote_repo))
    return repo


def remote_sha(remote: Path, branch: str) -> str | None:
    """Sha of ``branch`` in the bare remote, or None if it does not exist."""
    result = subprocess.run(
        ["git", "rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"],
        cwd=remote,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip() if result.returncode == 0 else None


def upstream_of(repo: Path, branch: str = "main") -> str | None:
    result = subprocess.run(
        ["git", "rev-parse", "--abbrev-ref", f"{branch}@{{upstream}}"],
        cwd=repo,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip() if result.returncode == 0 else None


def install_hook(repo: Path, body: str) -> Path:
    hook = repo / ".git" / "hooks" / "pre-push"
    hook.parent.mkdir(parents=True, exist_ok=True)
    hook.write_text("#!/bin/sh\n" + body)
    hook.chmod(0o755)
    return hook
