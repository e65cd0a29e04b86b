"""Tests for push summaries."""

from __future__ import annotations

import io

from rich.console import Console

from pushwise import PushResult
from pushwise.push_modules.reporting import git_command, print_summary, render_summary


def make_result(**overrides) -> PushResult:
    values = {"remote": "origin", "branch": "main", "username": None, "force": False, "dry_run": False}
    values.update(overrides)
    return PushResult(**values)


def test_git_command_plain_and_forced():
    assert git_command(make_result()) == "git push origin main"
    assert git_command(make_result(force=True)) == "git push -f origin main"


def test_summary_for_real_push():
    summary = render_summary(make_result(remote="upstream", branch="release"))

    assert summary.startswith("Summary from git_push")
    assert 'Pushing to the branch "release" of the remote repository "upstream"' in summary
    assert "The following Git command was run:" in summary
    assert "  $ git push upstream release" in summary


def test_summary_for_forced_dry_run():
    summary = render_summary(make_result(force=True, dry_run=True))

    assert "The following Git command would be run:" in summary
    assert "git push -f origin main" in summary


def test_str_of_result_is_the_summary():
    result = make_result()
    assert str(result) == render_summary(result)


def test_print_summary_writes_to_console():
    buffer = io.StringIO()
    console = Console(file=buffer, width=120)
    result = make_result(branch="feat/[wip]")

    assert print_summary(result, console) is result
    output = buffer.getvalue()
    assert "  $ git push origin feat/[wip]" in output
    expected = render_summary(result)
    assert [line.rstrip() for line in output.strip().splitlines()] == [
        line.rstrip() for line in expected.strip().splitlines()
    ]
