"""Human-readable summaries of push results."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from rich.console import Console

from .utils import wrap

if TYPE_CHECKING:
    from .data_types import PushResult


def git_command(result: "PushResult") -> str:
    """Command-line equivalent of the push, e.g. ``git push -f origin main``."""

    parts = ["git", "push"]
    if result.force:
        parts.append("-f")
    parts.extend([result.remote, result.branch])
    return " ".join(parts)


def render_summary(result: "PushResult") -> str:
    target = wrap(f'Pushing to the branch "{result.branch}" of the remote repository "{result.remote}"')
    tense = "would be run" if result.dry_run else "was run"
    return (
        "Summary from git_push\n\n"
        f"{target}\n\n"
        f"The following Git command {tense}:\n\n"
        f"  $ {git_command(result)}\n"
    )


def print_summary(result: "PushResult", console: Optional[Console] = None) -> "PushResult":
    """Print the summary of ``result`` and return it unchanged."""

    console = console or Console()
    console.print(render_summary(result), markup=False, highlight=False, soft_wrap=True, end="")
    return result


__all__ = ["git_command", "print_summary", "render_summary"]
