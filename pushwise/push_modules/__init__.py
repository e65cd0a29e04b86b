"""Building blocks of the push pipeline."""

from . import auth, data_types, errors, exit_codes, git_ops, hooks, reporting, resolution, utils

__all__ = [
    "auth",
    "data_types",
    "errors",
    "exit_codes",
    "git_ops",
    "hooks",
    "reporting",
    "resolution",
    "utils",
]
