"""Exit code constants for the pushwise command.

Exit Code Ranges:
    0: Success
    1-9: Blockers (invalid arguments, missing paths or credentials)
    10-19: Validation failures (pre-push hook rejected the push)
    20-29: Execution failures (unexpected errors)
    30-39: Resource failures (git push and repository errors)
"""

from __future__ import annotations

from .errors import (
    AuthenticationError,
    HookFailureError,
    InputValidationError,
    PathError,
    PushError,
    RepositoryStateError,
)

# Success
EXIT_SUCCESS = 0

# Blockers (1-9): Missing preconditions that prevent execution
EXIT_BLOCKER_INVALID_ARGS = 5  # Invalid arguments
EXIT_BLOCKER_MISSING_PATH = 6  # Project directory does not exist
EXIT_BLOCKER_MISSING_CREDENTIALS = 8  # Credentials could not be obtained

# Validation Failures (10-19)
EXIT_VALIDATION_HOOK_FAILED = 10  # Pre-push hook exited non-zero

# Execution Failures (20-29)
EXIT_EXEC_UNEXPECTED_ERROR = 23  # Unexpected runtime error

# Resource Failures (30-39): Git and repository errors
EXIT_RESOURCE_GIT_ERROR = 30  # git push failed
EXIT_RESOURCE_REPO_ERROR = 33  # Repository state prevents pushing

# Interrupted by the user (128 + SIGINT)
EXIT_INTERRUPTED = 130

_EXIT_CODES_BY_ERROR = (
    (InputValidationError, EXIT_BLOCKER_INVALID_ARGS),
    (PathError, EXIT_BLOCKER_MISSING_PATH),
    (AuthenticationError, EXIT_BLOCKER_MISSING_CREDENTIALS),
    (HookFailureError, EXIT_VALIDATION_HOOK_FAILED),
    (PushError, EXIT_RESOURCE_GIT_ERROR),
    (RepositoryStateError, EXIT_RESOURCE_REPO_ERROR),
)


def exit_code_for(error: BaseException) -> int:
    """Map an exception raised by git_push to an exit code.

    Examples:
        >>> exit_code_for(PathError("missing"))
        6
        >>> exit_code_for(RuntimeError("boom"))
        23
    """
    if isinstance(error, KeyboardInterrupt):
        return EXIT_INTERRUPTED
    for error_type, code in _EXIT_CODES_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return EXIT_EXEC_UNEXPECTED_ERROR


def get_exit_code_description(code: int) -> str:
    """Get human-readable description for an exit code.

    Examples:
        >>> get_exit_code_description(EXIT_VALIDATION_HOOK_FAILED)
        'Validation Failure: Pre-push hook rejected the push'
        >>> get_exit_code_description(99)
        'Unknown exit code: 99'
    """
    descriptions = {
        EXIT_SUCCESS: "Success",
        EXIT_BLOCKER_INVALID_ARGS: "Blocker: Invalid arguments",
        EXIT_BLOCKER_MISSING_PATH: "Blocker: Project directory does not exist",
        EXIT_BLOCKER_MISSING_CREDENTIALS: "Blocker: Credentials could not be obtained",
        EXIT_VALIDATION_HOOK_FAILED: "Validation Failure: Pre-push hook rejected the push",
        EXIT_EXEC_UNEXPECTED_ERROR: "Execution Failure: Unexpected runtime error",
        EXIT_RESOURCE_GIT_ERROR: "Resource Failure: git push failed",
        EXIT_RESOURCE_REPO_ERROR: "Resource Failure: Repository state prevents pushing",
        EXIT_INTERRUPTED: "Interrupted",
    }
    return descriptions.get(code, f"Unknown exit code: {code}")


__all__ = [
    "EXIT_BLOCKER_INVALID_ARGS",
    "EXIT_BLOCKER_MISSING_CREDENTIALS",
    "EXIT_BLOCKER_MISSING_PATH",
    "EXIT_EXEC_UNEXPECTED_ERROR",
    "EXIT_INTERRUPTED",
    "EXIT_RESOURCE_GIT_ERROR",
    "EXIT_RESOURCE_REPO_ERROR",
    "EXIT_SUCCESS",
    "EXIT_VALIDATION_HOOK_FAILED",
    "exit_code_for",
    "get_exit_code_description",
]
