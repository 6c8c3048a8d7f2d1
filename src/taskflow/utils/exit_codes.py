"""
Exit codes for the TaskFlow CLI.

Semantic exit codes so scripts can tell a rejected form apart from a
network failure.
"""

from taskflow.exceptions import (
    RecordServiceError,
    TaskNotFoundError,
    TaskValidationError,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Authentication failure (not logged in, invalid credentials, etc.)
ERROR_AUTH_FAILURE = 3

# Network or record service error (server unreachable, timeout, etc.)
ERROR_NETWORK = 4

# Task not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for(error: Exception) -> int:
    """Map a TaskFlow exception to the exit code the CLI should return."""
    if isinstance(error, TaskValidationError):
        return ERROR_INVALID_ARGS
    if isinstance(error, TaskNotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, RecordServiceError):
        return ERROR_AUTH_FAILURE if error.is_auth_error else ERROR_NETWORK
    return ERROR_GENERAL
