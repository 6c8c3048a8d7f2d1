"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from taskflow.config import get_config_manager
from taskflow.exceptions import TaskflowError, TaskValidationError
from taskflow.services.auth_service import AuthService
from taskflow.ui.formatters import format_error, format_form_errors
from taskflow.utils.exit_codes import ERROR_AUTH_FAILURE, exit_code_for
from taskflow.utils.logger import get_logger


def _require_auth() -> None:
    """Require a signed-in session when tasks live in the record service.

    The local backend needs no session.
    """
    if not get_config_manager().is_remote:
        return

    if not AuthService.is_authenticated():
        format_error("Not logged in. Use 'taskflow auth login' to authenticate.")
        raise typer.Exit(ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                # 1. Route guard
                if auth_required:
                    _require_auth()

                # 2. Run Sync or Async
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except AppError as e:
                _log_failure(logger, cmd, start, e)
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e

            except TaskValidationError as e:
                _log_failure(logger, cmd, start, e)
                format_form_errors(e.errors)
                raise typer.Exit(code=exit_code_for(e)) from e

            except TaskflowError as e:
                _log_failure(logger, cmd, start, e)
                format_error(str(e))
                raise typer.Exit(code=exit_code_for(e)) from e

            except (typer.Exit, typer.Abort, typer.BadParameter):
                # Re-raise Typer's own exits and usage errors
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                # Generic fallback for unexpected crashes
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=1) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)


def _log_failure(logger, cmd: str, start: float, error: Exception) -> None:
    logger.error(
        "command failed: %s (%.3fs) - %s",
        cmd,
        time.monotonic() - start,
        str(error),
    )
