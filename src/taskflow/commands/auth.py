"""Authentication commands."""

import typer

from taskflow.config import get_config_manager
from taskflow.models import Authenticated, Failed
from taskflow.services.auth_service import AuthService
from taskflow.services.bootstrap import open_auth_service
from taskflow.ui.formatters import format_info, format_output, format_success
from taskflow.utils.exit_codes import ERROR_AUTH_FAILURE
from taskflow.utils.typer_helpers import SuggestingGroup

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")


async def _authenticate(view, email: str, password: str, first_name: str | None = None) -> None:
    async with open_auth_service() as auth:
        result = await auth.authenticate(view, email, password, first_name)

    if isinstance(result, Failed):
        raise AppError(f"Authentication failed: {result.reason}", ERROR_AUTH_FAILURE)
    if isinstance(result, Authenticated):
        format_success(f"Signed in as {result.user.display_name}")
        if not get_config_manager().is_remote:
            format_info(
                "Tasks are stored locally. Run 'taskflow config set backend.type remote' "
                "to use the record service."
            )


@app.command()
@command_wrapper(auth_required=False)
async def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, help="Account password"
    ),
) -> None:
    """Sign in to the record service."""
    await _authenticate("login", email, password)


@app.command()
@command_wrapper(auth_required=False)
async def signup(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Account password",
    ),
    first_name: str | None = typer.Option(None, "--first-name", help="Your first name"),
) -> None:
    """Create a record service account and sign in."""
    await _authenticate("signup", email, password, first_name)


@app.command()
@command_wrapper(auth_required=False)
def logout() -> None:
    """Forget the stored session."""
    AuthService(get_config_manager()).logout()
    format_success("Logged out")


@app.command()
@command_wrapper(auth_required=False)
def whoami(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show the signed-in user."""
    user = AuthService(get_config_manager()).current_user()
    if user is None:
        raise AppError("Not logged in", ERROR_AUTH_FAILURE)
    format_output(user.model_dump(by_alias=True), output)
