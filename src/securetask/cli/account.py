"""
securetask CLI - Account commands.

login / register store the returned token in the token file; logout
removes it. ``profile`` shows or changes the current user's profile.
"""

from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console

from securetask.cli.common import api_session, get_config, get_token_store, run_async
from securetask.cli.errors import ExitCode, print_error, print_remote_error
from securetask.core.api.exceptions import RemoteError
from securetask.core.users.gateway import AccountGateway
from securetask.core.users.models import (
    AuthResult,
    Credentials,
    ProfileUpdate,
    Registration,
    User,
)

console = Console()
profile_app = typer.Typer(help="Show or update your profile")


def _invalid_input(e: ValidationError) -> NoReturn:
    fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
    print_error("Invalid input", reason=f"Check: {fields}" if fields else str(e))
    raise typer.Exit(ExitCode.USER_ERROR)


def _store_token(result: AuthResult) -> None:
    store = get_token_store(get_config())
    store.save_token(result.token)


def _print_user(user: User) -> None:
    console.print(f"[dim]Name:[/dim]    {user.name}")
    console.print(f"[dim]Email:[/dim]   {user.email}")
    console.print(f"[dim]User ID:[/dim] {user.id}")


def login(
    email: str = typer.Option(..., "--email", "-e", help="Account email"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Account password"
    ),
) -> None:
    """
    Log in and remember the token for later commands.

    Examples:
        securetask login --email you@example.com
    """
    try:
        credentials = Credentials(email=email, password=password)
    except ValidationError as e:
        _invalid_input(e)

    async def _login() -> AuthResult:
        async with api_session() as api:
            return await AccountGateway(api).login(credentials)

    try:
        result = run_async(_login())
    except RemoteError as e:
        if e.is_client_error:
            # 401 here means wrong email or password, not a missing token
            print_error("Login failed", reason=str(e))
        else:
            print_remote_error(e, "Login failed")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _store_token(result)
    who = result.user.name if result.user and result.user.name else email
    console.print(f"[green]Logged in as[/green] {who}")


def register(
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    email: str = typer.Option(..., "--email", "-e", help="Account email"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Account password",
    ),
) -> None:
    """
    Create an account and log in with it.

    Examples:
        securetask register --name Ada --email ada@example.com
    """
    try:
        registration = Registration(name=name, email=email, password=password)
    except ValidationError as e:
        _invalid_input(e)

    async def _register() -> AuthResult:
        async with api_session() as api:
            return await AccountGateway(api).register(registration)

    try:
        result = run_async(_register())
    except RemoteError as e:
        print_remote_error(e, "Registration failed")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _store_token(result)
    console.print(f"[green]Registered and logged in as[/green] {name}")


def logout() -> None:
    """Forget the stored login token."""
    store = get_token_store(get_config())
    if store.clear():
        console.print("[green]Logged out[/green]")
    else:
        console.print("[dim]Not logged in[/dim]")


@profile_app.command()
def show() -> None:
    """Show your profile."""

    async def _show() -> User:
        async with api_session() as api:
            return await AccountGateway(api).get_profile()

    try:
        user = run_async(_show())
    except RemoteError as e:
        print_remote_error(e, "Failed to load profile")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _print_user(user)


@profile_app.command()
def update(
    name: str | None = typer.Option(None, "--name", "-n", help="New display name"),
    email: str | None = typer.Option(None, "--email", "-e", help="New email"),
    change_password: bool = typer.Option(
        False, "--password", help="Prompt for a new password"
    ),
) -> None:
    """
    Change your name, email, or password.

    Examples:
        securetask profile update --name "Ada L."
        securetask profile update --password
    """
    password = None
    if change_password:
        password = typer.prompt("New password", hide_input=True, confirmation_prompt=True)

    if name is None and email is None and password is None:
        print_error(
            "Nothing to update",
            solution="securetask profile update --name NAME  # or --email / --password",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    try:
        changes = ProfileUpdate(name=name, email=email, password=password)
    except ValidationError as e:
        _invalid_input(e)

    async def _update() -> User:
        async with api_session() as api:
            return await AccountGateway(api).update_profile(changes)

    try:
        user = run_async(_update())
    except RemoteError as e:
        print_remote_error(e, "Failed to update profile")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    console.print("[green]Profile updated successfully[/green]")
    _print_user(user)
