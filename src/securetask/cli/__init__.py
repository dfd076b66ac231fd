"""
securetask CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import typer
from rich.console import Console

from securetask import __version__
from securetask.cli import account, dashboard, tasks
from securetask.cli.common import get_config, get_credentials, setup_logging
from securetask.core.config import get_project_config_path, get_user_config_path
from securetask.core.config.env import load_layered_env

# Help panel names for command grouping
PANEL_TASKS = "Work with Tasks"
PANEL_ACCOUNT = "Your Account"
PANEL_INSTALL = "Setup"

app = typer.Typer(
    name="securetask",
    help="Terminal client for the SecureTask task service",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    SecureTask - manage your tasks from the terminal.

    Quick Start:
        1. securetask login --email you@example.com
        2. securetask tasks add "Buy milk"
        3. securetask tasks list

    Configuration:
        SECURETASK_API_URL      API root (default http://localhost:5000/api)
        SECURETASK_TOKEN        Use this token instead of the stored login
        .securetask.json        Project config
        ~/.config/securetask/   User config, .env and login token
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    setup_logging(debug)

    ctx.obj = {"debug": debug}


# =============================================================================
# Work with Tasks
# =============================================================================

app.add_typer(tasks.app, name="tasks", rich_help_panel=PANEL_TASKS)
app.command(name="dashboard", rich_help_panel=PANEL_TASKS)(dashboard.dashboard)


# =============================================================================
# Your Account
# =============================================================================

app.command(name="login", rich_help_panel=PANEL_ACCOUNT)(account.login)
app.command(name="register", rich_help_panel=PANEL_ACCOUNT)(account.register)
app.command(name="logout", rich_help_panel=PANEL_ACCOUNT)(account.logout)
app.add_typer(account.profile_app, name="profile", rich_help_panel=PANEL_ACCOUNT)


# =============================================================================
# Setup
# =============================================================================


@app.command(name="config", rich_help_panel=PANEL_INSTALL)
def show_config() -> None:
    """Show the resolved configuration and where it was read from."""
    config = get_config()
    token = get_credentials(config).get_token()

    console.print(f"[dim]API URL:[/dim]        {config.api_url}")
    console.print(f"[dim]Timeout:[/dim]        {config.timeout:g}s")
    console.print(f"[dim]Token file:[/dim]     {config.token_file}")
    if token:
        source = "SECURETASK_TOKEN / config" if config.token else "token file"
        console.print(f"[dim]Authenticated:[/dim]  yes ({source}, …{token[-4:]})")
    else:
        console.print("[dim]Authenticated:[/dim]  no")
    console.print(f"[dim]User config:[/dim]    {get_user_config_path()}")
    console.print(f"[dim]Project config:[/dim] {get_project_config_path()}")


@app.command(rich_help_panel=PANEL_INSTALL)
def version() -> None:
    """Show securetask version and exit."""
    console.print(f"securetask version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
