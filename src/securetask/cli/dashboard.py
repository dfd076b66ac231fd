"""
securetask CLI - Dashboard command.

Welcome screen: who you are logged in as and how your tasks break down.
"""

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from securetask.cli.common import api_session, run_async
from securetask.cli.errors import ExitCode, print_remote_error
from securetask.core.api.exceptions import RemoteError
from securetask.core.tasks.gateway import TaskGateway
from securetask.core.tasks.models import Task, TaskStatus
from securetask.core.users.gateway import AccountGateway
from securetask.core.users.models import User

console = Console()


async def _load() -> tuple[User, list[Task]]:
    async with api_session() as api:
        user, tasks = await asyncio.gather(
            AccountGateway(api).get_profile(),
            TaskGateway(api).list(),
        )
    return user, tasks


def dashboard() -> None:
    """
    Show your profile and a summary of your tasks.

    Examples:
        securetask dashboard
    """
    try:
        user, tasks = run_async(_load())
    except RemoteError as e:
        print_remote_error(e, "Failed to load dashboard")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    pending = sum(1 for t in tasks if t.status == TaskStatus.PENDING)
    completed = sum(1 for t in tasks if t.status == TaskStatus.COMPLETED)

    details = Table.grid(padding=(0, 2))
    details.add_column(style="dim")
    details.add_column()
    details.add_row("Name", user.name)
    details.add_row("Email", user.email)
    details.add_row("User ID", user.id)
    details.add_row("", "")
    details.add_row("Pending", f"[yellow]{pending}[/yellow]")
    details.add_row("Completed", f"[green]{completed}[/green]")
    details.add_row("Total", str(len(tasks)))

    console.print(
        Panel(
            details,
            title=f"[bold]Welcome, {user.name or user.email}![/bold]",
            border_style="cyan",
            expand=False,
        )
    )
    console.print("[dim]→ securetask tasks list   # manage tasks[/dim]")
    console.print("[dim]→ securetask profile update   # edit profile[/dim]")
