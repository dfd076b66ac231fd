"""
securetask CLI - Task commands.

Each command drives a TaskListController the way the task screen does:
load the list, apply one user action, and render the resulting state
(messages first, then the refreshed list).
"""

import json
from collections.abc import Awaitable, Callable

import typer
from rich.console import Console
from rich.table import Table

from securetask.cli.common import api_session, run_async
from securetask.cli.errors import (
    ExitCode,
    print_invalid_option_error,
    print_no_tasks_found_error,
    print_task_not_found_error,
)
from securetask.core.tasks.controller import TaskListController
from securetask.core.tasks.gateway import TaskGateway
from securetask.core.tasks.models import Task, TaskFilters, TaskStatus

console = Console()
app = typer.Typer(help="List and manage your tasks")

DELETE_PROMPT = "Are you sure you want to delete this task?"

Action = Callable[[TaskListController], Awaitable[object]]


def _decline(task_id: str) -> bool:
    return False


def _parse_status(status: str | None) -> TaskStatus | None:
    """Convert a --status value, exiting with a user error if invalid."""
    if not status:
        return None
    try:
        return TaskStatus(status.lower())
    except ValueError:
        print_invalid_option_error(status, [s.value for s in TaskStatus])
        raise typer.Exit(ExitCode.USER_ERROR)


def _find_task(controller: TaskListController, task_id: str) -> Task | None:
    for task in controller.tasks:
        if task.id == task_id:
            return task
    return None


async def _drive(
    action: Action | None = None,
    *,
    filters: TaskFilters | None = None,
    confirm_delete: Callable[[str], bool] = _decline,
) -> TaskListController:
    """Load the list, apply ``action``, and return the settled controller."""
    async with api_session() as api:
        controller = TaskListController(TaskGateway(api), confirm_delete=confirm_delete)
        if filters is not None:
            controller.filters = filters
        try:
            await controller.start()
            if action is not None and controller.error is None:
                await action(controller)
        finally:
            controller.close()
    return controller


def render_messages(controller: TaskListController) -> None:
    if controller.success_message:
        console.print(f"[green]{controller.success_message}[/green]")
    if controller.error:
        console.print(f"[red]Error:[/red] {controller.error}")


def render_tasks(tasks: list[Task], criteria: str | None = None) -> None:
    if not tasks:
        print_no_tasks_found_error(criteria)
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("", width=1)
    table.add_column("ID", style="dim")
    table.add_column("Status", width=10)
    table.add_column("Title", overflow="fold")
    table.add_column("Description", overflow="fold", style="dim")

    for task in tasks:
        if task.is_completed:
            mark = "[green]✓[/green]"
            status = f"[green]{task.status.value}[/green]"
            title = f"[strike dim]{task.title}[/strike dim]"
        else:
            mark = " "
            status = f"[yellow]{task.status.value}[/yellow]"
            title = task.title
        table.add_row(mark, task.id, status, title, task.description)

    console.print(table)
    console.print(f"\n[dim]Total: {len(tasks)} tasks[/dim]")


def _finish(controller: TaskListController, show_list: bool = True) -> None:
    """Render the controller state and exit non-zero if it holds an error."""
    render_messages(controller)
    if show_list and controller.error is None:
        render_tasks(controller.tasks, controller.filters.describe())
    if controller.error is not None:
        raise typer.Exit(ExitCode.GENERAL_ERROR)


@app.command("list")
def list_tasks(
    search: str | None = typer.Option(
        None,
        "--search",
        "-q",
        help="Only tasks matching this text (matching is done by the server)",
    ),
    status: str | None = typer.Option(
        None,
        "--status",
        "-s",
        help="Filter by status: pending, completed",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """
    List tasks with optional filters.

    Examples:
        securetask tasks list
        securetask tasks list --status pending
        securetask tasks list --search milk
    """
    filters = TaskFilters(search=search, status=_parse_status(status))
    controller = run_async(_drive(filters=filters))

    if json_output and controller.error is None:
        data = [t.model_dump(mode="json") for t in controller.tasks]
        console.print(json.dumps(data, indent=2))
        return

    _finish(controller)


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option(
        "",
        "--description",
        "-d",
        help="Task description",
    ),
    status: str = typer.Option(
        TaskStatus.PENDING.value,
        "--status",
        "-s",
        help="Initial status: pending, completed",
    ),
) -> None:
    """
    Create a new task.

    Examples:
        securetask tasks add "Buy milk"
        securetask tasks add "Write report" -d "Q3 numbers"
    """
    task_status = _parse_status(status) or TaskStatus.PENDING

    async def action(controller: TaskListController) -> None:
        controller.open_create()
        controller.update_draft(title=title, description=description, status=task_status)
        await controller.submit()

    _finish(run_async(_drive(action)))


@app.command()
def edit(
    task_id: str = typer.Argument(..., help="Task ID to edit"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    status: str | None = typer.Option(
        None, "--status", "-s", help="New status: pending, completed"
    ),
) -> None:
    """
    Edit a task. Fields that are not given keep their current value.

    Examples:
        securetask tasks edit 64f1c2 --title "Buy oat milk"
        securetask tasks edit 64f1c2 --status completed
    """
    task_status = _parse_status(status)
    changes: dict[str, object] = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if task_status is not None:
        changes["status"] = task_status

    missing: list[str] = []

    async def action(controller: TaskListController) -> None:
        task = _find_task(controller, task_id)
        if task is None:
            missing.append(task_id)
            return
        controller.open_edit(task)
        controller.update_draft(**changes)
        await controller.submit()

    controller = run_async(_drive(action))
    if missing:
        print_task_not_found_error(task_id)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    _finish(controller)


@app.command()
def toggle(
    task_id: str = typer.Argument(..., help="Task ID to mark done / not done"),
) -> None:
    """
    Flip a task between pending and completed.

    Examples:
        securetask tasks toggle 64f1c2
    """
    missing: list[str] = []

    async def action(controller: TaskListController) -> None:
        task = _find_task(controller, task_id)
        if task is None:
            missing.append(task_id)
            return
        await controller.toggle_status(task)

    controller = run_async(_drive(action))
    if missing:
        print_task_not_found_error(task_id)
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    _finish(controller)


@app.command()
def delete(
    task_id: str = typer.Argument(..., help="Task ID to delete"),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """
    Delete a task (asks for confirmation unless --yes is given).

    Examples:
        securetask tasks delete 64f1c2
        securetask tasks delete 64f1c2 --yes
    """

    def confirm(_task_id: str) -> bool:
        return yes or typer.confirm(DELETE_PROMPT, default=False)

    async def action(controller: TaskListController) -> None:
        await controller.remove(task_id)

    controller = run_async(_drive(action, confirm_delete=confirm))
    _finish(controller)
