"""
Standardized error handling and exit codes for the securetask CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum

from rich.console import Console

from securetask.core.api.exceptions import RemoteError

console = Console()


class ExitCode(IntEnum):
    """Standard exit codes for securetask CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error, including failed calls to the task service."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Not logged in",
        ...     reason="The task service rejected the request (HTTP 401)",
        ...     solution="securetask login --email you@example.com",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(reason, style="dim", markup=False)

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_not_logged_in_error() -> None:
    """Print error when the service rejects the request as unauthenticated."""
    print_error(
        "Not logged in",
        reason="The task service rejected the request (HTTP 401)",
        solution="securetask login --email you@example.com",
    )


def print_remote_error(error: RemoteError, action: str) -> None:
    """
    Print a failed call to the task service.

    Args:
        error: The error raised by a gateway
        action: What was being attempted, e.g. "Login failed"
    """
    if error.status_code == 401:
        print_not_logged_in_error()
        return

    if error.status_code is None:
        print_error(
            action,
            reason=str(error),
            solution="securetask config  # check api_url, or set SECURETASK_API_URL",
        )
        return

    print_error(action, reason=f"HTTP {error.status_code}: {error}")


def print_task_not_found_error(task_id: str) -> None:
    """Print error when a specific task is not found."""
    print_error(
        f"Task not found: {task_id}",
        reason="The task ID may be incorrect or the task may have been deleted",
        solution="securetask tasks list  # to see available tasks",
    )


def print_no_tasks_found_error(criteria: str | None = None) -> None:
    """Print notice when no tasks match the filters."""
    reason_msg = (
        f"No tasks match the criteria: {criteria}" if criteria else "You have no tasks yet"
    )

    print_error(
        "No tasks found",
        reason=reason_msg,
        solution="securetask tasks add 'Your task title'",
    )


def print_invalid_option_error(option: str, valid_options: list[str]) -> None:
    """Print error when an invalid option value is provided."""
    valid_str = ", ".join(valid_options)
    print_error(
        f"Invalid option: {option}",
        reason=f"Valid options are: {valid_str}",
        solution=f"Use one of: {valid_str}",
    )


__all__ = [
    "ExitCode",
    "print_error",
    "print_not_logged_in_error",
    "print_remote_error",
    "print_task_not_found_error",
    "print_no_tasks_found_error",
    "print_invalid_option_error",
]
