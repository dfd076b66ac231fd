"""
Task remote gateway.

Typed operations against the ``/tasks`` REST resource. Each call performs
exactly one round trip through the ApiClient; there is no retry, caching,
or batching here.

API Endpoints:
- List:   GET    /tasks?search={search}&status={status}
- Create: POST   /tasks          body {title, description, status}
- Update: PUT    /tasks/{id}     body = partial task fields
- Delete: DELETE /tasks/{id}

Example:
    >>> gateway = TaskGateway(api)
    >>> tasks = await gateway.list(TaskFilters(status=TaskStatus.PENDING))
    >>> created = await gateway.create(TaskDraft(title="Buy milk"))
    >>> await gateway.update(created.id, {"status": "completed"})
    >>> await gateway.delete(created.id)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from securetask.core.api.client import ApiClient
from securetask.core.api.exceptions import ResponseError, TaskValidationError
from securetask.core.tasks.models import Task, TaskDraft, TaskFilters, TaskUpdate

logger = logging.getLogger(__name__)

TASKS_PATH = "/tasks"


def _task_path(task_id: str) -> str:
    return f"{TASKS_PATH}/{quote(str(task_id), safe='')}"


def _parse_task(data: Any, url: str) -> Task:
    try:
        return Task.model_validate(data)
    except ValidationError as e:
        raise ResponseError(
            None,
            f"Failed to parse task data: {e.error_count()} validation error(s)",
            url=url,
        ) from e


class TaskGateway:
    """
    Gateway for the task REST resource.

    Attributes:
        api: Client used for every request
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    async def list(self, filters: TaskFilters | None = None) -> list[Task]:
        """
        Fetch tasks matching the filters, in server order.

        Args:
            filters: Optional filters; only non-absent keys are sent

        Returns:
            Tasks exactly as ordered by the server

        Raises:
            RemoteError: On transport or server failure
            ResponseError: If the body is not a list of task objects
        """
        params = (filters or TaskFilters()).to_params()
        data = await self.api.get(TASKS_PATH, params=params)

        if not isinstance(data, list):
            raise ResponseError(
                None,
                "Expected a JSON array of tasks",
                url=TASKS_PATH,
                response_type=type(data).__name__,
            )

        tasks = [_parse_task(item, TASKS_PATH) for item in data]
        logger.debug("Listed %d task(s) with params=%s", len(tasks), params)
        return tasks

    async def create(self, task_input: TaskDraft) -> Task:
        """
        Create a task.

        Args:
            task_input: Title, description and status of the new task

        Returns:
            The created task, including its server-assigned id

        Raises:
            RemoteError: On validation rejection (4xx) or transport failure
        """
        data = await self.api.post(TASKS_PATH, json=task_input.to_payload())
        task = _parse_task(data, TASKS_PATH)
        logger.debug("Created task %s", task.id)
        return task

    async def update(
        self, task_id: str, fields: TaskUpdate | Mapping[str, Any]
    ) -> Task:
        """
        Update some or all fields of a task.

        Args:
            task_id: Task to update
            fields: Any subset of title, description, status

        Returns:
            The updated task

        Raises:
            TaskValidationError: If fields contain unknown keys or a blank title
            RemoteError: On failure, including 404 when the task no longer exists
        """
        if not isinstance(fields, TaskUpdate):
            try:
                fields = TaskUpdate.model_validate(dict(fields))
            except ValidationError as e:
                raise TaskValidationError(
                    f"Invalid task fields: {e.error_count()} validation error(s)",
                    task_id=task_id,
                ) from e

        url = _task_path(task_id)
        data = await self.api.put(url, json=fields.to_payload())
        task = _parse_task(data, url)
        logger.debug("Updated task %s", task_id)
        return task

    async def delete(self, task_id: str) -> Any:
        """
        Delete a task.

        Args:
            task_id: Task to delete

        Returns:
            The server's acknowledgement body (may be None)

        Raises:
            RemoteError: On failure
        """
        ack = await self.api.delete(_task_path(task_id))
        logger.debug("Deleted task %s", task_id)
        return ack


__all__ = ["TaskGateway", "TASKS_PATH"]
