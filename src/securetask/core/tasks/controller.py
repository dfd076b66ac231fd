"""
Task list controller.

Mediates between user intent and the TaskGateway. Holds the local view of
the task collection plus the UI-only state around it (filters, loading
flag, messages, editor session, form draft), and re-fetches the whole list
after every change instead of patching it locally.

Refresh cycle:
    filters change / mutation succeeds -> refresh() -> gateway.list(filters)
    -> tasks replaced wholesale

Overlapping refreshes: each refresh records a generation number and the
filters it was issued with. A response is applied only if no newer refresh
has been issued and the filters still match, so a slow, older response can
never overwrite a newer one. close() cancels in-flight refreshes and makes
the controller ignore anything that settles afterwards.

Example:
    >>> controller = TaskListController(gateway, confirm_delete=lambda _id: True)
    >>> await controller.start()
    >>> controller.open_create()
    >>> controller.update_draft(title="Buy milk")
    >>> await controller.submit()
    True
    >>> controller.success_message
    'Task created successfully'
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from securetask.core.api.exceptions import RemoteError, TaskValidationError
from securetask.core.tasks.gateway import TaskGateway
from securetask.core.tasks.models import (
    EditSession,
    Task,
    TaskDraft,
    TaskFilters,
    TaskStatus,
    TaskUpdate,
)

logger = logging.getLogger(__name__)

# User-facing messages
TASK_CREATED = "Task created successfully"
TASK_UPDATED = "Task updated successfully"
TASK_DELETED = "Task deleted successfully"
LOAD_FAILED = "Failed to load tasks"
SAVE_FAILED = "Failed to save task"
DELETE_FAILED = "Failed to delete task"
STATUS_FAILED = "Failed to update task status"

ConfirmDelete = Callable[[str], bool | Awaitable[bool]]


class TaskListController:
    """
    State holder for the task list screen.

    Attributes:
        tasks: Tasks from the most recent applied refresh, in server order
        filters: Current list filters
        loading: True while the newest refresh is in flight
        saving: True while a create/update from the editor is in flight
        error: Current error message, if any
        success_message: Current success message, if any
        edit_session: Open editor session, or None when the editor is closed
        form_draft: Editor contents
    """

    def __init__(self, gateway: TaskGateway, *, confirm_delete: ConfirmDelete) -> None:
        """
        Args:
            gateway: Remote task gateway
            confirm_delete: Called with the task id before deleting; the
                delete only happens if it returns (or resolves to) True
        """
        self._gateway = gateway
        self._confirm_delete = confirm_delete

        self.tasks: list[Task] = []
        self.filters = TaskFilters()
        self.loading = False
        self.saving = False
        self.error: str | None = None
        self.success_message: str | None = None
        self.edit_session: EditSession | None = None
        self.form_draft = TaskDraft()

        self._generation = 0
        self._inflight: set[asyncio.Future[list[Task]]] = set()
        self._closed = False

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _report_error(self, message: str) -> None:
        self.error = message
        self.success_message = None

    def _report_success(self, message: str) -> None:
        self.success_message = message
        self.error = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def start(self) -> bool:
        """Initial load with the current (default empty) filters."""
        return await self.refresh()

    def close(self) -> None:
        """
        Stop caring about in-flight work.

        Cancels outstanding refreshes and clears ``loading``. Refreshes
        that settle after this point leave the state untouched.
        """
        self._closed = True
        for request in list(self._inflight):
            request.cancel()
        self._inflight.clear()
        self.loading = False

    # ------------------------------------------------------------------
    # Refresh and filters
    # ------------------------------------------------------------------

    def _is_current(self, generation: int, snapshot: TaskFilters) -> bool:
        return (
            not self._closed
            and generation == self._generation
            and snapshot == self.filters
        )

    async def refresh(self) -> bool:
        """
        Re-fetch the task list for the current filters.

        Returns:
            True if the response was applied to ``tasks``; False on failure,
            or when the response was stale or arrived after close()
        """
        if self._closed:
            return False

        self._generation += 1
        generation = self._generation
        snapshot = self.filters
        self.loading = True

        request = asyncio.ensure_future(self._gateway.list(snapshot))
        self._inflight.add(request)
        try:
            tasks = await request
        except asyncio.CancelledError:
            if self._closed:
                logger.debug("Refresh %d cancelled by close()", generation)
                return False
            raise
        except RemoteError as e:
            if not self._is_current(generation, snapshot):
                logger.debug("Ignoring failure of stale refresh %d: %s", generation, e)
                return False
            logger.warning("Failed to load tasks: %s", e)
            self._report_error(LOAD_FAILED)
            self.loading = False
            return False
        finally:
            self._inflight.discard(request)

        if not self._is_current(generation, snapshot):
            logger.debug(
                "Discarding stale refresh %d (latest %d)", generation, self._generation
            )
            return False

        self.tasks = tasks
        self.loading = False
        return True

    async def set_filters(self, filters: TaskFilters) -> None:
        """Replace the filters and refresh if they changed."""
        if filters == self.filters:
            return
        self.filters = filters
        await self.refresh()

    async def set_search(self, search: str | None) -> None:
        await self.set_filters(TaskFilters(search=search, status=self.filters.status))

    async def set_status_filter(self, status: TaskStatus | str | None) -> None:
        await self.set_filters(TaskFilters(search=self.filters.search, status=status))

    # ------------------------------------------------------------------
    # Editor
    # ------------------------------------------------------------------

    @property
    def is_editor_open(self) -> bool:
        return self.edit_session is not None

    def open_create(self) -> None:
        """Open the editor for a new task with a blank draft."""
        self.edit_session = EditSession.creating()
        self.form_draft = TaskDraft()

    def open_edit(self, task: Task) -> None:
        """Open the editor bound to ``task``, seeded with its fields."""
        self.edit_session = EditSession.editing(task.id)
        self.form_draft = TaskDraft.from_task(task)

    def update_draft(self, **fields: Any) -> None:
        """
        Change draft fields (the form's change handler).

        Raises:
            pydantic.ValidationError: For unknown fields or an invalid status
        """
        self.form_draft = TaskDraft.model_validate(
            {**self.form_draft.model_dump(), **fields}
        )

    def close_editor(self) -> None:
        self.edit_session = None
        self.form_draft = TaskDraft()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def submit(self) -> bool:
        """
        Save the draft: create without a bound task, update with one.

        On success the editor closes and the list refreshes once. On failure
        the editor and draft stay as they are so the user can retry.

        Returns:
            True if the task was saved
        """
        try:
            draft = self.form_draft.validated()
        except TaskValidationError as e:
            self._report_error(e.message)
            return False

        session = self.edit_session
        self.saving = True
        self.error = None
        try:
            if session is not None and session.task_id is not None:
                await self._gateway.update(
                    session.task_id,
                    TaskUpdate(
                        title=draft.title,
                        description=draft.description,
                        status=draft.status,
                    ),
                )
                message = TASK_UPDATED
            else:
                await self._gateway.create(draft)
                message = TASK_CREATED
        except RemoteError as e:
            logger.warning("Failed to save task: %s", e)
            self._report_error(e.server_message or SAVE_FAILED)
            return False
        finally:
            self.saving = False

        self._report_success(message)
        self.close_editor()
        await self.refresh()
        return True

    async def remove(self, task_id: str) -> bool:
        """
        Delete a task after the confirmation gate agrees.

        A declined confirmation is a silent no-op.

        Returns:
            True if the task was deleted
        """
        confirmed = self._confirm_delete(task_id)
        if inspect.isawaitable(confirmed):
            confirmed = await confirmed
        if not confirmed:
            logger.debug("Delete of %s declined", task_id)
            return False

        try:
            await self._gateway.delete(task_id)
        except RemoteError as e:
            logger.warning("Failed to delete task %s: %s", task_id, e)
            self._report_error(DELETE_FAILED)
            return False

        self._report_success(TASK_DELETED)
        await self.refresh()
        return True

    async def toggle_status(self, task: Task) -> bool:
        """
        Flip a task between pending and completed.

        Returns:
            True if the server accepted the change
        """
        new_status = task.status.toggled()
        try:
            await self._gateway.update(task.id, TaskUpdate(status=new_status))
        except RemoteError as e:
            logger.warning("Failed to update status of %s: %s", task.id, e)
            self._report_error(STATUS_FAILED)
            return False

        await self.refresh()
        return True


__all__ = [
    "TaskListController",
    "ConfirmDelete",
    "TASK_CREATED",
    "TASK_UPDATED",
    "TASK_DELETED",
    "LOAD_FAILED",
    "SAVE_FAILED",
    "DELETE_FAILED",
    "STATUS_FAILED",
]
