"""
Task data models.

Defines Pydantic models for tasks as returned by the task service, the
form draft used to create or edit a task, partial updates, and the list
filters. Provides validation and JSON serialization for the gateway.

Example:
    >>> from securetask.core.tasks.models import Task, TaskFilters, TaskStatus
    >>>
    >>> task = Task.model_validate({"_id": "t1", "title": "Buy milk"})
    >>> task.status
    <TaskStatus.PENDING: 'pending'>
    >>> task.status.toggled()
    <TaskStatus.COMPLETED: 'completed'>
    >>>
    >>> TaskFilters(search="milk").to_params()
    {'search': 'milk'}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from securetask.core.api.exceptions import TaskValidationError


class TaskStatus(str, Enum):
    """Task status enumeration."""

    PENDING = "pending"
    COMPLETED = "completed"

    def toggled(self) -> "TaskStatus":
        """Return the opposite status."""
        if self is TaskStatus.PENDING:
            return TaskStatus.COMPLETED
        return TaskStatus.PENDING


class Task(BaseModel):
    """
    A unit of work stored by the task service.

    The server assigns ``id``; the original backend sends it as ``_id``, so
    both spellings are accepted on input. Extra server fields (timestamps,
    owner) are ignored.

    Attributes:
        id: Server-assigned identifier, immutable after creation
        title: Non-empty task title
        description: Free text, empty when not provided
        status: pending or completed
    """

    id: str = Field(
        ...,
        validation_alias=AliasChoices("id", "_id"),
        description="Server-assigned identifier",
    )
    title: str = Field(..., min_length=1, description="Task title")
    description: str = Field(default="", description="Optional task description")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Task status")

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        # Some backends emit numeric ids
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("description", mode="before")
    @classmethod
    def null_description_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class TaskDraft(BaseModel):
    """
    Form contents for creating or editing a task.

    Also the request body for ``POST /tasks``. The title invariant is only
    checked by validated(), so an in-progress draft may hold an empty title.
    """

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_task(cls, task: Task) -> "TaskDraft":
        """Seed a draft from an existing task."""
        return cls(
            title=task.title,
            description=task.description or "",
            status=task.status,
        )

    def validated(self) -> "TaskDraft":
        """
        Check the draft can be submitted.

        Returns:
            self, unchanged

        Raises:
            TaskValidationError: If the title is empty after trimming
        """
        if not self.title.strip():
            raise TaskValidationError("Title is required", field="title")
        return self

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class TaskUpdate(BaseModel):
    """
    Partial set of task fields for ``PUT /tasks/{id}``.

    Only fields that were explicitly set are sent.

    Example:
        >>> TaskUpdate(status=TaskStatus.COMPLETED).to_payload()
        {'status': 'completed'}
    """

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("title must not be blank")
        return v

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class TaskFilters(BaseModel):
    """
    List filters for ``GET /tasks``.

    Empty strings mean "no filter" and normalize to None, so the query only
    ever contains keys that carry a value. How ``search`` matches is up to
    the server.
    """

    search: str | None = None
    status: TaskStatus | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("search", "status", mode="before")
    @classmethod
    def empty_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.search is not None:
            params["search"] = self.search
        if self.status is not None:
            params["status"] = self.status.value
        return params

    def describe(self) -> str | None:
        """Short human-readable summary, or None when unfiltered."""
        parts = [f"{k}={v}" for k, v in self.to_params().items()]
        return " ".join(parts) if parts else None


@dataclass(frozen=True)
class EditSession:
    """
    Which task the editor is bound to.

    ``task_id is None`` means the editor is creating a new task.
    """

    task_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.task_id is not None

    @classmethod
    def creating(cls) -> "EditSession":
        return cls()

    @classmethod
    def editing(cls, task_id: str) -> "EditSession":
        return cls(task_id=task_id)
