"""
Task management models, gateway, and list controller.

This module provides the task data models, the TaskGateway for the
``/tasks`` REST resource, and the TaskListController that keeps a local
view of the collection in sync with the server.
"""

from .controller import TaskListController
from .gateway import TaskGateway
from .models import EditSession, Task, TaskDraft, TaskFilters, TaskStatus, TaskUpdate

__all__ = [
    # Models
    "Task",
    "TaskStatus",
    "TaskDraft",
    "TaskUpdate",
    "TaskFilters",
    "EditSession",
    # Remote access and state
    "TaskGateway",
    "TaskListController",
]
