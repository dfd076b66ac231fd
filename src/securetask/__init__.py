"""
SecureTask - terminal client for the SecureTask task service.

Lists, creates, edits, completes and deletes tasks over the service's REST
API, and manages the login token used to authenticate.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from securetask.core.config.models import ClientConfig
from securetask.core.tasks.models import Task, TaskStatus

__all__ = ["ClientConfig", "Task", "TaskStatus", "__version__"]
