from typing import Optional


class TaskboardError(Exception):
    """Base class for request-local errors raised by the task services."""

    detail = "Request failed"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.detail)
        self.detail = detail or self.detail


class AuthenticationRequired(TaskboardError):
    detail = "Not authenticated"


class TaskNotFound(TaskboardError):
    # Same answer whether the task is missing or belongs to someone else.
    detail = "Task not found"

    def __init__(self, task_id: Optional[int] = None):
        super().__init__()
        self.task_id = task_id


class MalformedRequest(TaskboardError):
    detail = "Task not found"


class ConcurrencyConflict(TaskboardError):
    detail = "The task was modified by another request"

    def __init__(self, task_id: Optional[int] = None):
        super().__init__()
        self.task_id = task_id
