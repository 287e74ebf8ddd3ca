# Both models are loaded together to resolve the User <-> TaskItem references
from .user import User
from .task import TaskItem, TaskPriority, TaskStatus

__all__ = ["User", "TaskItem", "TaskPriority", "TaskStatus"]
