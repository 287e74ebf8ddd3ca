from sqlmodel import SQLModel, Field
from typing import Any, List, Optional
from datetime import date, datetime
import uuid


class TaskSubmission(SQLModel):
    """Raw body of a create request. Values are read and checked by the lifecycle rules."""
    title: Any = None
    description: Any = None
    due_date: Any = None
    priority: Any = None


class TaskEditSubmission(TaskSubmission):
    id: Any = None


class TaskForm(SQLModel):
    """A submission whose values have been read and normalized."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[str] = None


class TaskRead(SQLModel):
    id: int
    owner_id: uuid.UUID
    title: str
    description: str
    due_date: date
    priority: str
    status: str
    created_at: datetime


# --- PAGES (what the form-rendering step hands to the client) ---
class TaskListPage(SQLModel):
    tasks: List[TaskRead]
    csrf_token: str


class TaskPage(SQLModel):
    task: TaskRead
    csrf_token: str


class TaskFormPage(SQLModel):
    task: TaskForm
    csrf_token: str


# --- VALIDATION ---
class FieldViolation(SQLModel):
    field: str
    message: str


class ValidationResult(SQLModel):
    violations: List[FieldViolation] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def add(self, field: str, message: str) -> None:
        self.violations.append(FieldViolation(field=field, message=message))

    def messages_for(self, field: str) -> List[str]:
        return [v.message for v in self.violations if v.field == field]

    def has(self, field: str) -> bool:
        return any(v.field == field for v in self.violations)


class TaskFormErrors(SQLModel):
    detail: str = "Validation failed"
    errors: List[FieldViolation]
    # Submitted input, normalized where it could be read
    task: TaskEditSubmission
    csrf_token: str


# --- DASHBOARD ---
class DashboardStats(SQLModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    pending_tasks: int = 0
    overdue_tasks: int = 0
    recent_tasks: List[TaskRead] = Field(default_factory=list)
