"""
Lifecycle rules for task items.

Everything here is pure: no session, no request. Handlers read the raw
submission into a normalized form, validate it, then use these helpers to
stamp defaults, copy edits and flip the status before the store sees
anything.
"""
from datetime import date, datetime, timezone
from typing import Any, Optional, Tuple
import uuid

from pydantic import TypeAdapter, ValidationError

from ..core.exceptions import MalformedRequest
from ..models.task import TaskItem, TaskPriority, TaskStatus
from ..schemas.task import TaskForm, TaskSubmission, ValidationResult

TITLE_MIN, TITLE_MAX = 3, 100
DESCRIPTION_MIN, DESCRIPTION_MAX = 5, 1000

PRIORITIES = tuple(p.value for p in TaskPriority)

_DATE = TypeAdapter(date)


def utcnow() -> datetime:
    # Naive UTC, matching the timezone-less created_at column
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize(
    title: Optional[str], description: Optional[str], priority: Optional[str]
) -> Tuple[str, str, str]:
    title = (title or "").strip()
    description = (description or "").strip()
    priority = (priority or "").strip() or TaskPriority.medium.value
    return title, description, priority


def normalize_form(form: TaskForm) -> TaskForm:
    """Return a normalized copy of ``form``; the original is left untouched."""
    title, description, priority = normalize(form.title, form.description, form.priority)
    return form.model_copy(
        update={"title": title, "description": description, "priority": priority}
    )


def _read_text(value: Any, field: str, label: str, result: ValidationResult) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    result.add(field, f"{label} must be text.")
    return None


def _read_date(value: Any, result: ValidationResult) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return _DATE.validate_python(value.strip() if isinstance(value, str) else value)
    except ValidationError:
        result.add("due_date", "Due date must be a valid date.")
        return None


def read_submission(submission: TaskSubmission) -> Tuple[TaskForm, ValidationResult]:
    """
    Turn a raw submission into a normalized form.

    Values that cannot be read at all (a title that is an object, a due
    date that is not a date) are recorded in the returned result and left
    empty on the form. Pass that result on to ``validate_task`` so every
    problem is reported together.
    """
    result = ValidationResult()
    form = TaskForm(
        title=_read_text(submission.title, "title", "Title", result),
        description=_read_text(submission.description, "description", "Description", result),
        due_date=_read_date(submission.due_date, result),
        priority=_read_text(submission.priority, "priority", "Priority", result),
    )
    return normalize_form(form), result


def validate_task(form: TaskForm, result: Optional[ValidationResult] = None) -> ValidationResult:
    """
    Check a normalized form against the task shape.

    Every violation is collected so the client can show them all at once.
    Fields already flagged in ``result`` are not checked again. Used for
    both create and edit.
    """
    if result is None:
        result = ValidationResult()

    if not result.has("title"):
        title = form.title or ""
        if not title:
            result.add("title", "Title is required.")
        elif not TITLE_MIN <= len(title) <= TITLE_MAX:
            result.add("title", f"Title must be between {TITLE_MIN} and {TITLE_MAX} characters.")

    if not result.has("description"):
        description = form.description or ""
        if not description:
            result.add("description", "Description is required.")
        elif not DESCRIPTION_MIN <= len(description) <= DESCRIPTION_MAX:
            result.add(
                "description",
                f"Description must be between {DESCRIPTION_MIN} and {DESCRIPTION_MAX} characters.",
            )

    if not result.has("priority") and form.priority not in PRIORITIES:
        result.add("priority", "Priority must be Low, Medium, or High.")

    if not result.has("due_date") and form.due_date is None:
        result.add("due_date", "Due date is required.")

    # Keep the field order stable regardless of which step found the problem
    order = ("title", "description", "priority", "due_date")
    result.violations.sort(key=lambda v: order.index(v.field) if v.field in order else len(order))
    return result


def build_task(form: TaskForm) -> TaskItem:
    return TaskItem(
        title=form.title,
        description=form.description,
        due_date=form.due_date,
        priority=form.priority,
    )


def apply_create_defaults(task: TaskItem, owner_id: uuid.UUID, now: datetime) -> TaskItem:
    # Server-owned fields; whatever the client sent is overwritten.
    task.status = TaskStatus.pending.value
    task.created_at = now
    task.owner_id = owner_id
    return task


def apply_edit(existing: TaskItem, incoming: TaskForm) -> TaskItem:
    existing.title = incoming.title
    existing.description = incoming.description
    existing.due_date = incoming.due_date
    existing.priority = incoming.priority
    return existing


def toggle_status(task: TaskItem) -> TaskItem:
    current = (task.status or "").strip()
    if current.lower() == TaskStatus.completed.value.lower():
        task.status = TaskStatus.pending.value
    else:
        task.status = TaskStatus.completed.value
    return task


def check_path_id(path_id: int, body_id: Any) -> int:
    if body_id is None or isinstance(body_id, bool):
        raise MalformedRequest()
    if isinstance(body_id, float) and not body_id.is_integer():
        raise MalformedRequest()
    try:
        body_id = int(body_id)
    except (TypeError, ValueError):
        raise MalformedRequest()
    if body_id != path_id:
        raise MalformedRequest()
    return body_id
