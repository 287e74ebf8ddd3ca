from datetime import date, datetime, timezone
from typing import List, Optional
import uuid

from sqlmodel import Session, select, func, desc

from ..core.config import settings
from ..models.task import TaskItem, TaskStatus
from ..schemas.task import DashboardStats, TaskRead


def _count(session: Session, owner_id: uuid.UUID, *conditions) -> int:
    return session.exec(
        select(func.count(TaskItem.id)).where(TaskItem.owner_id == owner_id, *conditions)
    ).one()


def total_count(session: Session, owner_id: uuid.UUID) -> int:
    return _count(session, owner_id)


def completed_count(session: Session, owner_id: uuid.UUID) -> int:
    return _count(session, owner_id, TaskItem.status == TaskStatus.completed.value)


def pending_count(session: Session, owner_id: uuid.UUID) -> int:
    # Anything not Completed counts as pending
    return _count(session, owner_id, TaskItem.status != TaskStatus.completed.value)


def overdue_count(session: Session, owner_id: uuid.UUID, today: Optional[date] = None) -> int:
    if today is None:
        today = datetime.now(timezone.utc).date()
    return _count(
        session,
        owner_id,
        TaskItem.due_date < today,
        TaskItem.status != TaskStatus.completed.value,
    )


def recent_tasks(session: Session, owner_id: uuid.UUID, limit: int = 5) -> List[TaskItem]:
    statement = (
        select(TaskItem)
        .where(TaskItem.owner_id == owner_id)
        .order_by(desc(TaskItem.created_at))
        .limit(limit)
    )
    return list(session.exec(statement).all())


def build_dashboard(
    session: Session,
    owner_id: Optional[uuid.UUID],
    today: Optional[date] = None,
    limit: Optional[int] = None,
) -> DashboardStats:
    """
    Summary counts plus the most recent tasks for one owner.

    Each number is its own query, so a task created mid-way may show up in
    some counts and not others. Anonymous callers get an empty dashboard.
    """
    if owner_id is None:
        return DashboardStats()

    if limit is None:
        limit = settings.RECENT_TASKS_LIMIT

    return DashboardStats(
        total_tasks=total_count(session, owner_id),
        completed_tasks=completed_count(session, owner_id),
        pending_tasks=pending_count(session, owner_id),
        overdue_tasks=overdue_count(session, owner_id, today),
        recent_tasks=[TaskRead.model_validate(t) for t in recent_tasks(session, owner_id, limit)],
    )
