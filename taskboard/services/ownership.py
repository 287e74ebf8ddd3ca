import logging
from typing import List
import uuid

from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session, select, desc

from ..core.exceptions import ConcurrencyConflict, TaskNotFound
from ..models.task import TaskItem

logger = logging.getLogger(__name__)

# Every function takes the acting owner explicitly; nothing reads request state.


def load_owned(session: Session, task_id: int, owner_id: uuid.UUID) -> TaskItem:
    task = session.exec(
        select(TaskItem).where(TaskItem.id == task_id, TaskItem.owner_id == owner_id)
    ).first()
    if task is None:
        # Also the answer for someone else's task, so its existence never leaks
        logger.debug("Task %s not found for owner %s", task_id, owner_id)
        raise TaskNotFound(task_id)
    return task


def exists_owned(session: Session, task_id: int, owner_id: uuid.UUID) -> bool:
    found = session.exec(
        select(TaskItem.id).where(TaskItem.id == task_id, TaskItem.owner_id == owner_id)
    ).first()
    return found is not None


def list_owned(session: Session, owner_id: uuid.UUID) -> List[TaskItem]:
    # Same due date: most recently created first
    statement = (
        select(TaskItem)
        .where(TaskItem.owner_id == owner_id)
        .order_by(TaskItem.due_date, desc(TaskItem.created_at))
    )
    return list(session.exec(statement).all())


def add_owned(session: Session, task: TaskItem, owner_id: uuid.UUID) -> TaskItem:
    if task.owner_id != owner_id:
        raise ValueError("task must be stamped with the acting owner before it is stored")
    session.add(task)
    session.commit()
    session.refresh(task)
    logger.info("Created task %s for owner %s", task.id, owner_id)
    return task


def save_owned(session: Session, task: TaskItem, owner_id: uuid.UUID) -> TaskItem:
    """
    Commit changes made to a task previously returned by ``load_owned``.

    If the row vanished or stopped matching between load and save, the
    session is rolled back and the task looked up again: gone means
    TaskNotFound, still there means ConcurrencyConflict. No retry.

    There is no version column, so the only stale signal is an UPDATE that
    matched no row. Two edits that both find the row end as last write wins.
    """
    task_id = task.id
    try:
        session.add(task)
        session.commit()
    except StaleDataError:
        session.rollback()
        if not exists_owned(session, task_id, owner_id):
            logger.info("Task %s vanished before it could be saved", task_id)
            raise TaskNotFound(task_id)
        logger.error("Concurrent update detected on task %s", task_id)
        raise ConcurrencyConflict(task_id)
    session.refresh(task)
    logger.info("Updated task %s for owner %s", task_id, owner_id)
    return task


def delete_owned(session: Session, task: TaskItem, owner_id: uuid.UUID) -> None:
    if task.owner_id != owner_id:
        raise TaskNotFound(task.id)
    task_id = task.id
    session.delete(task)
    session.commit()
    logger.info("Deleted task %s for owner %s", task_id, owner_id)
