# tests/test_ownership.py

from datetime import date, datetime, timezone

import pytest
from sqlalchemy.orm.exc import StaleDataError
from sqlmodel import Session

from taskboard.core.exceptions import ConcurrencyConflict, TaskNotFound
from taskboard.models import TaskItem
from taskboard.schemas.task import TaskForm
from taskboard.services import lifecycle, ownership


def _at(day: int) -> datetime:
    return datetime(2024, 1, day, 9, 0, tzinfo=timezone.utc)


def test_load_owned_returns_own_task(session, alice, make_task):
    task = make_task(alice, title="Mine")
    assert ownership.load_owned(session, task.id, alice.id).title == "Mine"


def test_load_owned_hides_other_owners_task(session, alice, bob, make_task):
    task = make_task(alice)
    with pytest.raises(TaskNotFound):
        ownership.load_owned(session, task.id, bob.id)


def test_load_owned_missing_task(session, alice):
    with pytest.raises(TaskNotFound):
        ownership.load_owned(session, 999, alice.id)


def test_exists_owned(session, alice, bob, make_task):
    task = make_task(alice)
    assert ownership.exists_owned(session, task.id, alice.id)
    assert not ownership.exists_owned(session, task.id, bob.id)


def test_list_owned_orders_by_due_date_then_newest_first(session, alice, bob, make_task):
    late = make_task(alice, title="Late", due_date=date(2024, 3, 1), created_at=_at(1))
    older = make_task(alice, title="Older", due_date=date(2024, 2, 1), created_at=_at(2))
    newer = make_task(alice, title="Newer", due_date=date(2024, 2, 1), created_at=_at(3))
    make_task(bob, title="Not mine", due_date=date(2024, 1, 1))

    titles = [t.title for t in ownership.list_owned(session, alice.id)]

    assert titles == [newer.title, older.title, late.title]


def test_add_owned_persists_task(session, alice):
    form = lifecycle.normalize_form(
        TaskForm(title="Plan", description="Plan the week", due_date=date(2024, 1, 1))
    )
    task = lifecycle.apply_create_defaults(lifecycle.build_task(form), alice.id, lifecycle.utcnow())

    stored = ownership.add_owned(session, task, alice.id)

    assert stored.id is not None
    assert ownership.load_owned(session, stored.id, alice.id).priority == "Medium"


def test_add_owned_refuses_foreign_owner(session, alice, bob):
    task = TaskItem(title="Plan", description="Plan the week", due_date=date(2024, 1, 1), owner_id=bob.id)
    with pytest.raises(ValueError):
        ownership.add_owned(session, task, alice.id)


def test_save_owned_commits_changes(session, alice, make_task):
    task = make_task(alice)
    task.title = "Renamed"
    ownership.save_owned(session, task, alice.id)

    session.expire_all()
    assert ownership.load_owned(session, task.id, alice.id).title == "Renamed"


def test_save_owned_reports_vanished_task_as_not_found(engine, session, alice, make_task):
    task = make_task(alice)
    loaded = ownership.load_owned(session, task.id, alice.id)

    # Another request deletes the task between load and save
    with Session(engine) as other:
        other.delete(other.get(TaskItem, task.id))
        other.commit()

    loaded.title = "Too late"
    with pytest.raises(TaskNotFound):
        ownership.save_owned(session, loaded, alice.id)


def test_save_owned_surfaces_conflict_when_task_still_exists(session, alice, make_task, monkeypatch):
    task = make_task(alice)
    loaded = ownership.load_owned(session, task.id, alice.id)

    def stale_commit():
        raise StaleDataError("simulated lost update")

    monkeypatch.setattr(session, "commit", stale_commit)
    loaded.title = "Conflicting"

    with pytest.raises(ConcurrencyConflict):
        ownership.save_owned(session, loaded, alice.id)


def test_delete_owned(session, alice, make_task):
    task = make_task(alice)
    task_id = task.id
    ownership.delete_owned(session, task, alice.id)
    assert not ownership.exists_owned(session, task_id, alice.id)


def test_delete_owned_refuses_other_owner(session, alice, bob, make_task):
    task = make_task(alice)
    with pytest.raises(TaskNotFound):
        ownership.delete_owned(session, task, bob.id)
    assert ownership.exists_owned(session, task.id, alice.id)
