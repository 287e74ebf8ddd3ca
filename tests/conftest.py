# tests/conftest.py

from datetime import date, datetime
from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine

from taskboard import models  # noqa: F401  (registers tables)
from taskboard.db.session import get_session
from taskboard.main import app
from taskboard.models import TaskItem, User
from taskboard.services import lifecycle


# ============================================================
# DATABASE (fresh SQLite file per test)
# ============================================================

@pytest.fixture()
def engine(tmp_path: Path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'tasks.db'}",
        connect_args={"check_same_thread": False},
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================
# USERS AND TASKS
# ============================================================

@pytest.fixture()
def make_user(session: Session) -> Callable[..., User]:
    def _make(email: str = "alice@example.com", full_name: str = "Alice") -> User:
        # Password hashing is exercised by the auth tests only
        user = User(email=email, full_name=full_name, password_hash="not-a-real-hash")
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture()
def alice(make_user) -> User:
    return make_user("alice@example.com", "Alice")


@pytest.fixture()
def bob(make_user) -> User:
    return make_user("bob@example.com", "Bob")


@pytest.fixture()
def make_task(session: Session) -> Callable[..., TaskItem]:
    def _make(
        owner: User,
        title: str = "Write report",
        description: str = "Quarterly numbers",
        due_date: date = date(2030, 1, 1),
        priority: str = "Medium",
        status: str = "Pending",
        created_at: datetime = None,
    ) -> TaskItem:
        task = TaskItem(title=title, description=description, due_date=due_date, priority=priority)
        lifecycle.apply_create_defaults(task, owner.id, created_at or lifecycle.utcnow())
        task.status = status
        session.add(task)
        session.commit()
        session.refresh(task)
        return task

    return _make
