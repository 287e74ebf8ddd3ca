from sqlmodel import SQLModel, Field, Relationship
from typing import Optional
from datetime import date, datetime, timezone
import uuid
from enum import Enum


class TaskStatus(str, Enum):
    pending = "Pending"
    completed = "Completed"


class TaskPriority(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"


class TaskItem(SQLModel, table=True):
    __tablename__ = "task_items"

    id: Optional[int] = Field(default=None, primary_key=True)
    owner_id: uuid.UUID = Field(foreign_key="users.id", index=True, nullable=False)
    title: str = Field(max_length=100, nullable=False)
    description: str = Field(max_length=1000, nullable=False)
    due_date: date = Field(nullable=False, index=True)

    # Stored as plain strings; the enums above hold the accepted values.
    priority: str = Field(default=TaskPriority.medium.value, max_length=20, nullable=False)
    status: str = Field(default=TaskStatus.pending.value, max_length=20, nullable=False)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc).replace(tzinfo=None), nullable=False)

    # Relationship to owner
    owner: Optional["User"] = Relationship(back_populates="tasks")
