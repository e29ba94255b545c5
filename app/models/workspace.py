# app/models/workspace.py
"""
Workspace tables that reference an auth user.

None of these columns carries a foreign key to auth.users, so deleting a
user does not cascade here. AccountEraser removes the rows explicitly.
Only the columns this backend touches are mapped.
"""

import uuid
from datetime import date, datetime, timezone

from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Lead(SQLModel, table=True):
    __tablename__ = "leads"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=200)
    created_by: uuid.UUID = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow)


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(max_length=200)
    assigned_to: uuid.UUID = Field(index=True)
    status: str = Field(default="todo", max_length=20)
    created_at: datetime = Field(default_factory=_utcnow)


class Leave(SQLModel, table=True):
    __tablename__ = "leaves"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(index=True)
    start_date: date
    end_date: date
    status: str = Field(default="pending", max_length=20)


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=200)
    created_by: uuid.UUID = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow)


class Announcement(SQLModel, table=True):
    __tablename__ = "announcements"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(max_length=200)
    body: str | None = None
    created_by: uuid.UUID = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow)


class ActivityLog(SQLModel, table=True):
    __tablename__ = "activity_logs"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(index=True)
    action: str = Field(max_length=100)
    created_at: datetime = Field(default_factory=_utcnow)
