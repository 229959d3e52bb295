import uuid
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String, Text, Uuid
from pydantic import field_validator
from sqlmodel import SQLModel, Field


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Due dates are stored as naive UTC; aware values are shifted to UTC first"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskStatus(IntEnum):
    PENDING = 0
    IN_PROGRESS = 1
    COMPLETED = 2


class Task(SQLModel):
    """Task entity as returned by the repository"""
    id: uuid.UUID
    title: str
    description: str = ""
    due_date: Optional[datetime] = None
    status: TaskStatus = TaskStatus.PENDING
    # Owner reference; not a foreign key
    user_id: uuid.UUID

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class User(SQLModel):
    """User entity as returned by the repository"""
    id: uuid.UUID
    name: str = ""
    email: str
    password_hash: str


class TaskRecord(SQLModel, table=True):
    """Tasks table; rows are read and written with SQL text in repositories/"""
    __tablename__ = "Tasks"

    id: uuid.UUID = Field(sa_column=Column("Id", Uuid, primary_key=True))
    title: str = Field(sa_column=Column("Title", String(200), nullable=False))
    description: str = Field(sa_column=Column("Description", Text, nullable=False))
    due_date: Optional[datetime] = Field(sa_column=Column("DueDate", DateTime, nullable=True))
    status: int = Field(sa_column=Column("Status", Integer, nullable=False))
    user_id: uuid.UUID = Field(sa_column=Column("UserId", Uuid, nullable=False, index=True))


class UserRecord(SQLModel, table=True):
    """Users table"""
    __tablename__ = "Users"

    id: uuid.UUID = Field(sa_column=Column("Id", Uuid, primary_key=True))
    name: str = Field(sa_column=Column("Name", String(200), nullable=False))
    email: str = Field(sa_column=Column("Email", String(256), nullable=False, unique=True))
    password_hash: str = Field(sa_column=Column("PasswordHash", String(512), nullable=False))
