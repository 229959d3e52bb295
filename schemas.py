import uuid
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime

from models import TaskStatus, to_naive_utc


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case accepted too"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TaskCreate(CamelModel):
    """Schema for creating a new task; the service rejects a blank title"""
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str = Field("", max_length=200)
    description: str = Field("", max_length=1000)
    due_date: Optional[datetime] = None
    status: TaskStatus = TaskStatus.PENDING
    user_id: uuid.UUID

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class TaskUpdate(CamelModel):
    """Schema for updating a task; every field overwrites the stored value"""
    title: str = Field("", max_length=200)
    description: str = Field("", max_length=1000)
    due_date: Optional[datetime] = None
    status: TaskStatus = TaskStatus.PENDING
    user_id: uuid.UUID

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class TaskResponse(CamelModel):
    """Schema for task response"""
    id: uuid.UUID
    title: str
    description: str
    due_date: Optional[datetime]
    status: TaskStatus
    user_id: uuid.UUID


class UserCreate(CamelModel):
    """Schema for registering a user"""
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str = Field("", max_length=200)
    email: str = Field("", max_length=256)
    password: str = Field(
        "",
        validation_alias=AliasChoices("password", "passwordHash", "password_hash"),
    )


class UserResponse(CamelModel):
    """Schema for user response; the password hash is never exposed"""
    id: uuid.UUID
    name: str
    email: str


class LoginRequest(CamelModel):
    email: str
    password: str


class AuthResponse(CamelModel):
    """Token issued on successful login"""
    token: str
    user_id: uuid.UUID
    email: str
