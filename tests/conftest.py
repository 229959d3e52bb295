# tests/conftest.py

from __future__ import annotations

import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from config import Settings
from context import AppContext
from database import build_engine, create_db_and_tables
from main import create_app
from repositories.task_repository import TaskRepository
from repositories.user_repository import UserRepository
from services.task_service import TaskService
from services.user_service import UserService
from utils.passwords import PasswordHasher

from .helpers import TEST_JWT


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Auth-enabled settings backed by a SQLite file per test."""
    return Settings(
        default_connection=f"sqlite:///{tmp_path / 'tasks.sqlite3'}",
        jwt=TEST_JWT,
        log_level="DEBUG",
    )


@pytest.fixture()
def context(settings: Settings) -> AppContext:
    return AppContext.create(settings)


@pytest.fixture()
def engine(settings: Settings):
    engine = build_engine(settings.default_connection)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def task_repository(engine, context: AppContext) -> TaskRepository:
    return TaskRepository(engine, context)


@pytest.fixture()
def task_service(task_repository: TaskRepository, context: AppContext) -> TaskService:
    return TaskService(task_repository, context)


@pytest.fixture()
def user_service(engine, context: AppContext) -> UserService:
    return UserService(UserRepository(engine, context), PasswordHasher(), context)


@pytest.fixture()
def client(settings: Settings):
    """In-process client for the auth-enabled app; lifespan creates the tables."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture()
def open_client(tmp_path: Path):
    """Client for an app running with auth disabled."""
    settings = Settings(default_connection=f"sqlite:///{tmp_path / 'open.sqlite3'}")
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture()
def registered_user(client: TestClient) -> dict:
    body = {"name": "Ada", "email": "ada@example.com", "password": "s3cret"}
    response = client.post("/users/register", json=body)
    assert response.status_code == 201
    return {**response.json(), "password": body["password"]}


@pytest.fixture()
def auth_headers(client: TestClient, registered_user: dict) -> dict:
    response = client.post(
        "/users/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def task_body():
    """Factory for a valid POST /tasks body."""

    def make(**overrides) -> dict:
        body = {
            "title": "Buy milk",
            "description": "2 litres",
            "dueDate": "2025-01-01",
            "status": 0,
            "userId": str(uuid.uuid4()),
        }
        body.update(overrides)
        return body

    return make
