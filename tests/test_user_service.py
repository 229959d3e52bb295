# tests/test_user_service.py

from __future__ import annotations

import uuid

from schemas import UserCreate
from services.result import ErrorKind
from services.user_service import UserService


def register(service: UserService, email: str = "grace@example.com", password: str = "hopper"):
    return service.add(UserCreate(name="Grace", email=email, password=password))


def test_add_stores_hashed_password(user_service: UserService) -> None:
    result = register(user_service)
    assert result.ok

    stored = user_service.get_by_email("grace@example.com").value
    assert stored.id == result.value.id
    assert stored.name == "Grace"
    assert stored.password_hash != "hopper"
    assert stored.password_hash.startswith("$argon2")


def test_add_rejects_blank_email(user_service: UserService) -> None:
    result = user_service.add(UserCreate(name="Nobody", email="  ", password="x"))
    assert result.error.kind is ErrorKind.VALIDATION
    assert result.error.message == "Email is required"


def test_get_by_id_and_unknown_user(user_service: UserService) -> None:
    user = register(user_service).value

    assert user_service.get_by_id(user.id).value.email == user.email
    assert user_service.get_by_id(uuid.uuid4()).error.kind is ErrorKind.NOT_FOUND
    assert user_service.get_by_email("missing@example.com").error.kind is ErrorKind.NOT_FOUND


def test_login_with_correct_password(user_service: UserService) -> None:
    user = register(user_service).value

    result = user_service.login("grace@example.com", "hopper")
    assert result.ok
    assert result.value.id == user.id


def test_login_failures_are_indistinguishable(user_service: UserService) -> None:
    register(user_service)

    wrong_password = user_service.login("grace@example.com", "wrong")
    unknown_email = user_service.login("nobody@example.com", "hopper")

    assert wrong_password.error == unknown_email.error
    assert wrong_password.error.kind is ErrorKind.AUTHENTICATION
    assert wrong_password.error.message == "Invalid credentials"


def test_duplicate_email_is_an_infrastructure_error(user_service: UserService) -> None:
    assert register(user_service).ok

    result = register(user_service, password="other")
    assert result.error.kind is ErrorKind.INFRASTRUCTURE


def test_padded_email_registers_and_logs_in(user_service: UserService) -> None:
    user = register(user_service, email="  x@y.com ").value
    assert user.email == "x@y.com"

    assert user_service.login("  x@y.com ", "hopper").value.id == user.id
    assert user_service.login("x@y.com", "hopper").ok
    assert user_service.get_by_email(" x@y.com").ok
