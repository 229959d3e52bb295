from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication"
    INFRASTRUCTURE = "infrastructure"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str = ""


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of a service call: either a value or a typed error, never both"""
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> "ServiceResult[T]":
        return cls(error=ServiceError(kind=kind, message=message))

    @classmethod
    def validation(cls, message: str) -> "ServiceResult[T]":
        return cls.failure(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls) -> "ServiceResult[T]":
        return cls.failure(ErrorKind.NOT_FOUND)

    @classmethod
    def infrastructure(cls) -> "ServiceResult[T]":
        return cls.failure(ErrorKind.INFRASTRUCTURE, INTERNAL_ERROR_MESSAGE)
