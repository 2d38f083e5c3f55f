"""Service error taxonomy and the tagged result returned at the service boundary.

Services raise :class:`ServiceError` subclasses internally. Public service
functions are wrapped with :func:`habitsync.core.utils.decorators.service_boundary`,
which turns those errors (and storage failures) into a :class:`ServiceResult`
so no exception crosses into the HTTP layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    UNAUTHENTICATED = "unauthenticated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INFRASTRUCTURE = "infrastructure"


class ServiceError(ValueError):
    """Base class; ``str(exc)`` is the machine-readable code."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, code: str, message: Optional[str] = None) -> None:
        super().__init__(code)
        self.code = code
        self.message = message or code.replace("_", " ").capitalize()


class InvalidArgument(ServiceError):
    kind = ErrorKind.INVALID_ARGUMENT


class Unauthenticated(ServiceError):
    kind = ErrorKind.UNAUTHENTICATED


class NotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND


class Conflict(ServiceError):
    kind = ErrorKind.CONFLICT


class DuplicateKey(Conflict):
    """A natural (non-surrogate) unique key collided on insert."""


class Infrastructure(ServiceError):
    kind = ErrorKind.INFRASTRUCTURE


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    code: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "ServiceResult":
        return cls(value=value)

    @classmethod
    def failure(cls, exc: ServiceError) -> "ServiceResult":
        return cls(error=exc.kind, code=exc.code, message=exc.message)


__all__ = [
    "ErrorKind",
    "ServiceError",
    "InvalidArgument",
    "Unauthenticated",
    "NotFound",
    "Conflict",
    "DuplicateKey",
    "Infrastructure",
    "ServiceResult",
]
