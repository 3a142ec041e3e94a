"""
Bookmarks API — Service Results
================================

What:  Explicit success/failure values returned by BookmarkService.
Why:   Expected outcomes (missing bookmark, empty field) are data, not control
       flow. The route layer inspects the result and picks the HTTP status;
       nothing below the routes knows about HTTP.

    Result.success(bookmark)                → ok, value set
    Result.failure(ServiceError.not_found()) → not ok, error set
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")

BOOKMARK_NOT_FOUND = "Bookmark not found"


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    VALIDATION = "validation"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str
    fields: List[FieldError] = field(default_factory=list)

    @classmethod
    def not_found(cls, message: str = BOOKMARK_NOT_FOUND) -> "ServiceError":
        return cls(kind=ErrorKind.NOT_FOUND, message=message)

    @classmethod
    def validation(cls, fields: List[FieldError]) -> "ServiceError":
        return cls(kind=ErrorKind.VALIDATION, message="Validation failed", fields=list(fields))


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)
