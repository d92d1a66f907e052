"""Response envelope shared by every endpoint of the reference app.

    { "success": bool, "message": str, "data": <payload|null>, "timestamp": ISO-8601 }

Paged payloads are serialized as PagePayload with camelCase keys
(content, pageNumber, pageSize, totalElements, totalPages, last).
The HTTP layer itself lives outside this package; it only needs
ApiResponse, PagePayload and status_for().
"""

from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from src.domain.exceptions import (
    ArgumentCountMismatch,
    DuplicateKey,
    InvalidArgument,
    NotFound,
    SchemaMismatch,
    UnsupportedOperator,
)
from src.domain.models.query import Page

T = TypeVar("T")

OK = HTTPStatus.OK
CREATED = HTTPStatus.CREATED
DELETED = HTTPStatus.NO_CONTENT

_STATUS_BY_ERROR: list[tuple[type[Exception], HTTPStatus]] = [
    (NotFound, HTTPStatus.NOT_FOUND),
    (DuplicateKey, HTTPStatus.CONFLICT),
    (InvalidArgument, HTTPStatus.BAD_REQUEST),
    (SchemaMismatch, HTTPStatus.BAD_REQUEST),
    (UnsupportedOperator, HTTPStatus.BAD_REQUEST),
    (ArgumentCountMismatch, HTTPStatus.BAD_REQUEST),
    (ValidationError, HTTPStatus.BAD_REQUEST),
]


class ApiResponse(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    data: T | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: T | None = None, message: str = "OK") -> ApiResponse[T]:
        return cls(success=True, message=message, data=data)

    @classmethod
    def failure(cls, exc: Exception | str) -> ApiResponse[T]:
        message = exc if isinstance(exc, str) else getattr(exc, "message", str(exc))
        return cls(success=False, message=message, data=None)


class PagePayload(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    content: list[T]
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int
    last: bool

    @classmethod
    def from_page(cls, page: Page[T]) -> PagePayload[T]:
        return cls(
            content=page.items,
            page_number=page.page_number,
            page_size=page.page_size,
            total_elements=page.total_count,
            total_pages=page.total_pages,
            last=page.is_last,
        )


def status_for(exc: BaseException) -> HTTPStatus:
    """HTTP status the front end should send for exc (500 when unmapped)."""
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR
