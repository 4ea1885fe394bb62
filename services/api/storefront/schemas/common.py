"""Common schemas used across the core."""

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Structured error detail."""

    code: str
    message: str
    detail: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format.

    Format: { "error": { "code": str, "message": str, "detail": object } }
    """

    error: ErrorDetail


class Page(BaseModel, Generic[T]):
    """A bounded slice of a filtered, ordered collection."""

    items: list[T] = Field(default_factory=list)
    total_pages: int = Field(alias="totalPages", default=0, ge=0)
    selected_page: int = Field(alias="selectedPage", default=0)

    model_config = {"populate_by_name": True}
