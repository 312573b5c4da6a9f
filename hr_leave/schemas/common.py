"""Common Schemas — success envelope and pagination metadata shared by all routes."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from hr_leave.core.pagination import PageMeta

T = TypeVar("T")


class PaginationMetadata(BaseModel):
    current_page: int
    page_size: int
    total_pages: int
    total_items: int

    @classmethod
    def from_meta(cls, meta: PageMeta) -> "PaginationMetadata":
        return cls(
            current_page=meta.current_page,
            page_size=meta.page_size,
            total_pages=meta.total_pages,
            total_items=meta.total_items,
        )


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for every non-auth success response."""
    success: bool = True
    message: str
    data: T | None = None
