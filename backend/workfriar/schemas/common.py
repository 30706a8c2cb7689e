from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every endpoint."""

    status: bool = True
    message: str = ""
    data: T


class PageRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    total: int
    page: int
    pages: int
    limit: int


def envelope(data: Any = None, message: str = "", status: bool = True) -> dict:
    return {"status": status, "message": message, "data": [] if data is None else data}


def paginate(total: int, page: PageRequest) -> Pagination:
    pages = (total + page.limit - 1) // page.limit if total else 0
    return Pagination(total=total, page=page.page, pages=pages, limit=page.limit)
