from typing import List, Generic, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


# Paginated response wrapper — used by all list endpoints
class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    total: int
    page: int
    limit: int
    total_pages: int


def paginate(items: List, page: int, limit: int) -> dict:
    """Slice an in-memory list into the fields of a PaginatedResponse."""
    total = len(items)
    start = (page - 1) * limit
    return {
        "data": items[start:start + limit],
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": -(-total // limit) if total else 0,
    }


# Error responses
class ErrorResponse(BaseModel):
    error: str
    message: str


class SlotUnavailableError(ErrorResponse):
    conflicting_booking_ids: List[str]
