"""
Shared Pydantic Schemas
Response envelope, pagination and base request/response models
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class RequestModel(BaseModel):
    """
    Base for request bodies

    Accepts camelCase keys (eventId, branchOrder...) as well as snake_case,
    and rejects unknown fields.
    """

    class Config:
        extra = "forbid"
        alias_generator = to_camel
        populate_by_name = True


class ORMModel(BaseModel):
    """Base for responses built from SQLAlchemy objects"""

    class Config:
        from_attributes = True


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope shared by every endpoint"""

    success: bool = True
    message: Optional[str] = None
    data: Optional[DataT] = None


class Pagination(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int


class PaginatedResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: List[DataT]
    pagination: Pagination


class PageRequest(RequestModel):
    """Pagination parameters sent in POST list bodies"""

    per_page: int = Field(10, ge=1, le=100)
    page_number: int = Field(1, ge=1)

    @property
    def skip(self) -> int:
        return (self.page_number - 1) * self.per_page


def paginate(page: PageRequest, total: int) -> dict:
    """Pagination block for a PaginatedResponse"""
    return {
        "page": page.page_number,
        "per_page": page.per_page,
        "total": total,
        "total_pages": (total + page.per_page - 1) // page.per_page,
    }


class FileMeta(BaseModel):
    """Reference to a stored upload"""

    path: str
    original_name: str
    mime_type: str
    size: int

    class Config:
        extra = "forbid"
        alias_generator = to_camel
        populate_by_name = True
