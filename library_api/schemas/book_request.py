"""
Book Request Pydantic Schemas

Requests describe a book the library does not hold, so writer,
publication and subjects are free text rather than ids.
"""

from datetime import datetime

from pydantic import Field

from library_api.schemas.book import BookResponse
from library_api.schemas.common import ObjectId, PageQuery, RequestModel, ResponseModel

SubjectName = str


class BookRequestCreate(RequestModel):
    name: str = Field(..., min_length=3, max_length=100, examples=["The Name of the Wind"])
    writer: str | None = Field(default=None, min_length=3, max_length=100)
    publication: str | None = Field(default=None, min_length=3, max_length=100)
    subjects: list[SubjectName] = Field(default_factory=list, max_length=20)
    edition: str | None = Field(default=None, min_length=1, max_length=50)
    page: int | None = Field(default=None, ge=1, le=50000)
    summary: str | None = Field(default=None, min_length=10, max_length=1000)


class BookRequestParams(RequestModel):
    """Path parameters of /users/requested-books/{requestId}/image"""

    request_id: ObjectId


class BookRequestListQuery(PageQuery):
    name: str | None = Field(default=None, max_length=100)
    requested_by: ObjectId | None = None


class BookRequestResponse(ResponseModel):
    id: str
    requested_by: str
    name: str
    writer: str | None = None
    publication: str | None = None
    subjects: list[str] = Field(default_factory=list)
    edition: str | None = None
    page: int | None = None
    summary: str | None = None
    image: str | None = None
    created_at: datetime


class DesiredBookResponse(ResponseModel):
    """A title several members asked for, with the catalogue match if any."""

    name: str
    count: int
    book: BookResponse | None = None
