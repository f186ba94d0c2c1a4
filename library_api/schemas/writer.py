"""
Writer Pydantic Schemas

Writers have an optional portrait, a biography of 100 to 5000
characters and a review score between 0 and 5.
"""

from pydantic import Field

from library_api.schemas.common import (
    AuditResponse,
    ListQuery,
    RequestModel,
    ResponseModel,
    UpdateModel,
    UrlStr,
)


class WriterCreate(RequestModel):
    """Schema for creating a new writer."""

    name: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Writer's full name",
        examples=["Humayun Ahmed"],
    )
    image: UrlStr | None = Field(
        default=None,
        description="URL to the writer's portrait",
    )
    summary: str | None = Field(
        default=None,
        min_length=100,
        max_length=5000,
        description="Short biography",
    )
    review: float = Field(default=0, ge=0, le=5)
    is_active: bool = Field(default=True)


class WriterUpdate(UpdateModel):
    """Schema for updating a writer. All fields optional."""

    nullable = ("image", "summary")

    name: str | None = Field(default=None, min_length=3, max_length=100)
    image: UrlStr | None = None
    summary: str | None = Field(default=None, min_length=100, max_length=5000)
    review: float | None = Field(default=None, ge=0, le=5)
    is_active: bool | None = None


class WriterListQuery(ListQuery):
    sortable = ("createdAt", "updatedAt", "name", "review")

    name: str | None = Field(default=None, max_length=100)
    review: float | None = Field(default=None, ge=0, le=5)


class WriterResponse(AuditResponse):
    name: str
    image: str | None = None
    summary: str | None = None
    review: float


class WriterSummary(ResponseModel):
    """Writer embedded in a book response."""

    id: str
    name: str
    image: str | None = None
