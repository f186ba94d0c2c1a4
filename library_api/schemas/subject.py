"""
Subject Pydantic Schemas

Schemas for subject operations. Publications and pronouns follow the
same small shape: a unique name plus the isActive flag.
"""

from pydantic import Field

from library_api.schemas.common import (
    AuditResponse,
    ListQuery,
    RequestModel,
    ResponseModel,
    UpdateModel,
)


class SubjectCreate(RequestModel):
    """Schema for creating a new subject."""

    name: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Subject name",
        examples=["Fiction", "History"],
    )
    is_active: bool = Field(default=True)


class SubjectUpdate(UpdateModel):
    """Schema for updating a subject. All fields optional."""

    name: str | None = Field(default=None, min_length=3, max_length=100)
    is_active: bool | None = None


class SubjectListQuery(ListQuery):
    """Filters for GET /subjects"""

    name: str | None = Field(default=None, max_length=100)


class SubjectResponse(AuditResponse):
    name: str


class SubjectSummary(ResponseModel):
    """Subject embedded in other responses (e.g. a book's subjects)."""

    id: str
    name: str
