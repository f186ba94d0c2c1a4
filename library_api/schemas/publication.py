"""
Publication Pydantic Schemas
"""

from pydantic import Field

from library_api.schemas.common import (
    AuditResponse,
    ListQuery,
    RequestModel,
    ResponseModel,
    UpdateModel,
)


class PublicationCreate(RequestModel):
    """Schema for creating a new publication."""

    name: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Publishing house name",
        examples=["Penguin Books"],
    )
    is_active: bool = Field(default=True)


class PublicationUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=3, max_length=100)
    is_active: bool | None = None


class PublicationListQuery(ListQuery):
    name: str | None = Field(default=None, max_length=100)


class PublicationResponse(AuditResponse):
    name: str


class PublicationSummary(ResponseModel):
    id: str
    name: str
