"""
Translator Pydantic Schemas

Translators share the writer shape: optional portrait, a biography of
100 to 5000 characters and a review score between 0 and 5.
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


class TranslatorCreate(RequestModel):
    """Schema for creating a new translator."""

    name: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Translator's full name",
        examples=["Gregory Rabassa"],
    )
    image: UrlStr | None = Field(
        default=None,
        description="URL to the translator's portrait",
    )
    summary: str | None = Field(
        default=None,
        min_length=100,
        max_length=5000,
        description="Short biography",
    )
    review: float = Field(default=0, ge=0, le=5)
    is_active: bool = Field(default=True)


class TranslatorUpdate(UpdateModel):
    """Schema for updating a translator. All fields optional."""

    nullable = ("image", "summary")

    name: str | None = Field(default=None, min_length=3, max_length=100)
    image: UrlStr | None = None
    summary: str | None = Field(default=None, min_length=100, max_length=5000)
    review: float | None = Field(default=None, ge=0, le=5)
    is_active: bool | None = None


class TranslatorListQuery(ListQuery):
    sortable = ("createdAt", "updatedAt", "name", "review")

    name: str | None = Field(default=None, max_length=100)
    review: float | None = Field(default=None, ge=0, le=5)


class TranslatorResponse(AuditResponse):
    name: str
    image: str | None = None
    summary: str | None = None
    review: float


class TranslatorSummary(ResponseModel):
    """Translator embedded in a translated book."""

    id: str
    name: str
    image: str | None = None
