"""
Site Content Pydantic Schemas

FAQs are a regular resource. About us, terms and conditions and the
privacy policy are single documents with a details text.
"""

from pydantic import Field

from library_api.schemas.common import AuditResponse, ListQuery, RequestModel, UpdateModel


class FaqCreate(RequestModel):
    question: str = Field(
        ...,
        min_length=10,
        max_length=500,
        examples=["How many books can I borrow at once?"],
    )
    answer: str = Field(..., min_length=10, max_length=5000)
    is_active: bool = Field(default=True)


class FaqUpdate(UpdateModel):
    question: str | None = Field(default=None, min_length=10, max_length=500)
    answer: str | None = Field(default=None, min_length=10, max_length=5000)
    is_active: bool | None = None


class FaqListQuery(ListQuery):
    sortable = ("createdAt", "updatedAt", "question")

    question: str | None = Field(default=None, max_length=500)


class FaqResponse(AuditResponse):
    question: str
    answer: str


class SiteDocumentWrite(RequestModel):
    """Body of POST /site/<kind>: creates the page or replaces its text."""

    details: str = Field(..., min_length=10, max_length=20000)
    is_active: bool = Field(default=True)


class SiteDocumentResponse(AuditResponse):
    kind: str
    details: str
