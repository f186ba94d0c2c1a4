"""
Book Pydantic Schemas

The richest schemas of the API, handling:
- References to writer, publication, translator (ids in requests,
  embedded summaries in responses)
- The subject list, which updates can replace or edit incrementally
- Price with two decimal places
"""

from decimal import Decimal

from pydantic import Field, model_validator

from library_api.schemas.common import (
    AuditResponse,
    ListQuery,
    ObjectId,
    RequestModel,
    UpdateModel,
    UrlStr,
)
from library_api.schemas.publication import PublicationSummary
from library_api.schemas.subject import SubjectSummary
from library_api.schemas.translator import TranslatorSummary
from library_api.schemas.writer import WriterSummary


class BookCreate(RequestModel):
    """
    Schema for creating a new book.

    Relationships are given as ids:
        {"name": "1984", "writer": "<writer id>", "subjects": ["<id>", ...]}
    """

    name: str = Field(
        ...,
        min_length=3,
        max_length=100,
        description="Book title (unique)",
        examples=["Pride and Prejudice"],
    )
    image: UrlStr | None = Field(default=None, description="Cover image URL")
    best_seller: bool = Field(default=False)
    review: float = Field(default=0, ge=0, le=5)

    writer_id: ObjectId | None = Field(default=None, alias="writer")
    publication_id: ObjectId | None = Field(default=None, alias="publication")
    translator_id: ObjectId | None = Field(default=None, alias="translator")
    subjects: list[ObjectId] = Field(default_factory=list)

    page: int | None = Field(default=None, ge=1, le=50000)
    edition: int | None = Field(default=None, ge=1, le=50)
    summary: str | None = Field(default=None, min_length=10, max_length=1000)
    price: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    stock_available: int = Field(default=0, ge=0)
    is_active: bool = Field(default=True)


class BookUpdate(UpdateModel):
    """
    Schema for updating a book. All fields optional.

    Subjects can be replaced wholesale with `subjects`, or edited with
    `addSubjects` / `removeSubjects`; the two styles cannot be mixed.
    """

    nullable = (
        "image",
        "writer_id",
        "publication_id",
        "translator_id",
        "page",
        "edition",
        "summary",
        "price",
    )

    name: str | None = Field(default=None, min_length=3, max_length=100)
    image: UrlStr | None = None
    best_seller: bool | None = None
    review: float | None = Field(default=None, ge=0, le=5)

    writer_id: ObjectId | None = Field(default=None, alias="writer")
    publication_id: ObjectId | None = Field(default=None, alias="publication")
    translator_id: ObjectId | None = Field(default=None, alias="translator")
    subjects: list[ObjectId] | None = None
    add_subjects: list[ObjectId] | None = Field(default=None, min_length=1)
    remove_subjects: list[ObjectId] | None = Field(default=None, min_length=1)

    page: int | None = Field(default=None, ge=1, le=50000)
    edition: int | None = Field(default=None, ge=1, le=50)
    summary: str | None = Field(default=None, min_length=10, max_length=1000)
    price: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    stock_available: int | None = Field(default=None, ge=0)
    is_active: bool | None = None

    @model_validator(mode="after")
    def subjects_edited_one_way(self) -> "BookUpdate":
        if self.subjects is not None and (self.add_subjects or self.remove_subjects):
            raise ValueError(
                "use either subjects or addSubjects/removeSubjects, not both"
            )
        return self


class BookListQuery(ListQuery):
    """Filters for GET /books"""

    sortable = (
        "createdAt",
        "updatedAt",
        "name",
        "price",
        "review",
        "page",
        "edition",
        "stockAvailable",
    )

    name: str | None = Field(default=None, max_length=100)
    summary: str | None = Field(default=None, max_length=100)
    best_seller: bool | None = None
    review: float | None = Field(default=None, ge=0, le=5)
    writer_id: ObjectId | None = Field(default=None, alias="writer")
    publication_id: ObjectId | None = Field(default=None, alias="publication")
    translator_id: ObjectId | None = Field(default=None, alias="translator")
    subject: ObjectId | None = None
    edition: int | None = Field(default=None, ge=1, le=50)
    price: Decimal | None = Field(default=None, ge=0)
    stock_available: int | None = Field(default=None, ge=0)


class BookResponse(AuditResponse):
    """Book with its references expanded."""

    name: str
    image: str | None = None
    best_seller: bool
    review: float
    page: int | None = None
    edition: int | None = None
    summary: str | None = None
    price: Decimal | None = None
    stock_available: int

    writer: WriterSummary | None = None
    publication: PublicationSummary | None = None
    translator: TranslatorSummary | None = None
    subjects: list[SubjectSummary] = Field(default_factory=list)
