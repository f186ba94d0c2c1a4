"""
Lending Pydantic Schemas

Dates are ISO 8601 calendar dates ("2024-05-01"). The JSON keys "from"
and "to" map to lent_from / lent_to because `from` is a Python keyword.
"""

from datetime import date, datetime

from pydantic import Field

from library_api.schemas.book import BookResponse
from library_api.schemas.common import ObjectId, PageQuery, RequestModel, ResponseModel


class LendCreate(RequestModel):
    """Body of POST /lend"""

    user_id: ObjectId = Field(..., alias="user", description="Borrower id")
    book_id: ObjectId = Field(..., alias="book")
    lent_from: date = Field(..., alias="from", examples=["2024-05-01"])
    lent_to: date = Field(..., alias="to", examples=["2024-05-20"])
    remarks: str = Field(..., min_length=10, max_length=5000)


class ReturnCreate(RequestModel):
    """Body of POST /return"""

    user_id: ObjectId = Field(..., alias="user")
    book_id: ObjectId = Field(..., alias="book")
    remarks: str | None = Field(default=None, min_length=10, max_length=5000)


class HistoryQuery(PageQuery):
    """Filters for the returned-books history."""

    sortable = ("createdAt", "updatedAt", "returnedAt", "lentFrom", "lentTo")

    book_id: ObjectId | None = Field(default=None, alias="book")
    user_id: ObjectId | None = Field(default=None, alias="user")
    lent_from: date | None = Field(default=None, alias="from")
    lent_to: date | None = Field(default=None, alias="to")
    created_by: ObjectId | None = None


class BorrowerSummary(ResponseModel):
    id: str
    username: str
    full_name: str | None = None


class LendingResponse(ResponseModel):
    id: str
    user: BorrowerSummary
    book: BookResponse
    lent_from: date = Field(..., alias="from")
    lent_to: date = Field(..., alias="to")
    remarks: str
    returned_at: datetime | None = None
    return_remarks: str | None = None
    created_by: str | None = None
    created_at: datetime
