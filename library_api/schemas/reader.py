"""
Reader Activity Pydantic Schemas

Favourites and the recently visited list are keyed by the book id in
the path; responses embed full book details.
"""

from pydantic import Field

from library_api.schemas.book import BookResponse
from library_api.schemas.common import ObjectId, RequestModel, ResponseModel


class BookIdParams(RequestModel):
    """Path parameters of /users/favourites/{bookId} and friends."""

    book_id: ObjectId


class FavouriteBooksResponse(ResponseModel):
    total: int
    favourite_books: list[BookResponse] = Field(default_factory=list)


class RemovedFavouriteResponse(ResponseModel):
    removed_book_id: str


class RecentlyVisitedResponse(ResponseModel):
    """Books oldest first, most recent last."""

    total: int
    books: list[BookResponse] = Field(default_factory=list)
