"""
Trending Pydantic Schemas

Each entry pairs a record with how many favourites point at it.
"""

from library_api.schemas.book import BookResponse
from library_api.schemas.common import ResponseModel
from library_api.schemas.publication import PublicationResponse
from library_api.schemas.subject import SubjectResponse
from library_api.schemas.writer import WriterResponse


class TrendingBook(ResponseModel):
    book: BookResponse
    count: int


class TrendingWriter(ResponseModel):
    writer: WriterResponse
    count: int


class TrendingPublication(ResponseModel):
    publication: PublicationResponse
    count: int


class TrendingSubject(ResponseModel):
    subject: SubjectResponse
    count: int
