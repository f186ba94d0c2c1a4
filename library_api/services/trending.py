"""
Trending Service

What members favourite most. Every favourite counts once for its book,
and once for the book's writer, publication and each of its subjects.

    books          more than 1 favourite
    writers        more than 2 favourites across their books
    publications   more than 2
    subjects       more than 2

Each list keeps the top TRENDING_LIMIT entries, highest count first.
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from library_api.models import Book, FavouriteBook, Publication, Subject, Writer, book_subjects
from library_api.schemas.book import BookResponse
from library_api.schemas.publication import PublicationResponse
from library_api.schemas.subject import SubjectResponse
from library_api.schemas.trending import (
    TrendingBook,
    TrendingPublication,
    TrendingSubject,
    TrendingWriter,
)
from library_api.schemas.writer import WriterResponse
from library_api.services.resource import DATASTORE_ERRORS
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)

TRENDING_LIMIT = 10


def _ranked(
    db: Session,
    key: Any,
    joins: list[tuple[Any, Any]],
    min_count: int,
) -> list[tuple[str, int]]:
    """(id, favourite count) pairs for `key`, best first."""
    count = func.count(FavouriteBook.id)
    stmt = select(key, count).select_from(FavouriteBook)
    for target, on in joins:
        stmt = stmt.join(target, on)
    stmt = (
        stmt.where(key.is_not(None))
        .group_by(key)
        .having(count > min_count)
        .order_by(count.desc(), key)
        .limit(TRENDING_LIMIT)
    )
    return [(row[0], row[1]) for row in db.execute(stmt)]


def _trending(
    db: Session,
    label: str,
    model: type,
    ranking: Callable[[], list[tuple[str, int]]],
    build: Callable[[Any, int], BaseModel],
) -> ServiceResult:
    try:
        ranked = ranking()
        records = {
            record.id: record
            for record in db.execute(
                select(model).where(model.id.in_([record_id for record_id, _ in ranked]))
            ).scalars()
        }
        entries = [
            build(records[record_id], total)
            for record_id, total in ranked
            if record_id in records
        ]
    except DATASTORE_ERRORS:
        logger.exception(f"Failed to fetch trending {label}")
        return ServiceResult.internal_error(f"Failed to fetch trending {label}.")

    if not entries:
        return ServiceResult.not_found(f"No trending {label} found.")
    return ServiceResult.ok(entries, f"{len(entries)} trending {label} fetched successfully.")


def books(db: Session) -> ServiceResult:
    return _trending(
        db,
        "books",
        Book,
        lambda: _ranked(db, FavouriteBook.book_id, [], min_count=1),
        lambda book, total: TrendingBook(book=BookResponse.model_validate(book), count=total),
    )


def writers(db: Session) -> ServiceResult:
    return _trending(
        db,
        "writers",
        Writer,
        lambda: _ranked(
            db,
            Book.writer_id,
            [(Book, Book.id == FavouriteBook.book_id)],
            min_count=2,
        ),
        lambda writer, total: TrendingWriter(
            writer=WriterResponse.model_validate(writer), count=total
        ),
    )


def publications(db: Session) -> ServiceResult:
    return _trending(
        db,
        "publications",
        Publication,
        lambda: _ranked(
            db,
            Book.publication_id,
            [(Book, Book.id == FavouriteBook.book_id)],
            min_count=2,
        ),
        lambda publication, total: TrendingPublication(
            publication=PublicationResponse.model_validate(publication), count=total
        ),
    )


def subjects(db: Session) -> ServiceResult:
    return _trending(
        db,
        "subjects",
        Subject,
        lambda: _ranked(
            db,
            book_subjects.c.subject_id,
            [(book_subjects, book_subjects.c.book_id == FavouriteBook.book_id)],
            min_count=2,
        ),
        lambda subject, total: TrendingSubject(
            subject=SubjectResponse.model_validate(subject), count=total
        ),
    )
