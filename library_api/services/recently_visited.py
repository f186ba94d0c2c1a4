"""
Recently Visited Books

Each user has one ordered list of book ids they opened, oldest first,
holding at most `capacity` entries (settings.recently_visited_capacity).

append_visit() is the whole policy and is a pure function:

    append_visit(["a", "b"], "c", capacity=2)  -> ["b", "c"]
    append_visit(["a", "b"], "a", capacity=2)  -> AlreadyVisitedError

A book already on the list is rejected rather than moved to the end.
When the list is full the oldest entry is evicted before appending.
"""

import logging
from collections.abc import Sequence

from fastapi import status
from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.models import Book, RecentlyVisited
from library_api.schemas.book import BookResponse
from library_api.schemas.reader import RecentlyVisitedResponse
from library_api.services.resource import DATASTORE_ERRORS
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)


class AlreadyVisitedError(ValueError):
    """The book is already on the recently visited list."""

    def __init__(self, book_id: str) -> None:
        self.book_id = book_id
        super().__init__(f"Book {book_id} is already in the recently visited list.")


def append_visit(history: Sequence[str], book_id: str, capacity: int) -> list[str]:
    """
    Return a new list with book_id appended.

    Raises:
        AlreadyVisitedError: if book_id is already in history
    """
    if book_id in history:
        raise AlreadyVisitedError(book_id)

    visits = list(history)
    while visits and len(visits) >= capacity:
        visits.pop(0)
    visits.append(book_id)
    return visits


def add(db: Session, user_id: str, book_id: str) -> ServiceResult:
    """
    Record that the user opened a book.

    201 when this creates the user's list, 200 afterwards.
    """
    capacity = get_settings().recently_visited_capacity

    try:
        if db.get(Book, book_id) is None:
            return ServiceResult.not_found("No book found with the provided ID.")

        record = db.execute(
            select(RecentlyVisited).where(RecentlyVisited.user_id == user_id)
        ).scalar_one_or_none()
        created = record is None
        history = [] if created else record.book_ids

        try:
            visits = append_visit(history, book_id, capacity)
        except AlreadyVisitedError as exc:
            logger.warning(f"Duplicate recent visit by {user_id}: {book_id}")
            return ServiceResult.conflict(str(exc))

        if created:
            record = RecentlyVisited(user_id=user_id, book_ids=visits)
            db.add(record)
        else:
            record.book_ids = visits
        db.commit()
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to add recently visited book for {user_id}")
        return ServiceResult.internal_error("Failed to add recently visited book.")

    logger.info(f"Recent visit recorded for {user_id}: {book_id}")
    if created:
        return ServiceResult.ok(
            {"bookIds": visits},
            "Book added to recently visited list.",
            status.HTTP_201_CREATED,
        )
    return ServiceResult.ok({"bookIds": visits}, "Recently visited list updated.")


def get(db: Session, user_id: str) -> ServiceResult:
    """The user's recently visited books with full details, oldest first."""
    try:
        record = db.execute(
            select(RecentlyVisited).where(RecentlyVisited.user_id == user_id)
        ).scalar_one_or_none()
        if record is None:
            return ServiceResult.not_found("No recently visited books found.")

        books = {
            book.id: book
            for book in db.execute(
                select(Book).where(Book.id.in_(record.book_ids))
            ).scalars()
        }
        # Books deleted since the visit are skipped
        visited = [
            BookResponse.model_validate(books[book_id])
            for book_id in record.book_ids
            if book_id in books
        ]
    except DATASTORE_ERRORS:
        logger.exception(f"Failed to fetch recently visited books for {user_id}")
        return ServiceResult.internal_error("Failed to fetch recently visited books.")

    payload = RecentlyVisitedResponse(total=len(visited), books=visited)
    return ServiceResult.ok(payload, "Recently visited books fetched successfully.")
