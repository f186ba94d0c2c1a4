"""
Favourite Books

Members keep a list of favourite books. Each (user, book) pair is one
FavouriteBook row; a unique constraint backs the duplicate check.
"""

import logging

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.models import Book, FavouriteBook
from library_api.schemas.book import BookResponse
from library_api.schemas.reader import FavouriteBooksResponse, RemovedFavouriteResponse
from library_api.services.resource import DATASTORE_ERRORS
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)


def _find(db: Session, user_id: str, book_id: str) -> FavouriteBook | None:
    return db.execute(
        select(FavouriteBook).where(
            FavouriteBook.user_id == user_id,
            FavouriteBook.book_id == book_id,
        )
    ).scalar_one_or_none()


def add(db: Session, user_id: str, book_id: str) -> ServiceResult:
    """Mark a book as favourite: 201 for the first one, 200 afterwards."""
    try:
        if db.get(Book, book_id) is None:
            return ServiceResult.not_found("No book found with the provided ID.")

        if _find(db, user_id, book_id) is not None:
            logger.warning(f"Duplicate favourite by {user_id}: {book_id}")
            return ServiceResult.conflict("Book is already in favourite books.")

        count = db.execute(
            select(func.count()).select_from(FavouriteBook).where(
                FavouriteBook.user_id == user_id
            )
        ).scalar_one()

        db.add(FavouriteBook(user_id=user_id, book_id=book_id))
        db.commit()
    except IntegrityError:
        # Another request added the same pair after the duplicate check
        db.rollback()
        logger.warning(
            f"Integrity error adding favourite for {user_id}: {book_id}", exc_info=True
        )
        return ServiceResult.conflict("Book is already in favourite books.")
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to add favourite book for {user_id}")
        return ServiceResult.internal_error("Failed to add favourite book.")

    logger.info(f"Favourite added for {user_id}: {book_id}")
    data = {"bookId": book_id, "total": count + 1}
    if count == 0:
        return ServiceResult.ok(
            data,
            "Favourite books list created successfully.",
            status.HTTP_201_CREATED,
        )
    return ServiceResult.ok(data, "Book added to favourite books.")


def get(db: Session, user_id: str) -> ServiceResult:
    try:
        favourites = db.execute(
            select(FavouriteBook)
            .where(FavouriteBook.user_id == user_id)
            .order_by(FavouriteBook.created_at, FavouriteBook.id)
        ).scalars().all()
        books = [BookResponse.model_validate(favourite.book) for favourite in favourites]
    except DATASTORE_ERRORS:
        logger.exception(f"Failed to fetch favourite books for {user_id}")
        return ServiceResult.internal_error("Failed to fetch favourite books.")

    if not books:
        return ServiceResult.not_found("No favourite books found.")

    payload = FavouriteBooksResponse(total=len(books), favourite_books=books)
    return ServiceResult.ok(payload, "Favourite books fetched successfully.")


def remove(db: Session, user_id: str, book_id: str) -> ServiceResult:
    try:
        favourite = _find(db, user_id, book_id)
        if favourite is None:
            return ServiceResult.not_found("Book is not in favourite books.")
        db.delete(favourite)
        db.commit()
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to remove favourite book for {user_id}")
        return ServiceResult.internal_error("Failed to remove favourite book.")

    logger.info(f"Favourite removed for {user_id}: {book_id}")
    return ServiceResult.ok(
        RemovedFavouriteResponse(removed_book_id=book_id),
        "Book removed from favourite books.",
    )
