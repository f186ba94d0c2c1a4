"""
Lending Service

Handing books out, taking them back, and the circulation history.

Lend checks, in this order:
    1. the borrower exists                          404
    2. the book exists                              404
    3. the book is not out already                  409
    4. the period does not start in the past        400
    5. the period ends after it starts, and within
       settings.lending_max_days of the start       400

A return closes the open lending of (user, book). Closed lendings are
the history: GET /books/history for staff, GET /users/history for the
caller's own.
"""

import logging
import math
from datetime import date, timedelta

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.models import Book, Lending, User
from library_api.models.base import utcnow
from library_api.schemas.common import Page
from library_api.schemas.lending import HistoryQuery, LendCreate, LendingResponse, ReturnCreate
from library_api.services.resource import DATASTORE_ERRORS
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)

HISTORY_SORT_COLUMNS = {
    "createdAt": Lending.created_at,
    "updatedAt": Lending.updated_at,
    "returnedAt": Lending.returned_at,
    "lentFrom": Lending.lent_from,
    "lentTo": Lending.lent_to,
}


def _open_lending(db: Session, book_id: str, user_id: str | None = None) -> Lending | None:
    stmt = select(Lending).where(Lending.book_id == book_id, Lending.returned_at.is_(None))
    if user_id is not None:
        stmt = stmt.where(Lending.user_id == user_id)
    return db.execute(stmt).scalars().first()


def _check_period(lent_from: date, lent_to: date, today: date) -> str | None:
    """Why the lending period is unacceptable, or None."""
    max_days = get_settings().lending_max_days
    if lent_from < today:
        return "Lending cannot start in the past."
    if lent_to <= lent_from:
        return "Return date must be after the lending date."
    if lent_to > lent_from + timedelta(days=max_days):
        return f"Books can be lent for at most {max_days} days."
    return None


def lend(
    db: Session,
    requester_id: str,
    data: LendCreate,
    today: date | None = None,
) -> ServiceResult:
    """Lend a book to a member."""
    today = today or date.today()

    try:
        if db.get(User, data.user_id) is None:
            return ServiceResult.not_found("No user found with the provided ID.")
        if db.get(Book, data.book_id) is None:
            return ServiceResult.not_found("No book found with the provided ID.")
        if _open_lending(db, data.book_id) is not None:
            logger.warning(f"Book {data.book_id} is already lent")
            return ServiceResult.conflict("Book is already lent.")

        problem = _check_period(data.lent_from, data.lent_to, today)
        if problem is not None:
            return ServiceResult.fail(problem)

        lending = Lending(
            user_id=data.user_id,
            book_id=data.book_id,
            lent_from=data.lent_from,
            lent_to=data.lent_to,
            remarks=data.remarks,
            created_by=requester_id,
        )
        db.add(lending)
        db.commit()
        db.refresh(lending)
        payload = LendingResponse.model_validate(lending)
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to lend book {data.book_id}")
        return ServiceResult.internal_error("Failed to lend book.")

    logger.info(f"Book {data.book_id} lent to {data.user_id} until {data.lent_to}")
    return ServiceResult.ok(payload, "Book lent successfully.", status.HTTP_201_CREATED)


def lent_books(db: Session, user_id: str) -> ServiceResult:
    """Books the user currently has out, earliest due first."""
    try:
        lendings = db.execute(
            select(Lending)
            .where(Lending.user_id == user_id, Lending.returned_at.is_(None))
            .order_by(Lending.lent_to, Lending.id)
        ).scalars().all()
        items = [LendingResponse.model_validate(lending) for lending in lendings]
    except DATASTORE_ERRORS:
        logger.exception(f"Failed to fetch lent books for {user_id}")
        return ServiceResult.internal_error("Failed to fetch lent books.")

    if not items:
        return ServiceResult.not_found("No lent books found.")
    return ServiceResult.ok(items, f"{len(items)} lent books fetched successfully.")


def return_book(db: Session, requester_id: str, data: ReturnCreate) -> ServiceResult:
    try:
        lending = _open_lending(db, data.book_id, data.user_id)
        if lending is None:
            return ServiceResult.not_found("No lent book found for this user.")

        lending.returned_at = utcnow()
        lending.return_remarks = data.remarks
        db.commit()
        db.refresh(lending)
        payload = LendingResponse.model_validate(lending)
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to return book {data.book_id}")
        return ServiceResult.internal_error("Failed to return book.")

    logger.info(f"Book {data.book_id} returned by {data.user_id} (recorded by {requester_id})")
    return ServiceResult.ok(payload, "Book returned successfully.")


def history(db: Session, query: HistoryQuery) -> ServiceResult:
    """Returned lendings, filtered and paginated like a resource list."""
    clauses = [Lending.returned_at.is_not(None)]
    if query.book_id is not None:
        clauses.append(Lending.book_id == query.book_id)
    if query.user_id is not None:
        clauses.append(Lending.user_id == query.user_id)
    if query.lent_from is not None:
        clauses.append(Lending.lent_from >= query.lent_from)
    if query.lent_to is not None:
        clauses.append(Lending.lent_to <= query.lent_to)
    if query.created_by is not None:
        clauses.append(Lending.created_by == query.created_by)

    column = HISTORY_SORT_COLUMNS[query.sort.lstrip("-")]
    ordering = column.desc() if query.sort.startswith("-") else column.asc()

    try:
        total = db.execute(
            select(func.count()).select_from(Lending).where(*clauses)
        ).scalar_one()
        offset = (query.page - 1) * query.limit
        page_size = max(0, min(query.limit, total - offset))

        items = []
        if page_size:
            lendings = db.execute(
                select(Lending)
                .where(*clauses)
                .order_by(ordering, Lending.id)
                .offset(offset)
                .limit(page_size)
            ).scalars()
            items = [LendingResponse.model_validate(lending) for lending in lendings]
    except DATASTORE_ERRORS:
        logger.exception("Failed to fetch lending history")
        return ServiceResult.internal_error("Failed to fetch lending history.")

    if total == 0:
        return ServiceResult.not_found("No lending history found.")

    page = Page(
        items=items,
        total_items=total,
        total_pages=math.ceil(total / query.limit),
        current_page=query.page,
        page_size=page_size,
        sort=query.sort,
    )
    return ServiceResult.ok(page, f"{len(items)} history records fetched successfully.")
