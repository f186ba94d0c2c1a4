"""
Book Request Service

Members ask for titles the library does not hold yet.

- request(): one request per title per member (case-insensitive)
- upload_image(): attach a cover photo (JPEG/PNG, size capped by
  settings.upload_max_bytes) through the FileStorage interface
- mine(): the caller's requests; staff list all of them through
  book_request_resource
- desired(): titles requested by more than one member, most wanted
  first, matched against the catalogue by name
"""

import logging

from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.models import Book, BookRequest
from library_api.schemas.book import BookResponse
from library_api.schemas.book_request import (
    BookRequestCreate,
    BookRequestResponse,
    DesiredBookResponse,
)
from library_api.services.resource import DATASTORE_ERRORS, MatchMode, ResourceService
from library_api.services.results import ServiceResult
from library_api.services.storage import FileStorage

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png")
DESIRED_LIMIT = 10

book_request_resource = ResourceService(
    BookRequest,
    BookRequestResponse,
    label="book request",
    unique_field=None,
    filters={"name": MatchMode.CONTAINS},
)


def request(db: Session, user_id: str, data: BookRequestCreate) -> ServiceResult:
    try:
        duplicate = db.execute(
            select(BookRequest.id).where(
                BookRequest.requested_by == user_id,
                func.lower(BookRequest.name) == data.name.lower(),
            )
        ).first()
        if duplicate is not None:
            logger.warning(f"Duplicate book request by {user_id}: {data.name}")
            return ServiceResult.conflict(f'Book "{data.name}" is already requested.')

        book_request = BookRequest(requested_by=user_id, **data.model_dump())
        db.add(book_request)
        db.commit()
        db.refresh(book_request)
        payload = BookRequestResponse.model_validate(book_request)
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to request book for {user_id}")
        return ServiceResult.internal_error("Failed to request book.")

    logger.info(f"Book requested by {user_id}: {book_request.id}")
    return ServiceResult.ok(payload, "Book requested successfully.", status.HTTP_201_CREATED)


def _discard_upload(storage: FileStorage, file_id: str) -> None:
    """Remove a stored file that no book request ended up referencing."""
    try:
        storage.delete(file_id)
    except OSError:
        logger.exception(f"Orphaned upload {file_id} could not be removed")


def upload_image(
    db: Session,
    storage: FileStorage,
    user_id: str,
    request_id: str,
    content: bytes,
    mimetype: str,
    filename: str,
) -> ServiceResult:
    """Store a cover photo and attach it to the caller's own request."""
    max_bytes = get_settings().upload_max_bytes

    if mimetype not in ALLOWED_IMAGE_TYPES:
        return ServiceResult.fail("Only JPEG and PNG images are allowed.")
    if len(content) > max_bytes:
        return ServiceResult.fail(f"Image must not be larger than {max_bytes} bytes.")

    stored = None
    try:
        book_request = db.get(BookRequest, request_id)
        if book_request is None or book_request.requested_by != user_id:
            return ServiceResult.not_found("No book request found with the provided ID.")

        stored = storage.save(content, mimetype, filename)
        book_request.image = stored.url
        book_request.image_id = stored.id
        db.commit()
        db.refresh(book_request)
        payload = BookRequestResponse.model_validate(book_request)
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to upload image for book request {request_id}")
        if stored is not None:
            _discard_upload(storage, stored.id)
        return ServiceResult.internal_error("Failed to upload image.")

    logger.info(f"Image uploaded for book request {request_id}")
    return ServiceResult.ok(payload, "Image uploaded successfully.")


def mine(db: Session, user_id: str) -> ServiceResult:
    try:
        requests = db.execute(
            select(BookRequest)
            .where(BookRequest.requested_by == user_id)
            .order_by(BookRequest.created_at.desc(), BookRequest.id)
        ).scalars().all()
        items = [BookRequestResponse.model_validate(item) for item in requests]
    except DATASTORE_ERRORS:
        logger.exception(f"Failed to fetch book requests of {user_id}")
        return ServiceResult.internal_error("Failed to fetch book requests.")

    if not items:
        return ServiceResult.not_found("No book requests found.")
    return ServiceResult.ok(items, f"{len(items)} book requests fetched successfully.")


def desired(db: Session) -> ServiceResult:
    """Titles requested more than once, with the catalogue book if any."""
    name_key = func.lower(BookRequest.name)
    count = func.count(BookRequest.id)

    try:
        rows = db.execute(
            select(name_key, func.min(BookRequest.name), count)
            .group_by(name_key)
            .having(count > 1)
            .order_by(count.desc(), name_key)
            .limit(DESIRED_LIMIT)
        ).all()

        entries = []
        for key, name, total in rows:
            book = db.execute(
                select(Book).where(func.lower(Book.name) == key)
            ).scalars().first()
            entries.append(
                DesiredBookResponse(
                    name=name,
                    count=total,
                    book=BookResponse.model_validate(book) if book else None,
                )
            )
    except DATASTORE_ERRORS:
        logger.exception("Failed to fetch desired books")
        return ServiceResult.internal_error("Failed to fetch desired books.")

    if not entries:
        return ServiceResult.not_found("No desired books found.")
    return ServiceResult.ok(entries, f"{len(entries)} desired books fetched successfully.")
