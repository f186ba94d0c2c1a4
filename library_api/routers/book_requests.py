"""
Book Requests Router

- POST|GET /users/requested-books: request a title, list own requests
- PUT /users/requested-books/{request_id}/image: attach a cover photo
  (multipart field "image", JPEG or PNG)
- GET /requested-books: every request (staff, "get-book-request-list")
- GET /books/desired: titles requested by several members (public)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.responses import JSONResponse

from library_api.config import get_settings
from library_api.dependencies import CurrentUser, DbSession, RequirePermission, Storage
from library_api.responses import envelope_response
from library_api.schemas.book_request import (
    BookRequestCreate,
    BookRequestListQuery,
    BookRequestParams,
)
from library_api.services import book_requests
from library_api.services.rate_limiter import limiter
from library_api.validation import RequestPart, ValidatedRequest, validate_request

settings = get_settings()

router = APIRouter(tags=["Book Requests"])


@router.post(
    "/users/requested-books",
    status_code=status.HTTP_201_CREATED,
    summary="Request a book",
)
@limiter.limit(settings.rate_limit_write)
def request_book(
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((BookRequestCreate, RequestPart.BODY))),
    ],
) -> JSONResponse:
    result = book_requests.request(db, current_user.id, payload.body)
    return envelope_response(request, result)


@router.get("/users/requested-books", summary="The caller's book requests")
@limiter.limit(settings.rate_limit_default)
def my_requests(request: Request, db: DbSession, current_user: CurrentUser) -> JSONResponse:
    return envelope_response(request, book_requests.mine(db, current_user.id))


@router.put(
    "/users/requested-books/{request_id}/image",
    summary="Upload a cover photo for a book request",
)
@limiter.limit(settings.rate_limit_write)
def upload_request_image(
    request: Request,
    db: DbSession,
    storage: Storage,
    current_user: CurrentUser,
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((BookRequestParams, RequestPart.PARAMS))),
    ],
    image: Annotated[UploadFile, File(description="JPEG or PNG, at most ~1.1 MB")],
) -> JSONResponse:
    # One byte over the cap is enough to reject the file
    content = image.file.read(settings.upload_max_bytes + 1)
    result = book_requests.upload_image(
        db,
        storage,
        current_user.id,
        payload.params.request_id,
        content,
        image.content_type or "",
        image.filename or "upload",
    )
    return envelope_response(request, result)


@router.get(
    "/requested-books",
    summary="Every book request",
    dependencies=[Depends(RequirePermission("get-book-request-list"))],
)
@limiter.limit(settings.rate_limit_default)
def list_requests(
    request: Request,
    db: DbSession,
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((BookRequestListQuery, RequestPart.QUERY))),
    ],
) -> JSONResponse:
    result = book_requests.book_request_resource.list(db, payload.query)
    return envelope_response(request, result)


@router.get("/books/desired", summary="Most requested titles")
@limiter.limit(settings.rate_limit_default)
def desired_books(request: Request, db: DbSession) -> JSONResponse:
    return envelope_response(request, book_requests.desired(db))
