"""
Lending Router

- POST /lend: hand a book to a member (staff, "create-lend")
- POST /return: take it back (staff, "create-return")
- GET /users/lent-books: books the caller has out
- GET /users/history: the caller's returned books
- GET /books/history: every returned book (staff, "get-book-history")
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from library_api.config import get_settings
from library_api.dependencies import CurrentUser, DbSession, RequirePermission
from library_api.models import User
from library_api.responses import envelope_response
from library_api.schemas.lending import HistoryQuery, LendCreate, ReturnCreate
from library_api.services import lending as lending_service
from library_api.services.rate_limiter import limiter
from library_api.validation import RequestPart, ValidatedRequest, validate_request

settings = get_settings()

router = APIRouter(tags=["Lending"])

History = Annotated[
    ValidatedRequest,
    Depends(validate_request((HistoryQuery, RequestPart.QUERY))),
]


@router.post(
    "/lend",
    status_code=status.HTTP_201_CREATED,
    summary="Lend a book",
)
@limiter.limit(settings.rate_limit_write)
def lend(
    request: Request,
    db: DbSession,
    user: Annotated[User, Depends(RequirePermission("create-lend"))],
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((LendCreate, RequestPart.BODY))),
    ],
) -> JSONResponse:
    return envelope_response(request, lending_service.lend(db, user.id, payload.body))


@router.post("/return", summary="Return a lent book")
@limiter.limit(settings.rate_limit_write)
def return_book(
    request: Request,
    db: DbSession,
    user: Annotated[User, Depends(RequirePermission("create-return"))],
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((ReturnCreate, RequestPart.BODY))),
    ],
) -> JSONResponse:
    return envelope_response(request, lending_service.return_book(db, user.id, payload.body))


@router.get("/users/lent-books", summary="Books the caller has out")
@limiter.limit(settings.rate_limit_default)
def lent_books(request: Request, db: DbSession, current_user: CurrentUser) -> JSONResponse:
    return envelope_response(request, lending_service.lent_books(db, current_user.id))


@router.get("/users/history", summary="The caller's returned books")
@limiter.limit(settings.rate_limit_default)
def user_history(
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
    payload: History,
) -> JSONResponse:
    query = payload.query.model_copy(update={"user_id": current_user.id})
    return envelope_response(request, lending_service.history(db, query))


@router.get(
    "/books/history",
    summary="Lending history of every book",
    dependencies=[Depends(RequirePermission("get-book-history"))],
)
@limiter.limit(settings.rate_limit_default)
def book_history(request: Request, db: DbSession, payload: History) -> JSONResponse:
    return envelope_response(request, lending_service.history(db, payload.query))
