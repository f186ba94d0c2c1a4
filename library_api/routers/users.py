"""
Users Router

Everything under /users concerns the caller's own account:

- GET|PUT /users/me: profile
- GET /users/favourites, POST|DELETE /users/favourites/{book_id}
- GET /users/recently-visited, POST /users/recently-visited/{book_id}

Lent books, history and book requests of the caller are served by the
lending and book request routers under the same prefix.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from library_api.config import get_settings
from library_api.dependencies import CurrentUser, DbSession
from library_api.responses import envelope_response
from library_api.schemas.reader import BookIdParams
from library_api.schemas.user import UserUpdate
from library_api.services import auth as auth_service
from library_api.services import favourites, recently_visited
from library_api.services.rate_limiter import limiter
from library_api.validation import RequestPart, ValidatedRequest, validate_request

settings = get_settings()

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={401: {"description": "Not authenticated"}},
)

BookInPath = Annotated[
    ValidatedRequest,
    Depends(validate_request((BookIdParams, RequestPart.PARAMS))),
]


# =============================================================================
# Profile
# =============================================================================
@router.get("/me", summary="Get current user")
@limiter.limit(settings.rate_limit_default)
def get_me(request: Request, current_user: CurrentUser) -> JSONResponse:
    return envelope_response(request, auth_service.profile(current_user))


@router.put("/me", summary="Update current user")
@limiter.limit(settings.rate_limit_write)
def update_me(
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((UserUpdate, RequestPart.BODY))),
    ],
) -> JSONResponse:
    result = auth_service.update_profile(db, current_user, payload.body)
    return envelope_response(request, result)


# =============================================================================
# Favourite Books
# =============================================================================
@router.get("/favourites", summary="List favourite books")
@limiter.limit(settings.rate_limit_default)
def get_favourites(request: Request, db: DbSession, current_user: CurrentUser) -> JSONResponse:
    return envelope_response(request, favourites.get(db, current_user.id))


@router.post("/favourites/{book_id}", summary="Add a favourite book")
@limiter.limit(settings.rate_limit_write)
def add_favourite(
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
    payload: BookInPath,
) -> JSONResponse:
    result = favourites.add(db, current_user.id, payload.params.book_id)
    return envelope_response(request, result)


@router.delete("/favourites/{book_id}", summary="Remove a favourite book")
@limiter.limit(settings.rate_limit_write)
def remove_favourite(
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
    payload: BookInPath,
) -> JSONResponse:
    result = favourites.remove(db, current_user.id, payload.params.book_id)
    return envelope_response(request, result)


# =============================================================================
# Recently Visited Books
# =============================================================================
@router.get("/recently-visited", summary="List recently visited books")
@limiter.limit(settings.rate_limit_default)
def get_recently_visited(
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
) -> JSONResponse:
    return envelope_response(request, recently_visited.get(db, current_user.id))


@router.post("/recently-visited/{book_id}", summary="Record a book visit")
@limiter.limit(settings.rate_limit_write)
def add_recently_visited(
    request: Request,
    db: DbSession,
    current_user: CurrentUser,
    payload: BookInPath,
) -> JSONResponse:
    result = recently_visited.add(db, current_user.id, payload.params.book_id)
    return envelope_response(request, result)
