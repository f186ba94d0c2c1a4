"""
Authentication Router

- POST /auth/signup: register with email, username and password
- POST /auth/login: email and password in a JSON body -> access and
  refresh tokens
- POST /auth/refresh: refresh token -> new access token

Security:
=========
- Passwords are hashed with bcrypt before storage and never logged
- Access tokens are short-lived (15 min default)
- Refresh tokens are longer-lived (7 days default)
- Every route has the strict auth rate limit
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from library_api.config import get_settings
from library_api.dependencies import DbSession
from library_api.responses import envelope_response
from library_api.schemas.user import LoginRequest, RefreshTokenRequest, UserCreate
from library_api.services import auth as auth_service
from library_api.services.rate_limiter import limiter
from library_api.validation import RequestPart, ValidatedRequest, validate_request

settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
        409: {"description": "Conflict (email/username already exists)"},
    },
)


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new account.

    **Password Requirements:**
    - 8 to 128 characters
    - At least 1 uppercase letter, 1 lowercase letter and 1 number

    **Username Requirements:**
    - 3-50 characters, starting with a letter
    - Only letters, numbers, and underscores
    """,
)
@limiter.limit(settings.rate_limit_auth)
def signup(
    request: Request,
    db: DbSession,
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((UserCreate, RequestPart.BODY))),
    ],
) -> JSONResponse:
    return envelope_response(request, auth_service.signup(db, payload.body))


@router.post(
    "/login",
    summary="Login with email and password",
    description="""
    Returns an `accessToken` for the Authorization header
    (`Authorization: Bearer <accessToken>`) and a `refreshToken` for
    POST /auth/refresh.
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    db: DbSession,
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((LoginRequest, RequestPart.BODY))),
    ],
) -> JSONResponse:
    return envelope_response(request, auth_service.login(db, payload.body))


@router.post(
    "/refresh",
    summary="Refresh access token",
)
@limiter.limit(settings.rate_limit_auth)
def refresh(
    request: Request,
    db: DbSession,
    payload: Annotated[
        ValidatedRequest,
        Depends(validate_request((RefreshTokenRequest, RequestPart.BODY))),
    ],
) -> JSONResponse:
    return envelope_response(request, auth_service.refresh(db, payload.body.refresh_token))
