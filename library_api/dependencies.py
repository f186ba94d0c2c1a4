"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers with
Depends(). This module holds the ones shared by every router:

- DbSession: the per-request SQLAlchemy session
- CurrentUser: the authenticated, active account behind the bearer token
- RequirePermission("create-book"): the account must hold a permission
- Storage: the FileStorage uploads are written to

Authentication and authorisation failures are raised as ApiError
subclasses, which the app turns into the standard envelope.
"""

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.database import get_db
from library_api.exceptions import AuthenticationError, PermissionDeniedError
from library_api.models import User
from library_api.services.security import ACCESS_TOKEN, verify_token_type
from library_api.services.storage import FileStorage, get_file_storage

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def list_books(db: Session = Depends(get_db)):
#
# routes write:
#   def list_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]
Storage = Annotated[FileStorage, Depends(get_file_storage)]


# =============================================================================
# JWT Authentication
# =============================================================================
# auto_error=False: a missing header reaches get_current_user as None so
# the 401 is reported in the envelope like every other error.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"/api/{settings.api_version}/auth/login",
    auto_error=False,
)


def get_current_user(
    db: DbSession,
    token: str | None = Depends(oauth2_scheme),
) -> User:
    """
    Resolve the bearer token to its user.

    Raises:
        AuthenticationError: no token, an invalid or expired one, a
            refresh token, or a user that no longer exists
    """
    if token is None:
        raise AuthenticationError("Authentication required.")

    payload = verify_token_type(token, ACCESS_TOKEN)
    if payload is None or payload.get("sub") is None:
        raise AuthenticationError("Invalid or expired token.")

    user = db.get(User, payload["sub"])
    if user is None:
        raise AuthenticationError("User not found.")
    return user


def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Like get_current_user, but deactivated accounts are refused."""
    if not current_user.is_active:
        raise PermissionDeniedError("Account is inactive.")
    return current_user


CurrentUser = Annotated[User, Depends(get_current_active_user)]


# =============================================================================
# Permissions
# =============================================================================
class RequirePermission:
    """
    Class-based dependency guarding a route with a named permission.

    Usage:
        @router.post("/books")
        def create_book(user: Annotated[User, Depends(RequirePermission("create-book"))]):
            ...

    Returns the authenticated user so handlers can stamp audit fields.
    """

    def __init__(self, permission: str) -> None:
        self.permission = permission

    def __call__(self, current_user: CurrentUser) -> User:
        if not current_user.has_permission(self.permission):
            logger.warning(f"User {current_user.id} lacks permission {self.permission}")
            raise PermissionDeniedError(
                f'You do not have the "{self.permission}" permission.'
            )
        return current_user
