"""
Account Service

Signup, login, token refresh and the caller's own profile.

Login and refresh answer 401 with one generic message whatever went
wrong, so the response never tells which of email or password was off.
"""

import logging

from fastapi import status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.config import get_settings
from library_api.models import User
from library_api.models.base import utcnow
from library_api.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from library_api.services.resource import DATASTORE_ERRORS
from library_api.services.results import ServiceResult
from library_api.services.security import (
    REFRESH_TOKEN,
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
    verify_token_type,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password."


def _expires_in() -> int:
    return get_settings().access_token_expire_minutes * 60


def signup(db: Session, data: UserCreate) -> ServiceResult:
    """Register an account; email and username must both be free."""
    try:
        existing = db.execute(
            select(User).where(
                or_(User.email == data.email, User.username == data.username)
            )
        ).scalars().first()
        if existing is not None:
            field = "Email" if existing.email == data.email else "Username"
            logger.warning(f"Signup rejected, {field.lower()} taken: {data.email}")
            return ServiceResult.conflict(f"{field} is already registered.")

        user = User(
            email=data.email,
            username=data.username,
            hashed_password=hash_password(data.password),
            full_name=data.full_name,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        logger.warning(f"Integrity error registering {data.email}", exc_info=True)
        return ServiceResult.conflict("Email is already registered.")
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception("Failed to register user")
        return ServiceResult.internal_error("Failed to register user.")

    logger.info(f"New user registered: {user.email}")
    return ServiceResult.ok(
        UserResponse.model_validate(user),
        "User registered successfully.",
        status.HTTP_201_CREATED,
    )


def login(db: Session, data: LoginRequest) -> ServiceResult:
    """Exchange email and password for an access and a refresh token."""
    user = db.execute(select(User).where(User.email == data.email)).scalar_one_or_none()

    if user is None or not verify_password(data.password, user.hashed_password):
        logger.warning(f"Login failed for {data.email}")
        return ServiceResult.fail(INVALID_CREDENTIALS, status.HTTP_401_UNAUTHORIZED)

    if not user.is_active:
        logger.warning(f"Login failed: inactive account {data.email}")
        return ServiceResult.fail("Account is inactive.", status.HTTP_403_FORBIDDEN)

    user.last_login_at = utcnow()
    db.commit()

    logger.info(f"User logged in: {user.email}")
    tokens = TokenResponse(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
        expires_in=_expires_in(),
    )
    return ServiceResult.ok(tokens, "Logged in successfully.")


def refresh(db: Session, refresh_token: str) -> ServiceResult:
    """New access token for a valid refresh token of an active user."""
    payload = verify_token_type(refresh_token, REFRESH_TOKEN)
    user = db.get(User, payload["sub"]) if payload and payload.get("sub") else None

    if user is None or not user.is_active:
        return ServiceResult.fail(
            "Invalid or expired refresh token.",
            status.HTTP_401_UNAUTHORIZED,
        )

    logger.info(f"Token refreshed for user: {user.email}")
    tokens = TokenResponse(access_token=create_access_token(user.id), expires_in=_expires_in())
    return ServiceResult.ok(tokens, "Token refreshed successfully.")


def profile(user: User) -> ServiceResult:
    return ServiceResult.ok(UserResponse.model_validate(user), "Profile fetched successfully.")


def update_profile(db: Session, user: User, data: UserUpdate) -> ServiceResult:
    values = data.model_dump(exclude_unset=True)
    if not values:
        return ServiceResult.fail("Please provide update data.")

    try:
        for field, value in values.items():
            setattr(user, field, value)
        db.commit()
        db.refresh(user)
    except DATASTORE_ERRORS:
        db.rollback()
        logger.exception(f"Failed to update profile of {user.id}")
        return ServiceResult.internal_error("Failed to update profile.")

    logger.info(f"Profile updated: {user.id}")
    return ServiceResult.ok(UserResponse.model_validate(user), "Profile updated successfully.")
