"""
Security Service

Password hashing and JWT token operations.

- Passwords are hashed with bcrypt (passlib)
- Tokens are HS256 JWTs carrying the user id in "sub" and a "type"
  claim, "access" or "refresh", so one kind can't be used as the other

Usage:
    from library_api.services.security import hash_password, verify_password

    hashed = hash_password("SecurePass123")
    verify_password("SecurePass123", hashed)  # True
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from library_api.config import get_settings

logger = logging.getLogger(__name__)

# deprecated="auto" upgrades old hashes on verify
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ALGORITHM = "HS256"
ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against its bcrypt hash."""
    return pwd_context.verify(plain_password, hashed_password)


def _create_token(subject: str, token_type: str, expires_delta: timedelta) -> str:
    payload = {
        "sub": subject,
        "type": token_type,
        "exp": datetime.now(UTC) + expires_delta,
    }
    return jwt.encode(payload, get_settings().secret_key, algorithm=ALGORITHM)


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """
    Create a short-lived access token for a user.

    Example:
        >>> token = create_access_token("65f0c0ffee0000000000beef")
        >>> token.count(".") == 2  # header.payload.signature
        True
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)
    return _create_token(user_id, ACCESS_TOKEN, expires_delta)


def create_refresh_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(days=get_settings().refresh_token_expire_days)
    return _create_token(user_id, REFRESH_TOKEN, expires_delta)


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate a JWT.

    Returns:
        The payload, or None if the token is malformed, tampered with or
        expired
    """
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def verify_token_type(token: str, expected_type: str) -> dict[str, Any] | None:
    """Decode a token and check its "type" claim."""
    payload = decode_token(token)
    if payload is None:
        return None

    if payload.get("type") != expected_type:
        logger.warning(f"Token type mismatch: expected {expected_type}")
        return None

    return payload
