"""
User Pydantic Schemas

Schemas:
- UserCreate: Signup data (email, username, password)
- LoginRequest / TokenResponse / RefreshTokenRequest: token exchange
- UserUpdate: Profile fields a user may change on their own account
- UserResponse: Account data returned by the API (never the password)
"""

import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from library_api.schemas.access import RoleSummary
from library_api.schemas.common import RequestModel, ResponseModel, UpdateModel


class UserCreate(RequestModel):
    """
    Schema for user signup.

    Requires email, username, and password with strength validation.
    """

    email: EmailStr = Field(..., examples=["reader@example.com"])
    username: str = Field(
        ...,
        min_length=3,
        max_length=50,
        description="Starts with a letter; letters, numbers and underscores",
        examples=["avid_reader"],
    )
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str | None = Field(default=None, max_length=255)

    @field_validator("username")
    @classmethod
    def username_must_be_valid(cls, v: str) -> str:
        if not re.match(r"^[a-zA-Z][a-zA-Z0-9_]*$", v):
            raise ValueError(
                "must start with a letter and contain only "
                "letters, numbers, and underscores"
            )
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_must_be_strong(cls, v: str) -> str:
        """At least one uppercase letter, one lowercase letter and one digit."""
        if not re.search(r"[A-Z]", v):
            raise ValueError("must contain at least one uppercase letter")
        if not re.search(r"[a-z]", v):
            raise ValueError("must contain at least one lowercase letter")
        if not re.search(r"\d", v):
            raise ValueError("must contain at least one number")
        return v


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class RefreshTokenRequest(RequestModel):
    refresh_token: str = Field(..., min_length=1)


class TokenResponse(ResponseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Access token lifetime in seconds")


class UserUpdate(UpdateModel):
    """Profile update. All fields optional."""

    nullable = ("full_name", "pronouns")

    full_name: str | None = Field(default=None, max_length=255)
    pronouns: str | None = Field(default=None, max_length=100)


class UserResponse(ResponseModel):
    """Account data. SECURITY: never includes the password hash."""

    id: str
    email: str
    username: str
    full_name: str | None = None
    pronouns: str | None = None
    is_active: bool
    is_superuser: bool
    role: RoleSummary | None = None
    created_at: datetime
    last_login_at: datetime | None = None
