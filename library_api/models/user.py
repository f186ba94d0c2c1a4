"""
User Model

Represents a library member or staff account.

Members authenticate with email and password and receive JWT tokens.
What an account may do beyond reading the catalogue is decided by its
role's permissions; superusers bypass permission checks entirely.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import ID_LENGTH, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from library_api.models.access import Role


class User(IdMixin, TimestampMixin, Base):
    """
    User model representing registered accounts.

    Table: users

    Relationships:
    - role: Many-to-One with Role (nullable)

    Indexes:
    - email: Unique index for login lookups
    - username: Unique index
    """

    __tablename__ = "users"

    # -------------------------------------------------------------------------
    # Authentication Fields
    # -------------------------------------------------------------------------
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="User's email address (used for login)"
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Profile Fields
    # -------------------------------------------------------------------------
    full_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="User's full display name"
    )

    pronouns: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Pronoun set shown on the profile"
    )

    # -------------------------------------------------------------------------
    # Account Status
    # -------------------------------------------------------------------------
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the account is active"
    )

    is_superuser: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Superusers pass every permission check"
    )

    role_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("roles.id", ondelete="SET NULL"),
        nullable=True,
    )

    last_login_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="When the user last logged in"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    role: Mapped[Optional["Role"]] = relationship(
        "Role",
        back_populates="users",
        foreign_keys=[role_id],
        lazy="selectin",
    )

    def has_permission(self, permission: str) -> bool:
        """True if the account may perform the named action."""
        if self.is_superuser:
            return True
        return self.role is not None and permission in self.role.permission_names

    def __repr__(self) -> str:
        return f"User(id={self.id}, email='{self.email}', username='{self.username}')"
