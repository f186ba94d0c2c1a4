"""
Shared Model Building Blocks

Every catalogue record in the library carries the same bookkeeping:
a 24 character hex identifier, an isActive flag, and audit fields that
record who created/updated it and when.

Rather than repeating those columns in every model, they live in
mixins that the models inherit next to Base:

    class Subject(AuditMixin, Base):
        __tablename__ = "subjects"
        name: Mapped[str] = ...
"""

import secrets
from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

ID_LENGTH = 24


def generate_id() -> str:
    """Return a new 24 character lowercase hex identifier."""
    return secrets.token_hex(ID_LENGTH // 2)


def utcnow() -> datetime:
    return datetime.now(UTC)


class IdMixin:
    """Primary key column shared by every table."""

    id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        primary_key=True,
        default=generate_id,
        comment="24 character hex identifier"
    )


class TimestampMixin:
    """
    Creation and modification timestamps.

    Defaults are computed in Python so values keep microsecond
    resolution on every backend; list endpoints sort on created_at.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
        comment="When the record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="When the record was last updated"
    )


class AuditMixin(IdMixin, TimestampMixin):
    """
    Full audit trail for catalogue resources.

    created_by / updated_by hold the id of the user whose request
    created or last modified the record.
    """

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the record is shown to readers"
    )

    created_by: Mapped[str | None] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="User who created the record"
    )

    updated_by: Mapped[str | None] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="User who last updated the record"
    )
