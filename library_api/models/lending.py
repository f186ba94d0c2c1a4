"""
Lending Model

A lending records one book handed to one member for a period.

While returned_at is NULL the book is out and cannot be lent again.
Returning the book stamps returned_at and the return remarks; the row
is kept, so the returned lendings of a book are its circulation history.
"""

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import ID_LENGTH, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from library_api.models.book import Book
    from library_api.models.user import User


class Lending(IdMixin, TimestampMixin, Base):
    """
    Lending model.

    Table: lendings

    Relationships:
    - book: Many-to-One with Book
    - user: Many-to-One with User (the borrower)
    """

    __tablename__ = "lendings"

    # -------------------------------------------------------------------------
    # Foreign Keys
    # -------------------------------------------------------------------------
    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Borrower"
    )

    book_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_by: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="Staff member who handed the book out"
    )

    # -------------------------------------------------------------------------
    # Lending Period
    # -------------------------------------------------------------------------
    lent_from: Mapped[date] = mapped_column(
        Date,
        nullable=False,
    )

    lent_to: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        comment="Date the book is due back"
    )

    remarks: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Return
    # -------------------------------------------------------------------------
    returned_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
        comment="NULL while the book is still out"
    )

    return_remarks: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    book: Mapped["Book"] = relationship(
        "Book",
        back_populates="lendings",
        lazy="selectin",
    )

    user: Mapped["User"] = relationship(
        "User",
        foreign_keys=[user_id],
        lazy="selectin",
    )

    @property
    def is_open(self) -> bool:
        return self.returned_at is None

    def __repr__(self) -> str:
        return f"Lending(id={self.id}, book_id={self.book_id}, user_id={self.user_id})"
