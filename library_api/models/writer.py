"""
Writer Model

Represents the author of books in the catalogue.

Writers carry a short biography (summary), an optional portrait URL and
an average review score shown on the writer page.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import AuditMixin

if TYPE_CHECKING:
    from library_api.models.book import Book


class Writer(AuditMixin, Base):
    """
    Writer model.

    Table: writers

    Relationships:
    - books: One-to-Many (Book.writer_id)

    Example:
        writer = Writer(name="Humayun Ahmed", review=4.5)
    """

    __tablename__ = "writers"

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Writer's full name"
    )

    image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="URL to the writer's portrait"
    )

    summary: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Short biography"
    )

    review: Mapped[float] = mapped_column(
        Float,
        default=0,
        nullable=False,
        comment="Average review score (0-5)"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    books: Mapped[List["Book"]] = relationship(
        "Book",
        back_populates="writer",
        foreign_keys="Book.writer_id",
    )

    def __repr__(self) -> str:
        return f"Writer(id={self.id}, name='{self.name}')"
