"""
Publication Model

A publication is the publishing house a book was released by.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import AuditMixin

if TYPE_CHECKING:
    from library_api.models.book import Book


class Publication(AuditMixin, Base):
    """
    Publication model.

    Table: publications

    Relationships:
    - books: One-to-Many; books keep a nullable publication_id, which is
      cleared when the publication is deleted.
    """

    __tablename__ = "publications"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Publishing house name"
    )

    books: Mapped[List["Book"]] = relationship(
        "Book",
        back_populates="publication",
    )

    def __repr__(self) -> str:
        return f"Publication(id={self.id}, name='{self.name}')"
