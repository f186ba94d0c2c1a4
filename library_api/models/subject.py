"""
Subject Model

A subject is a category a book is filed under ("Fiction", "History").
A book can be filed under several subjects.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import AuditMixin

if TYPE_CHECKING:
    from library_api.models.book import Book


class Subject(AuditMixin, Base):
    """
    Subject model.

    Table: subjects

    Relationships:
    - books: Many-to-Many through book_subjects
    """

    __tablename__ = "subjects"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Subject name (e.g., 'Fiction', 'History')"
    )

    # Declared here so deleting a subject also clears its association rows
    books: Mapped[List["Book"]] = relationship(
        "Book",
        secondary="book_subjects",
        back_populates="subjects",
    )

    def __repr__(self) -> str:
        return f"Subject(id={self.id}, name='{self.name}')"
