"""
Book Model

The central model of the Library API.

This file also contains the book_subjects association table.

WHY an Association Table?
=========================
A book is filed under several subjects and a subject groups many books.
The junction table only stores the pair, so it is a plain Table object
rather than a full model class.

Writer, publication and translator are plain foreign keys: a book has at
most one of each. They are nullable so deleting a writer does not delete
the books that reference it.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import ID_LENGTH, AuditMixin

if TYPE_CHECKING:
    from library_api.models.reader import FavouriteBook
    from library_api.models.lending import Lending
    from library_api.models.publication import Publication
    from library_api.models.subject import Subject
    from library_api.models.translator import Translator
    from library_api.models.writer import Writer


# =============================================================================
# Association Tables
# =============================================================================
book_subjects = Table(
    "book_subjects",
    Base.metadata,
    Column(
        "book_id",
        String(ID_LENGTH),
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "subject_id",
        String(ID_LENGTH),
        ForeignKey("subjects.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Book(AuditMixin, Base):
    """
    Book model representing a title held by the library.

    Table: books

    Relationships:
    - writer / publication / translator: Many-to-One (nullable)
    - subjects: Many-to-Many through book_subjects
    - favourites, lendings: One-to-Many, removed together with the book

    Indexes:
    - name: Unique index, a title is catalogued once
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Book title"
    )

    image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="URL to the cover image"
    )

    summary: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Short description of the book"
    )

    # -------------------------------------------------------------------------
    # Catalogue Details
    # -------------------------------------------------------------------------
    best_seller: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
        comment="Whether the book is flagged as a best seller"
    )

    review: Mapped[float] = mapped_column(
        Float,
        default=0,
        nullable=False,
        comment="Average review score (0-5)"
    )

    page: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Number of pages"
    )

    edition: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="Edition number (1-50)"
    )

    # Numeric(10, 2) keeps exact cents; never use Float for money
    price: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Price with two decimal places"
    )

    stock_available: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        comment="Copies currently on the shelf"
    )

    # -------------------------------------------------------------------------
    # Foreign Keys
    # -------------------------------------------------------------------------
    writer_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("writers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    publication_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("publications.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    translator_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("translators.id", ondelete="SET NULL"),
        nullable=True,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # selectin loading keeps list endpoints at a fixed number of queries
    writer: Mapped[Optional["Writer"]] = relationship(
        "Writer",
        back_populates="books",
        foreign_keys=[writer_id],
        lazy="selectin",
    )

    publication: Mapped[Optional["Publication"]] = relationship(
        "Publication",
        back_populates="books",
        lazy="selectin",
    )

    translator: Mapped[Optional["Translator"]] = relationship(
        "Translator",
        back_populates="books",
        foreign_keys=[translator_id],
        lazy="selectin",
    )

    subjects: Mapped[List["Subject"]] = relationship(
        "Subject",
        secondary=book_subjects,
        back_populates="books",
        lazy="selectin",
    )

    favourites: Mapped[List["FavouriteBook"]] = relationship(
        "FavouriteBook",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    lendings: Mapped[List["Lending"]] = relationship(
        "Lending",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, name='{self.name}')"
