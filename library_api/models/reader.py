"""
Reader Activity Models

Per-user data kept about how members use the catalogue:

- FavouriteBook: one row per (user, book) pair the user marked.
- RecentlyVisited: one row per user with the ordered list of book ids
  they opened, oldest first. The list is bounded; see
  library_api.services.recently_visited.append_visit.
"""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import ID_LENGTH, IdMixin, TimestampMixin

if TYPE_CHECKING:
    from library_api.models.book import Book


class FavouriteBook(IdMixin, TimestampMixin, Base):
    """
    A book a user marked as favourite.

    Table: favourite_books

    Constraints:
    - (user_id, book_id) is unique: a book is favourited once per user
    """

    __tablename__ = "favourite_books"
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_favourite_user_book"),
    )

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    book_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    book: Mapped["Book"] = relationship(
        "Book",
        back_populates="favourites",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"FavouriteBook(user_id={self.user_id}, book_id={self.book_id})"


class RecentlyVisited(IdMixin, TimestampMixin, Base):
    """
    Ordered list of books a user recently opened.

    Table: recently_visited_books

    book_ids is stored as a JSON array; always assign a new list rather
    than mutating it in place so the ORM notices the change.
    """

    __tablename__ = "recently_visited_books"

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    book_ids: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
        comment="Book ids, oldest first"
    )

    def __repr__(self) -> str:
        return f"RecentlyVisited(user_id={self.user_id}, books={len(self.book_ids)})"
