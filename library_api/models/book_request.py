"""
Book Request Model

Members can ask the library to acquire a title it does not hold yet.
Requests are free text (writer, publication and subjects are names, not
catalogue references) because the book is not catalogued.

Titles requested by several members show up as "desired books".
"""

from typing import Optional

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base
from library_api.models.base import ID_LENGTH, IdMixin, TimestampMixin


class BookRequest(IdMixin, TimestampMixin, Base):
    """Book request model. Table: book_requests"""

    __tablename__ = "book_requests"

    requested_by: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Requested title"
    )

    writer: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    publication: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    subjects: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    edition: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    page: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Storage URL of the uploaded cover photo"
    )

    image_id: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="Storage identifier of the uploaded cover photo"
    )

    def __repr__(self) -> str:
        return f"BookRequest(id={self.id}, name='{self.name}')"
