"""
Translator Model

Translators are tracked separately from writers: a translated book keeps
its original writer and points at the translator of the edition we hold.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import AuditMixin

if TYPE_CHECKING:
    from library_api.models.book import Book


class Translator(AuditMixin, Base):
    """Translator model. Table: translators"""

    __tablename__ = "translators"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Translator's full name"
    )

    image: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="URL to the translator's portrait"
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

    books: Mapped[List["Book"]] = relationship(
        "Book",
        back_populates="translator",
        foreign_keys="Book.translator_id",
    )

    def __repr__(self) -> str:
        return f"Translator(id={self.id}, name='{self.name}')"
