"""
Pronouns Model

Pronoun sets offered to users on their profile ("He/Him", "They/Them").
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base
from library_api.models.base import AuditMixin


class Pronouns(AuditMixin, Base):
    """Pronouns model. Table: pronouns"""

    __tablename__ = "pronouns"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Pronoun set, e.g. 'They/Them'"
    )

    def __repr__(self) -> str:
        return f"Pronouns(id={self.id}, name='{self.name}')"
