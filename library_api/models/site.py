"""
Site Content Models

Content shown on the public website:

- Faq: question/answer pairs, managed like any other resource.
- SiteDocument: single long-form pages (about us, terms and conditions,
  privacy policy). There is at most one row per kind.
"""

from enum import Enum

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from library_api.database import Base
from library_api.models.base import AuditMixin


class DocumentKind(str, Enum):
    ABOUT_US = "about-us"
    TERMS_AND_CONDITIONS = "terms-and-conditions"
    PRIVACY_POLICY = "privacy-policy"


class Faq(AuditMixin, Base):
    """FAQ model. Table: faqs"""

    __tablename__ = "faqs"

    question: Mapped[str] = mapped_column(
        String(500),
        unique=True,
        nullable=False,
    )

    answer: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"Faq(id={self.id}, question='{self.question[:30]}')"


class SiteDocument(AuditMixin, Base):
    """
    Singleton site page.

    Table: site_documents

    kind is unique, so each page exists at most once.
    """

    __tablename__ = "site_documents"

    kind: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        comment="One of DocumentKind"
    )

    details: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"SiteDocument(kind='{self.kind}')"
