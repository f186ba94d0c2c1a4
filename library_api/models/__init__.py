"""
SQLAlchemy Models Package

This package contains all database models for the Library API.

Model Relationships:
- Book -> Writer / Publication / Translator: Many-to-One (nullable)
- Book <-> Subject: Many-to-Many (book_subjects)
- Role <-> Permission: Many-to-Many (role_permissions)
- User -> Role: Many-to-One (nullable)
- FavouriteBook, Lending: link a User to a Book
- RecentlyVisited, BookRequest: per-user records

Import all models here to:
1. Make them available as: from library_api.models import Book, Writer
2. Ensure Alembic discovers them for migrations
"""

from library_api.models.user import User
from library_api.models.access import ADMIN_ROLE_NAME, Permission, Role, role_permissions
from library_api.models.subject import Subject
from library_api.models.publication import Publication
from library_api.models.writer import Writer
from library_api.models.translator import Translator
from library_api.models.pronouns import Pronouns
from library_api.models.book import Book, book_subjects
from library_api.models.reader import FavouriteBook, RecentlyVisited
from library_api.models.lending import Lending
from library_api.models.book_request import BookRequest
from library_api.models.site import DocumentKind, Faq, SiteDocument

__all__ = [
    "ADMIN_ROLE_NAME",
    "Book",
    "BookRequest",
    "DocumentKind",
    "Faq",
    "FavouriteBook",
    "Lending",
    "Permission",
    "Pronouns",
    "Publication",
    "RecentlyVisited",
    "Role",
    "SiteDocument",
    "Subject",
    "Translator",
    "User",
    "Writer",
    "book_subjects",
    "role_permissions",
]
