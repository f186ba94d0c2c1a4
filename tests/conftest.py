"""
pytest Fixtures for Library API Tests

Shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions, clients and sample data (isolation
  between tests)

Every test runs inside a connection-level transaction that is rolled
back afterwards, so services may commit freely.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting and sets a test secret key
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from library_api.database import Base, get_db
from library_api.main import app
from library_api.models import (
    Book,
    Permission,
    Publication,
    Role,
    Subject,
    Translator,
    User,
    Writer,
)
from library_api.services.security import create_access_token, hash_password
from library_api.services.storage import StoredFile, get_file_storage

API = "/api/v1"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    SQLite in-memory engine shared by the whole test session.

    StaticPool keeps the single connection alive; without it the
    in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Fresh session per test, wrapped in a transaction that is rolled back.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


class MemoryFileStorage:
    """FileStorage keeping uploads in a dict."""

    def __init__(self) -> None:
        self.files: dict[str, tuple[bytes, str]] = {}

    def save(self, content: bytes, mimetype: str, filename: str) -> StoredFile:
        file_id = f"file-{len(self.files) + 1}"
        self.files[file_id] = (content, mimetype)
        return StoredFile(id=file_id, url=f"memory://{file_id}")

    def delete(self, file_id: str) -> None:
        self.files.pop(file_id, None)


@pytest.fixture
def file_storage() -> MemoryFileStorage:
    return MemoryFileStorage()


@pytest.fixture(scope="function")
def client(
    db_session: Session,
    file_storage: MemoryFileStorage,
) -> Generator[TestClient, None, None]:
    """
    Test client using the test session and the in-memory file storage.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: file_storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# USER FIXTURES
# =============================================================================
def _add_user(db: Session, **fields) -> User:
    user = User(hashed_password=hash_password("SecurePass123"), **fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """A member without any role."""
    return _add_user(
        db_session,
        email="reader@example.com",
        username="reader",
        full_name="Avid Reader",
    )


@pytest.fixture
def second_user(db_session: Session) -> User:
    return _add_user(
        db_session,
        email="second@example.com",
        username="second",
        full_name="Second Reader",
    )


@pytest.fixture
def superuser(db_session: Session) -> User:
    return _add_user(
        db_session,
        email="admin@example.com",
        username="admin",
        full_name="Admin User",
        is_superuser=True,
    )


@pytest.fixture
def librarian(db_session: Session) -> User:
    """A staff account whose role grants book writes and lending only."""
    permissions = [
        Permission(name=name)
        for name in ("create-book", "update-book-by-id", "create-lend", "create-return")
    ]
    role = Role(name="Librarian", permissions=permissions)
    db_session.add(role)
    db_session.commit()
    return _add_user(
        db_session,
        email="librarian@example.com",
        username="librarian",
        role_id=role.id,
    )


@pytest.fixture
def auth_headers(sample_user: User) -> dict[str, str]:
    return bearer(sample_user)


@pytest.fixture
def admin_headers(superuser: User) -> dict[str, str]:
    return bearer(superuser)


@pytest.fixture
def librarian_headers(librarian: User) -> dict[str, str]:
    return bearer(librarian)


# =============================================================================
# CATALOGUE FIXTURES
# =============================================================================
@pytest.fixture
def sample_writer(db_session: Session) -> Writer:
    writer = Writer(name="George Orwell", review=4.5)
    db_session.add(writer)
    db_session.commit()
    db_session.refresh(writer)
    return writer


@pytest.fixture
def sample_publication(db_session: Session) -> Publication:
    publication = Publication(name="Secker & Warburg")
    db_session.add(publication)
    db_session.commit()
    db_session.refresh(publication)
    return publication


@pytest.fixture
def sample_translator(db_session: Session) -> Translator:
    translator = Translator(name="Gregory Rabassa")
    db_session.add(translator)
    db_session.commit()
    db_session.refresh(translator)
    return translator


@pytest.fixture
def sample_subjects(db_session: Session) -> list[Subject]:
    subjects = [Subject(name=name) for name in ("Dystopian", "Classics", "Politics")]
    db_session.add_all(subjects)
    db_session.commit()
    for subject in subjects:
        db_session.refresh(subject)
    return subjects


@pytest.fixture
def sample_book(
    db_session: Session,
    sample_writer: Writer,
    sample_publication: Publication,
    sample_subjects: list[Subject],
) -> Book:
    book = Book(
        name="Nineteen Eighty-Four",
        summary="A dystopian novel about surveillance and totalitarian rule.",
        page=328,
        edition=1,
        price=Decimal("12.99"),
        stock_available=3,
        writer=sample_writer,
        publication=sample_publication,
        subjects=sample_subjects[:1],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(
    db_session: Session,
    sample_writer: Writer,
    sample_subjects: list[Subject],
) -> list[Book]:
    """Fifteen books, more than the default page size."""
    books = []
    for i in range(15):
        book = Book(
            name=f"Test Book {i + 1:02d}",
            page=100 + i * 10,
            price=Decimal(f"{10 + i}.99"),
            stock_available=i,
            best_seller=i % 5 == 0,
        )
        if i % 2 == 0:
            book.writer = sample_writer
        if i % 3 == 0:
            book.subjects = [sample_subjects[1]]
        books.append(book)
        db_session.add(book)

    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books
