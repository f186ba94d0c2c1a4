#!/usr/bin/env python3
"""
Database Seed Script

Bootstraps a development database.

USAGE:
    # From the project root, with the virtualenv activated
    python scripts/seed_data.py

    # Admin credentials can be overridden
    SEED_ADMIN_EMAIL=me@example.com SEED_ADMIN_PASSWORD=Secret123 python scripts/seed_data.py

This script:
1. Creates the tables if they don't exist
2. Creates every default permission and the Admin role
3. Creates a superuser holding the Admin role
4. Creates sample writers, publications, subjects and books
"""

import os
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.database import SessionLocal, create_tables
from library_api.models import ADMIN_ROLE_NAME, Book, Publication, Role, Subject, User, Writer
from library_api.services.access import permission_service, role_service
from library_api.services.security import hash_password

ADMIN_EMAIL = os.environ.get("SEED_ADMIN_EMAIL", "admin@library.local")
ADMIN_PASSWORD = os.environ.get("SEED_ADMIN_PASSWORD", "ChangeMe123")


def create_access_control(db: Session) -> None:
    print("Creating default permissions and Admin role...")
    for result in (
        permission_service.create_default_permissions(db, None),
        role_service.create_default_role(db, None),
    ):
        if not result.success:
            raise RuntimeError(result.message)
        print(f"  {result.message}")


def create_admin(db: Session) -> User:
    """Create the superuser, or return it when it already exists."""
    admin = db.execute(select(User).where(User.email == ADMIN_EMAIL)).scalar_one_or_none()
    if admin is not None:
        print(f"Admin {ADMIN_EMAIL} already exists.")
        return admin

    role = db.execute(select(Role).where(Role.name == ADMIN_ROLE_NAME)).scalar_one()
    admin = User(
        email=ADMIN_EMAIL,
        username="admin",
        hashed_password=hash_password(ADMIN_PASSWORD),
        full_name="Library Admin",
        is_superuser=True,
        role=role,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    print(f"Created admin {ADMIN_EMAIL}.")
    return admin


def _get_or_add(db: Session, model: type, name: str, **fields) -> object:
    record = db.execute(select(model).where(model.name == name)).scalar_one_or_none()
    if record is None:
        record = model(name=name, **fields)
        db.add(record)
    return record


def create_catalogue(db: Session, admin: User) -> int:
    """Create a small sample catalogue. Returns the number of books."""
    print("Creating sample catalogue...")

    writers = {
        name: _get_or_add(db, Writer, name, created_by=admin.id)
        for name in ("George Orwell", "Jane Austen", "Isaac Asimov", "J.R.R. Tolkien")
    }
    publications = {
        name: _get_or_add(db, Publication, name, created_by=admin.id)
        for name in ("Penguin Classics", "Secker & Warburg", "Allen & Unwin")
    }
    subjects = {
        name: _get_or_add(db, Subject, name, created_by=admin.id)
        for name in ("Science Fiction", "Fantasy", "Classic Literature", "Dystopian", "Romance")
    }
    db.flush()

    books_data = [
        {
            "name": "1984",
            "writer": "George Orwell",
            "publication": "Secker & Warburg",
            "subjects": ["Dystopian", "Classic Literature"],
            "summary": "A dystopian novel set in a totalitarian society under constant surveillance.",
            "page": 328,
            "price": Decimal("15.99"),
            "stock_available": 4,
            "best_seller": True,
        },
        {
            "name": "Pride and Prejudice",
            "writer": "Jane Austen",
            "publication": "Penguin Classics",
            "subjects": ["Romance", "Classic Literature"],
            "summary": "The turbulent relationship between Elizabeth Bennet and Fitzwilliam Darcy.",
            "page": 432,
            "price": Decimal("9.99"),
            "stock_available": 2,
        },
        {
            "name": "Foundation",
            "writer": "Isaac Asimov",
            "publication": "Penguin Classics",
            "subjects": ["Science Fiction"],
            "summary": "A mathematician predicts the fall of the Galactic Empire and plans ahead.",
            "page": 255,
            "price": Decimal("14.99"),
            "stock_available": 3,
        },
        {
            "name": "The Hobbit",
            "writer": "J.R.R. Tolkien",
            "publication": "Allen & Unwin",
            "subjects": ["Fantasy", "Classic Literature"],
            "summary": "Bilbo Baggins is swept into a quest to reclaim a treasure guarded by a dragon.",
            "page": 310,
            "price": Decimal("12.99"),
            "stock_available": 5,
            "best_seller": True,
        },
    ]

    created = 0
    for data in books_data:
        if db.execute(select(Book.id).where(Book.name == data["name"])).first() is not None:
            continue
        book = Book(
            name=data["name"],
            writer=writers[data["writer"]],
            publication=publications[data["publication"]],
            subjects=[subjects[name] for name in data["subjects"]],
            summary=data["summary"],
            page=data["page"],
            price=data["price"],
            stock_available=data["stock_available"],
            best_seller=data.get("best_seller", False),
            created_by=admin.id,
        )
        db.add(book)
        created += 1

    db.commit()
    print(f"Created {created} books.")
    return created


def seed_database() -> None:
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()
    db = SessionLocal()

    try:
        create_access_control(db)
        admin = create_admin(db)
        books = create_catalogue(db, admin)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print(f"\nAdmin login: {ADMIN_EMAIL}")
        print(f"New books: {books}")
        print("\nYou can now access the API at http://localhost:8001")
        print("API documentation at http://localhost:8001/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
