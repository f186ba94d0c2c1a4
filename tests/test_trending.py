"""
Tests for Trending API Endpoints

Favourites drive the rankings: a book trends with 2 or more, a writer,
publication or subject with 3 or more across its books.
"""

import pytest
from fastapi import status

from library_api.models import FavouriteBook, User
from library_api.services.security import hash_password
from tests.conftest import API


@pytest.fixture
def readers(db_session) -> list[User]:
    users = [
        User(
            email=f"fan{i}@example.com",
            username=f"fan{i}",
            hashed_password=hash_password("SecurePass123"),
        )
        for i in range(3)
    ]
    db_session.add_all(users)
    db_session.commit()
    return users


def favourite(db_session, users, book):
    db_session.add_all(FavouriteBook(user_id=user.id, book_id=book.id) for user in users)
    db_session.commit()


class TestTrendingBooks:
    """Tests for GET /api/v1/trending/books endpoint."""

    def test_no_trending_books(self, client):
        response = client.get(f"{API}/trending/books")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "No trending books found."

    def test_single_favourite_does_not_trend(self, client, db_session, readers, sample_book):
        favourite(db_session, readers[:1], sample_book)

        response = client.get(f"{API}/trending/books")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_ranking(self, client, db_session, readers, multiple_books):
        favourite(db_session, readers[:2], multiple_books[0])
        favourite(db_session, readers, multiple_books[1])

        response = client.get(f"{API}/trending/books")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert [entry["count"] for entry in data] == [3, 2]
        assert data[0]["book"]["id"] == multiple_books[1].id


class TestTrendingCatalogue:
    """Tests for trending writers, publications and subjects."""

    def test_trending_writer_needs_three(self, client, db_session, readers, sample_book):
        favourite(db_session, readers[:2], sample_book)

        response = client.get(f"{API}/trending/writers")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "No trending writers found."

    def test_trending_writer(self, client, db_session, readers, sample_book, sample_writer):
        favourite(db_session, readers, sample_book)

        data = client.get(f"{API}/trending/writers").json()["data"]

        assert len(data) == 1
        assert data[0]["count"] == 3
        assert data[0]["writer"]["id"] == sample_writer.id

    def test_favourites_add_up_across_books(
        self, client, db_session, readers, multiple_books, sample_writer
    ):
        # Books 0 and 2 share sample_writer
        favourite(db_session, readers[:2], multiple_books[0])
        favourite(db_session, readers[:1], multiple_books[2])

        data = client.get(f"{API}/trending/writers").json()["data"]

        assert data[0]["count"] == 3

    def test_trending_publication(
        self, client, db_session, readers, sample_book, sample_publication
    ):
        favourite(db_session, readers, sample_book)

        data = client.get(f"{API}/trending/publications").json()["data"]

        assert data[0]["publication"]["name"] == "Secker & Warburg"

    def test_trending_subject(self, client, db_session, readers, sample_book):
        favourite(db_session, readers, sample_book)

        data = client.get(f"{API}/trending/subjects").json()["data"]

        assert len(data) == 1
        assert data[0]["subject"]["name"] == "Dystopian"
        assert data[0]["count"] == 3
