"""
Tests for Book Request API Endpoints

- POST/GET /api/v1/users/requested-books
- PUT /api/v1/users/requested-books/{id}/image
- GET /api/v1/requested-books (staff)
- GET /api/v1/books/desired
"""

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from library_api.config import get_settings
from library_api.models import BookRequest
from tests.conftest import API, bearer

UNKNOWN_ID = "0123456789abcdef01234567"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def book_request(db_session, sample_user) -> BookRequest:
    request = BookRequest(
        requested_by=sample_user.id,
        name="The Name of the Wind",
        writer="Patrick Rothfuss",
        subjects=["Fantasy"],
    )
    db_session.add(request)
    db_session.commit()
    db_session.refresh(request)
    return request


class TestRequestBook:
    """Tests for POST /api/v1/users/requested-books endpoint."""

    def test_request_book(self, client, auth_headers, sample_user):
        response = client.post(
            f"{API}/users/requested-books",
            json={
                "name": "The Wise Man's Fear",
                "writer": "Patrick Rothfuss",
                "subjects": ["Fantasy", "Adventure"],
                "edition": "2nd",
            },
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["requestedBy"] == sample_user.id
        assert data["subjects"] == ["Fantasy", "Adventure"]
        assert data["image"] is None

    def test_same_title_twice(self, client, auth_headers, book_request):
        response = client.post(
            f"{API}/users/requested-books",
            json={"name": "the name of the wind"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == (
            'Book "the name of the wind" is already requested.'
        )

    def test_other_member_may_request_same_title(self, client, second_user, book_request):
        response = client.post(
            f"{API}/users/requested-books",
            json={"name": "The Name of the Wind"},
            headers=bearer(second_user),
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_requires_authentication(self, client):
        response = client.post(
            f"{API}/users/requested-books",
            json={"name": "The Name of the Wind"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestMyRequests:
    """Tests for GET /api/v1/users/requested-books endpoint."""

    def test_my_requests(self, client, auth_headers, book_request):
        response = client.get(f"{API}/users/requested-books", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"][0]["id"] == book_request.id

    def test_no_requests(self, client, auth_headers):
        response = client.get(f"{API}/users/requested-books", headers=auth_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "No book requests found."


class TestUploadImage:
    """Tests for PUT /api/v1/users/requested-books/{id}/image endpoint."""

    def test_upload_image(self, client, auth_headers, book_request, file_storage):
        response = client.put(
            f"{API}/users/requested-books/{book_request.id}/image",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["image"] == "memory://file-1"
        assert file_storage.files["file-1"] == (PNG_BYTES, "image/png")

    def test_failed_save_removes_upload(
        self, client, auth_headers, book_request, file_storage, db_session, monkeypatch
    ):
        def commit():
            raise OperationalError("UPDATE book_requests", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", commit)
        monkeypatch.setattr(db_session, "rollback", lambda: None)

        response = client.put(
            f"{API}/users/requested-books/{book_request.id}/image",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["message"] == "Failed to upload image."
        assert file_storage.files == {}

    def test_wrong_type(self, client, auth_headers, book_request, file_storage):
        response = client.put(
            f"{API}/users/requested-books/{book_request.id}/image",
            files={"image": ("cover.gif", b"GIF89a", "image/gif")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Only JPEG and PNG images are allowed."
        assert file_storage.files == {}

    def test_too_large(self, client, auth_headers, book_request):
        too_large = b"\x00" * (get_settings().upload_max_bytes + 1)

        response = client.put(
            f"{API}/users/requested-books/{book_request.id}/image",
            files={"image": ("cover.jpg", too_large, "image/jpeg")},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_someone_elses_request(self, client, second_user, book_request):
        response = client.put(
            f"{API}/users/requested-books/{book_request.id}/image",
            files={"image": ("cover.png", PNG_BYTES, "image/png")},
            headers=bearer(second_user),
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_missing_file(self, client, auth_headers, book_request):
        response = client.put(
            f"{API}/users/requested-books/{book_request.id}/image",
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert '"image"' in response.json()["message"]


class TestRequestList:
    """Tests for GET /api/v1/requested-books endpoint."""

    def test_requires_permission(self, client, auth_headers):
        response = client.get(f"{API}/requested-books", headers=auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_requests(self, client, admin_headers, book_request):
        response = client.get(f"{API}/requested-books?name=wind", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["totalItems"] == 1
        assert response.json()["message"] == "1 book requests fetched successfully."

    def test_filter_by_requester(self, client, admin_headers, second_user, book_request):
        response = client.get(
            f"{API}/requested-books?requestedBy={second_user.id}",
            headers=admin_headers,
        )

        assert response.json()["data"]["totalItems"] == 0


class TestDesiredBooks:
    """Tests for GET /api/v1/books/desired endpoint."""

    def test_single_request_is_not_desired(self, client, book_request):
        response = client.get(f"{API}/books/desired")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "No desired books found."

    def test_desired_books(self, client, db_session, book_request, second_user, superuser):
        db_session.add_all([
            BookRequest(requested_by=second_user.id, name="THE NAME OF THE WIND"),
            BookRequest(requested_by=superuser.id, name="The Name of the Wind"),
            BookRequest(requested_by=second_user.id, name="Dune"),
            BookRequest(requested_by=superuser.id, name="Dune"),
        ])
        db_session.commit()

        response = client.get(f"{API}/books/desired")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert [entry["count"] for entry in data] == [3, 2]
        assert data[1]["name"] == "Dune"
        assert data[1]["book"] is None

    def test_desired_book_in_catalogue(
        self, client, db_session, sample_book, sample_user, second_user
    ):
        db_session.add_all([
            BookRequest(requested_by=sample_user.id, name="Nineteen Eighty-Four"),
            BookRequest(requested_by=second_user.id, name="nineteen eighty-four"),
        ])
        db_session.commit()

        data = client.get(f"{API}/books/desired").json()["data"]

        assert data[0]["book"]["id"] == sample_book.id
