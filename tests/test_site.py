"""
Tests for Site Content API Endpoints

About us, terms and conditions and the privacy policy under
/api/v1/site/<kind>. Reading is public, writing needs a permission.
"""

import pytest
from fastapi import status

from tests.conftest import API

DETAILS = "We are a small community library open to everyone."


class TestSiteDocuments:
    """Tests for GET/POST/DELETE /api/v1/site/<kind>."""

    @pytest.mark.parametrize(
        ("kind", "title"),
        [
            ("about-us", "About us"),
            ("terms-and-conditions", "Terms and conditions"),
            ("privacy-policy", "Privacy policy"),
        ],
    )
    def test_missing_document(self, client, kind, title):
        response = client.get(f"{API}/site/{kind}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == f"{title} not found."

    def test_create_then_read(self, client, admin_headers):
        response = client.post(
            f"{API}/site/about-us",
            json={"details": DETAILS},
            headers=admin_headers,
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["message"] == "About us created successfully."

        response = client.get(f"{API}/site/about-us")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["details"] == DETAILS
        assert response.json()["data"]["kind"] == "about-us"

    def test_second_write_replaces(self, client, admin_headers):
        client.post(f"{API}/site/privacy-policy", json={"details": DETAILS}, headers=admin_headers)

        response = client.post(
            f"{API}/site/privacy-policy",
            json={"details": "We never share your reading history."},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Privacy policy updated successfully."
        assert response.json()["data"]["details"] == "We never share your reading history."

    def test_write_requires_permission(self, client, auth_headers):
        response = client.post(
            f"{API}/site/terms-and-conditions",
            json={"details": DETAILS},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == (
            'You do not have the "create-terms-and-conditions" permission.'
        )

    def test_details_too_short(self, client, admin_headers):
        response = client.post(
            f"{API}/site/about-us",
            json={"details": "short"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete(self, client, admin_headers):
        client.post(f"{API}/site/about-us", json={"details": DETAILS}, headers=admin_headers)

        response = client.delete(f"{API}/site/about-us", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert client.get(f"{API}/site/about-us").status_code == status.HTTP_404_NOT_FOUND

    def test_delete_missing(self, client, admin_headers):
        response = client.delete(f"{API}/site/about-us", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
