"""
Tests for the cross-cutting API behaviour

- The response envelope
- Request validation (400, ordered, short-circuiting)
- Unknown routes (404) and unsupported methods (405)
- Service status and the root endpoint
"""

from fastapi import status

from tests.conftest import API

UNKNOWN_ID = "0123456789abcdef01234567"


class TestEnvelope:
    """Every response shares {route, timestamp, success, data, message, status}."""

    def test_success_envelope(self, client):
        response = client.get(f"{API}/subjects?page=1")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert set(body) == {"route", "timestamp", "success", "data", "message", "status"}
        assert body["route"] == "/api/v1/subjects?page=1"
        assert body["success"] is True
        assert body["status"] == 200

    def test_error_envelope(self, client):
        response = client.get(f"{API}/subjects/{UNKNOWN_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["success"] is False
        assert body["data"] == {}
        assert body["status"] == 404
        assert body["message"] == "No subject found with the provided ID."


class TestValidation:
    """Tests for the ordered request validation."""

    def test_invalid_id_is_400(self, client):
        response = client.get(f"{API}/subjects/not-an-id")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith('"id"')

    def test_params_checked_before_body(self, client, admin_headers):
        """An invalid id stops the request before the body is looked at."""
        response = client.put(
            f"{API}/subjects/not-an-id",
            json={"name": "x"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        message = response.json()["message"]
        assert '"id"' in message
        assert '"name"' not in message

    def test_all_errors_of_a_part_are_reported(self, client, admin_headers):
        response = client.post(
            f"{API}/writers",
            json={"name": "ab", "review": 9},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        message = response.json()["message"]
        assert '"name"' in message
        assert '"review"' in message

    def test_unknown_field_rejected(self, client, admin_headers):
        response = client.post(
            f"{API}/subjects",
            json={"name": "Fiction", "colour": "blue"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert '"colour"' in response.json()["message"]

    def test_malformed_json_body(self, client, admin_headers):
        response = client.post(
            f"{API}/subjects",
            content=b"{not json",
            headers={**admin_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Request body must be valid JSON."

    def test_query_values_are_coerced(self, client):
        response = client.get(f"{API}/subjects?page=2&limit=5&isActive=true")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["currentPage"] == 2
        assert data["totalPages"] == 0

    def test_repeated_single_value_key_rejected(self, client):
        response = client.get(f"{API}/subjects?page=1&page=2")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"].startswith('"page"')


class TestRouting:
    """Tests for unknown routes and methods."""

    def test_unknown_route(self, client):
        response = client.get(f"{API}/nowhere")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["message"] == "Route /api/v1/nowhere not found."

    def test_method_not_allowed(self, client):
        response = client.patch(f"{API}/subjects")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "DELETE, GET, POST"
        assert response.json()["message"] == (
            'Method "PATCH" is not allowed for the requested route. '
            "Allowed methods: DELETE, GET, POST."
        )

    def test_method_not_allowed_on_item_route(self, client):
        response = client.post(f"{API}/subjects/{UNKNOWN_ID}")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "DELETE, GET, PUT"
        assert response.json()["message"].endswith("Allowed methods: DELETE, GET, PUT.")

    def test_method_not_allowed_on_auth_route(self, client):
        response = client.delete(f"{API}/auth/login")

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        assert response.headers["Allow"] == "POST"


class TestStatus:
    """Tests for GET /api/v1/status and GET /."""

    def test_status(self, client):
        response = client.get(f"{API}/status")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Service is running."
        assert body["data"]["database"] == "ok"
        assert body["data"]["version"] == "v1"

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert set(body) == {"route", "timestamp", "success", "data", "message", "status"}
        assert body["success"] is True
        assert body["message"] == "Welcome to Library API"
        assert body["data"]["statusRoute"] == f"{API}/status"
