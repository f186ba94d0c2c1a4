"""
Tests for User Authentication

- Signup (POST /api/v1/auth/signup)
- Login (POST /api/v1/auth/login)
- Token refresh (POST /api/v1/auth/refresh)
- Profile (GET/PUT /api/v1/users/me)
"""

from fastapi import status
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from library_api.models import User
from library_api.services.security import (
    create_access_token,
    create_refresh_token,
    verify_password,
)
from tests.conftest import API


class TestSignup:
    """Tests for POST /api/v1/auth/signup"""

    def test_signup_success(self, client: TestClient, db_session: Session):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": "newuser@example.com",
                "username": "NewUser",
                "password": "SecurePass123",
                "fullName": "New User",
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()["data"]
        assert data["email"] == "newuser@example.com"
        assert data["username"] == "newuser"  # Lowercased
        assert data["fullName"] == "New User"
        assert data["isActive"] is True
        # Password should NEVER be in response
        assert "password" not in data
        assert "hashedPassword" not in data

        user = db_session.get(User, data["id"])
        assert verify_password("SecurePass123", user.hashed_password)

    def test_signup_duplicate_email(self, client: TestClient, sample_user: User):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": sample_user.email,
                "username": "someoneelse",
                "password": "SecurePass123",
            },
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Email is already registered."

    def test_signup_duplicate_username(self, client: TestClient, sample_user: User):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": "other@example.com",
                "username": sample_user.username,
                "password": "SecurePass123",
            },
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == "Username is already registered."

    def test_signup_weak_password(self, client: TestClient):
        response = client.post(
            f"{API}/auth/signup",
            json={
                "email": "weak@example.com",
                "username": "weakling",
                "password": "alllowercase1",
            },
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "uppercase" in response.json()["message"]

    def test_signup_invalid_email(self, client: TestClient):
        response = client.post(
            f"{API}/auth/signup",
            json={"email": "not-an-email", "username": "someone", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert '"email"' in response.json()["message"]


class TestLogin:
    """Tests for POST /api/v1/auth/login"""

    def test_login_success(self, client: TestClient, sample_user: User):
        response = client.post(
            f"{API}/auth/login",
            json={"email": sample_user.email, "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "Logged in successfully."
        assert body["data"]["accessToken"]
        assert body["data"]["refreshToken"]
        assert body["data"]["tokenType"] == "bearer"

    def test_login_wrong_password(self, client: TestClient, sample_user: User):
        response = client.post(
            f"{API}/auth/login",
            json={"email": sample_user.email, "password": "WrongPass123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Incorrect email or password."

    def test_login_unknown_email(self, client: TestClient):
        response = client.post(
            f"{API}/auth/login",
            json={"email": "nobody@example.com", "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Incorrect email or password."

    def test_login_inactive_account(
        self, client: TestClient, db_session: Session, sample_user: User
    ):
        sample_user.is_active = False
        db_session.commit()

        response = client.post(
            f"{API}/auth/login",
            json={"email": sample_user.email, "password": "SecurePass123"},
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestRefresh:
    """Tests for POST /api/v1/auth/refresh"""

    def test_refresh_success(self, client: TestClient, sample_user: User):
        response = client.post(
            f"{API}/auth/refresh",
            json={"refreshToken": create_refresh_token(sample_user.id)},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["accessToken"]

    def test_access_token_cannot_refresh(self, client: TestClient, sample_user: User):
        response = client.post(
            f"{API}/auth/refresh",
            json={"refreshToken": create_access_token(sample_user.id)},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid or expired refresh token."

    def test_refresh_token_cannot_authenticate(self, client: TestClient, sample_user: User):
        headers = {"Authorization": f"Bearer {create_refresh_token(sample_user.id)}"}

        response = client.get(f"{API}/users/me", headers=headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestProfile:
    """Tests for GET/PUT /api/v1/users/me"""

    def test_get_me(self, client: TestClient, auth_headers, sample_user: User):
        response = client.get(f"{API}/users/me", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["id"] == sample_user.id
        assert data["role"] is None

    def test_get_me_with_role(self, client: TestClient, librarian_headers):
        data = client.get(f"{API}/users/me", headers=librarian_headers).json()["data"]

        assert data["role"]["name"] == "Librarian"

    def test_get_me_unauthenticated(self, client: TestClient):
        response = client.get(f"{API}/users/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_inactive_user_refused(
        self, client: TestClient, db_session: Session, sample_user: User, auth_headers
    ):
        sample_user.is_active = False
        db_session.commit()

        response = client.get(f"{API}/users/me", headers=auth_headers)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Account is inactive."

    def test_update_me(self, client: TestClient, auth_headers):
        response = client.put(
            f"{API}/users/me",
            json={"fullName": "Renamed Reader", "pronouns": "They/Them"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["fullName"] == "Renamed Reader"
        assert data["pronouns"] == "They/Them"

    def test_update_me_empty(self, client: TestClient, auth_headers):
        response = client.put(f"{API}/users/me", json={}, headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Please provide update data."

    def test_cannot_promote_self(self, client: TestClient, auth_headers):
        response = client.put(
            f"{API}/users/me",
            json={"isSuperuser": True},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
