"""
Tests for Subjects API Endpoints

Subjects are the simplest catalogue resource, so these tests also cover
the behaviour every resource router shares: permissions, pagination,
sorting, partial updates and delete-by-list.
"""

from fastapi import status
from sqlalchemy.exc import OperationalError

from library_api.models import Subject
from library_api.services.catalog import subject_service
from tests.conftest import API

UNKNOWN_ID = "0123456789abcdef01234567"


class TestListSubjects:
    """Tests for GET /api/v1/subjects endpoint."""

    def test_list_subjects_empty(self, client):
        response = client.get(f"{API}/subjects")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "No subjects found."
        assert body["data"]["items"] == []
        assert body["data"]["totalItems"] == 0

    def test_list_is_public(self, client, sample_subjects):
        response = client.get(f"{API}/subjects")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["message"] == "3 subjects fetched successfully."
        assert body["data"]["totalItems"] == 3

    def test_sort_by_name(self, client, sample_subjects):
        response = client.get(f"{API}/subjects?sort=name")

        names = [item["name"] for item in response.json()["data"]["items"]]
        assert names == ["Classics", "Dystopian", "Politics"]

    def test_sort_descending(self, client, sample_subjects):
        response = client.get(f"{API}/subjects?sort=-name")

        names = [item["name"] for item in response.json()["data"]["items"]]
        assert names == ["Politics", "Dystopian", "Classics"]

    def test_unknown_sort_field(self, client):
        response = client.get(f"{API}/subjects?sort=colour")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert '"sort"' in response.json()["message"]

    def test_name_filter_is_case_insensitive(self, client, sample_subjects):
        response = client.get(f"{API}/subjects?name=CLASS")

        items = response.json()["data"]["items"]
        assert [item["name"] for item in items] == ["Classics"]

    def test_pagination(self, client, db_session):
        db_session.add_all(Subject(name=f"Subject {i:02d}") for i in range(12))
        db_session.commit()

        response = client.get(f"{API}/subjects?page=2&limit=5&sort=name")

        data = response.json()["data"]
        assert data["totalItems"] == 12
        assert data["totalPages"] == 3
        assert data["currentPage"] == 2
        assert data["pageSize"] == 5
        assert data["items"][0]["name"] == "Subject 05"

    def test_last_page_is_partial(self, client, db_session):
        db_session.add_all(Subject(name=f"Subject {i:02d}") for i in range(12))
        db_session.commit()

        data = client.get(f"{API}/subjects?page=3&limit=5").json()["data"]

        assert data["pageSize"] == 2
        assert len(data["items"]) == 2

    def test_page_past_the_end(self, client, sample_subjects):
        data = client.get(f"{API}/subjects?page=5").json()["data"]

        assert data["pageSize"] == 0
        assert data["items"] == []

    def test_limit_out_of_range(self, client):
        response = client.get(f"{API}/subjects?limit=500")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestGetSubject:
    """Tests for GET /api/v1/subjects/{id} endpoint."""

    def test_get_subject(self, client, sample_subjects):
        subject = sample_subjects[0]

        response = client.get(f"{API}/subjects/{subject.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["id"] == subject.id
        assert data["name"] == "Dystopian"
        assert data["isActive"] is True
        assert "createdAt" in data

    def test_get_subject_not_found(self, client):
        response = client.get(f"{API}/subjects/{UNKNOWN_ID}")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestCreateSubject:
    """Tests for POST /api/v1/subjects endpoint."""

    def test_requires_authentication(self, client):
        response = client.post(f"{API}/subjects", json={"name": "Fiction"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Authentication required."

    def test_requires_permission(self, client, auth_headers):
        response = client.post(
            f"{API}/subjects",
            json={"name": "Fiction"},
            headers=auth_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == (
            'You do not have the "create-subject" permission.'
        )

    def test_invalid_token(self, client):
        response = client.post(
            f"{API}/subjects",
            json={"name": "Fiction"},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["message"] == "Invalid or expired token."

    def test_create_subject(self, client, admin_headers, superuser):
        response = client.post(
            f"{API}/subjects",
            json={"name": "  Fiction  "},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["message"] == "Subject created successfully."
        assert body["data"]["name"] == "Fiction"
        assert body["data"]["createdBy"] == superuser.id

    def test_create_duplicate_name(self, client, admin_headers, sample_subjects):
        response = client.post(
            f"{API}/subjects",
            json={"name": "Dystopian"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["message"] == 'Subject name "Dystopian" already exists.'

    def test_name_too_short(self, client, admin_headers):
        response = client.post(
            f"{API}/subjects",
            json={"name": "ab"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestUpdateSubject:
    """Tests for PUT /api/v1/subjects/{id} endpoint."""

    def test_update_subject(self, client, admin_headers, superuser, sample_subjects):
        subject = sample_subjects[0]

        response = client.put(
            f"{API}/subjects/{subject.id}",
            json={"isActive": False},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["isActive"] is False
        assert data["name"] == "Dystopian"  # Unchanged
        assert data["updatedBy"] == superuser.id

    def test_empty_update(self, client, admin_headers, sample_subjects):
        response = client.put(
            f"{API}/subjects/{sample_subjects[0].id}",
            json={},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Please provide update data."

    def test_null_name_rejected(self, client, admin_headers, sample_subjects):
        response = client.put(
            f"{API}/subjects/{sample_subjects[0].id}",
            json={"name": None},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "name cannot be null" in response.json()["message"]

    def test_rename_to_existing_name(self, client, admin_headers, sample_subjects):
        response = client.put(
            f"{API}/subjects/{sample_subjects[0].id}",
            json={"name": "Classics"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_keep_own_name(self, client, admin_headers, sample_subjects):
        response = client.put(
            f"{API}/subjects/{sample_subjects[0].id}",
            json={"name": "Dystopian"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK

    def test_update_not_found(self, client, admin_headers):
        response = client.put(
            f"{API}/subjects/{UNKNOWN_ID}",
            json={"name": "Updated"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestDeleteSubject:
    """Tests for DELETE /api/v1/subjects and /api/v1/subjects/{id}."""

    def test_delete_subject(self, client, admin_headers, db_session):
        subject = Subject(name="Short Stories")
        db_session.add(subject)
        db_session.commit()

        response = client.delete(f"{API}/subjects/{subject.id}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Subject deleted successfully."
        assert client.get(f"{API}/subjects/{subject.id}").status_code == 404

    def test_delete_not_found(self, client, admin_headers):
        response = client.delete(f"{API}/subjects/{UNKNOWN_ID}", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_by_list(self, client, admin_headers, db_session):
        subjects = [Subject(name="Poetry"), Subject(name="Drama")]
        db_session.add_all(subjects)
        db_session.commit()
        ids = f"{subjects[0].id},{subjects[1].id},{UNKNOWN_ID}"

        response = client.delete(f"{API}/subjects?ids={ids}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Deleted 2, Not found 1, Failed 0."
        assert body["data"]["notFoundIds"] == [UNKNOWN_ID]

    def test_delete_by_repeated_ids(self, client, admin_headers, db_session):
        subjects = [Subject(name="Satire"), Subject(name="Fable")]
        db_session.add_all(subjects)
        db_session.commit()

        response = client.delete(
            f"{API}/subjects?ids={subjects[0].id}&ids={subjects[1].id}",
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Deleted 2, Not found 0, Failed 0."

    def test_delete_by_list_requires_ids(self, client, admin_headers):
        response = client.delete(f"{API}/subjects", headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert '"ids"' in response.json()["message"]

    def test_delete_by_list_rejects_bad_id(self, client, admin_headers):
        response = client.delete(f"{API}/subjects?ids=abc", headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


def database_locked() -> OperationalError:
    return OperationalError("DELETE FROM subjects", {}, Exception("database is locked"))


class TestDatastoreFailures:
    """Unexpected datastore errors are logged and reported without detail."""

    def test_bulk_delete_counts_failed_ids(self, client, admin_headers, db_session, monkeypatch):
        subjects = [Subject(name="Poetry"), Subject(name="Drama"), Subject(name="Essays")]
        db_session.add_all(subjects)
        db_session.commit()
        failing_id = subjects[1].id
        real_delete = db_session.delete

        def delete(instance):
            if instance.id == failing_id:
                raise database_locked()
            real_delete(instance)

        monkeypatch.setattr(db_session, "delete", delete)
        monkeypatch.setattr(db_session, "rollback", lambda: None)
        ids = ",".join(subject.id for subject in subjects)

        response = client.delete(f"{API}/subjects?ids={ids}", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Deleted 2, Not found 0, Failed 1."
        assert body["data"]["failed"] == 1
        assert body["data"]["failedIds"] == [failing_id]

    def test_delete_many_without_failures_succeeds(self, db_session):
        subject = Subject(name="Memoir")
        db_session.add(subject)
        db_session.commit()

        result = subject_service.delete_many(db_session, [subject.id])

        assert result.success is True
        assert result.status == status.HTTP_200_OK

    def test_failed_create_is_a_500(self, client, admin_headers, db_session, monkeypatch):
        def commit():
            raise database_locked()

        monkeypatch.setattr(db_session, "commit", commit)
        monkeypatch.setattr(db_session, "rollback", lambda: None)

        response = client.post(f"{API}/subjects", json={"name": "Essays"}, headers=admin_headers)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Failed to create subject."
        assert "locked" not in response.text
