"""
Admin student management endpoint
"""
import pytest

from models import User
from conftest import STUDENTS_URL

ANN = {"name": "Ann", "email": "ann123@uni.edu", "password": "longpass1"}


def add_student(client, **overrides):
    payload = dict(ANN, **overrides)
    return client.post(STUDENTS_URL, json=payload)


def student_count(app):
    with app.app_context():
        return User.query.filter_by(is_admin=False).count()


class TestAccess:

    def test_anonymous_is_rejected(self, client):
        response = client.get(STUDENTS_URL)
        assert response.status_code == 401
        assert response.get_json() == {"success": False, "message": "Not logged in"}

    def test_student_is_rejected(self, student_client):
        response = student_client.get(STUDENTS_URL)
        assert response.status_code == 403
        assert response.get_json()["message"] == "Access denied: insufficient permissions"


class TestCreate:

    def test_create_derives_student_id(self, admin_client):
        response = add_student(admin_client)

        assert response.status_code == 201
        data = response.get_json()["data"]
        assert data["id"] == "ann123"
        assert data["student_id"] == "ann123"
        assert data["email"] == "ann123@uni.edu"
        assert "password" not in data and "password_hash" not in data

        fetched = admin_client.get(STUDENTS_URL + "?id=ann123")
        assert fetched.status_code == 200
        student = fetched.get_json()["data"]
        assert student["name"] == "Ann"
        assert student["id"] == "ann123"
        assert student["email"] == "ann123@uni.edu"

    def test_lookup_by_student_id_param(self, admin_client):
        add_student(admin_client)
        response = admin_client.get(STUDENTS_URL + "?student_id=ann123")
        assert response.status_code == 200

    @pytest.mark.parametrize("missing", ["name", "email", "password"])
    def test_missing_required_field(self, app, admin_client, missing):
        payload = dict(ANN)
        del payload[missing]

        response = admin_client.post(STUDENTS_URL, json=payload)

        assert response.status_code == 400
        assert response.get_json()["message"] == f"Missing required field: {missing}"
        assert student_count(app) == 0

    def test_blank_name_counts_as_missing(self, app, admin_client):
        response = add_student(admin_client, name="   ")
        assert response.status_code == 400
        assert student_count(app) == 0

    def test_invalid_email(self, app, admin_client):
        response = add_student(admin_client, email="ann-at-uni")
        assert response.status_code == 400
        assert student_count(app) == 0

    def test_short_password(self, app, admin_client):
        response = add_student(admin_client, password="short")
        assert response.status_code == 400
        assert student_count(app) == 0

    def test_duplicate_email(self, app, admin_client):
        assert add_student(admin_client).status_code == 201

        response = add_student(admin_client, name="Other Ann")

        assert response.status_code == 409
        assert student_count(app) == 1

    def test_duplicate_derived_id(self, app, admin_client):
        assert add_student(admin_client).status_code == 201

        response = add_student(admin_client, email="ann123@other.edu")

        assert response.status_code == 409
        assert response.get_json()["message"] == "Student ID already exists"
        assert student_count(app) == 1

    def test_unknown_action(self, admin_client):
        response = admin_client.post(STUDENTS_URL + "?action=explode", json=ANN)
        assert response.status_code == 400


class TestRead:

    def test_unknown_student(self, admin_client):
        response = admin_client.get(STUDENTS_URL + "?id=ghost")
        assert response.status_code == 404
        assert response.get_json()["success"] is False

    def test_student_id_is_case_sensitive(self, admin_client):
        add_student(admin_client)

        assert admin_client.get(STUDENTS_URL + "?id=ANN123").status_code == 404
        assert admin_client.delete(STUDENTS_URL + "?student_id=Ann123").status_code == 404
        assert admin_client.get(STUDENTS_URL + "?id=ann123").status_code == 200

    def test_admins_are_not_listed(self, admin_client):
        response = admin_client.get(STUDENTS_URL)
        assert response.status_code == 200
        assert response.get_json() == {"success": True, "data": []}

    def test_list_search_and_sort(self, admin_client):
        add_student(admin_client, name="Zoe", email="zoe@uni.edu")
        add_student(admin_client, name="Bob", email="bob@uni.edu")
        add_student(admin_client, name="Ann", email="ann123@uni.edu")

        names = [s["name"] for s in admin_client.get(STUDENTS_URL).get_json()["data"]]
        assert names == ["Ann", "Bob", "Zoe"]

        desc = admin_client.get(STUDENTS_URL + "?sort=student_id&order=desc").get_json()["data"]
        assert [s["id"] for s in desc] == ["zoe", "bob", "ann123"]

        found = admin_client.get(STUDENTS_URL + "?search=bo").get_json()["data"]
        assert [s["name"] for s in found] == ["Bob"]

    def test_unknown_sort_falls_back_to_name(self, admin_client):
        add_student(admin_client, name="Zoe", email="a-zoe@uni.edu")
        add_student(admin_client, name="Bob", email="b-bob@uni.edu")

        response = admin_client.get(STUDENTS_URL + "?sort=password_hash&order=sideways")

        assert response.status_code == 200
        assert [s["name"] for s in response.get_json()["data"]] == ["Bob", "Zoe"]


class TestUpdate:

    def test_invalid_email_leaves_row_unchanged(self, admin_client):
        add_student(admin_client)

        response = admin_client.put(STUDENTS_URL, json={"student_id": "ann123", "email": "not-an-email"})

        assert response.status_code == 400
        student = admin_client.get(STUDENTS_URL + "?id=ann123").get_json()["data"]
        assert student["email"] == "ann123@uni.edu"

    def test_nothing_to_update(self, admin_client):
        add_student(admin_client)

        response = admin_client.put(STUDENTS_URL, json={"student_id": "ann123", "nickname": "annie"})

        assert response.status_code == 400
        assert response.get_json()["message"] == "No fields provided to update"
        assert admin_client.get(STUDENTS_URL + "?id=ann123").get_json()["data"]["name"] == "Ann"

    def test_missing_key(self, admin_client):
        response = admin_client.put(STUDENTS_URL, json={"name": "Nobody"})
        assert response.status_code == 400

    def test_unknown_student(self, admin_client):
        response = admin_client.put(STUDENTS_URL, json={"student_id": "ghost", "name": "Casper"})
        assert response.status_code == 404

    def test_rename(self, admin_client):
        add_student(admin_client)

        response = admin_client.put(STUDENTS_URL, json={"student_id": "ann123", "name": "Ann Smith"})

        assert response.status_code == 200
        assert response.get_json()["data"]["name"] == "Ann Smith"

    def test_email_change_moves_student_id(self, admin_client):
        add_student(admin_client)

        response = admin_client.put(STUDENTS_URL, json={"student_id": "ann123", "email": "ann.smith@uni.edu"})

        assert response.status_code == 200
        assert response.get_json()["data"]["id"] == "ann.smith"
        assert admin_client.get(STUDENTS_URL + "?id=ann123").status_code == 404

    def test_email_taken_by_someone_else(self, admin_client):
        add_student(admin_client)
        add_student(admin_client, name="Bob", email="bob@uni.edu")

        response = admin_client.put(STUDENTS_URL, json={"student_id": "bob", "email": "ann123@uni.edu"})

        assert response.status_code == 409

    def test_keeping_own_email_is_not_a_conflict(self, admin_client):
        add_student(admin_client)

        response = admin_client.put(STUDENTS_URL, json={"student_id": "ann123", "email": "ann123@uni.edu"})

        assert response.status_code == 200


class TestDelete:

    def test_delete(self, app, admin_client):
        add_student(admin_client)

        response = admin_client.delete(STUDENTS_URL + "?student_id=ann123")

        assert response.status_code == 200
        assert student_count(app) == 0

    def test_delete_with_body(self, app, admin_client):
        add_student(admin_client)

        response = admin_client.delete(STUDENTS_URL, json={"id": "ann123"})

        assert response.status_code == 200
        assert student_count(app) == 0

    def test_unknown_student(self, admin_client):
        response = admin_client.delete(STUDENTS_URL + "?student_id=ghost")
        assert response.status_code == 404

    def test_missing_key(self, admin_client):
        response = admin_client.delete(STUDENTS_URL)
        assert response.status_code == 400


class TestChangePassword:

    URL = STUDENTS_URL + "?action=change_password"

    def test_change_password(self, client, admin_client):
        add_student(admin_client)

        response = admin_client.post(self.URL, json={
            "student_id": "ann123", "current_password": "longpass1", "new_password": "newpass123",
        })

        assert response.status_code == 200
        login = client.post("/api/auth/", json={"email": "ann123@uni.edu", "password": "newpass123"})
        assert login.status_code == 200

    def test_wrong_current_password(self, admin_client):
        add_student(admin_client)

        response = admin_client.post(self.URL, json={
            "student_id": "ann123", "current_password": "notmypass", "new_password": "newpass123",
        })

        assert response.status_code == 401

    def test_new_password_too_short(self, admin_client):
        add_student(admin_client)

        response = admin_client.post(self.URL, json={
            "student_id": "ann123", "current_password": "longpass1", "new_password": "short",
        })

        assert response.status_code == 400

    def test_missing_fields(self, admin_client):
        response = admin_client.post(self.URL, json={"student_id": "ann123"})
        assert response.status_code == 400

    def test_unknown_student(self, admin_client):
        response = admin_client.post(self.URL, json={
            "student_id": "ghost", "current_password": "longpass1", "new_password": "newpass123",
        })
        assert response.status_code == 404
