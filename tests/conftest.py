"""
Pytest configuration and shared fixtures
"""
import os

# Must be set before the app (and config.py) is imported
os.environ["FLASK_ENV"] = "testing"

import pytest

from app import app as flask_app
from models import db, User

ADMIN = {"name": "Portal Admin", "email": "admin@uni.edu", "password": "adminpass1"}
STUDENT = {"name": "Sam Student", "email": "sam@uni.edu", "password": "studentpass1"}

STUDENTS_URL = "/api/admin/students"
ASSIGNMENTS_URL = "/api/assignments/"
RESOURCES_URL = "/api/resources/"
WEEKLY_URL = "/api/weekly/"
AUTH_URL = "/api/auth/"


def create_user(app, name, email, password, is_admin=False):
    with app.app_context():
        user = User(name=name, email=email, is_admin=is_admin)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id


def login(client, email, password):
    response = client.post(AUTH_URL, json={"email": email, "password": password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def app():
    """Fresh in-memory schema for every test."""
    with flask_app.app_context():
        db.create_all()
    yield flask_app
    with flask_app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Anonymous test client"""
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Test client logged in as an administrator"""
    create_user(app, ADMIN["name"], ADMIN["email"], ADMIN["password"], is_admin=True)
    return login(app.test_client(), ADMIN["email"], ADMIN["password"])


@pytest.fixture
def student_client(app):
    """Test client logged in as a student"""
    create_user(app, STUDENT["name"], STUDENT["email"], STUDENT["password"])
    return login(app.test_client(), STUDENT["email"], STUDENT["password"])
