"""
SessionStore over a plain dict backend
"""
from classes.session_store import SessionStore


class FakeUser:
    id = 4
    name = "Sam Student"
    email = "sam@uni.edu"
    role = "student"


def test_get_and_set():
    store = SessionStore({})
    assert store.get("user_id") is None
    assert store.get("user_id", 0) == 0

    store.set("user_id", 4)

    assert store.get("user_id") == 4


def test_identity_requires_login():
    store = SessionStore({"user_id": 4, "role": "admin"})
    assert store.identity() is None


def test_login_replaces_previous_session():
    backend = {"role": "admin", "stale": "value"}
    store = SessionStore(backend)

    store.login(FakeUser())

    assert "stale" not in backend
    assert store.identity() == {"id": 4, "name": "Sam Student", "email": "sam@uni.edu", "role": "student"}


def test_destroy():
    store = SessionStore({})
    store.login(FakeUser())

    store.destroy()

    assert store.identity() is None
    assert store.backend == {}
