from flask import session


class SessionStore:
    """Thin wrapper over the server-side session so handlers never reach for
    `flask.session` directly. Any mapping can be injected in its place."""

    def __init__(self, backend=None):
        self._backend = backend

    @property
    def backend(self):
        return self._backend if self._backend is not None else session

    def get(self, key, default=None):
        return self.backend.get(key, default)

    def set(self, key, value):
        self.backend[key] = value

    def destroy(self):
        self.backend.clear()

    def login(self, user):
        self.destroy()
        self.set("logged_in", True)
        self.set("user_id", user.id)
        self.set("user_name", user.name)
        self.set("user_email", user.email)
        self.set("role", user.role)

    def identity(self):
        """Return the logged-in user as a dict, or None."""
        if not self.get("logged_in"):
            return None
        return {
            "id": self.get("user_id"),
            "name": self.get("user_name"),
            "email": self.get("user_email"),
            "role": self.get("role"),
        }


session_store = SessionStore()
