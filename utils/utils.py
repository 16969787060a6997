from functools import wraps
from flask import current_app, request
from classes.session_store import session_store
from utils.errors import AuthenticationError, PermissionDenied
from utils.helpers import send_error


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not session_store.get("logged_in"):
            current_app.logger.info("Rejected %s %s: not logged in", request.method, request.path)
            return send_error("Not logged in", 401)
        return f(*args, **kwargs)

    return decorated_function


def role_required(role):
    """Exact match on the role stored in the session; no role hierarchy."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not session_store.get("logged_in"):
                current_app.logger.info("Rejected %s %s: not logged in", request.method, request.path)
                return send_error("Not logged in", 401)
            if session_store.get("role") != role:
                current_app.logger.info("Rejected %s %s: role %r, needs %r",
                                        request.method, request.path, session_store.get("role"), role)
                return send_error("Access denied: insufficient permissions", 403)
            return f(*args, **kwargs)

        return decorated_function
    return decorator


def restricted_to(role, handler):
    """Wrap a router handler so it only runs for sessions holding `role`."""
    @wraps(handler)
    def guarded(ctx, *args, **kwargs):
        if ctx.identity is None:
            raise AuthenticationError()
        if ctx.identity.get("role") != role:
            raise PermissionDenied()
        return handler(ctx, *args, **kwargs)

    return guarded
