from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from models import db
from utils.helpers import send_error


class ApiError(Exception):
    """Base class for errors that end a request with a JSON failure body."""
    status_code = 500
    default_message = "Server error occurred"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "Not logged in"


class PermissionDenied(ApiError):
    status_code = 403
    default_message = "Access denied: insufficient permissions"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


class MethodNotAllowed(ApiError):
    status_code = 405
    default_message = "Method not allowed"


class Conflict(ApiError):
    status_code = 409
    default_message = "Already exists"


class ServerError(ApiError):
    status_code = 500


def register_error_handlers(app):

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return send_error(error.message, error.status_code)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(error):
        db.session.rollback()
        current_app.logger.exception("Database error: %s", error)
        return send_error("Database error occurred", 500)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return send_error(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        current_app.logger.exception("Unhandled error: %s", error)
        return send_error("Server error occurred", 500)
