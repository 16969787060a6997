from flask import Blueprint, current_app

from models.users import User
from classes.request_context import RequestContext
from classes.session_store import session_store
from classes.validators import validate_email
from utils.errors import AuthenticationError, MethodNotAllowed, ValidationError
from utils.helpers import send_response

auth_bp = Blueprint('auth_bp', __name__)


# Login / logout
@auth_bp.route('/', methods=['GET', 'POST'], strict_slashes=False)
def authenticate():
    ctx = RequestContext.from_request()

    if ctx.method == "GET" and ctx.param("action") == "logout":
        return logout()
    if ctx.method != "POST":
        raise MethodNotAllowed("Invalid request method")

    return login(ctx)


def login(ctx):
    data = ctx.body
    email = data.get("email")
    password = data.get("password")

    if not isinstance(email, str) or not isinstance(password, str) or not email.strip() or not password:
        raise ValidationError("Email and password required")

    try:
        email = validate_email(email)
    except ValueError as e:
        raise ValidationError(str(e))

    min_length = current_app.config["MIN_PASSWORD_LENGTH"]
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters")

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        current_app.logger.info("Failed login attempt")
        raise AuthenticationError("Invalid email or password")

    session_store.login(user)
    current_app.logger.info("User %s logged in as %s", user.id, user.role)

    return send_response({
        "message": "Login successful",
        "user": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role
        }
    })


def logout():
    user_id = session_store.get("user_id")
    session_store.destroy()
    if user_id is not None:
        current_app.logger.info("User %s logged out", user_id)
    return send_response({"message": "Logged out successfully"})


# Auth Check
@auth_bp.route('/check-auth', methods=['GET'])
def check_auth():
    identity = session_store.identity()
    if identity is None:
        raise AuthenticationError("Not authenticated")

    return send_response({"message": "Authenticated", "user": identity})
