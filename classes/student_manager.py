from flask import current_app
from werkzeug.security import generate_password_hash

from models import db
from models.users import User, derive_student_id
from classes.crud_resource import CrudResource, FieldSpec, is_blank
from classes.validators import validate_email, validate_min_length
from utils.errors import AuthenticationError, Conflict, NotFound, ValidationError
from utils.helpers import send_response


def hash_new_password(value):
    if not isinstance(value, str):
        raise ValueError("password must be a string")
    validate_min_length("Password", value, current_app.config["MIN_PASSWORD_LENGTH"])
    return generate_password_hash(value, method="pbkdf2:sha256")


class StudentManager(CrudResource):
    """Student accounts: non-admin rows of `users`, keyed by the local part
    of their email address."""

    def __init__(self):
        super().__init__(
            name="student",
            model=User,
            key="student_id",
            fields=[
                FieldSpec("name", sanitize=True),
                FieldSpec("email", parse=validate_email, unique=True),
                FieldSpec("password", column="password_hash", parse=hash_new_password),
            ],
            required=["name", "email", "password"],
            search_columns=[User.name, User.email],
            sort_columns={"name": User.name, "student_id": User.email, "email": User.email},
            default_sort="name",
            key_params=("student_id", "id"),
        )

    def base_query(self):
        return User.query.filter(User.is_admin.is_(False))

    def find(self, key):
        # LIKE ignores case on SQLite and MySQL's default collation; ids match exactly
        candidates = self.base_query().filter(User.email.startswith(f"{key}@", autoescape=True))
        for user in candidates:
            if user.student_id == key:
                return user
        return None

    def check_unique(self, values, instance=None):
        super().check_unique(values, instance)
        if "email" not in values:
            return
        owner = User.query.filter(User.email.startswith(f"{derive_student_id(values['email'])}@", autoescape=True))
        if instance is not None:
            owner = owner.filter(User.id != instance.id)
        if owner.first() is not None:
            raise Conflict("Student ID already exists")

    def build(self, values):
        return User(is_admin=False, **values)

    def change_password(self, ctx):
        data = ctx.body
        for name in ("student_id", "current_password", "new_password"):
            if is_blank(data.get(name)):
                raise ValidationError("Missing required fields")

        new_password = data["new_password"]
        min_length = current_app.config["MIN_PASSWORD_LENGTH"]
        if not isinstance(new_password, str) or len(new_password) < min_length:
            raise ValidationError(f"New password must be at least {min_length} characters")

        student = self.find(self.parse_key(data["student_id"]))
        if student is None:
            raise NotFound("Student not found")
        if not student.check_password(str(data["current_password"])):
            raise AuthenticationError("Incorrect current password")

        student.set_password(new_password)
        db.session.commit()

        current_app.logger.info("Password changed for student %s", student.student_id)
        return send_response({"message": "Password updated"})
