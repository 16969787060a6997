from models import db
from werkzeug.security import generate_password_hash, check_password_hash
from utils.helpers import format_datetime


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(100), nullable=False, unique=True)
    password_hash = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    @property
    def student_id(self):
        """Student ids are the local part of the email address."""
        return derive_student_id(self.email)

    @property
    def role(self):
        return "admin" if self.is_admin else "student"

    def set_password(self, password):
        """Hashes the password before storing."""
        self.password_hash = generate_password_hash(password, method="pbkdf2:sha256")

    def check_password(self, password):
        """Checks if a given password matches the stored hash."""
        return check_password_hash(self.password_hash, password)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"

    def to_dict(self):
        return {
            "id": self.student_id,
            "student_id": self.student_id,
            "name": self.name,
            "email": self.email,
            "created_at": format_datetime(self.created_at),
            }


def derive_student_id(email):
    if not email:
        return None
    return email.split("@", 1)[0]
