from models import db
from utils.helpers import format_datetime

# Parent keys are plain indexed columns; parent existence and cascading
# deletes are handled by CommentResource / CrudResource.


class AssignmentComment(db.Model):
    __tablename__ = "assignment_comments"

    id = db.Column(db.Integer, primary_key=True)
    assignment_id = db.Column(db.Integer, nullable=False, index=True)
    author = db.Column(db.String(100), nullable=False)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "assignment_id": self.assignment_id,
            "author": self.author,
            "text": self.text,
            "created_at": format_datetime(self.created_at),
        }


class ResourceComment(db.Model):
    __tablename__ = "resource_comments"

    id = db.Column(db.Integer, primary_key=True)
    resource_id = db.Column(db.Integer, nullable=False, index=True)
    author = db.Column(db.String(100), nullable=False)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "resource_id": self.resource_id,
            "author": self.author,
            "text": self.text,
            "created_at": format_datetime(self.created_at),
        }


class WeekComment(db.Model):
    __tablename__ = "week_comments"

    id = db.Column(db.Integer, primary_key=True)
    week_id = db.Column(db.String(50), nullable=False, index=True)
    author = db.Column(db.String(100), nullable=False)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "week_id": self.week_id,
            "author": self.author,
            "text": self.text,
            "created_at": format_datetime(self.created_at),
        }
