from models import db
from utils.helpers import format_date, format_datetime, load_json_list


class Week(db.Model):
    __tablename__ = "weeks"

    id = db.Column(db.Integer, primary_key=True)
    week_id = db.Column(db.String(50), nullable=False, unique=True)
    title = db.Column(db.String(255), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    description = db.Column(db.Text, nullable=False)
    links = db.Column(db.Text, nullable=False, default="[]")
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)
    updated_at = db.Column(db.DateTime, default=db.func.now(), onupdate=db.func.now(), nullable=False)

    def __repr__(self):
        return f"<Week {self.week_id} ({self.start_date})>"

    def to_dict(self):
        return {
            "week_id": self.week_id,
            "title": self.title,
            "start_date": format_date(self.start_date),
            "description": self.description,
            "links": load_json_list(self.links),
            "created_at": format_datetime(self.created_at),
            "updated_at": format_datetime(self.updated_at),
        }
