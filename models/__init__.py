from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.users import User

from models.assignment import Assignment
from models.resources import Resource
from models.weeks import Week

from models.comments import AssignmentComment, ResourceComment, WeekComment
