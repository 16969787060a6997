from dotenv import load_dotenv
load_dotenv()
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from flask_session import Session
from config import CurrentConfig
from models import db
from routes.authentication import auth_bp
from routes.students import student_bp
from routes.assignments import assignment_bp
from routes.resources import resource_bp
from routes.weekly import weekly_bp
from utils.errors import register_error_handlers

app = Flask(__name__)

@app.route('/')
def home():
    return "Welcome to the School Portal API!"

app.config.from_object(CurrentConfig)
app.logger.setLevel(app.config["LOG_LEVEL"])

CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"], "supports_credentials": True}})
if app.config.get("SESSION_TYPE"):
    Session(app)

db.init_app(app)
migrate = Migrate(app, db)

app.register_blueprint(auth_bp, url_prefix='/api/auth')
app.register_blueprint(student_bp, url_prefix='/api/admin')
app.register_blueprint(assignment_bp, url_prefix='/api/assignments')
app.register_blueprint(resource_bp, url_prefix='/api/resources')
app.register_blueprint(weekly_bp, url_prefix='/api/weekly')

register_error_handlers(app)

app.logger.info("Loaded %s, database %s", CurrentConfig.__name__, app.config["SQLALCHEMY_DATABASE_URI"].split("@")[-1])

if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False))
