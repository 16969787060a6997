import os
import sys
from app import app, db
from models import User

# Usage: python create_admin.py <email> <name>   (password read from ADMIN_PASSWORD)

if len(sys.argv) < 3 or not os.getenv("ADMIN_PASSWORD"):
    print("Usage: ADMIN_PASSWORD=... python create_admin.py <email> <name>")
    sys.exit(1)

email, name = sys.argv[1], " ".join(sys.argv[2:])

with app.app_context():
    user = User.query.filter_by(email=email).first()
    if user:
        user.is_admin = True
        user.set_password(os.environ["ADMIN_PASSWORD"])
        print(f"Existing user {email} promoted to admin and password reset.")
    else:
        user = User(name=name, email=email, is_admin=True)
        user.set_password(os.environ["ADMIN_PASSWORD"])
        db.session.add(user)
        print(f"Admin {email} created.")
    db.session.commit()
