"""
Initialize the database with tables and optional demo users
"""
from server import app
from models import db, User
from core.users import UserService, InvalidUserInput
import sys

DEMO_USERS = [
    {'name': 'Ann Example', 'email': 'ann@example.com'},
    {'name': 'Ben Example', 'email': 'ben@example.com'},
]


def init_database(seed=False):
    """Create all database tables, optionally seeding demo users"""
    with app.app_context():
        db.create_all()
        print("✅ Database tables created successfully!")

        if not seed:
            return

        if User.query.first() is not None:
            print("ℹ️  Users already exist, skipping seed.")
            return

        service = UserService()
        for payload in DEMO_USERS:
            try:
                service.create(payload)
            except InvalidUserInput as e:
                print(f"⚠️ Skipped {payload['email']}: {e.message}")


if __name__ == '__main__':
    init_database(seed='--seed' in sys.argv[1:])
