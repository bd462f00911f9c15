"""
User management utility
List, create, rename and delete users from the command line
"""
from server import app
from core.users import UserService, UserError
import sys


def list_users():
    """List all users"""
    with app.app_context():
        users = UserService().list()
        if not users:
            print("No users found")
            return

        print("Current users:")
        for user in users:
            print(f"  - {user.name} <{user.email}> (ID: {user.id})")


def show_user(user_id):
    """Print one user"""
    with app.app_context():
        try:
            user = UserService().retrieve(user_id)
        except UserError as e:
            print(f"❌ {e.message}")
            return False

        print(f"ID:      {user.id}")
        print(f"Name:    {user.name}")
        print(f"Email:   {user.email}")
        print(f"Created: {user.created_at}")
        print(f"Updated: {user.updated_at}")
        return True


def create_user(name, email):
    """Create a user"""
    with app.app_context():
        try:
            UserService().create({'name': name, 'email': email})
        except UserError as e:
            print(f"❌ {e.message}")
            return False
        return True


def rename_user(user_id, name):
    """Change a user's display name"""
    with app.app_context():
        try:
            UserService().update({'name': name}, user_id)
        except UserError as e:
            print(f"❌ {e.message}")
            return False
        return True


def delete_user(user_id):
    """Delete a user"""
    with app.app_context():
        try:
            UserService().delete(user_id)
        except UserError as e:
            print(f"❌ {e.message}")
            return False
        return True


def show_usage():
    """Show usage information"""
    print("""
User Directory Management Utility

Usage:
    python manage_users.py list                     - List all users
    python manage_users.py show <id>                - Show one user
    python manage_users.py create <name> <email>    - Create a user
    python manage_users.py rename <id> <name>       - Rename a user
    python manage_users.py delete <id>              - Delete a user

Examples:
    python manage_users.py create "Ann Example" ann@example.com
    python manage_users.py rename 1 "Ann B. Example"
    python manage_users.py delete 1
    """)


def _parse_id(value):
    try:
        return int(value)
    except ValueError:
        print(f"❌ Invalid user id: {value}")
        show_usage()
        sys.exit(1)


def main(argv):
    """Dispatch a command line; returns the process exit code"""
    if len(argv) < 1:
        show_usage()
        return 1

    command = argv[0].lower()
    args = argv[1:]

    if command == 'list':
        list_users()
        return 0
    if command == 'show' and len(args) == 1:
        return 0 if show_user(_parse_id(args[0])) else 1
    if command == 'create' and len(args) == 2:
        return 0 if create_user(args[0], args[1]) else 1
    if command == 'rename' and len(args) == 2:
        return 0 if rename_user(_parse_id(args[0]), args[1]) else 1
    if command == 'delete' and len(args) == 1:
        return 0 if delete_user(_parse_id(args[0])) else 1

    if command in ('show', 'create', 'rename', 'delete'):
        print(f"❌ Wrong number of arguments for {command}")
    else:
        print(f"❌ Unknown command: {command}")
    show_usage()
    return 1


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
