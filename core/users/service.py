"""
core.users.service — Flask-SQLAlchemy backend for the user contract.

All DB writes happen here so routes and the controller stay thin.
Must be used inside an application context.
"""
from __future__ import annotations

from datetime import datetime
from typing import Mapping

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db, User
from core.users.contract import UserInterface
from core.users.errors import InvalidUserInput, UserNotFound, UserStorageError
from core.users.validation import validate_payload


class UserService(UserInterface):
    """Persists users in the ``users`` table."""

    def list(self) -> list[User]:
        try:
            return User.query.order_by(User.id.asc()).all()
        except SQLAlchemyError as exc:
            raise UserStorageError(f'Could not list users: {exc}') from exc

    def create(self, payload: Mapping[str, str]) -> User:
        fields = validate_payload(payload)
        self._ensure_email_available(fields['email'])

        user = User(name=fields['name'], email=fields['email'])
        db.session.add(user)
        self._commit('create user')
        print(f"✅ User created: {user.email} (ID: {user.id})")
        return user

    def retrieve(self, user_id: int) -> User:
        try:
            user = db.session.get(User, user_id)
        except OverflowError:
            # Ids past the 64-bit INTEGER range cannot be bound, so no row can match
            db.session.rollback()
            raise UserNotFound(user_id)
        except SQLAlchemyError as exc:
            raise UserStorageError(f'Could not load user {user_id}: {exc}') from exc
        if user is None:
            raise UserNotFound(user_id)
        return user

    def update(self, payload: Mapping[str, str], user_id: int) -> User:
        fields = validate_payload(payload, partial=True)
        user = self.retrieve(user_id)

        if 'email' in fields and fields['email'] != user.email:
            self._ensure_email_available(fields['email'])

        for key, value in fields.items():
            setattr(user, key, value)
        user.updated_at = datetime.utcnow()

        self._commit(f'update user {user_id}')
        print(f"✅ User updated: {user.email} (ID: {user.id})")
        return user

    def delete(self, user_id: int) -> None:
        user = self.retrieve(user_id)
        db.session.delete(user)
        self._commit(f'delete user {user_id}')
        print(f"🗑️  User deleted: ID {user_id}")

    # ---- internal helpers ----

    def _ensure_email_available(self, email: str) -> None:
        try:
            taken = User.query.filter_by(email=email).first() is not None
        except SQLAlchemyError as exc:
            raise UserStorageError(f'Could not check email: {exc}') from exc
        if taken:
            raise InvalidUserInput(['Email is already taken'])

    def _commit(self, operation: str) -> None:
        """Commit the session, rolling back and translating on failure."""
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            # Unique index race between the availability check and the insert
            raise InvalidUserInput(['Email is already taken']) from exc
        except SQLAlchemyError as exc:
            db.session.rollback()
            print(f"❌ Failed to {operation}: {exc}")
            raise UserStorageError(f'Failed to {operation}') from exc
