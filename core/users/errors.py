"""
core.users.errors — Error taxonomy raised by user backends.

The controller never catches these; the HTTP binding maps each one to a
status code.
"""
from __future__ import annotations


class UserError(Exception):
    """Base class for every failure a user backend may raise."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserNotFound(UserError):
    """No user exists for the requested id."""

    status_code = 404

    def __init__(self, user_id) -> None:
        super().__init__(f'User {user_id} not found')
        self.user_id = user_id


class InvalidUserInput(UserError):
    """The submitted payload failed validation."""

    status_code = 422

    def __init__(self, errors: list[str]) -> None:
        super().__init__('Invalid user data: ' + '; '.join(errors))
        self.errors = list(errors)


class UserStorageError(UserError):
    """The underlying store could not complete the operation."""

    status_code = 503
