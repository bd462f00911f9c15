"""
core.users — User directory CRUD domain.

Public API:
    UserInterface         — persistence contract (list/create/retrieve/update/delete)
    UserService           — Flask-SQLAlchemy backend
    InMemoryUserStore     — dict-backed backend
    UserController        — request adapter returning Render / Redirect actions
    UserRequest           — explicit request context
    Render, Redirect      — output actions
    UserError, UserNotFound, InvalidUserInput, UserStorageError — error taxonomy
"""

from core.users.actions import UserRequest, Render, Redirect
from core.users.contract import UserInterface
from core.users.controller import UserController
from core.users.errors import UserError, UserNotFound, InvalidUserInput, UserStorageError
from core.users.memory import InMemoryUserStore, UserRecord
from core.users.service import UserService

__all__ = [
    'UserRequest',
    'Render',
    'Redirect',
    'UserInterface',
    'UserController',
    'UserError',
    'UserNotFound',
    'InvalidUserInput',
    'UserStorageError',
    'InMemoryUserStore',
    'UserRecord',
    'UserService',
]
