"""
UserController — maps HTTP verbs onto a user backend.

Every handler takes the request explicitly, makes at most one backend
call and returns an action. Backend errors are not caught here; the
HTTP binding translates them.
"""
from __future__ import annotations

from core.users.actions import Redirect, Render, UserRequest
from core.users.contract import UserInterface

USERS_PATH = '/users'


class UserController:
    """Stateless adapter between requests and a ``UserInterface``."""

    def __init__(self, users: UserInterface) -> None:
        self._users = users

    @property
    def users(self) -> UserInterface:
        return self._users

    def handle_list(self, request: UserRequest) -> Render:
        users = self._users.list()
        return Render('users/index.html', {'users': users})

    def handle_show_form(self, request: UserRequest) -> Render:
        return Render('users/create.html')

    def handle_create(self, request: UserRequest) -> Redirect:
        self._users.create(request.payload)
        return Redirect(USERS_PATH)

    def handle_show(self, request: UserRequest, user_id: int) -> Render:
        user = self._users.retrieve(user_id)
        return Render('users/show.html', {'user': user})

    def handle_edit_form(self, request: UserRequest, user_id: int) -> Render:
        user = self._users.retrieve(user_id)
        return Render('users/edit.html', {'user': user})

    def handle_update(self, request: UserRequest, user_id: int) -> Redirect:
        self._users.update(request.payload, user_id)
        return Redirect(USERS_PATH)

    def handle_delete(self, request: UserRequest, user_id: int) -> Redirect:
        self._users.delete(user_id)
        return Redirect(USERS_PATH)
