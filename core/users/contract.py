"""
core.users.contract — The five operations every user backend supports.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence


class UserInterface(ABC):
    """Persistence contract for User records.

    Implementations own all state. ``retrieve``, ``update`` and ``delete``
    raise ``UserNotFound`` for an unknown id; ``create`` and ``update``
    raise ``InvalidUserInput`` for a payload they refuse.
    """

    @abstractmethod
    def list(self) -> Sequence[Any]:
        """Return every known user."""

    @abstractmethod
    def create(self, payload: Mapping[str, str]) -> Any:
        """Persist a new user built from ``payload``."""

    @abstractmethod
    def retrieve(self, user_id: int) -> Any:
        """Return the user addressed by ``user_id``."""

    @abstractmethod
    def update(self, payload: Mapping[str, str], user_id: int) -> Any:
        """Replace the fields present in ``payload`` on an existing user."""

    @abstractmethod
    def delete(self, user_id: int) -> None:
        """Remove the user addressed by ``user_id``."""
