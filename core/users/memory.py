"""
core.users.memory — Dict-backed backend for the user contract.

Holds records in process memory; nothing survives a restart. Useful for
demos (``USER_STORE=memory``) and for exercising the controller without
a database.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Mapping

from core.users.contract import UserInterface
from core.users.errors import InvalidUserInput, UserNotFound
from core.users.validation import validate_payload


@dataclass(frozen=True)
class UserRecord:
    """Immutable snapshot of a stored user."""
    id: int
    name: str
    email: str
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }


class InMemoryUserStore(UserInterface):
    """Thread-safe store keyed by an auto-incrementing id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[int, UserRecord] = {}
        self._next_id = 1

    def list(self) -> list[UserRecord]:
        with self._lock:
            return [self._records[key] for key in sorted(self._records)]

    def create(self, payload: Mapping[str, str]) -> UserRecord:
        fields = validate_payload(payload)
        with self._lock:
            self._ensure_email_available(fields['email'])
            record = UserRecord(id=self._next_id, **fields)
            self._records[record.id] = record
            self._next_id += 1
        return record

    def retrieve(self, user_id: int) -> UserRecord:
        with self._lock:
            return self._get(user_id)

    def update(self, payload: Mapping[str, str], user_id: int) -> UserRecord:
        fields = validate_payload(payload, partial=True)
        with self._lock:
            current = self._get(user_id)
            if 'email' in fields and fields['email'] != current.email:
                self._ensure_email_available(fields['email'])
            record = replace(current, updated_at=datetime.utcnow(), **fields)
            self._records[user_id] = record
        return record

    def delete(self, user_id: int) -> None:
        with self._lock:
            self._get(user_id)
            del self._records[user_id]

    def __len__(self) -> int:
        return len(self._records)

    # ---- internal helpers (caller holds the lock) ----

    def _get(self, user_id: int) -> UserRecord:
        record = self._records.get(user_id)
        if record is None:
            raise UserNotFound(user_id)
        return record

    def _ensure_email_available(self, email: str) -> None:
        if any(r.email == email for r in self._records.values()):
            raise InvalidUserInput(['Email is already taken'])
