"""
core.users.validation — Payload checks shared by every bundled backend.
"""
from __future__ import annotations

from typing import Mapping

from core.users.errors import InvalidUserInput

FILLABLE_FIELDS = ('name', 'email')
REQUIRED_FIELDS = ('name', 'email')


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    """Basic shape check: a local part, an @ and a dotted domain."""
    if email.count('@') != 1:
        return False
    local, domain = email.split('@')
    return bool(local) and '.' in domain and not domain.startswith('.') and not domain.endswith('.')


def validate_payload(payload: Mapping[str, str], partial: bool = False) -> dict[str, str]:
    """Return the cleaned fields of ``payload`` or raise InvalidUserInput.

    With ``partial`` set (updates) only the fields present are checked;
    otherwise every required field must be supplied.
    """
    if payload is None:
        payload = {}

    errors = []
    cleaned = {}

    unknown = sorted(key for key in payload if key not in FILLABLE_FIELDS)
    if unknown:
        errors.append(f"Unknown field(s): {', '.join(unknown)}")

    for field in FILLABLE_FIELDS:
        if field not in payload:
            if not partial and field in REQUIRED_FIELDS:
                errors.append(f'{field} is required')
            continue

        value = payload[field]
        if not isinstance(value, str):
            errors.append(f'{field} must be a string')
            continue

        value = value.strip()
        if not value:
            errors.append(f'{field} cannot be blank')
            continue

        if field == 'email':
            value = normalize_email(value)
            if not is_valid_email(value):
                errors.append('Invalid email address')
                continue

        cleaned[field] = value

    if partial and not cleaned and not errors:
        errors.append('No fields to update')

    if errors:
        raise InvalidUserInput(errors)

    return cleaned
