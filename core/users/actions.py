"""
core.users.actions — Request and response values exchanged with the controller.

The controller never touches Flask: it receives a ``UserRequest`` and
returns a ``Render`` or ``Redirect`` that the HTTP binding interprets.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class UserRequest:
    """Explicit request context threaded through every handler."""
    method: str = 'GET'
    path: str = '/users'
    payload: Mapping[str, Any] = field(default_factory=dict)
    wants_json: bool = False


@dataclass(frozen=True)
class Render:
    """Produce the named template with ``bindings`` as its context."""
    template: str
    bindings: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    """Send the client to ``location``."""
    location: str
    status_code: int = 302


Action = Union[Render, Redirect]
