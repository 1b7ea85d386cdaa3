"""
Session lookup for the action layer.

Views resolve the session once per request and hand the resulting
:class:`Principal` to the action explicitly; actions never read the
request or any global state to find out who is calling.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Principal:
    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user) -> 'Principal':
        return cls(id=user.pk, name=user.display_name, email=user.email or '')

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'email': self.email}


@dataclass(frozen=True)
class Session:
    user: Principal

    def to_dict(self) -> dict:
        return {'user': self.user.to_dict()}


def get_current_session(request) -> Optional[Session]:
    """Return the session for an authenticated request, otherwise ``None``."""
    user = getattr(request, 'user', None)
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    return Session(user=Principal.from_user(user))


def principal_for(request) -> Optional[Principal]:
    session = get_current_session(request)
    return session.user if session else None
