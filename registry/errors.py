"""
Error taxonomy and the uniform action result.

Every action returns an :class:`ActionResult`.  Internally actions raise
:class:`ActionError` tagged with an :class:`ErrorKind`; the query layer
raises :class:`ConstraintViolation` tagged with a constraint code.  The
``@action`` decorator in :mod:`registry.services.base` is the only place
that turns these into results.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class ErrorKind(str, Enum):
    UNAUTHORIZED = 'unauthorized'
    NOT_FOUND = 'not_found'
    FORBIDDEN = 'forbidden'
    VALIDATION = 'validation'
    CONSTRAINT = 'constraint'
    UNEXPECTED = 'unexpected'


HTTP_STATUS = {
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONSTRAINT: 400,
    ErrorKind.UNEXPECTED: 500,
}


@dataclass(frozen=True)
class FieldError:
    message: str
    field: Optional[str] = None

    def to_dict(self) -> dict:
        if self.field is None:
            return {'message': self.message}
        return {'field': self.field, 'message': self.message}


class ActionError(Exception):
    """A categorised business failure raised inside an action."""

    def __init__(self, kind: ErrorKind, errors: Iterable[FieldError] = ()):
        self.kind = kind
        self.errors = list(errors)
        super().__init__(kind.value, self.errors)

    @classmethod
    def unauthorized(cls) -> 'ActionError':
        # message is filled in by the action boundary
        return cls(ErrorKind.UNAUTHORIZED)

    @classmethod
    def not_found(cls, message: str) -> 'ActionError':
        return cls(ErrorKind.NOT_FOUND, [FieldError(message)])

    @classmethod
    def forbidden(cls, message: str) -> 'ActionError':
        return cls(ErrorKind.FORBIDDEN, [FieldError(message)])

    @classmethod
    def invalid(cls, field_name: Optional[str], message: str) -> 'ActionError':
        return cls(ErrorKind.VALIDATION, [FieldError(message, field_name)])


class ConstraintViolation(Exception):
    """Raised by the query layer when the database rejects a write.

    ``code`` is one of :attr:`FOREIGN_KEY`, :attr:`UNIQUE` or
    :attr:`INTEGRITY`; ``column`` names the model attribute involved
    when it could be identified.
    """
    FOREIGN_KEY = 'foreign_key'
    UNIQUE = 'unique'
    INTEGRITY = 'integrity'

    def __init__(self, code: str, column: Optional[str] = None, detail: str = ''):
        self.code = code
        self.column = column
        self.detail = detail
        super().__init__(f"{code}:{column or '-'} {detail}".strip())


@dataclass
class ActionResult:
    success: bool
    data: Any = None
    errors: list[FieldError] = field(default_factory=list)
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, data: Any = None) -> 'ActionResult':
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, errors: Iterable[FieldError]) -> 'ActionResult':
        return cls(success=False, errors=list(errors), kind=kind)

    @classmethod
    def from_dict(cls, payload: dict) -> 'ActionResult':
        """Rebuild a result from its JSON form (e.g. an API response body)."""
        raw_errors = payload.get('errors') or []
        if not isinstance(raw_errors, list) or not all(isinstance(e, dict) for e in raw_errors):
            raise ValueError(f"malformed errors in result: {raw_errors!r}")
        errors = [FieldError(e.get('message', ''), e.get('field')) for e in raw_errors]
        kind = payload.get('kind')
        return cls(
            success=bool(payload.get('success')),
            data=payload.get('data'),
            errors=errors,
            kind=ErrorKind(kind) if kind else None,
        )

    @property
    def http_status(self) -> int:
        if self.success:
            return 200
        return HTTP_STATUS.get(self.kind, 400)

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]

    def to_dict(self) -> dict:
        if self.success:
            payload: dict[str, Any] = {'success': True}
            if self.data is not None:
                payload['data'] = self.data
            return payload
        return {
            'success': False,
            'kind': self.kind.value if self.kind else None,
            'errors': [e.to_dict() for e in self.errors],
        }
