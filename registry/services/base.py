"""
The action boundary.

Every public action is wrapped in :func:`action`, which checks for a
principal, optionally runs the body inside one transaction and converts
whatever the body raises into an :class:`~registry.errors.ActionResult`.
Nothing raised inside an action escapes it.
"""
from __future__ import annotations

import functools
import logging
from typing import Callable, Optional

from django.db import transaction
from rest_framework import serializers

from ..errors import ActionError, ActionResult, ConstraintViolation, ErrorKind, FieldError

logger = logging.getLogger(__name__)

# model attribute -> (payload field, message) for constraint failures
CONSTRAINT_FIELDS = {
    'hospital_id': ('hospitalId', 'Selected hospital does not exist'),
    'hmo_id': ('hmoId', 'Selected HMO does not exist'),
    'code': ('code', 'HMO code already exists'),
}


def flatten_errors(detail, field: Optional[str] = None) -> list[FieldError]:
    """Turn DRF's nested ``ValidationError.detail`` into one entry per message."""
    if isinstance(detail, dict):
        out: list[FieldError] = []
        for key, value in detail.items():
            name = None if key == 'non_field_errors' else key
            out.extend(flatten_errors(value, name if field is None else f'{field}.{name}'))
        return out
    if isinstance(detail, (list, tuple)):
        out = []
        for item in detail:
            out.extend(flatten_errors(item, field))
        return out
    return [FieldError(str(detail), field)]


def constraint_errors(exc: ConstraintViolation, failure: str) -> ActionResult:
    if exc.code in (ConstraintViolation.FOREIGN_KEY, ConstraintViolation.UNIQUE) and exc.column in CONSTRAINT_FIELDS:
        field_name, message = CONSTRAINT_FIELDS[exc.column]
        return ActionResult.fail(ErrorKind.VALIDATION, [FieldError(message, field_name)])
    logger.warning('unmapped constraint violation: %s', exc)
    return ActionResult.fail(ErrorKind.CONSTRAINT, [FieldError(failure)])


def action(*, unauthorized: str, failure: str, atomic: bool = False) -> Callable:
    """Decorate an action taking ``principal`` as its first argument.

    ``unauthorized`` is the message used when there is no principal and
    ``failure`` the generic message for anything uncategorised.  With
    ``atomic=True`` the body, including its audit record, commits or
    rolls back as a unit.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(principal, *args, **kwargs) -> ActionResult:
            try:
                if principal is None:
                    raise ActionError.unauthorized()
                if atomic:
                    with transaction.atomic():
                        data = func(principal, *args, **kwargs)
                else:
                    data = func(principal, *args, **kwargs)
                return ActionResult.ok(data)
            except ActionError as exc:
                errors = exc.errors
                if exc.kind is ErrorKind.UNAUTHORIZED and not errors:
                    errors = [FieldError(unauthorized)]
                return ActionResult.fail(exc.kind, errors)
            except serializers.ValidationError as exc:
                return ActionResult.fail(ErrorKind.VALIDATION, flatten_errors(exc.detail))
            except ConstraintViolation as exc:
                return constraint_errors(exc, failure)
            except Exception:
                logger.exception('%s failed', func.__name__)
                return ActionResult.fail(ErrorKind.UNEXPECTED, [FieldError(failure)])
        return wrapper
    return decorator


def parse(serializer_class, data, **kwargs) -> dict:
    s = serializer_class(data=data if data is not None else {}, **kwargs)
    s.is_valid(raise_exception=True)
    return dict(s.validated_data)
