import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .errors import ErrorKind

logger = logging.getLogger(__name__)

KINDS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
}


def _errors(data, field=None):
    if isinstance(data, dict):
        out = []
        for key, value in data.items():
            name = field if key in ('detail', 'non_field_errors') else key
            out.extend(_errors(value, name))
        return out
    if isinstance(data, (list, tuple)):
        return [e for v in data for e in _errors(v, field)]
    if field is None:
        return [{'message': str(data)}]
    return [{'field': field, 'message': str(data)}]


def api_exception_handler(exc, context):
    """Render errors raised outside the actions in the registry result shape."""
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', context.get('view'))
        return Response({'success': False, 'kind': ErrorKind.UNEXPECTED.value,
                         'errors': [{'message': 'Internal server error'}]}, status=500)
    kind = KINDS.get(resp.status_code)
    resp.data = {
        'success': False,
        'kind': kind.value if kind else None,
        'errors': _errors(resp.data),
    }
    return resp
