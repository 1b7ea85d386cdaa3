from rest_framework import serializers

from registry.errors import ActionError, ActionResult, ConstraintViolation, ErrorKind, FieldError
from registry.services.base import action, flatten_errors


def test_result_shapes():
    assert ActionResult.ok({'id': '1'}).to_dict() == {'success': True, 'data': {'id': '1'}}
    assert ActionResult.ok().to_dict() == {'success': True}

    failure = ActionResult.fail(ErrorKind.VALIDATION, [FieldError('HMO code already exists', 'code')])
    assert failure.to_dict() == {
        'success': False,
        'kind': 'validation',
        'errors': [{'field': 'code', 'message': 'HMO code already exists'}],
    }
    assert failure.http_status == 400
    assert ActionResult.from_dict(failure.to_dict()) == failure


def test_flatten_nested_detail():
    detail = {'name': ['too short', 'too plain'], 'non_field_errors': ['bad combo']}
    assert flatten_errors(detail) == [
        FieldError('too short', 'name'),
        FieldError('too plain', 'name'),
        FieldError('bad combo'),
    ]


def test_action_boundary_maps_every_failure():
    @action(unauthorized='log in first', failure='Something broke')
    def run(principal, exc):
        raise exc

    principal = object()
    assert run(None, None).messages == ['log in first']
    assert run(principal, ActionError.not_found('Hospital not found')).kind is ErrorKind.NOT_FOUND
    assert run(principal, ActionError.forbidden('no')).http_status == 403
    assert run(principal, serializers.ValidationError({'name': ['required']})).errors == [
        FieldError('required', 'name')
    ]

    fk = run(principal, ConstraintViolation(ConstraintViolation.FOREIGN_KEY, 'hospital_id'))
    assert fk.errors == [FieldError('Selected hospital does not exist', 'hospitalId')]

    integrity = run(principal, ConstraintViolation(ConstraintViolation.INTEGRITY))
    assert integrity.kind is ErrorKind.CONSTRAINT
    assert integrity.messages == ['Something broke']

    unexpected = run(principal, KeyError('secret internals'))
    assert unexpected.kind is ErrorKind.UNEXPECTED
    assert unexpected.messages == ['Something broke']
    assert unexpected.http_status == 500
