"""
HMO actions.

Only the creator of an HMO may change or delete it.  Codes are unique
when present: the collision is checked up front so the caller gets a
``code`` field error, and the unique index backs that up.
"""
from __future__ import annotations

from ..errors import ActionError
from ..permissions import owns_hmo
from ..queries import HmoQueries, HospitalQueries
from ..serializers.hmo import HmoFilterSerializer, HmoSerializer
from ..serializers.listing import PaginationSerializer
from .audit import record_change
from .base import action, parse
from .presenters import hmo_to_dict, page_to_dict

CODE_TAKEN = 'HMO code already exists'


@action(unauthorized='You must be logged in to create an HMO',
        failure='Failed to create HMO. Please try again.', atomic=True)
def create_hmo(principal, payload: dict) -> dict:
    values = parse(HmoSerializer, payload)
    code = values.get('code')
    if code and HmoQueries.find_by_code(code) is not None:
        raise ActionError.invalid('code', CODE_TAKEN)

    hmo = HmoQueries.create(values, principal.id)
    record_change(principal, 'hmo', 'create', hmo.pk, {'name': hmo.name, 'code': hmo.code})
    return hmo_to_dict(hmo)


@action(unauthorized='You must be logged in to view HMO details',
        failure='Failed to fetch HMO details')
def get_hmo(principal, hmo_id) -> dict:
    hmo = HmoQueries.find_by_id_with_relations(hmo_id)
    if hmo is None:
        raise ActionError.not_found('HMO not found')
    return hmo_to_dict(hmo, with_relations=True)


@action(unauthorized='You must be logged in to view HMOs',
        failure='Failed to fetch HMOs')
def list_hmos(principal, filters: dict | None = None, pagination: dict | None = None) -> dict:
    page = HmoQueries.find_many(parse(HmoFilterSerializer, filters),
                                **parse(PaginationSerializer, pagination))
    return page_to_dict(page, hmo_to_dict)


@action(unauthorized='You must be logged in to view HMOs',
        failure='Failed to fetch HMOs for hospital')
def list_hmos_for_hospital(principal, hospital_id) -> list:
    if HospitalQueries.find_by_id(hospital_id) is None:
        raise ActionError.not_found('Hospital not found')
    return [hmo_to_dict(h) for h in HmoQueries.find_by_hospital(hospital_id)]


@action(unauthorized='You must be logged in to update HMOs',
        failure='Failed to update HMO. Please try again.', atomic=True)
def update_hmo(principal, hmo_id, payload: dict) -> dict:
    hmo = HmoQueries.find_by_id(hmo_id)
    if hmo is None:
        raise ActionError.not_found('HMO not found')
    if not owns_hmo(principal.id, hmo):
        raise ActionError.forbidden("You don't have permission to update this HMO")

    values = parse(HmoSerializer, payload, instance=hmo, partial=True)
    code = values.get('code')
    if code and code != hmo.code and HmoQueries.find_by_code(code) is not None:
        raise ActionError.invalid('code', CODE_TAKEN)

    hmo = HmoQueries.update(hmo.pk, values)
    record_change(principal, 'hmo', 'update', hmo.pk, {'fields': sorted(values)})
    return hmo_to_dict(hmo)


@action(unauthorized='You must be logged in to delete HMOs',
        failure='Failed to delete HMO. Please try again.', atomic=True)
def delete_hmo(principal, hmo_id) -> dict:
    """Delete an HMO together with every plan it offers."""
    hmo = HmoQueries.find_by_id(hmo_id)
    if hmo is None:
        raise ActionError.not_found('HMO not found')
    if not owns_hmo(principal.id, hmo):
        raise ActionError.forbidden("You don't have permission to delete this HMO")

    pk = hmo.pk
    if not HmoQueries.delete(pk):
        raise ActionError.not_found('HMO not found')
    record_change(principal, 'hmo', 'delete', pk, {'name': hmo.name})
    return {'id': str(pk)}
