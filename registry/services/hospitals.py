"""
Hospital actions.

A hospital may only be changed or removed by its admin.  Deleting a
hospital also removes the HMOs defaulting to it and the plans offered
there.
"""
from __future__ import annotations

from ..errors import ActionError
from ..permissions import owns_hospital
from ..queries import HospitalQueries
from ..serializers.hospital import HospitalFilterSerializer, HospitalSerializer
from ..serializers.listing import PaginationSerializer
from .audit import record_change
from .base import action, parse
from .presenters import hospital_to_dict, page_to_dict


@action(unauthorized='You must be logged in to create a hospital',
        failure='Failed to create hospital. Please try again.', atomic=True)
def create_hospital(principal, payload: dict) -> dict:
    values = parse(HospitalSerializer, payload)
    hospital = HospitalQueries.create(values, principal.id)
    record_change(principal, 'hospital', 'create', hospital.pk, {'name': hospital.name})
    return hospital_to_dict(hospital)


@action(unauthorized='You must be logged in to view hospital details',
        failure='Failed to fetch hospital details')
def get_hospital(principal, hospital_id) -> dict:
    hospital = HospitalQueries.find_by_id_with_relations(hospital_id)
    if hospital is None:
        raise ActionError.not_found('Hospital not found')
    return hospital_to_dict(hospital, with_admin=True)


@action(unauthorized='You must be logged in to view hospitals',
        failure='Failed to fetch hospitals')
def list_hospitals(principal, filters: dict | None = None, pagination: dict | None = None) -> dict:
    page = HospitalQueries.find_many(parse(HospitalFilterSerializer, filters),
                                     **parse(PaginationSerializer, pagination))
    return page_to_dict(page, hospital_to_dict)


@action(unauthorized='You must be logged in to view your hospitals',
        failure='Failed to fetch hospitals')
def list_my_hospitals(principal) -> list:
    return [hospital_to_dict(h) for h in HospitalQueries.find_by_admin(principal.id)]


@action(unauthorized='You must be logged in to update hospitals',
        failure='Failed to update hospital. Please try again.', atomic=True)
def update_hospital(principal, hospital_id, payload: dict) -> dict:
    hospital = HospitalQueries.find_by_id(hospital_id)
    if hospital is None:
        raise ActionError.not_found('Hospital not found')
    if not owns_hospital(principal.id, hospital):
        raise ActionError.forbidden("You don't have permission to update this hospital")

    values = parse(HospitalSerializer, payload, instance=hospital, partial=True)
    hospital = HospitalQueries.update(hospital.pk, values)
    record_change(principal, 'hospital', 'update', hospital.pk, {'fields': sorted(values)})
    return hospital_to_dict(hospital)


@action(unauthorized='You must be logged in to delete hospitals',
        failure='Failed to delete hospital. Please try again.', atomic=True)
def delete_hospital(principal, hospital_id) -> dict:
    hospital = HospitalQueries.find_by_id(hospital_id)
    if hospital is None:
        raise ActionError.not_found('Hospital not found')
    if not owns_hospital(principal.id, hospital):
        raise ActionError.forbidden("You don't have permission to delete this hospital")

    pk = hospital.pk
    if not HospitalQueries.delete(pk):
        raise ActionError.not_found('Hospital not found')
    record_change(principal, 'hospital', 'delete', pk, {'name': hospital.name})
    return {'id': str(pk)}
