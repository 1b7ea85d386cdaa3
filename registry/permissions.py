"""
Ownership rules for mutating registry records.

Hospitals belong to their admin and HMOs to their creator.  A plan may
be managed by whoever created its HMO or whoever administers its
hospital.  Lookups that find nothing simply do not grant access; they
never raise.
"""
from __future__ import annotations

from .models import Hmo, Hospital
from .queries import as_uuid


def owns_hospital(user_id, hospital: Hospital) -> bool:
    return hospital.admin_id == user_id


def owns_hmo(user_id, hmo: Hmo) -> bool:
    return hmo.created_by_id == user_id


def can_manage_plan(user_id, hmo_id, hospital_id) -> bool:
    """True if ``user_id`` created the HMO or administers the hospital."""
    if user_id is None:
        return False
    hmo_pk = as_uuid(hmo_id)
    if hmo_pk and Hmo.objects.filter(pk=hmo_pk, created_by_id=user_id).exists():
        return True
    hospital_pk = as_uuid(hospital_id)
    if hospital_pk and Hospital.objects.filter(pk=hospital_pk, admin_id=user_id).exists():
        return True
    return False
