"""
Insurance plan actions.

A plan may be managed by the creator of its HMO or by the admin of its
hospital (see :func:`registry.permissions.can_manage_plan`).  On create
the HMO and hospital come from the payload, so the payload is validated
before permission is evaluated against it.
"""
from __future__ import annotations

from ..errors import ActionError
from ..permissions import can_manage_plan
from ..queries import HmoQueries, HospitalQueries, PlanQueries
from ..serializers.listing import PaginationSerializer
from ..serializers.plan import PlanFilterSerializer, PlanSerializer, PlanUpdateSerializer
from .audit import record_change
from .base import action, parse
from .presenters import page_to_dict, plan_to_dict

NOT_FOUND = 'Insurance plan not found'


def _managed_plan(principal, plan_id, verb: str):
    plan = PlanQueries.find_by_id(plan_id)
    if plan is None:
        raise ActionError.not_found(NOT_FOUND)
    if not can_manage_plan(principal.id, plan.hmo_id, plan.hospital_id):
        raise ActionError.forbidden(f"You don't have permission to {verb} this insurance plan")
    return plan


@action(unauthorized='You must be logged in to create insurance plans',
        failure='Failed to create insurance plan. Please try again.', atomic=True)
def create_plan(principal, payload: dict) -> dict:
    values = parse(PlanSerializer, payload)
    if not can_manage_plan(principal.id, values['hmo_id'], values['hospital_id']):
        raise ActionError.forbidden(
            "You don't have permission to create plans for this HMO/Hospital combination"
        )
    plan = PlanQueries.create(values)
    record_change(principal, 'plan', 'create', plan.pk, {'name': plan.name, 'hmoId': str(plan.hmo_id)})
    return plan_to_dict(plan)


@action(unauthorized='You must be logged in to view insurance plan details',
        failure='Failed to fetch insurance plan details')
def get_plan(principal, plan_id) -> dict:
    plan = PlanQueries.find_by_id_with_relations(plan_id)
    if plan is None:
        raise ActionError.not_found(NOT_FOUND)
    return plan_to_dict(plan, with_relations=True)


@action(unauthorized='You must be logged in to view insurance plans',
        failure='Failed to fetch insurance plans')
def list_plans(principal, filters: dict | None = None, pagination: dict | None = None) -> dict:
    page = PlanQueries.find_many(parse(PlanFilterSerializer, filters),
                                 **parse(PaginationSerializer, pagination))
    return page_to_dict(page, plan_to_dict)


@action(unauthorized='You must be logged in to view insurance plans',
        failure='Failed to fetch insurance plans')
def list_plans_for_hmo(principal, hmo_id) -> list:
    if HmoQueries.find_by_id(hmo_id) is None:
        raise ActionError.not_found('HMO not found')
    return [plan_to_dict(p) for p in PlanQueries.find_by_hmo(hmo_id)]


@action(unauthorized='You must be logged in to view insurance plans',
        failure='Failed to fetch insurance plans')
def list_plans_for_hospital(principal, hospital_id) -> list:
    if HospitalQueries.find_by_id(hospital_id) is None:
        raise ActionError.not_found('Hospital not found')
    return [plan_to_dict(p) for p in PlanQueries.find_by_hospital(hospital_id)]


@action(unauthorized='You must be logged in to update insurance plans',
        failure='Failed to update insurance plan. Please try again.', atomic=True)
def update_plan(principal, plan_id, payload: dict) -> dict:
    plan = _managed_plan(principal, plan_id, 'update')
    values = parse(PlanUpdateSerializer, payload, instance=plan, partial=True)
    plan = PlanQueries.update(plan.pk, values)
    record_change(principal, 'plan', 'update', plan.pk, {'fields': sorted(values)})
    return plan_to_dict(plan)


@action(unauthorized='You must be logged in to delete insurance plans',
        failure='Failed to delete insurance plan. Please try again.', atomic=True)
def delete_plan(principal, plan_id) -> dict:
    plan = _managed_plan(principal, plan_id, 'delete')
    pk = plan.pk
    if not PlanQueries.delete(pk):
        raise ActionError.not_found(NOT_FOUND)
    record_change(principal, 'plan', 'delete', pk, {'name': plan.name})
    return {'id': str(pk)}


@action(unauthorized='You must be logged in to modify insurance plans',
        failure='Failed to update plan status. Please try again.', atomic=True)
def toggle_plan_active(principal, plan_id) -> dict:
    plan = _managed_plan(principal, plan_id, 'modify')
    plan = PlanQueries.toggle_active(plan.pk)
    if plan is None:
        raise ActionError.not_found(NOT_FOUND)
    record_change(principal, 'plan', 'toggle', plan.pk, {'isActive': plan.is_active})
    return plan_to_dict(plan)
