"""
JSON shapes returned by actions.

Keys are camelCase to match the request payloads; ids are strings and
timestamps ISO-8601.
"""
from __future__ import annotations

from typing import Optional

from ..currency import plan_cost_summary, plan_metrics


def _ts(value) -> Optional[str]:
    return value.isoformat() if value else None


def user_to_dict(user) -> Optional[dict]:
    if user is None:
        return None
    return {'id': user.pk, 'name': user.display_name, 'email': user.email or ''}


def hospital_to_dict(h, *, with_admin: bool = False) -> dict:
    data = {
        'id': str(h.pk),
        'name': h.name,
        'address': h.address,
        'phone': h.phone,
        'email': h.email,
        'state': h.state,
        'localGovernment': h.local_government,
        'adminId': h.admin_id,
        'createdAt': _ts(h.created_at),
        'updatedAt': _ts(h.updated_at),
    }
    if with_admin:
        data['admin'] = user_to_dict(h.admin)
    return data


def hmo_to_dict(hmo, *, with_relations: bool = False) -> dict:
    data = {
        'id': str(hmo.pk),
        'name': hmo.name,
        'code': hmo.code,
        'logoUrl': hmo.logo_url,
        'hospitalId': str(hmo.hospital_id) if hmo.hospital_id else None,
        'createdBy': hmo.created_by_id,
        'createdAt': _ts(hmo.created_at),
        'updatedAt': _ts(hmo.updated_at),
    }
    if with_relations:
        data['hospital'] = hospital_to_dict(hmo.hospital) if hmo.hospital_id else None
        data['creator'] = user_to_dict(hmo.created_by)
    return data


def plan_to_dict(plan, *, with_relations: bool = False) -> dict:
    data = {
        'id': str(plan.pk),
        'hmoId': str(plan.hmo_id),
        'hospitalId': str(plan.hospital_id),
        'name': plan.name,
        'planType': plan.plan_type,
        'durationYears': plan.duration_years,
        'monthlyCostCents': plan.monthly_cost_cents,
        'yearlyCostCents': plan.yearly_cost_cents,
        'deductibleCents': plan.deductible_cents,
        'annualOutOfPocketLimitCents': plan.annual_out_of_pocket_limit_cents,
        'annualMaxBenefitCents': plan.annual_max_benefit_cents,
        'description': plan.description,
        'isActive': plan.is_active,
        'createdAt': _ts(plan.created_at),
        'updatedAt': _ts(plan.updated_at),
    }
    if with_relations:
        data['hmo'] = hmo_to_dict(plan.hmo)
        data['hospital'] = hospital_to_dict(plan.hospital)
        data['formattedCosts'] = plan_cost_summary(plan)
        data['metrics'] = plan_metrics(plan)
    return data


def page_to_dict(page, presenter) -> dict:
    return {'items': [presenter(obj) for obj in page.items], 'total': page.total}
