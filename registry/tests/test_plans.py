import uuid
from decimal import Decimal

import pytest

from registry.errors import ErrorKind
from registry.models import Hmo, InsurancePlan
from registry.services.plans import (
    create_plan,
    delete_plan,
    get_plan,
    list_plans,
    list_plans_for_hmo,
    list_plans_for_hospital,
    toggle_plan_active,
    update_plan,
)

pytestmark = pytest.mark.django_db


def fields(result):
    return {e.field: e.message for e in result.errors}


def test_hmo_creator_creates_plan(bob, principal, hmo, hospital, plan_payload):
    result = create_plan(principal(bob), plan_payload(hmo, hospital))
    assert result.success, result.errors
    plan = InsurancePlan.objects.get(pk=result.data['id'])
    assert plan.is_active
    assert plan.deductible_cents == 0
    assert result.data['hmoId'] == str(hmo.pk)


def test_hospital_admin_creates_plan(alice, principal, hmo, hospital, plan_payload):
    assert create_plan(principal(alice), plan_payload(hmo, hospital)).success


def test_stranger_cannot_create_plan(carol, principal, hmo, hospital, plan_payload):
    result = create_plan(principal(carol), plan_payload(hmo, hospital))
    assert result.kind is ErrorKind.FORBIDDEN
    assert result.messages == [
        "You don't have permission to create plans for this HMO/Hospital combination"
    ]
    assert not InsurancePlan.objects.exists()


def test_payload_is_validated_before_permission(carol, principal, hmo, hospital, plan_payload):
    result = create_plan(principal(carol), plan_payload(hmo, hospital, hmoId='nope'))
    assert result.kind is ErrorKind.VALIDATION
    assert fields(result) == {'hmoId': 'Invalid HMO ID'}


def test_yearly_cost_boundary(bob, principal, hmo, hospital, plan_payload):
    exact = create_plan(principal(bob), plan_payload(hmo, hospital, monthlyCostCents=10_000, yearlyCostCents=100_000))
    assert exact.success

    short = create_plan(principal(bob), plan_payload(hmo, hospital, monthlyCostCents=10_000, yearlyCostCents=99_999))
    assert short.kind is ErrorKind.VALIDATION
    assert fields(short) == {'yearlyCostCents': 'Yearly cost should be at least 10 times the monthly cost'}


def test_max_benefit_boundary(bob, principal, hmo, hospital, plan_payload):
    equal = create_plan(principal(bob), plan_payload(
        hmo, hospital, annualOutOfPocketLimitCents=50_000, annualMaxBenefitCents=50_000))
    assert equal.success

    below = create_plan(principal(bob), plan_payload(
        hmo, hospital, annualOutOfPocketLimitCents=50_000, annualMaxBenefitCents=49_999))
    assert fields(below) == {
        'annualMaxBenefitCents': 'Annual max benefit must be at least equal to out-of-pocket limit'
    }


def test_numeric_ranges(bob, principal, hmo, hospital, plan_payload):
    result = create_plan(principal(bob), plan_payload(
        hmo, hospital, durationYears=11, monthlyCostCents=-1, planType='group'))
    errors = fields(result)
    assert errors['durationYears'] == 'Duration cannot exceed 10 years'
    assert errors['monthlyCostCents'] == 'Monthly cost cannot be negative'
    assert 'planType' in errors


def test_dangling_hmo_maps_to_hmo_field(alice, principal, hospital, plan_payload):
    ghost = Hmo(pk=uuid.uuid4())
    result = create_plan(principal(alice), plan_payload(ghost, hospital))
    assert fields(result) == {'hmoId': 'Selected HMO does not exist'}
    assert not InsurancePlan.objects.exists()


def test_update_checks_pricing_against_stored_values(bob, principal, hmo, hospital, make_plan):
    plan = make_plan(hmo, hospital, monthly_cost_cents=10_000, yearly_cost_cents=100_000)
    result = update_plan(principal(bob), plan.pk, {'monthlyCostCents': 20_000})
    assert fields(result) == {'yearlyCostCents': 'Yearly cost should be at least 10 times the monthly cost'}
    plan.refresh_from_db()
    assert plan.monthly_cost_cents == 10_000

    ok = update_plan(principal(bob), plan.pk, {'monthlyCostCents': 20_000, 'yearlyCostCents': 200_000})
    assert ok.success
    assert ok.data['monthlyCostCents'] == 20_000


def test_update_cannot_move_plan(bob, principal, hmo, hospital, make_plan):
    plan = make_plan(hmo, hospital)
    other = Hmo.objects.create(name='Other', created_by=bob)
    result = update_plan(principal(bob), plan.pk, {'hmoId': str(other.pk), 'name': 'Renamed'})
    assert result.success
    plan.refresh_from_db()
    assert plan.hmo_id == hmo.pk
    assert plan.name == 'Renamed'


def test_update_and_delete_permissions(carol, alice, principal, hmo, hospital, make_plan):
    plan = make_plan(hmo, hospital)
    assert update_plan(principal(carol), plan.pk, {'name': 'Nope'}).messages == [
        "You don't have permission to update this insurance plan"
    ]
    assert delete_plan(principal(carol), plan.pk).kind is ErrorKind.FORBIDDEN
    # the hospital admin may manage a plan on another user's HMO
    assert delete_plan(principal(alice), plan.pk).success
    assert not InsurancePlan.objects.filter(pk=plan.pk).exists()


def test_missing_plan(bob, principal):
    for action in (get_plan, delete_plan, toggle_plan_active):
        result = action(principal(bob), uuid.uuid4())
        assert result.kind is ErrorKind.NOT_FOUND
        assert result.messages == ['Insurance plan not found']


def test_toggle_twice_restores_flag(bob, principal, hmo, hospital, make_plan):
    plan = make_plan(hmo, hospital)
    first = toggle_plan_active(principal(bob), plan.pk)
    assert first.data['isActive'] is False
    second = toggle_plan_active(principal(bob), plan.pk)
    assert second.data['isActive'] is True
    plan.refresh_from_db()
    assert plan.is_active is True


def test_toggle_requires_login(hmo, hospital, make_plan):
    plan = make_plan(hmo, hospital)
    assert toggle_plan_active(None, plan.pk).messages == ['You must be logged in to modify insurance plans']


def test_get_plan_formats_costs(bob, principal, hmo, hospital, make_plan):
    plan = make_plan(hmo, hospital, monthly_cost_cents=150_075, yearly_cost_cents=1_500_750)
    result = get_plan(principal(bob), plan.pk)
    assert result.data['hmo']['id'] == str(hmo.pk)
    assert result.data['hospital']['id'] == str(hospital.pk)
    assert result.data['formattedCosts']['monthly'] == '₦1,500.75'
    assert result.data['metrics']['yearlyPremiumDiscount'] == Decimal('16.67')


def test_list_filters(bob, principal, hmo, hospital, make_plan):
    make_plan(hmo, hospital, name='Family', plan_type=InsurancePlan.TYPE_FAMILY)
    make_plan(hmo, hospital, name='Inactive', is_active=False)
    make_plan(hmo, hospital, name='Solo')

    family = list_plans(principal(bob), {'planType': 'family'})
    assert [p['name'] for p in family.data['items']] == ['Family']

    inactive = list_plans(principal(bob), {'isActive': 'false', 'hmoId': str(hmo.pk)})
    assert [p['name'] for p in inactive.data['items']] == ['Inactive']

    active = list_plans(principal(bob), {'isActive': True})
    assert active.data['total'] == 2


def test_list_by_parent(bob, principal, hmo, hospital, make_plan):
    plan = make_plan(hmo, hospital)
    assert [p['id'] for p in list_plans_for_hmo(principal(bob), hmo.pk).data] == [str(plan.pk)]
    assert [p['id'] for p in list_plans_for_hospital(principal(bob), hospital.pk).data] == [str(plan.pk)]
    assert list_plans_for_hmo(principal(bob), uuid.uuid4()).kind is ErrorKind.NOT_FOUND
