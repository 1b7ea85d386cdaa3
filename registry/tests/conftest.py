import pytest
from django.core.cache import cache

from registry.auth import Principal
from registry.models import Hmo, Hospital, InsurancePlan, User

PASSWORD = 'Str0ng-Passw0rd!'


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_user(db):
    def make(email, name=''):
        return User.objects.create_user(username=email, email=email, password=PASSWORD, name=name)
    return make


@pytest.fixture
def alice(make_user):
    return make_user('alice@example.com', 'Alice Okafor')


@pytest.fixture
def bob(make_user):
    return make_user('bob@example.com', 'Bob Adeyemi')


@pytest.fixture
def carol(make_user):
    return make_user('carol@example.com', 'Carol Eze')


@pytest.fixture
def principal():
    """Build the request-scoped caller for a user."""
    return Principal.from_user


@pytest.fixture
def hospital(alice):
    """Lagos hospital administered by alice."""
    return Hospital.objects.create(name='Lagos General', state='Lagos', local_government='Ikeja', admin=alice)


@pytest.fixture
def hmo(bob, hospital):
    """HMO created by bob, defaulting to alice's hospital."""
    return Hmo.objects.create(name='Avon Health', code='AVON', hospital=hospital, created_by=bob)


def _plan_payload(hmo, hospital, **overrides):
    data = {
        'hmoId': str(hmo.pk),
        'hospitalId': str(hospital.pk),
        'name': 'Basic Care',
        'planType': 'individual',
        'durationYears': 1,
        'monthlyCostCents': 10_000,
        'yearlyCostCents': 100_000,
        'annualOutOfPocketLimitCents': 50_000,
        'annualMaxBenefitCents': 500_000,
    }
    data.update(overrides)
    return data


def _make_plan(hmo, hospital, **overrides):
    values = {
        'hmo': hmo,
        'hospital': hospital,
        'name': 'Basic Care',
        'plan_type': InsurancePlan.TYPE_INDIVIDUAL,
        'monthly_cost_cents': 10_000,
        'yearly_cost_cents': 100_000,
        'annual_out_of_pocket_limit_cents': 50_000,
        'annual_max_benefit_cents': 500_000,
    }
    values.update(overrides)
    return InsurancePlan.objects.create(**values)


@pytest.fixture
def plan_payload():
    return _plan_payload


@pytest.fixture
def make_plan(db):
    return _make_plan
