from decimal import Decimal
from types import SimpleNamespace

import pytest

from registry.currency import (
    cents_to_units,
    format_currency,
    plan_cost_summary,
    plan_metrics,
    to_cents,
)


def plan(**overrides):
    values = dict(monthly_cost_cents=10_000, yearly_cost_cents=100_000, deductible_cents=0,
                  annual_out_of_pocket_limit_cents=50_000, annual_max_benefit_cents=500_000)
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.mark.parametrize('units, cents', [
    ('1500.75', 150_075),
    (100.5, 10_050),
    (0.1 + 0.2, 30),
    (Decimal('0.005'), 1),
    (None, 0),
])
def test_to_cents(units, cents):
    assert to_cents(units) == cents


def test_to_cents_rejects_garbage():
    with pytest.raises(ValueError):
        to_cents('abc')


def test_format():
    assert cents_to_units(150_075) == Decimal('1500.75')
    assert format_currency(150_075) == '₦1,500.75'
    assert format_currency(-5_000) == '-₦50.00'
    assert format_currency(100, 'USD') == '$1.00'
    assert format_currency(100, 'KES') == 'KES 1.00'


def test_cost_summary():
    summary = plan_cost_summary(plan())
    assert summary['monthly'] == '₦100.00'
    assert summary['yearly'] == '₦1,000.00'
    assert summary['yearlySavings'] == '₦200.00'


def test_metrics():
    metrics = plan_metrics(plan())
    assert metrics['effectiveMonthlyRate'] == Decimal('83.33')
    assert metrics['monthlySavings'] == Decimal('16.67')
    assert metrics['yearlyPremiumDiscount'] == Decimal('16.67')
    assert metrics['coverageRatio'] == Decimal('5.00')
    assert metrics['deductiblePercentage'] == Decimal('0.00')


def test_metrics_over_zero_costs():
    metrics = plan_metrics(plan(monthly_cost_cents=0, yearly_cost_cents=0))
    assert metrics['coverageRatio'] is None
    assert metrics['yearlyPremiumDiscount'] is None
