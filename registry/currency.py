"""
Money helpers.

Amounts are stored as integer cents (kobo for the Naira).  Conversions
go through :class:`~decimal.Decimal` built from strings so floats never
take part in the arithmetic.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from django.conf import settings

CENT = Decimal('0.01')
HUNDRED = Decimal(100)

SYMBOLS = {'NGN': '₦', 'USD': '$', 'GBP': '£', 'EUR': '€'}


def to_cents(units: Union[str, int, float, Decimal, None]) -> int:
    """Convert a major-unit amount (``1500.75``) to cents (``150075``)."""
    if units is None:
        return 0
    try:
        value = Decimal(str(units))
    except InvalidOperation as e:
        raise ValueError(f"Cannot convert {units!r} to an amount") from e
    return int((value * HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def cents_to_units(cents: int) -> Decimal:
    return (Decimal(int(cents)) / HUNDRED).quantize(CENT)


def format_currency(cents: int, currency: Optional[str] = None) -> str:
    code = currency or getattr(settings, 'CURRENCY_CODE', 'NGN')
    units = cents_to_units(cents)
    sign = '-' if units < 0 else ''
    body = f"{abs(units):,.2f}"
    symbol = SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{body}"
    return f"{sign}{code} {body}"


def plan_cost_summary(plan, currency: Optional[str] = None) -> dict:
    """Display strings for a plan's costs, plus what paying yearly saves."""
    return {
        'monthly': format_currency(plan.monthly_cost_cents, currency),
        'yearly': format_currency(plan.yearly_cost_cents, currency),
        'deductible': format_currency(plan.deductible_cents, currency),
        'outOfPocketLimit': format_currency(plan.annual_out_of_pocket_limit_cents, currency),
        'maxBenefit': format_currency(plan.annual_max_benefit_cents, currency),
        'yearlySavings': format_currency(plan.monthly_cost_cents * 12 - plan.yearly_cost_cents, currency),
    }


def _ratio(numerator: Decimal, denominator: Decimal, scale: Decimal = Decimal(1)) -> Optional[Decimal]:
    if not denominator:
        return None
    return (numerator / denominator * scale).quantize(CENT)


def plan_metrics(plan) -> dict:
    """Derived figures for comparing plans.  Ratios over a zero base are ``None``."""
    monthly = cents_to_units(plan.monthly_cost_cents)
    yearly = cents_to_units(plan.yearly_cost_cents)
    deductible = cents_to_units(plan.deductible_cents)
    max_benefit = cents_to_units(plan.annual_max_benefit_cents)

    return {
        'effectiveMonthlyRate': (yearly / 12).quantize(CENT),
        'monthlySavings': (monthly - yearly / 12).quantize(CENT),
        'yearlyPremiumDiscount': _ratio(monthly * 12 - yearly, monthly * 12, HUNDRED),
        'coverageRatio': _ratio(max_benefit, yearly),
        'deductiblePercentage': _ratio(deductible, yearly, HUNDRED),
    }
