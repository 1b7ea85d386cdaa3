"""
Insurance plan payloads.

Money is accepted as integer cents only.  The two pricing rules are
checked against the merged record when updating, so a patch touching
just one side of a rule is still held to it.
"""
from rest_framework import serializers

from ..models import InsurancePlan
from .common import blank_to_none, clean_name, clean_text

PRICING_FIELDS = (
    'monthly_cost_cents',
    'yearly_cost_cents',
    'annual_out_of_pocket_limit_cents',
    'annual_max_benefit_cents',
)


def cents_field(source, message, **kwargs):
    return serializers.IntegerField(
        source=source, min_value=0, error_messages={'min_value': message}, **kwargs
    )


class PlanSerializer(serializers.Serializer):
    hmoId = serializers.UUIDField(source='hmo_id', error_messages={'invalid': 'Invalid HMO ID'})
    hospitalId = serializers.UUIDField(source='hospital_id', error_messages={'invalid': 'Invalid hospital ID'})
    name = serializers.CharField(
        min_length=2, max_length=255,
        error_messages={'min_length': 'Plan name must be at least 2 characters'},
    )
    planType = serializers.ChoiceField(source='plan_type', choices=InsurancePlan.PLAN_TYPE_CHOICES)
    durationYears = serializers.IntegerField(
        source='duration_years', min_value=1, max_value=10, required=False, default=1,
        error_messages={
            'min_value': 'Duration must be at least 1 year',
            'max_value': 'Duration cannot exceed 10 years',
        },
    )
    monthlyCostCents = cents_field('monthly_cost_cents', 'Monthly cost cannot be negative')
    yearlyCostCents = cents_field('yearly_cost_cents', 'Yearly cost cannot be negative')
    deductibleCents = cents_field('deductible_cents', 'Deductible cannot be negative', required=False, default=0)
    annualOutOfPocketLimitCents = cents_field(
        'annual_out_of_pocket_limit_cents', 'Out-of-pocket limit cannot be negative'
    )
    annualMaxBenefitCents = cents_field('annual_max_benefit_cents', 'Max benefit cannot be negative')
    description = serializers.CharField(
        max_length=2000, required=False, allow_blank=True, allow_null=True,
        error_messages={'max_length': 'Description too long'},
    )
    isActive = serializers.BooleanField(source='is_active', required=False, default=True)

    def validate_name(self, v):
        return clean_name(v, 'Plan')

    def validate_description(self, v):
        return blank_to_none(clean_text(v))

    def validate(self, attrs):
        merged = {f: getattr(self.instance, f) for f in PRICING_FIELDS} if self.instance is not None else {}
        merged.update({k: v for k, v in attrs.items() if k in PRICING_FIELDS})

        errors = {}
        monthly = merged.get('monthly_cost_cents')
        yearly = merged.get('yearly_cost_cents')
        if monthly is not None and yearly is not None and yearly < monthly * 10:
            errors['yearlyCostCents'] = 'Yearly cost should be at least 10 times the monthly cost'

        oop = merged.get('annual_out_of_pocket_limit_cents')
        max_benefit = merged.get('annual_max_benefit_cents')
        if oop is not None and max_benefit is not None and max_benefit < oop:
            errors['annualMaxBenefitCents'] = 'Annual max benefit must be at least equal to out-of-pocket limit'

        if errors:
            raise serializers.ValidationError(errors)
        return attrs


class PlanUpdateSerializer(PlanSerializer):
    """Partial form of :class:`PlanSerializer`; a plan never moves to another HMO or hospital."""
    hmoId = None
    hospitalId = None


class PlanFilterSerializer(serializers.Serializer):
    hmoId = serializers.UUIDField(required=False, source='hmo_id')
    hospitalId = serializers.UUIDField(required=False, source='hospital_id')
    planType = serializers.ChoiceField(required=False, source='plan_type', choices=InsurancePlan.PLAN_TYPE_CHOICES)
    isActive = serializers.BooleanField(required=False, source='is_active')
