"""
Database models for the healthcare registry.

A hospital is administered by exactly one user, an HMO is owned by the
user who created it and may point at a default hospital, and an
insurance plan ties an HMO to a hospital.  All money is stored as
integer minor units (cents) so no arithmetic is ever done in floating
point.
"""
from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Dashboard account.

    ``name`` is the display name captured at sign-up; ``email`` doubles
    as the username for accounts created through the sign-up endpoint.
    """
    name = models.CharField(max_length=255, blank=True)

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    def __str__(self) -> str:
        return self.display_name


class Hospital(models.Model):
    """A healthcare facility owned by its admin user."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    email = models.EmailField(max_length=255, blank=True, null=True)
    # state / LGA are the location filters the dashboard exposes
    state = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    local_government = models.CharField(max_length=255, blank=True, null=True)
    admin = models.ForeignKey(User, on_delete=models.CASCADE, related_name='hospitals', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name


class Hmo(models.Model):
    """Health Maintenance Organisation.

    ``code`` is an optional short identifier which must be unique when
    present; NULL is used for "no code" so the unique index allows many
    HMOs without one.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    code = models.CharField(max_length=50, unique=True, blank=True, null=True)
    logo_url = models.URLField(max_length=2048, blank=True, null=True)
    hospital = models.ForeignKey(
        Hospital, null=True, blank=True, on_delete=models.CASCADE, related_name='hmos'
    )
    created_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name='hmos_created')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'HMO'
        verbose_name_plural = 'HMOs'

    def __str__(self) -> str:
        return f"{self.name} ({self.code})" if self.code else self.name


class InsurancePlan(models.Model):
    """An insurance package an HMO offers at a hospital."""
    TYPE_FAMILY = 'family'
    TYPE_INDIVIDUAL = 'individual'
    TYPE_ENTERPRISE = 'enterprise'
    PLAN_TYPE_CHOICES = [
        (TYPE_FAMILY, 'Family'),
        (TYPE_INDIVIDUAL, 'Individual'),
        (TYPE_ENTERPRISE, 'Enterprise'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    hmo = models.ForeignKey(Hmo, on_delete=models.CASCADE, related_name='plans')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='plans')
    name = models.CharField(max_length=255)
    plan_type = models.CharField(max_length=16, choices=PLAN_TYPE_CHOICES, db_index=True)
    duration_years = models.PositiveSmallIntegerField(default=1)

    monthly_cost_cents = models.BigIntegerField()
    yearly_cost_cents = models.BigIntegerField()
    deductible_cents = models.BigIntegerField(default=0)
    annual_out_of_pocket_limit_cents = models.BigIntegerField()
    annual_max_benefit_cents = models.BigIntegerField()

    description = models.TextField(blank=True, null=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} [{self.plan_type}]"


class AuditEvent(models.Model):
    """Who changed which registry record, and how."""
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='registry_au_action_5c1f0e_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='registry_au_object__9a2b7d_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.object_type}/{self.object_id}"
