"""
Query classes for hospitals, HMOs and insurance plans.

This is the only module that talks to the ORM on behalf of the action
layer.  Writes go through :func:`_write`, which forces deferred foreign
key checks to run immediately and turns any ``IntegrityError`` into a
:class:`~registry.errors.ConstraintViolation` naming the offending
column.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Optional

from django.db import IntegrityError, connection, transaction
from django.db.models import Case, Model, QuerySet, Value, When
from django.utils import timezone

from .errors import ConstraintViolation
from .models import Hmo, Hospital, InsurancePlan


@dataclass
class Page:
    items: list
    total: int


def as_uuid(value) -> Optional[uuid.UUID]:
    """Coerce ``value`` to a UUID, returning ``None`` for anything malformed."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def _classify(instance: Model, exc: IntegrityError) -> ConstraintViolation:
    model = type(instance)
    fields = model._meta.concrete_fields
    for f in fields:
        if f.unique and not f.primary_key:
            value = getattr(instance, f.attname)
            if value is not None and model._default_manager.filter(**{f.attname: value}).exclude(pk=instance.pk).exists():
                return ConstraintViolation(ConstraintViolation.UNIQUE, f.name, str(exc))
    for f in fields:
        if f.many_to_one:
            value = getattr(instance, f.attname)
            if value is not None and not f.related_model._default_manager.filter(pk=value).exists():
                return ConstraintViolation(ConstraintViolation.FOREIGN_KEY, f.attname, str(exc))
    return ConstraintViolation(ConstraintViolation.INTEGRITY, None, str(exc))


def _write(instance: Model) -> Model:
    try:
        with transaction.atomic():
            instance.save()
            # FK constraints are deferred until commit; check them now so the
            # failure belongs to this write and not to whoever commits later
            connection.check_constraints(table_names=[instance._meta.db_table])
    except IntegrityError as exc:
        raise _classify(instance, exc) from exc
    return instance


def _delete_rows(qs: QuerySet) -> int:
    deleted, _ = qs.delete()
    return deleted


class _Queries:
    model: type[Model]
    relations: tuple[str, ...] = ()
    ordering = ('-created_at', '-pk')

    @classmethod
    def find_by_id(cls, pk) -> Optional[Any]:
        pk = as_uuid(pk)
        if pk is None:
            return None
        return cls.model.objects.filter(pk=pk).first()

    @classmethod
    def find_by_id_with_relations(cls, pk) -> Optional[Any]:
        pk = as_uuid(pk)
        if pk is None:
            return None
        return cls.model.objects.select_related(*cls.relations).filter(pk=pk).first()

    @classmethod
    def find_many(cls, filters: Optional[dict] = None, *, limit: int = 10, offset: int = 0) -> Page:
        qs = cls.model.objects.all()
        conditions = {k: v for k, v in (filters or {}).items() if v is not None}
        if conditions:
            qs = qs.filter(**conditions)
        total = qs.count()
        items = list(qs.order_by(*cls.ordering)[offset:offset + limit])
        return Page(items=items, total=total)

    @classmethod
    def _create(cls, values: dict) -> Any:
        return _write(cls.model(**values))

    @classmethod
    def update(cls, pk, values: dict) -> Optional[Any]:
        instance = cls.find_by_id(pk)
        if instance is None:
            return None
        for attr, value in values.items():
            setattr(instance, attr, value)
        return _write(instance)

    @classmethod
    def delete(cls, pk) -> bool:
        pk = as_uuid(pk)
        if pk is None:
            return False
        with transaction.atomic():
            return _delete_rows(cls.model.objects.filter(pk=pk)) > 0


class HospitalQueries(_Queries):
    model = Hospital
    relations = ('admin',)

    @classmethod
    def create(cls, values: dict, admin_id) -> Hospital:
        return cls._create({**values, 'admin_id': admin_id})

    @classmethod
    def find_by_admin(cls, admin_id) -> list[Hospital]:
        return list(Hospital.objects.filter(admin_id=admin_id).order_by(*cls.ordering))


class HmoQueries(_Queries):
    model = Hmo
    relations = ('hospital', 'created_by')

    @classmethod
    def create(cls, values: dict, created_by_id) -> Hmo:
        return cls._create({**values, 'created_by_id': created_by_id})

    @classmethod
    def find_by_code(cls, code: str) -> Optional[Hmo]:
        return Hmo.objects.filter(code=code).first()

    @classmethod
    def find_by_hospital(cls, hospital_id) -> list[Hmo]:
        pk = as_uuid(hospital_id)
        if pk is None:
            return []
        return list(Hmo.objects.filter(hospital_id=pk).order_by(*cls.ordering))

    @classmethod
    def delete(cls, pk) -> bool:
        """Delete the HMO and its plans as one unit: both happen or neither."""
        pk = as_uuid(pk)
        if pk is None:
            return False
        with transaction.atomic():
            _delete_rows(InsurancePlan.objects.filter(hmo_id=pk))
            return _delete_rows(Hmo.objects.filter(pk=pk)) > 0


class PlanQueries(_Queries):
    model = InsurancePlan
    relations = ('hmo', 'hospital')

    @classmethod
    def create(cls, values: dict) -> InsurancePlan:
        return cls._create(values)

    @classmethod
    def find_by_hmo(cls, hmo_id) -> list[InsurancePlan]:
        pk = as_uuid(hmo_id)
        if pk is None:
            return []
        return list(InsurancePlan.objects.filter(hmo_id=pk).order_by(*cls.ordering))

    @classmethod
    def find_by_hospital(cls, hospital_id) -> list[InsurancePlan]:
        pk = as_uuid(hospital_id)
        if pk is None:
            return []
        return list(InsurancePlan.objects.filter(hospital_id=pk).order_by(*cls.ordering))

    @classmethod
    def toggle_active(cls, pk) -> Optional[InsurancePlan]:
        pk = as_uuid(pk)
        if pk is None:
            return None
        flipped = Case(When(is_active=True, then=Value(False)), default=Value(True))
        updated = InsurancePlan.objects.filter(pk=pk).update(is_active=flipped, updated_at=timezone.now())
        if not updated:
            return None
        return cls.find_by_id(pk)
