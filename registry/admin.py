"""
Django admin registrations for the registry models.

Lets superusers inspect and correct hospitals, HMOs and plans through
``/admin/`` without going through the API's ownership rules.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import AuditEvent, Hmo, Hospital, InsurancePlan, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    fieldsets = BaseUserAdmin.fieldsets + (('Profile', {'fields': ('name',)}),)
    list_display = ('username', 'email', 'name', 'is_staff')


class HmoInline(admin.TabularInline):
    model = Hmo
    extra = 0
    fields = ('name', 'code', 'created_by')


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('name', 'state', 'local_government', 'admin', 'created_at')
    list_filter = ('state',)
    search_fields = ('name', 'address', 'email')
    inlines = [HmoInline]


@admin.register(Hmo)
class HmoAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'hospital', 'created_by', 'created_at')
    search_fields = ('name', 'code')


@admin.register(InsurancePlan)
class InsurancePlanAdmin(admin.ModelAdmin):
    list_display = ('name', 'hmo', 'hospital', 'plan_type', 'monthly_cost_cents', 'is_active')
    list_filter = ('plan_type', 'is_active')
    search_fields = ('name',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action',)
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
