"""
URL mappings for the registry API.

Trailing slashes are omitted throughout (``APPEND_SLASH`` is off).
"""
from django.urls import path, include

from .auth_views import register_view, login_view, jwt_refresh_view, jwt_logout_view, session_view
from .views import health
from .views.hospitals import hospitals, my_hospitals, hospital_detail, hospital_hmos, hospital_plans
from .views.hmos import hmos, hmo_detail, hmo_plans
from .views.plans import plans, plan_detail, plan_toggle_active
from .views.upload import upload_logo

urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),

    # Authentication
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view, name='jwt_refresh_view'),
    path('api/auth/logout', jwt_logout_view, name='jwt_logout_view'),
    path('api/auth/session', session_view, name='session_view'),

    # Hospitals
    path('api/hospitals', hospitals, name='hospitals'),
    path('api/hospitals/mine', my_hospitals, name='my_hospitals'),
    path('api/hospitals/<str:hospital_id>', hospital_detail, name='hospital_detail'),
    path('api/hospitals/<str:hospital_id>/hmos', hospital_hmos, name='hospital_hmos'),
    path('api/hospitals/<str:hospital_id>/plans', hospital_plans, name='hospital_plans'),

    # HMOs
    path('api/hmos', hmos, name='hmos'),
    path('api/hmos/<str:hmo_id>', hmo_detail, name='hmo_detail'),
    path('api/hmos/<str:hmo_id>/plans', hmo_plans, name='hmo_plans'),

    # Insurance plans
    path('api/plans', plans, name='plans'),
    path('api/plans/<str:plan_id>', plan_detail, name='plan_detail'),
    path('api/plans/<str:plan_id>/toggle-active', plan_toggle_active, name='plan_toggle_active'),

    path('api/upload', upload_logo, name='upload_logo'),
]
