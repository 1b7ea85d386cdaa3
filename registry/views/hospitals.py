"""
Hospital endpoints.

Views only translate HTTP to actions: they resolve the caller once and
pass it along, so an anonymous request reaches the action and gets the
action's own "must be logged in" result.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from ..auth import principal_for
from ..services import hmos as hmo_actions
from ..services import hospitals as actions
from ..services import plans as plan_actions
from .common import payload, query, respond


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def hospitals(request):
    """``GET`` lists hospitals (``state``, ``localGovernment``, ``adminId``, ``limit``, ``offset``); ``POST`` creates one."""
    principal = principal_for(request)
    if request.method == 'GET':
        params = query(request)
        return respond(actions.list_hospitals(principal, params, params))
    return respond(actions.create_hospital(principal, payload(request)), created=True)


@api_view(['GET'])
@permission_classes([AllowAny])
def my_hospitals(request):
    return respond(actions.list_my_hospitals(principal_for(request)))


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([AllowAny])
def hospital_detail(request, hospital_id):
    principal = principal_for(request)
    if request.method == 'GET':
        return respond(actions.get_hospital(principal, hospital_id))
    if request.method == 'PATCH':
        return respond(actions.update_hospital(principal, hospital_id, payload(request)))
    return respond(actions.delete_hospital(principal, hospital_id))


@api_view(['GET'])
@permission_classes([AllowAny])
def hospital_hmos(request, hospital_id):
    return respond(hmo_actions.list_hmos_for_hospital(principal_for(request), hospital_id))


@api_view(['GET'])
@permission_classes([AllowAny])
def hospital_plans(request, hospital_id):
    return respond(plan_actions.list_plans_for_hospital(principal_for(request), hospital_id))
