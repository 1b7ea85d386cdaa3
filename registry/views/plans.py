from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from ..auth import principal_for
from ..services import plans as actions
from .common import payload, query, respond


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def plans(request):
    principal = principal_for(request)
    if request.method == 'GET':
        params = query(request)
        return respond(actions.list_plans(principal, params, params))
    return respond(actions.create_plan(principal, payload(request)), created=True)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([AllowAny])
def plan_detail(request, plan_id):
    principal = principal_for(request)
    if request.method == 'GET':
        return respond(actions.get_plan(principal, plan_id))
    if request.method == 'PATCH':
        return respond(actions.update_plan(principal, plan_id, payload(request)))
    return respond(actions.delete_plan(principal, plan_id))


@api_view(['POST'])
@permission_classes([AllowAny])
def plan_toggle_active(request, plan_id):
    return respond(actions.toggle_plan_active(principal_for(request), plan_id))
