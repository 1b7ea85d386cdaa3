from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from ..auth import principal_for
from ..services import hmos as actions
from ..services import plans as plan_actions
from .common import payload, query, respond


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def hmos(request):
    principal = principal_for(request)
    if request.method == 'GET':
        params = query(request)
        return respond(actions.list_hmos(principal, params, params))
    return respond(actions.create_hmo(principal, payload(request)), created=True)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([AllowAny])
def hmo_detail(request, hmo_id):
    """Read, update or delete one HMO.  Deleting also removes its plans."""
    principal = principal_for(request)
    if request.method == 'GET':
        return respond(actions.get_hmo(principal, hmo_id))
    if request.method == 'PATCH':
        return respond(actions.update_hmo(principal, hmo_id, payload(request)))
    return respond(actions.delete_hmo(principal, hmo_id))


@api_view(['GET'])
@permission_classes([AllowAny])
def hmo_plans(request, hmo_id):
    return respond(plan_actions.list_plans_for_hmo(principal_for(request), hmo_id))
