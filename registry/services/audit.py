from typing import Optional, Any, Dict

from ..models import AuditEvent
from .broadcast import broadcast_change


def log_action(*, user_id: Optional[int], action: str, object_type: Optional[str]=None, object_id: Any=None, detail: Optional[Dict[str, Any]]=None) -> AuditEvent:
    return AuditEvent.objects.create(
        user_id=user_id,
        action=action,
        object_type=object_type,
        object_id=str(object_id) if object_id is not None else None,
        detail=detail or {},
    )


def record_change(principal, entity: str, op: str, object_id, detail: Optional[Dict[str, Any]]=None) -> AuditEvent:
    """Audit a mutation and queue its change notification."""
    event = log_action(user_id=principal.id, action=f'{entity}.{op}', object_type=entity,
                       object_id=object_id, detail=detail)
    broadcast_change(entity, op, object_id)
    return event
