import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

logger = logging.getLogger(__name__)

GROUP = "registry"


def publish(entity: str, op: str, object_id) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    event = {"type": "registry.changed", "entity": entity, "op": op, "id": str(object_id)}
    async_to_sync(channel_layer.group_send)(GROUP, event)
    logger.debug("published %s %s %s", entity, op, object_id)


def broadcast_change(entity: str, op: str, object_id) -> None:
    """Tell connected dashboards about a change once the transaction commits."""
    transaction.on_commit(lambda: publish(entity, op, object_id), robust=True)
