import json
from channels.generic.websocket import AsyncWebsocketConsumer

from ..services.broadcast import GROUP


class RegistryUpdatesConsumer(AsyncWebsocketConsumer):
    """Pushes committed hospital / HMO / plan changes to open dashboards."""

    async def connect(self):
        await self.channel_layer.group_add(GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(GROUP, self.channel_name)

    async def registry_changed(self, event):
        # event: {"type": "registry.changed", "entity": "hmo", "op": "delete", "id": "..."}
        await self.send(json.dumps(event))
