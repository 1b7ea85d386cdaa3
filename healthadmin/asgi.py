"""
ASGI config for the healthadmin project.

Serves the JSON API over HTTP and registry change notifications over
WebSocket. Django must be configured before importing anything that
touches models.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "healthadmin.settings")

import django  # noqa: E402
django.setup()  # noqa: E402

from django.core.asgi import get_asgi_application  # noqa: E402
from channels.routing import ProtocolTypeRouter, URLRouter  # noqa: E402
from channels.auth import AuthMiddlewareStack  # noqa: E402
from django.urls import path  # noqa: E402

from registry.realtime.consumers import RegistryUpdatesConsumer  # noqa: E402

django_asgi_app = get_asgi_application()

websocket_urlpatterns = [
    path("ws/registry/", RegistryUpdatesConsumer.as_asgi()),
]

application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": AuthMiddlewareStack(URLRouter(websocket_urlpatterns)),
})
