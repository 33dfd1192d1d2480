"""
ASGI config for the Campus Mart backend.

Serves the REST API over HTTP and the push channels (inbox and notifications)
over WebSocket.
"""

import os

import django
from channels.auth import AuthMiddlewareStack
from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator
from django.core.asgi import get_asgi_application


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "campusmart.settings")

# Initialize Django ASGI application early to ensure the AppRegistry
# is populated before importing code that may import ORM models.
django.setup()

django_asgi_app = get_asgi_application()

# Import routing here, after Django has been initialized
from campusmart.routing import websocket_urlpatterns  # noqa: E402
from messaging.middleware.auth import HandshakeAuthMiddleware  # noqa: E402


application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
        "websocket": AllowedHostsOriginValidator(
            AuthMiddlewareStack(HandshakeAuthMiddleware(URLRouter(websocket_urlpatterns)))
        ),
    }
)
