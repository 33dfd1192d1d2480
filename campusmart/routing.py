from django.urls import re_path

from messaging.api.consumers import InboxConsumer
from notifications.api.consumers import NotificationConsumer


websocket_urlpatterns = [
    re_path(r"ws/messages/$", InboxConsumer.as_asgi()),
    re_path(r"ws/notifications/$", NotificationConsumer.as_asgi()),
]
