import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from notifications.domain.models import Notification
from notifications.domain.services.notification_service import notification_group_name


logger = logging.getLogger(__name__)


class NotificationConsumer(AsyncWebsocketConsumer):
    """
    Per-user notification stream.

    Sends the unread count on connect and forwards every ``notification_new``
    event published to the user's group.
    """

    async def connect(self):
        self.user = self.scope.get("user")

        if self.user is None or not self.user.is_authenticated:
            logger.warning("Unauthenticated connection attempt to notifications")
            await self.close(code=4001)  # Unauthorized
            return

        self.group_name = notification_group_name(self.user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"User {self.user.id} connected to notifications")

        unread_count = await self.get_unread_count()
        await self.send(
            text_data=json.dumps(
                {
                    "type": "connection_success",
                    "user_id": str(self.user.id),
                    "unread_count": unread_count,
                }
            )
        )

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def receive(self, text_data):
        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON")
            return

        msg_type = data.get("type")
        if msg_type == "get_unread_count":
            unread_count = await self.get_unread_count()
            await self.send(text_data=json.dumps({"type": "unread_count", "unread_count": unread_count}))
        elif msg_type == "ping":
            await self.send(text_data=json.dumps({"type": "pong"}))
        else:
            await self.send_error("Unknown message type")

    async def notification_new(self, event):
        """
        Handler for 'notification_new' events sent from the Channel Layer.
        """
        await self.send(text_data=json.dumps({"type": "notification.new", "data": event["notification"]}))

    async def send_error(self, message, code="error"):
        await self.send(text_data=json.dumps({"type": "error", "code": code, "message": message}))

    @database_sync_to_async
    def get_unread_count(self):
        return Notification.objects.filter(recipient_id=self.user.id, is_read=False).count()
