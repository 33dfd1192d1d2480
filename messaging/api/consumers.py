import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from messaging.domain.models import Message
from messaging.domain.services.message_service import inbox_group_name


logger = logging.getLogger(__name__)


class InboxConsumer(AsyncWebsocketConsumer):
    """
    Live inbox of one user.

    Forwards new messages in any of the user's conversations and read receipts
    for messages the user sent.
    """

    async def connect(self):
        self.user = self.scope.get("user")

        if self.user is None or not self.user.is_authenticated:
            logger.warning("Unauthenticated connection attempt to inbox")
            await self.close(code=4001)  # Unauthorized
            return

        self.group_name = inbox_group_name(self.user.id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        logger.info(f"User {self.user.id} connected to inbox")

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
            logger.info(f"User {self.user.id} disconnected from inbox")

    async def receive(self, text_data):
        try:
            data = json.loads(text_data)
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON")
            return

        if data.get("type") == "ping":
            await self.send(text_data=json.dumps({"type": "pong"}))
        else:
            await self.send_error("Unknown message type")

    async def message_new(self, event):
        await self.send(text_data=json.dumps({"type": "message.new", "data": event["message"]}))

    async def message_read(self, event):
        await self.send(text_data=json.dumps({"type": "message.read", "data": event["receipt"]}))

    async def send_error(self, message, code="error"):
        await self.send(text_data=json.dumps({"type": "error", "code": code, "message": message}))

    @database_sync_to_async
    def get_unread_count(self):
        return Message.objects.filter(receiver_id=self.user.id, is_read=False, is_deleted=False).count()
