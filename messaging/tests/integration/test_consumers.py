from channels.db import database_sync_to_async
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser
from django.test import TransactionTestCase
from rest_framework_simplejwt.tokens import AccessToken

from authentication.tests.factories import UserFactory
from messaging.api.consumers import InboxConsumer
from messaging.domain.models import Message
from messaging.middleware.auth import HandshakeAuthMiddleware


class InboxConsumerTests(TransactionTestCase):
    def setUp(self):
        self.user = UserFactory()
        self.other = UserFactory()

    def communicator(self, user):
        communicator = WebsocketCommunicator(InboxConsumer.as_asgi(), "/ws/messages/")
        communicator.scope["user"] = user
        return communicator

    async def test_connect_reports_unread_count(self):
        await database_sync_to_async(Message.objects.create)(sender=self.other, receiver=self.user, content="Hi")

        communicator = self.communicator(self.user)
        connected, _ = await communicator.connect()
        self.assertTrue(connected)

        greeting = await communicator.receive_json_from()
        self.assertEqual(greeting["type"], "connection_success")
        self.assertEqual(greeting["unread_count"], 1)
        await communicator.disconnect()

    async def test_anonymous_connection_rejected(self):
        communicator = self.communicator(AnonymousUser())

        connected, close_code = await communicator.connect()

        self.assertFalse(connected)
        self.assertEqual(close_code, 4001)

    async def test_ping_pong(self):
        communicator = self.communicator(self.user)
        await communicator.connect()
        await communicator.receive_json_from()

        await communicator.send_json_to({"type": "ping"})
        self.assertEqual(await communicator.receive_json_from(), {"type": "pong"})
        await communicator.disconnect()

    async def test_forwards_new_messages_and_read_receipts(self):
        communicator = self.communicator(self.user)
        await communicator.connect()
        await communicator.receive_json_from()

        channel_layer = get_channel_layer()
        group = f"inbox_user_{self.user.id}"
        await channel_layer.group_send(group, {"type": "message_new", "message": {"id": 7, "content": "Hello"}})
        event = await communicator.receive_json_from()
        self.assertEqual(event, {"type": "message.new", "data": {"id": 7, "content": "Hello"}})

        await channel_layer.group_send(group, {"type": "message_read", "receipt": {"reader": "x", "count": 2}})
        event = await communicator.receive_json_from()
        self.assertEqual(event["type"], "message.read")
        self.assertEqual(event["data"]["count"], 2)
        await communicator.disconnect()

    async def test_handshake_middleware_authenticates_query_token(self):
        token = str(AccessToken.for_user(self.user))
        application = HandshakeAuthMiddleware(InboxConsumer.as_asgi())
        communicator = WebsocketCommunicator(application, f"/ws/messages/?token={token}")
        communicator.scope["user"] = AnonymousUser()

        connected, _ = await communicator.connect()
        self.assertTrue(connected)
        greeting = await communicator.receive_json_from()
        self.assertEqual(greeting["user_id"], str(self.user.id))
        await communicator.disconnect()

    async def test_handshake_middleware_ignores_bad_token(self):
        application = HandshakeAuthMiddleware(InboxConsumer.as_asgi())
        communicator = WebsocketCommunicator(application, "/ws/messages/?token=not-a-jwt")
        communicator.scope["user"] = AnonymousUser()

        connected, close_code = await communicator.connect()

        self.assertFalse(connected)
        self.assertEqual(close_code, 4001)
