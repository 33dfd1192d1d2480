from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from infrastructure.container import container
from infrastructure.storage import StorageException
from marketplace.api.serializers import ErrorResponseSerializer
from messaging.api.serializers import (
    ConversationFlagSerializer,
    ConversationSerializer,
    ConversationTargetSerializer,
    ConversationUpdateResultSerializer,
    ImageUploadSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    MessageUnreadCountSerializer,
)
from messaging.domain.services.message_service import ANY_PRODUCT
from utils.api_errors import DOMAIN_EXCEPTIONS, domain_error_response


PAIR_PATH = r"conversation/(?P<user1_id>[^/.]+)/(?P<user2_id>[^/.]+)"


class MessageViewSet(viewsets.ViewSet):
    """
    Direct messages and conversations of the authenticated user.

    Conversation-wide operations take ``other_user`` and an optional ``product``
    in the request body.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get_service(self):
        return container.message_service()

    def _messages(self, messages):
        return Response(MessageSerializer(messages, many=True).data)

    def _conversation(self, request, user1_id, user2_id, product_id):
        try:
            messages = self.get_service().get_conversation(request.user, user1_id, user2_id, product_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return self._messages(messages)

    @extend_schema(
        operation_id="messages_conversations",
        summary="List a user's conversations",
        responses={200: ConversationSerializer(many=True), 403: OpenApiResponse(description="Not your inbox")},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["get"], url_path=r"conversations/(?P<user_id>[^/.]+)")
    def conversations(self, request, user_id=None):
        try:
            conversations = self.get_service().list_conversations(request.user, user_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(ConversationSerializer(conversations, many=True).data)

    @extend_schema(
        operation_id="messages_unread_count",
        summary="Count unread messages",
        responses={200: MessageUnreadCountSerializer},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["get"], url_path=r"unread-count/(?P<user_id>[^/.]+)")
    def unread_count(self, request, user_id=None):
        try:
            count = self.get_service().unread_count(request.user, user_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"unread_count": count})

    @extend_schema(
        operation_id="messages_for_user",
        summary="List every message a user sent or received",
        responses={200: MessageSerializer(many=True)},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>[^/.]+)")
    def user_messages(self, request, user_id=None):
        try:
            messages = self.get_service().list_user_messages(request.user, user_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return self._messages(messages)

    @extend_schema(
        operation_id="messages_conversation",
        summary="All messages between two users",
        responses={200: MessageSerializer(many=True)},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["get"], url_path=PAIR_PATH)
    def conversation(self, request, user1_id=None, user2_id=None):
        return self._conversation(request, user1_id, user2_id, ANY_PRODUCT)

    @extend_schema(
        operation_id="messages_conversation_product",
        summary="Messages between two users about one product",
        responses={200: MessageSerializer(many=True)},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["get"], url_path=PAIR_PATH + r"/product/(?P<product_id>\d+)")
    def conversation_product(self, request, user1_id=None, user2_id=None, product_id=None):
        return self._conversation(request, user1_id, user2_id, int(product_id))

    @extend_schema(
        operation_id="messages_conversation_general",
        summary="Messages between two users not tied to a product",
        responses={200: MessageSerializer(many=True)},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["get"], url_path=PAIR_PATH + "/general")
    def conversation_general(self, request, user1_id=None, user2_id=None):
        return self._conversation(request, user1_id, user2_id, None)

    @extend_schema(
        operation_id="messages_send",
        summary="Send a message",
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Empty message or self-message"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Receiver or product not found"),
        },
        tags=["Messaging"],
    )
    def create(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            message = self.get_service().send_message(
                request.user,
                data["receiver"],
                content=data["content"],
                product_id=data.get("product"),
                image_url=data["image_url"],
            )
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="messages_mark_read",
        summary="Mark one message read",
        request=None,
        responses={200: MessageSerializer, 403: OpenApiResponse(description="Not the receiver")},
        tags=["Messaging"],
    )
    @action(detail=True, methods=["patch"], url_path="read")
    def read(self, request, pk=None):
        try:
            message = self.get_service().mark_as_read(request.user, pk)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(MessageSerializer(message).data)

    @extend_schema(
        operation_id="messages_conversation_read",
        summary="Mark a conversation read",
        request=ConversationTargetSerializer,
        responses={200: ConversationUpdateResultSerializer},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["patch"], url_path="conversation/read")
    def conversation_read(self, request):
        serializer = ConversationTargetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = self.get_service().mark_conversation_read(
                request.user, data["other_user"], product_id=data.get("product")
            )
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"updated": updated})

    @extend_schema(
        operation_id="messages_delete",
        summary="Delete one of your messages",
        responses={204: None, 403: OpenApiResponse(description="Not the sender")},
        tags=["Messaging"],
    )
    def destroy(self, request, pk=None):
        try:
            self.get_service().delete_message(request.user, pk)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="messages_conversation_delete",
        summary="Delete a conversation",
        request=ConversationTargetSerializer,
        responses={200: ConversationUpdateResultSerializer},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["delete"], url_path="conversation")
    def delete_conversation(self, request):
        serializer = ConversationTargetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = self.get_service().delete_conversation(
                request.user, data["other_user"], product_id=data.get("product")
            )
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"updated": updated})

    @extend_schema(
        operation_id="messages_conversation_archive",
        summary="Archive or unarchive a conversation",
        request=ConversationFlagSerializer,
        responses={200: ConversationUpdateResultSerializer},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["patch"], url_path="conversation/archive")
    def archive(self, request):
        serializer = ConversationFlagSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = self.get_service().set_archived(
                request.user, data["other_user"], archived=data["value"], product_id=data.get("product")
            )
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"updated": updated})

    @extend_schema(
        operation_id="messages_conversation_mute",
        summary="Mute or unmute a conversation",
        request=ConversationFlagSerializer,
        responses={200: ConversationUpdateResultSerializer},
        tags=["Messaging"],
    )
    @action(detail=False, methods=["patch"], url_path="conversation/mute")
    def mute(self, request):
        serializer = ConversationFlagSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            updated = self.get_service().set_muted(
                request.user, data["other_user"], muted=data["value"], product_id=data.get("product")
            )
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"updated": updated})

    @extend_schema(
        operation_id="messages_upload_image",
        summary="Upload an image to attach to a message",
        request={
            "multipart/form-data": {
                "type": "object",
                "properties": {"file": {"type": "string", "format": "binary"}},
            }
        },
        responses={
            200: ImageUploadSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing, too large or wrong type"),
        },
        tags=["Messaging"],
    )
    @action(
        detail=False,
        methods=["post"],
        url_path="upload-image",
        parser_classes=[MultiPartParser, FormParser],
    )
    def upload_image(self, request):
        file_obj = request.FILES.get("file")
        if not file_obj:
            return Response({"detail": "No file provided"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            image_url = self.get_service().upload_image(request.user, file_obj)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        except StorageException:
            return Response({"detail": "Failed to upload image"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"image_url": image_url})
