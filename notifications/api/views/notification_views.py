from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from infrastructure.container import container
from notifications.api.serializers import BulkResultSerializer, NotificationSerializer, UnreadCountSerializer
from utils.api_errors import DOMAIN_EXCEPTIONS, domain_error_response


PROFILE_PATH = r"profile/(?P<user_id>[^/.]+)"


class NotificationViewSet(viewsets.ViewSet):
    """
    Notifications of the authenticated user.

    Profile-scoped routes take the owner's user id and reject anyone else.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get_service(self):
        return container.notification_service()

    @extend_schema(
        operation_id="notifications_for_profile",
        summary="List a user's notifications",
        parameters=[OpenApiParameter(name="type", type=str, description="Filter by notification type")],
        responses={200: NotificationSerializer(many=True), 403: OpenApiResponse(description="Not your notifications")},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"], url_path=PROFILE_PATH)
    def for_profile(self, request, user_id=None):
        try:
            notifications = self.get_service().list_notifications(
                request.user, user_id, type=request.query_params.get("type")
            )
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(NotificationSerializer(notifications, many=True).data)

    @extend_schema(
        operation_id="notifications_delete_all",
        summary="Delete all of a user's notifications",
        responses={200: BulkResultSerializer},
        tags=["Notifications"],
    )
    @for_profile.mapping.delete
    def delete_all(self, request, user_id=None):
        try:
            deleted = self.get_service().delete_all(request.user, user_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="notifications_unread",
        summary="List unread notifications",
        responses={200: NotificationSerializer(many=True)},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"], url_path=PROFILE_PATH + "/unread")
    def unread(self, request, user_id=None):
        try:
            notifications = self.get_service().list_unread(request.user, user_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(NotificationSerializer(notifications, many=True).data)

    @extend_schema(
        operation_id="notifications_unread_count",
        summary="Count unread notifications",
        responses={200: UnreadCountSerializer},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"], url_path=PROFILE_PATH + "/unread/count")
    def unread_count(self, request, user_id=None):
        try:
            count = self.get_service().unread_count(request.user, user_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"unread_count": count})

    @extend_schema(
        operation_id="notifications_read_all",
        summary="Mark all notifications read",
        request=None,
        responses={200: BulkResultSerializer},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["patch"], url_path=PROFILE_PATH + "/read-all")
    def read_all(self, request, user_id=None):
        try:
            updated = self.get_service().mark_all_as_read(request.user, user_id)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response({"updated": updated})

    @extend_schema(
        operation_id="notifications_mark_read",
        summary="Mark one notification read",
        request=None,
        responses={
            200: NotificationSerializer,
            403: OpenApiResponse(description="Not your notification"),
            404: OpenApiResponse(description="Notification not found"),
        },
        tags=["Notifications"],
    )
    @action(detail=True, methods=["patch"], url_path="read")
    def read(self, request, pk=None):
        try:
            notification = self.get_service().mark_as_read(request.user, pk)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(NotificationSerializer(notification).data)

    @extend_schema(
        operation_id="notifications_delete",
        summary="Delete one notification",
        responses={204: None, 403: OpenApiResponse(description="Not your notification")},
        tags=["Notifications"],
    )
    def destroy(self, request, pk=None):
        try:
            self.get_service().delete_notification(request.user, pk)
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)
