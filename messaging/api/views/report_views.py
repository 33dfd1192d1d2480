from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.response import Response

from infrastructure.container import container
from messaging.api.serializers import ConversationReportSerializer
from messaging.domain.models import ConversationReport
from utils.api_errors import DOMAIN_EXCEPTIONS, domain_error_response


class ReportViewSet(mixins.CreateModelMixin, viewsets.GenericViewSet):
    queryset = ConversationReport.objects.all()
    serializer_class = ConversationReportSerializer
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="reports_create",
        summary="Report a conversation",
        responses={
            201: ConversationReportSerializer,
            400: OpenApiResponse(description="Missing reason or self-report"),
            404: OpenApiResponse(description="Reported user or product not found"),
        },
        tags=["Messaging"],
    )
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            report = container.message_service().report_conversation(
                request.user,
                data["reported_user_id"],
                data["reason"],
                product_id=data.get("product_id"),
            )
        except DOMAIN_EXCEPTIONS as e:
            return domain_error_response(e)

        body = {"message": "Conversation reported successfully", **self.get_serializer(report).data}
        return Response(body, status=status.HTTP_201_CREATED)
