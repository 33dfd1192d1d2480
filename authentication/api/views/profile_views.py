from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from authentication.api.serializers import ProfileDetailSerializer, ProfileUpdateSerializer, SellerInfoSerializer
from authentication.api.serializers.response_serializers import (
    ErrorResponseSerializer,
    ProfilePictureUploadResponseSerializer,
)
from infrastructure.container import container


RESULT_STATUS = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "invalid": status.HTTP_400_BAD_REQUEST,
}


def _error_response(result):
    return Response(
        {"error": result.message},
        status=RESULT_STATUS.get(result.status, status.HTTP_500_INTERNAL_SERVER_ERROR),
    )


class ProfileViewSet(viewsets.ViewSet):
    """
    Profiles keyed by user id.

    Reading a profile or seller card needs only authentication; writes are owner only.
    """

    permission_classes = [permissions.IsAuthenticated]

    def get_service(self):
        return container.profile_service()

    @extend_schema(
        operation_id="profiles_retrieve",
        summary="Get a profile",
        responses={
            200: ProfileDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Profile not found"),
        },
        tags=["Profile"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_profile(pk)
        if not result.success:
            return _error_response(result)
        return Response(ProfileDetailSerializer(result.data["profile"]).data)

    @extend_schema(
        operation_id="profiles_update",
        summary="Update own profile",
        request=ProfileUpdateSerializer,
        responses={
            200: ProfileDetailSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your profile"),
        },
        tags=["Profile"],
    )
    def update(self, request, pk=None):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = self.get_service().update_profile(request.user, pk, serializer.validated_data)
        if not result.success:
            return _error_response(result)
        return Response(ProfileDetailSerializer(result.data["profile"]).data, status=status.HTTP_200_OK)

    def partial_update(self, request, pk=None):
        return self.update(request, pk)

    @extend_schema(
        operation_id="profiles_seller_info",
        summary="Public seller card",
        description="Name, picture, seller rating, review count and active listing count.",
        responses={
            200: SellerInfoSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Seller not found"),
        },
        tags=["Profile"],
    )
    @action(detail=True, methods=["get"], url_path="seller-info")
    def seller_info(self, request, pk=None):
        result = self.get_service().get_seller_info(pk)
        if not result.success:
            return _error_response(result)
        return Response(SellerInfoSerializer(result.data).data)

    @extend_schema(
        operation_id="profiles_upload_picture",
        summary="Upload profile picture",
        request={
            "multipart/form-data": {
                "type": "object",
                "properties": {"file": {"type": "string", "format": "binary"}},
            }
        },
        responses={
            200: ProfilePictureUploadResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing, too large or wrong type"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your profile"),
        },
        tags=["Profile"],
    )
    @action(
        detail=True,
        methods=["post"],
        url_path="upload-picture",
        parser_classes=[MultiPartParser, FormParser],
    )
    def upload_picture(self, request, pk=None):
        file_obj = request.FILES.get("file")
        if not file_obj:
            return Response({"error": "No file provided"}, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().upload_profile_picture(request.user, pk, file_obj)
        if not result.success:
            return _error_response(result)
        return Response({"message": result.message, **result.data}, status=status.HTTP_200_OK)
