from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.serializers import (
    ChangePasswordSerializer,
    LoginRequestSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from authentication.api.serializers.response_serializers import ErrorResponseSerializer, TokenPairResponseSerializer
from infrastructure.container import container


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_register",
        summary="Register a new campus account",
        description="""
        Create an account and its profile, and log the new user in.

        **What it receives:**
        - `email`, `password`, `first_name`, `last_name`
        - Optional profile fields: `phone_number`, `instagram_handle`, `academic_level`

        **What it returns:**
        - JWT `access`/`refresh` tokens and the user with its profile
        """,
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(response=TokenPairResponseSerializer, description="Account created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation error"),
            409: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Email already registered",
                examples=[OpenApiExample("Duplicate email", value={"error": "Email already exists"})],
            ),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().register(**serializer.validated_data)

        if not result.success:
            code = status.HTTP_409_CONFLICT if result.conflict else status.HTTP_400_BAD_REQUEST
            return Response({"error": result.error, "errors": result.errors}, status=code)

        return Response(
            {
                "message": result.message,
                "access": result.access_token,
                "refresh": result.refresh_token,
                "user": UserSerializer(result.user).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(
                response=TokenPairResponseSerializer,
                description="Login successful",
                examples=[
                    OpenApiExample(
                        "Successful Login",
                        value={
                            "message": "Login successful",
                            "access": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "refresh": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "user": {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "email": "student@campus.edu",
                                "first_name": "Ana",
                                "last_name": "Reyes",
                            },
                        },
                    )
                ],
            ),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid credentials"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        result = container.auth_service().login(request.data.get("email"), request.data.get("password"), request)

        if not result.success:
            return Response({"error": result.error}, status=status.HTTP_401_UNAUTHORIZED)

        return Response(
            {
                "message": result.message,
                "access": result.access_token,
                "refresh": result.refresh_token,
                "user": UserSerializer(result.user).data,
            },
            status=status.HTTP_200_OK,
        )


class MeAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_me",
        summary="Current user with profile",
        responses={200: UserSerializer},
        tags=["Authentication"],
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)


PASSWORD_CHANGE_STATUS = {
    "forbidden": status.HTTP_403_FORBIDDEN,
    "unauthorized": status.HTTP_400_BAD_REQUEST,
    "invalid": status.HTTP_400_BAD_REQUEST,
}


class ChangePasswordAPIView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="auth_change_password",
        summary="Change your own password",
        description="""
        Replace the password of the authenticated account.

        **What it receives:**
        - `current_password`, `new_password`

        A wrong current password answers 400 with an `error` message.
        """,
        request=ChangePasswordSerializer,
        responses={
            200: OpenApiResponse(
                description="Password changed",
                examples=[OpenApiExample("Changed", value={"message": "Password changed successfully"})],
            ),
            400: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Wrong current password or weak new password",
                examples=[OpenApiExample("Wrong password", value={"error": "Current password is incorrect"})],
            ),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not your account"),
        },
        tags=["Authentication"],
    )
    def put(self, request, user_id):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.auth_service().change_password(request.user, user_id, **serializer.validated_data)

        if not result.success:
            return Response({"error": result.message}, status=PASSWORD_CHANGE_STATUS[result.status])
        return Response({"message": result.message}, status=status.HTTP_200_OK)
